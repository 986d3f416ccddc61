"""Push reminders triggered by Cloud Scheduler.

Runs every few minutes. Each run sends plan reminders for the slots
scheduled today, expires finished schedules and sends hourly activity
reminders to users who opted into them. Clock values use the configured
notification timezone.
"""

import random
from dataclasses import asdict, dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

import structlog

from ecobreak.adapters.messaging_client import MessagingClient
from ecobreak.config.settings import Settings
from ecobreak.models.notification import NotificationPause, NotificationPlan, ScheduledPlan
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.repositories.notification_repo import (
    NotificationPauseRepository,
    NotificationPlanRepository,
)
from ecobreak.repositories.user_repo import DeviceRepository, UserRepository
from ecobreak.services.notification_plan_service import NotificationPlanService

logger = structlog.get_logger(__name__)

MINUTES_PER_DAY = 24 * 60

ACTIVITY_REMINDER_TITLE = "¡Hora de moverse! 💪"
ACTIVITY_REMINDER_FALLBACK = "Apresúrate a hacer ejercicio"


@dataclass
class DispatchResult:
    """Counters of one dispatcher run."""

    plan_reminders: int = 0
    notifications_sent: int = 0
    plans_expired: int = 0
    activity_reminders: int = 0
    failures: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def day_key(moment: datetime) -> str:
    """Key of ``assignedPlans`` for a day (``YYYY-MM-DDT00:00:00.000``)."""
    return f"{moment.date().isoformat()}T00:00:00.000"


def to_minutes(hhmm: str) -> int:
    """``HH:MM`` as minutes after midnight."""
    hours, minutes = hhmm.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def minutes_apart(a: int, b: int) -> int:
    """Distance between two clock times, wrapping around midnight."""
    diff = abs(a - b) % MINUTES_PER_DAY
    return min(diff, MINUTES_PER_DAY - diff)


def display_date(value: str) -> str:
    """``YYYY-MM-DD...`` as ``DD/MM/YYYY``."""
    year, month, day = value[:10].split("-")
    return f"{day}/{month}/{year}"


def in_pause_window(pause: NotificationPause, hhmm: str) -> bool:
    """Whether notifications are enabled for a user at a clock time."""
    return pause.notifi_active and pause.date_start <= hhmm <= pause.date_end


class NotificationDispatcher:
    """Sends scheduled push reminders."""

    def __init__(
        self,
        settings: Settings,
        messaging: MessagingClient,
        notification_plan_repo: NotificationPlanRepository,
        pause_repo: NotificationPauseRepository,
        user_repo: UserRepository,
        device_repo: DeviceRepository,
        exercise_repo: ExerciseRepository,
        notification_plan_service: NotificationPlanService,
        rng: random.Random | None = None,
    ) -> None:
        """NotificationDispatcher initialization.

        Args:
            settings: Application settings (timezone and reminder windows)
            messaging: FCM client
            notification_plan_repo: Notification plan repository
            pause_repo: Notification pause repository
            user_repo: User repository
            device_repo: Device repository
            exercise_repo: Exercise repository, source of activity reminders
            notification_plan_service: Expires finished schedules
            rng: Random source used to pick reminder exercises
        """
        self.settings = settings
        self.messaging = messaging
        self.notification_plan_repo = notification_plan_repo
        self.pause_repo = pause_repo
        self.user_repo = user_repo
        self.device_repo = device_repo
        self.exercise_repo = exercise_repo
        self.notification_plan_service = notification_plan_service
        self.rng = rng or random.Random()

    def now(self) -> datetime:
        """Current time in the notification timezone."""
        return datetime.now(ZoneInfo(self.settings.NOTIFICATION_TIMEZONE))

    def run(self, now: datetime | None = None) -> DispatchResult:
        """Run every reminder job once.

        Args:
            now: Clock override, in the notification timezone.

        Returns:
            Counters of the run.
        """
        moment = now or self.now()
        result = DispatchResult()
        logger.info("notification_dispatch_started", at=moment.isoformat())

        self.send_plan_reminders(moment, result)
        result.plans_expired = self.notification_plan_service.expire(day_key(moment))
        self.send_activity_reminders(moment, result)

        logger.info("notification_dispatch_finished", **result.to_dict())
        return result

    # -------------------------------------------------------------------------
    # Plan reminders
    # -------------------------------------------------------------------------

    def send_plan_reminders(self, moment: datetime, result: DispatchResult) -> None:
        """Remind groups of today's plan slots ahead of time."""
        today = day_key(moment)
        current = moment.hour * 60 + moment.minute
        hhmm = moment.strftime("%H:%M")

        for notification_plan in self.notification_plan_repo.find_running(today):
            for slot in notification_plan.assigned_plans.get(today, []):
                slot_time = self._due_slot_time(slot, current)
                if slot_time is None:
                    continue

                try:
                    tokens = self._group_tokens(slot.group, hhmm)
                    if not tokens:
                        logger.info(
                            "plan_reminder_no_tokens", plan_id=slot.id, group_id=slot.group
                        )
                        continue

                    push = self.messaging.send_multicast(
                        tokens,
                        title=f"Realiza las actividades de {slot.name} 🏋️‍♂️",
                        body=self._plan_reminder_body(notification_plan, slot, slot_time),
                        data={"planId": slot.id, "type": "plan_reminder"},
                    )
                except Exception:
                    result.failures += 1
                    logger.exception(
                        "plan_reminder_failed", plan_id=slot.id, group_id=slot.group
                    )
                    continue

                result.plan_reminders += 1
                result.notifications_sent += push.success_count
                logger.info(
                    "plan_reminder_sent",
                    plan_id=slot.id,
                    group_id=slot.group,
                    tokens=len(tokens),
                    success=push.success_count,
                )

    def _due_slot_time(self, slot: ScheduledPlan, current: int) -> str | None:
        lead = self.settings.REMINDER_LEAD_MINUTES
        window = self.settings.REMINDER_WINDOW_MINUTES
        for slot_time in (slot.time, slot.time_second):
            if not slot_time:
                continue
            if minutes_apart(current, to_minutes(slot_time) - lead) <= window:
                return slot_time
        return None

    def _group_tokens(self, group_id: str | None, hhmm: str) -> list[str]:
        if not group_id:
            return []
        user_ids = [user.id for user in self.user_repo.find_by_group(group_id) if user.id]
        available = {
            pause.id_user
            for pause in self.pause_repo.find_by_users(user_ids)
            if in_pause_window(pause, hhmm)
        }
        return self.device_repo.tokens_for_users([uid for uid in user_ids if uid in available])

    @staticmethod
    def _plan_reminder_body(
        notification_plan: NotificationPlan, slot: ScheduledPlan, slot_time: str
    ) -> str:
        return (
            f"⏰ En 1 hora tienes {slot.name} ({slot_time}) disponible del "
            f"{display_date(notification_plan.start_date)} al "
            f"{display_date(notification_plan.end_date)}."
        )

    # -------------------------------------------------------------------------
    # Activity reminders
    # -------------------------------------------------------------------------

    def send_activity_reminders(self, moment: datetime, result: DispatchResult) -> None:
        """Nudge users every ``frecuencia`` hours inside their pause window."""
        pauses = [
            pause
            for pause in self.pause_repo.find_enabled()
            if pause.frecuencia > 0 and self._activity_due(pause, moment)
        ]
        if not pauses:
            return

        exercises = self.exercise_repo.find_all()
        for pause in pauses:
            tokens = self.device_repo.tokens_for_users([pause.id_user])
            if not tokens:
                logger.warning("activity_reminder_no_tokens", user_id=pause.id_user)
                continue

            exercise = self.rng.choice(exercises) if exercises else None
            nombre = (exercise.nombre if exercise else None) or ACTIVITY_REMINDER_FALLBACK
            try:
                push = self.messaging.send_multicast(
                    tokens,
                    title=ACTIVITY_REMINDER_TITLE,
                    body=f"Tienes una actividad pendiente: {nombre}.",
                    data={
                        "actividadId": (exercise.id if exercise else None) or "",
                        "type": "activity_reminder",
                        "timestamp": moment.isoformat(),
                    },
                )
            except Exception:
                result.failures += 1
                logger.exception("activity_reminder_failed", user_id=pause.id_user)
                continue
            result.activity_reminders += 1
            result.notifications_sent += push.success_count
            logger.info(
                "activity_reminder_sent",
                user_id=pause.id_user,
                exercise_id=exercise.id if exercise else None,
                success=push.success_count,
            )

    def _activity_due(self, pause: NotificationPause, moment: datetime) -> bool:
        start_hour = int(pause.date_start.split(":")[0])
        end_hour = int(pause.date_end.split(":")[0])
        if not start_hour <= moment.hour <= end_hour:
            return False
        if (moment.hour - start_hour) % pause.frecuencia != 0:
            return False
        return moment.minute <= self.settings.ACTIVITY_REMINDER_MINUTE_WINDOW
