"""User profile, registration and statistics service."""

from typing import Any

import structlog
from firebase_admin import auth

from ecobreak.adapters.firebase_auth import FirebaseAuthClient
from ecobreak.models.base import utc_now_iso
from ecobreak.models.user import DEFAULT_AVATAR_COLOR, UserProfile
from ecobreak.repositories.category_repo import CategoryExerciseRepository
from ecobreak.repositories.history_repo import ExerciseHistoryRepository
from ecobreak.repositories.notification_repo import NotificationPlanRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.user_repo import UserRepository
from ecobreak.services.exceptions import BadRequestError, NotFoundError

logger = structlog.get_logger(__name__)

# Request field -> stored field for profile patches
PROFILE_FIELDS = {
    "name": "name",
    "lastName": "lastName",
    "gender": "gender",
    "avatarColor": "avatarColor",
    "telefono": "phoneNumber",
    "email": "email",
}


class UserService:
    """Self-service profile operations and admin user statistics."""

    def __init__(
        self,
        user_repo: UserRepository,
        auth_client: FirebaseAuthClient,
        notification_plan_repo: NotificationPlanRepository,
        plan_repo: PlanRepository,
        link_repo: CategoryExerciseRepository,
        history_repo: ExerciseHistoryRepository,
    ) -> None:
        """UserService initialization.

        Args:
            user_repo: User profile repository
            auth_client: Firebase Auth client
            notification_plan_repo: Notification plan repository
            plan_repo: Plan repository
            link_repo: Category-exercise link repository
            history_repo: Exercise history repository
        """
        self.user_repo = user_repo
        self.auth_client = auth_client
        self.notification_plan_repo = notification_plan_repo
        self.plan_repo = plan_repo
        self.link_repo = link_repo
        self.history_repo = history_repo

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    def get_profile(self, user_id: str) -> dict[str, Any]:
        """Public profile of a user.

        Raises:
            NotFoundError: The user has no profile.
        """
        user = self._get_user(user_id)
        return {
            "uid": user.id,
            "name": user.name,
            "lastName": user.last_name,
            "email": user.email,
            "gender": user.gender,
            "groupId": user.group_id,
            "avatarColor": user.avatar_color or DEFAULT_AVATAR_COLOR,
        }

    def update_profile(self, user_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """Merge profile changes; a new email is also pushed to Firebase Auth.

        Args:
            user_id: User ID.
            changes: Request fields (``telefono`` maps to ``phoneNumber``).

        Returns:
            The updated profile.

        Raises:
            NotFoundError: The user has no profile.
        """
        user = self._get_user(user_id)

        updates = {
            PROFILE_FIELDS[key]: value
            for key, value in changes.items()
            if key in PROFILE_FIELDS and value is not None
        }
        new_email = updates.get("email")
        if new_email and new_email != user.email:
            self.auth_client.update_user(user_id, email=new_email)
            logger.info("auth_email_updated", user_id=user_id)

        updates["updatedAt"] = utc_now_iso()
        self.user_repo.merge(user_id, updates)
        logger.info("profile_updated", user_id=user_id, fields=sorted(updates))
        return self.get_profile(user_id)

    def update_stats(
        self, user_id: str, num_activities: int | None, num_time_in_app: int | None
    ) -> None:
        """Overwrite the app usage counters of a user."""
        fields: dict[str, Any] = {"updatedAt": utc_now_iso()}
        if num_activities is not None:
            fields["numActivities"] = num_activities
        if num_time_in_app is not None:
            fields["numTimeInApp"] = num_time_in_app
        self.user_repo.merge(user_id, fields)
        logger.info("user_stats_updated", user_id=user_id)

    def update_notification_settings(self, user_id: str, settings: dict[str, Any]) -> None:
        """Replace the notification settings map of a user."""
        self.user_repo.merge(
            user_id, {"notificationSettings": settings, "updatedAt": utc_now_iso()}
        )
        logger.info("notification_settings_updated", user_id=user_id)

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_stats(self, user_id: str, date: str) -> dict[str, Any]:
        """Completion statistics of a user up to the end of a day.

        ``total_activities`` is the number of plan slots scheduled for the
        user's group, times the categories of those plans, times the exercises
        linked to those categories.

        Args:
            user_id: User ID.
            date: Day as YYYY-MM-DD.

        Returns:
            ``activities_done``, ``total_activities``, ``total_repeticiones``
            and ``total_time``.

        Raises:
            NotFoundError: The user does not exist.
        """
        user = self._get_user(user_id)
        end_of_day = f"{date}T23:59:59.999Z"

        assigned = 0
        plan_ids: dict[str, None] = {}
        if user.group_id:
            for notification_plan in self.notification_plan_repo.find_created_until(end_of_day):
                for slots in notification_plan.assigned_plans.values():
                    for slot in slots:
                        if slot.group == user.group_id:
                            assigned += 1
                            plan_ids[slot.id] = None

        category_ids: dict[str, None] = {}
        for plan in self.plan_repo.get_many(list(plan_ids)):
            for category_id in plan.categories:
                category_ids[category_id] = None

        exercise_count = len(
            {link.actividad_id for link in self.link_repo.find_by_categories(list(category_ids))}
        )

        history = self.history_repo.find_by_user(user_id, end=end_of_day)
        return {
            "activities_done": len(history),
            "total_activities": assigned * len(category_ids) * exercise_count,
            "total_repeticiones": sum(record.repeticiones for record in history),
            "total_time": sum(record.tiempo for record in history),
        }

    def get_all_stats(self) -> list[dict[str, Any]]:
        """App usage counters of every user."""
        return [
            {
                "id": user.id,
                "name": user.full_name,
                "email": user.email,
                "numActivities": user.num_activities,
                "numTimeInApp": user.num_time_in_app,
            }
            for user in self.user_repo.find_all()
        ]

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(
        self,
        email: str,
        password: str,
        name: str,
        last_name: str,
        gender: str | None = None,
        avatar_color: str | None = None,
        telefono: str | None = None,
    ) -> UserProfile:
        """Create the Auth user and its profile.

        When the profile cannot be written the Auth user is deleted again.

        Raises:
            BadRequestError: The email is already registered.
        """
        try:
            auth_user = self.auth_client.create_user(
                email=email, password=password, display_name=f"{name} {last_name}".strip()
            )
        except auth.EmailAlreadyExistsError as e:
            raise BadRequestError("El correo ya está registrado") from e

        now = utc_now_iso()
        profile = UserProfile(
            id=auth_user.uid,
            name=name,
            last_name=last_name,
            email=email,
            gender=gender,
            avatar_color=avatar_color or DEFAULT_AVATAR_COLOR,
            phone_number=telefono,
            num_activities=0,
            num_time_in_app=0,
            created_at=now,
            updated_at=now,
        )
        try:
            self.user_repo.create(profile)
        except Exception:
            logger.exception("profile_create_failed", user_id=auth_user.uid)
            self.auth_client.delete_user(auth_user.uid)
            raise

        logger.info("user_registered", user_id=auth_user.uid)
        return profile

    def send_password_reset(self, email: str) -> None:
        """Generate a password reset link for an email.

        Raises:
            NotFoundError: No Auth user has that email.
        """
        try:
            link = self.auth_client.generate_password_reset_link(email)
        except auth.UserNotFoundError as e:
            raise NotFoundError("Usuario no encontrado") from e
        logger.info("password_reset_link_generated", email=email, link=link)

    def _get_user(self, user_id: str) -> UserProfile:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("Usuario no encontrado")
        return user
