"""Pause history report and CSV export for admins."""

import csv
import io
from typing import Any

import structlog

from ecobreak.repositories.history_repo import ExerciseHistoryRepository
from ecobreak.repositories.user_repo import UserRepository

logger = structlog.get_logger(__name__)

CSV_HEADERS = ["Usuario", "Fecha", "Plan", "Duración", "Completado"]
UNKNOWN_USER = "Usuario no encontrado"


class PauseHistoryService:
    """Builds the admin pause history from exercise history records."""

    def __init__(self, history_repo: ExerciseHistoryRepository, user_repo: UserRepository) -> None:
        self.history_repo = history_repo
        self.user_repo = user_repo

    def get_history(self, start_date: str, end_date: str) -> list[dict[str, Any]]:
        """Completed pauses between two days, newest first.

        Args:
            start_date: First day (YYYY-MM-DD).
            end_date: Last day, inclusive.

        Returns:
            One row per history record.
        """
        records = self.history_repo.find_in_range(
            start_date[:10], f"{end_date[:10]}T23:59:59.999Z"
        )
        user_ids = list(dict.fromkeys(record.id_usuario for record in records))
        names = {user.id: user.full_name for user in self.user_repo.get_many(user_ids)}

        rows = [
            {
                "id": record.id,
                "userId": record.id_usuario,
                "userName": names.get(record.id_usuario) or UNKNOWN_USER,
                "date": record.created_at,
                "planId": record.id_plan,
                "planName": record.nombre,
                "duration": record.tiempo,
                "completionRate": 1,
            }
            for record in records
        ]
        logger.info("pause_history_loaded", start=start_date, end=end_date, rows=len(rows))
        return rows

    def export_csv(self, start_date: str, end_date: str) -> str:
        """Pause history between two days as CSV text."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for row in self.get_history(start_date, end_date):
            writer.writerow(
                [
                    row["userName"],
                    row["date"] or "",
                    row["planName"] or "",
                    f"{_format_number(row['duration'])} min",
                    f"{row['completionRate'] * 100:.1f}%",
                ]
            )
        return buffer.getvalue()


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
