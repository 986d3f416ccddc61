"""Motivo (skip reason) service."""

from typing import Any

import structlog

from ecobreak.models.base import utc_now_iso
from ecobreak.models.motivo import Motivo, MotivoResponse
from ecobreak.repositories.motivo_repo import MotivoRepository, MotivoResponseRepository
from ecobreak.services.exceptions import NotFoundError

logger = structlog.get_logger(__name__)


class MotivoService:
    """Skip reasons and the answers users give."""

    def __init__(
        self, motivo_repo: MotivoRepository, response_repo: MotivoResponseRepository
    ) -> None:
        self.motivo_repo = motivo_repo
        self.response_repo = response_repo

    def list_motivos(self) -> list[Motivo]:
        return self.motivo_repo.find_all()

    def list_active(self) -> list[Motivo]:
        return self.motivo_repo.find_active()

    def create_motivo(self, motivo: Motivo) -> Motivo:
        self.motivo_repo.create(motivo)
        logger.info("motivo_created", motivo_id=motivo.id)
        return motivo

    def update_motivo(self, motivo_id: str, changes: dict[str, Any]) -> Motivo:
        """Merge changes into a motivo.

        Raises:
            NotFoundError: The motivo does not exist.
        """
        if not self.motivo_repo.exists(motivo_id):
            raise NotFoundError("Motivo no encontrado")

        updates = {key: value for key, value in changes.items() if value is not None}
        self.motivo_repo.update_fields(motivo_id, updates)
        logger.info("motivo_updated", motivo_id=motivo_id, fields=sorted(updates))

        motivo = self.motivo_repo.get_by_id(motivo_id)
        if motivo is None:
            raise NotFoundError("Motivo no encontrado")
        return motivo

    def delete_motivo(self, motivo_id: str) -> None:
        """Delete a motivo.

        Raises:
            NotFoundError: The motivo does not exist.
        """
        if not self.motivo_repo.exists(motivo_id):
            raise NotFoundError("Motivo no encontrado")
        self.motivo_repo.delete(motivo_id)
        logger.info("motivo_deleted", motivo_id=motivo_id)

    def add_response(self, response: MotivoResponse) -> MotivoResponse:
        """Store a user's answer with creation timestamps."""
        now = utc_now_iso()
        response.create_at = now
        response.update_at = now
        self.response_repo.create(response)
        logger.info("motivo_response_created", response_id=response.id, user_id=response.id_user)
        return response

    def list_responses(self) -> list[MotivoResponse]:
        """Answers created up to now, newest first."""
        return self.response_repo.find_until(utc_now_iso())
