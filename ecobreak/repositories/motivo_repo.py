"""Repositories for motivos and their responses."""

from ecobreak.models.motivo import Motivo, MotivoResponse
from ecobreak.repositories.base import BaseRepository


class MotivoRepository(BaseRepository[Motivo]):
    """Motivo repository.

    Firestore Collection: motivos
    """

    collection_name = "motivos"
    model_class = Motivo

    def find_active(self) -> list[Motivo]:
        """Motivos offered to users."""
        return self.find_by([("estado", "==", True)])


class MotivoResponseRepository(BaseRepository[MotivoResponse]):
    """Motivo response repository.

    Firestore Collection: motivosRespuestas
    """

    collection_name = "motivosRespuestas"
    model_class = MotivoResponse

    def find_until(self, until: str) -> list[MotivoResponse]:
        """Responses created up to a moment, newest first."""
        return self.find_by([("createAt", "<=", until)], order_by="createAt", descending=True)
