"""Motivo models.

A motivo is a reason users can give for skipping a break.
"""

from ecobreak.models.base import FirestoreModel


class Motivo(FirestoreModel):
    """A skip reason offered to users.

    Firestore Collection: motivos
    """

    titulo: str
    descripcion: str | None = None
    estado: bool = True


class MotivoResponse(FirestoreModel):
    """A user's answer.

    Firestore Collection: motivosRespuestas
    """

    id_user: str
    username: str | None = None
    motivo: str
    create_at: str | None = None
    update_at: str | None = None
