"""Tests for the error envelope handlers."""

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from ecobreak.services.exceptions import ExternalServiceError, NotFoundError
from tests.utils import ClientFactory

router = APIRouter(prefix="/probe")


class ProbeRequest(BaseModel):
    name: str = Field(..., min_length=1)


@router.get("/not-found")
async def not_found() -> None:
    raise NotFoundError("Plan no encontrado")


@router.get("/with-details")
async def with_details() -> None:
    raise NotFoundError("Categorías no encontradas: cat_9", details={"missing": ["cat_9"]})


@router.get("/upstream")
async def upstream() -> None:
    raise ExternalServiceError("Error al consultar Google Drive")


@router.get("/crash")
async def crash() -> None:
    raise RuntimeError("boom")


@router.post("/validate")
async def validate(body: ProbeRequest) -> dict[str, str]:
    return {"name": body.name}


class TestErrorHandlers:
    """Tests for the error envelope."""

    @pytest.fixture
    def client(self, make_client: ClientFactory) -> TestClient:
        return make_client(router)

    def test_domain_error(self, client: TestClient) -> None:
        response = client.get("/probe/not-found")

        assert response.status_code == 404
        assert response.json() == {
            "status": False,
            "message": "Plan no encontrado",
            "error": "Not Found",
        }

    def test_domain_error_with_details(self, client: TestClient) -> None:
        response = client.get("/probe/with-details")

        assert response.json()["error"] == {
            "type": "Not Found",
            "details": {"missing": ["cat_9"]},
        }

    def test_external_service_error(self, client: TestClient) -> None:
        assert client.get("/probe/upstream").status_code == 502

    def test_validation_error(self, client: TestClient) -> None:
        response = client.post("/probe/validate", json={"name": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["status"] is False
        assert body["message"] == "Datos de entrada inválidos"
        assert body["error"][0]["field"] == "body.name"

    def test_unexpected_error(self, client: TestClient) -> None:
        response = client.get("/probe/crash")

        assert response.status_code == 500
        assert response.json() == {
            "status": False,
            "message": "Error interno del servidor",
            "error": "Internal Server Error",
        }

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/probe/missing")

        assert response.status_code == 404
        assert response.json()["status"] is False
