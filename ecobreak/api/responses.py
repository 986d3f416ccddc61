"""Response envelopes shared by every router."""

from typing import Any

from pydantic import BaseModel


def _plain(value: Any) -> Any:
    if hasattr(value, "to_response"):
        return value.to_response()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


def success(data: Any = None, message: str = "OK") -> dict[str, Any]:
    """Success envelope ``{status: true, message, data}``.

    Models inside ``data`` are serialized with their stored field names.
    """
    return {"status": True, "message": message, "data": _plain(data)}


def failure(message: str, error: Any) -> dict[str, Any]:
    """Error envelope ``{status: false, message, error}``."""
    return {"status": False, "message": message, "error": error}
