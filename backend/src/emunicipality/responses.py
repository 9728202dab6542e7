"""Response envelope builder.

Every endpoint answers with the same JSON shape:

    {"success": bool, "message"?: str, "data"?: ..., "count"?: int, "error"?: str}

Keys that carry no value are omitted.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar, Union

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from .errors import AppError

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Response envelope (used for OpenAPI documentation)."""
    model_config = ConfigDict(json_schema_extra={
        "example": {"success": True, "message": "Created successfully", "data": {}}
    })

    success: bool
    message: Optional[str] = None
    data: Optional[T] = None
    count: Optional[int] = None
    error: Optional[str] = None


class ListEnvelope(BaseModel, Generic[T]):
    """Envelope for list endpoints; count is the number of items in data."""
    success: bool
    message: Optional[str] = None
    data: List[T] = []
    count: int = 0


def _dump(data: Union[BaseModel, Sequence[BaseModel], Any]) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [_dump(item) for item in data]
    return jsonable_encoder(data)


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    count: Optional[int] = None,
) -> JSONResponse:
    """Wrap a successful outcome.

    List payloads get ``count`` filled in automatically.
    """
    content: dict = {"success": True}
    if message is not None:
        content["message"] = message
    if data is not None:
        content["data"] = _dump(data)
        if count is None and isinstance(data, (list, tuple)):
            count = len(data)
    if count is not None:
        content["count"] = count
    return JSONResponse(status_code=status_code, content=content)


def created_response(data: Any, message: str) -> JSONResponse:
    return success_response(data=data, message=message, status_code=status.HTTP_201_CREATED)


def error_response(
    message: str,
    status_code: int,
    error: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Failure envelope. ``extra`` adds keys beside message (e.g. an endpoint index)."""
    content: dict = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def app_error_response(exc: AppError, verbose: bool = False) -> JSONResponse:
    """Map an AppError to its envelope and status.

    Internal detail (e.g. the driver error behind a DatastoreError) is only
    included when verbose is set.
    """
    error = exc.detail if verbose and exc.detail else None
    return error_response(exc.message, exc.status_code, error=error)
