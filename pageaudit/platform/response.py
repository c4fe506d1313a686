from typing import Any, Dict, List, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from pageaudit.platform.schemas import APIResponse


def _envelope(status_code: int, message: str, data: Any) -> Dict[str, Any]:
    return APIResponse[Any](
        status_code=status_code,
        status="success" if status_code < 400 else "error",
        message=message,
        data=data,
    ).model_dump()


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
    exclude_none: bool = False,
) -> JSONResponse:
    """
    Wrap ``data`` in the standard envelope.

    Status is "success" below 400 and "error" otherwise. With
    ``exclude_none`` set, optional fields of pydantic payloads are dropped,
    e.g. issues that were never given a position or preview.
    """
    payload = jsonable_encoder(data, exclude_none=exclude_none) if data is not None else {}
    return JSONResponse(status_code=status_code, content=_envelope(status_code, message, payload))


def error_response(
    message: str,
    status_code: int,
    errors: Optional[List[Dict[str, Any]]] = None,
) -> JSONResponse:
    """Envelope for failures; ``errors`` carries field-level validation details."""
    data = {"errors": jsonable_encoder(errors)} if errors else {}
    return JSONResponse(status_code=status_code, content=_envelope(status_code, message, data))
