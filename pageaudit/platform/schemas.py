from typing import Any, Generic, List, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Envelope returned by every route (see ``api_response``)."""
    status_code: int = 200
    status: Literal["success", "error"] = "success"
    message: str
    data: T


class FieldError(BaseModel):
    loc: List[Any]
    msg: str
    type: str


class ValidationErrorData(BaseModel):
    errors: List[FieldError]
