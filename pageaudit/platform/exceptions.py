import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pageaudit.platform.response import error_response

logger = logging.getLogger(__name__)


class AuditEngineError(Exception):
    """Base class for errors raised by the analysis engine."""


class NodesNotConstructedError(AuditEngineError):
    """Raised when the engine is called before a node list exists."""

    def __init__(self, message: str = "Node list has not been constructed; build nodes before analysing"):
        super().__init__(message)


class AnalysisCancelledError(AuditEngineError):
    """Raised at a checkpoint when a run was cancelled. Partial results are discarded."""

    def __init__(self, message: str = "Analysis was cancelled before completion"):
        super().__init__(message)


class EnrichmentError(AuditEngineError):
    """Raised by host bridges when position or preview data is unavailable."""


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail) or "Error", exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        logger.info(f"Rejected request to {request.url.path}: {len(errors)} validation errors")
        return error_response("Validation failed", status.HTTP_422_UNPROCESSABLE_ENTITY, errors)

    @app.exception_handler(NodesNotConstructedError)
    async def nodes_not_constructed_handler(request: Request, exc: NodesNotConstructedError):
        return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(AnalysisCancelledError)
    async def analysis_cancelled_handler(request: Request, exc: AnalysisCancelledError):
        logger.warning(f"Analysis on {request.url.path} was cancelled")
        return error_response(str(exc), status.HTTP_409_CONFLICT)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
        return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
