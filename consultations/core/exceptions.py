import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from consultations.core.request_context import request_id_ctx_var

logger = logging.getLogger(__name__)


class DomainError(HTTPException):
    """Client-facing failure with a stable error code."""

    code = "domain_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=self.status_code, detail=detail)


class InvalidInputError(DomainError):
    code = "invalid_input"
    status_code = status.HTTP_400_BAD_REQUEST


class SlotConflictError(DomainError):
    code = "slot_conflict"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DomainError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidConfigurationError(RuntimeError):
    """Schedule settings that cannot produce a slot grid."""


def _error_payload(code: str, message: str, detail):
    return {
        "error": {
            "code": code,
            "message": message,
            "detail": detail,
        },
        "detail": detail,
        "request_id": request_id_ctx_var.get(),
    }


async def http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    code = exc.code if isinstance(exc, DomainError) else f"http_{exc.status_code}"
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(
            code=code,
            message=str(exc.detail),
            detail=exc.detail,
        ),
        headers=exc.headers,
    )


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_payload(
            code="validation_error",
            message="Request validation failed",
            detail=jsonable_errors(exc),
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_payload(
            code="internal_error",
            message="Something went wrong",
            detail="Something went wrong",
        ),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # pydantic may put exception instances into "ctx"
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        errors.append(error)
    return errors
