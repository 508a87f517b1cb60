"""
Exception handlers mapping store errors to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from workpluck.exceptions import TaskNotFoundError, ValidationError
from workpluck.types.api import ErrorResponse

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, detail) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(),
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed requests as 400 instead of FastAPI's 422."""
    detail = [
        {
            "loc": list(err.get("loc", ())),
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    logger.info(
        "Rejected malformed request",
        extra={"path": request.url.path, "errors": len(detail)},
    )
    return _error(status.HTTP_400_BAD_REQUEST, "validation_error", detail)


async def validation_error_handler(
    request: Request,
    exc: ValidationError,
) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, "validation_error", str(exc))


async def task_not_found_handler(
    request: Request,
    exc: TaskNotFoundError,
) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "task_not_found", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the error taxonomy on an application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(TaskNotFoundError, task_not_found_handler)
