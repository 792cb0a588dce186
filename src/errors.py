"""Exception handlers that turn rejected event actions into JSON responses.

Every response body has the same shape: {"message": ..., "error": <code>}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.events.dtos import EventActionError

logger = logging.getLogger(__name__)


async def event_action_error_handler(request: Request, exc: EventActionError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "error": exc.code},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Request validation failed",
            "error": "validation_error",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EventActionError, event_action_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
