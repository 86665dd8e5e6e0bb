"""Domain error → HTTP response translation, registered once on the app."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from assignflow.domain.errors import (
    ConflictError,
    ForbiddenError,
    IllegalTransitionError,
    NotFoundError,
    TransientError,
    ValidationError,
    WorkflowError,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_S = 2


def _body(kind: str, exc: WorkflowError, **extra) -> dict:
    return {"error": kind, "detail": exc.message, **extra}


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_body("not_found", exc))


async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return JSONResponse(status_code=403, content=_body("forbidden", exc))


async def _validation(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content=_body("validation_error", exc, field=exc.field))


async def _illegal_transition(request: Request, exc: IllegalTransitionError) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content=_body(
            "illegal_transition", exc,
            current=exc.current.value,
            requested=exc.requested.value,
            allowed=[s.value for s in exc.allowed],
        ),
    )


async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=409, content=_body("conflict", exc))


async def _transient(request: Request, exc: TransientError) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=503,
        content=_body("transient", exc, retryable=True),
        headers={"Retry-After": str(RETRY_AFTER_S)},
    )


def register_error_handlers(app: FastAPI) -> None:
    # Starlette resolves handlers along the MRO, so subclasses win
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(ForbiddenError, _forbidden)
    app.add_exception_handler(ValidationError, _validation)
    app.add_exception_handler(IllegalTransitionError, _illegal_transition)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(TransientError, _transient)
