from contextlib import contextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tourney.services.errors import InternalError, TourneyError

logger = structlog.get_logger(__name__)


def error_body(message: str, errors=None) -> dict:
    body = {"message": message}
    if errors is not None:
        body["errors"] = jsonable_encoder(errors)
    return body


@contextmanager
def internal_errors(message: str):
    """Turn unexpected failures inside a handler into an InternalError carrying ``message``.

    Domain errors pass through untouched; anything else is logged with its traceback.
    """
    try:
        yield
    except TourneyError:
        raise
    except Exception as exc:
        logger.exception("request_failed", error_message=message)
        raise InternalError(message) from exc


async def tourney_error_handler(request: Request, exc: TourneyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.errors))


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid request data", exc.errors()),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TourneyError, tourney_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
