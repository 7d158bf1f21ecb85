"""JSON error payloads carrying a human-readable message"""
import logging
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict) and "message" in detail:
        content = detail
    else:
        content = {"message": str(detail), "detail": detail}
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {content['message']}")
    return JSONResponse(content, status_code=exc.status_code, headers=getattr(exc, "headers", None))


def _validation_message(errors) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid request: " + "; ".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    content = {"message": _validation_message(errors), "detail": errors}
    logger.info(f"{request.method} {request.url.path} rejected: {content['message']}")
    return JSONResponse(content, status_code=422)
