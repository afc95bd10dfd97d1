"""
Conversión de excepciones al sobre de error {error: {code, message, ...}}
"""
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from kontaflow.utils.exceptions import AppError, DatabaseError, NotFoundError, ValidationError, translate_integrity_error
from kontaflow.utils.logging import get_logger

logger = get_logger(__name__)

VALIDATION_MESSAGE = "Validation error in submitted data"
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def _field_path(location: Sequence[Any]) -> str:
    parts = list(location)
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(to_camel(part) if isinstance(part, str) else str(part) for part in parts)


def _rule_from_errors(errors: Sequence[Dict[str, Any]]) -> Optional[str]:
    """Primer tipo de error con nombre de regla (p. ej. INVALID_DATE_RANGE)"""
    for error in errors:
        error_type = error.get("type", "")
        if error_type.isupper():
            return error_type
    return None


def validation_error_from_request(exc: RequestValidationError) -> ValidationError:
    details: Dict[str, List[str]] = {}
    errors = exc.errors()
    for error in errors:
        details.setdefault(_field_path(error.get("loc", ())), []).append(error.get("msg", "Invalid value"))
    return ValidationError(VALIDATION_MESSAGE, details=details, rule=_rule_from_errors(errors))


def error_response(error: AppError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.to_payload()})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(validation_error_from_request(exc))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    error = translate_integrity_error(exc)
    if isinstance(error, DatabaseError):
        logger.error(f"Unclassified integrity error on {request.url.path}: {exc.orig}")
    return error_response(error)


async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    return error_response(NotFoundError("Record"))


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(DatabaseError())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(AppError("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    """Registra los manejadores de error de la aplicación"""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(NoResultFound, no_result_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
