"""Exceções da aplicação e handlers que montam o envelope de erro"""
from typing import Any, List, Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException
import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Erro base da aplicação, já com status HTTP"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: Optional[List[Any]] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(BadRequestError):
    """Erro de validação com lista de campos"""

    def __init__(self, message: str = "Validation Error", fields: Optional[List[Any]] = None):
        super().__init__(message, errors=fields)
        self.fields = fields or []


class MissingRequiredDataError(ValidationError):
    """Registro do provedor sem os campos que o identificam"""

    def __init__(self, entity: str, fields: List[str]):
        super().__init__(f"Missing required {entity} data: {', '.join(fields)}", fields=fields)
        self.entity = entity


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class UpstreamUnavailableError(AppError):
    """Provedor externo (dados ou IA) falhou ou respondeu lixo"""
    status_code = status.HTTP_502_BAD_GATEWAY


def error_body(message: str, errors: Optional[List[Any]] = None) -> dict:
    """Envelope padrão de falha"""
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.errors),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


def _invalid_path_id(errors: List[dict]) -> Optional[str]:
    """'league_id' inválido no path -> 'Invalid league ID'"""
    for err in errors:
        loc = err.get("loc", ())
        if len(loc) == 2 and loc[0] == "path" and str(loc[1]).endswith("_id"):
            name = str(loc[1])[:-3].replace("_", " ")
            return f"Invalid {name} ID"
    return None


async def request_validation_handler(request: Request, exc: RequestValidationError):
    path_message = _invalid_path_id(exc.errors())
    if path_message:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(path_message))

    fields = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation Error", fields),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Violação de integridade em {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_body("Resource already exists"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registra todos os handlers de erro no app"""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
