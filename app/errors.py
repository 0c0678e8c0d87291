"""
app/errors.py

Taxonomia de erros da aplicação e os handlers que os convertem em JSON.

Os serviços levantam subclasses de `AppError`; a borda HTTP transforma
cada uma em `{"message": ...}` com o status correspondente.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


def flatten_validation_errors(errors) -> str:
    """Junta os erros de validação do pydantic numa única mensagem."""
    parts = []
    for error in errors:
        # descarta o prefixo "body"/"path"/"query" da localização
        loc = [str(item) for item in error.get("loc", ())[1:]]
        field = ".".join(loc)
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return ", ".join(parts)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        {"message": flatten_validation_errors(exc.errors())},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        f"Erro inesperado em {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        {"message": "Server error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Registra os handlers de erro. Chamado em main.py após criar a app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
