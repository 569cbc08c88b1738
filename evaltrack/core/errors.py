# evaltrack/core/errors.py
import logging
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidStatusError(AppError):
    """Valor fuera de una enumeración cerrada; el detalle nombra el valor rechazado."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value, field: str = "status"):
        super().__init__(f"Invalid {field}: {value!r}")
        self.value = value
        self.field = field


class StorageError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, cause: Exception | None = None):
        super().__init__(detail)
        self.cause = cause


def _storage_response(exc: StorageError) -> JSONResponse:
    underlying = str(exc.cause) if exc.cause is not None else exc.detail
    return JSONResponse(
        status_code=StorageError.status_code,
        content={"detail": "Storage error", "error": underlying},
    )


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("%s %s -> storage error: %s", request.method, request.url.path, exc.detail)
        return _storage_response(exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def _describe_validation_error(err: dict) -> str:
    # loc = ("body", "detailedStatus") / ("query", "month"); el primer elemento es la fuente
    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or "body"
    if err.get("type") == "missing":
        return f"{field} is required"
    if "input" in err:
        return f"Invalid {field}: {err['input']!r}"
    return f"Invalid {field}: {err.get('msg', 'bad value')}"


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body/query mal formado -> 400 con el mismo shape {"detail": ...} que ValidationError."""
    messages = [_describe_validation_error(err) for err in exc.errors()]
    logger.info("%s %s -> validación: %s", request.method, request.url.path, "; ".join(messages))
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"detail": "; ".join(messages) or "Invalid request"},
    )


async def handle_pymongo_error(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception("%s %s -> error de MongoDB: %s", request.method, request.url.path, exc)
    return _storage_response(StorageError("Storage error", cause=exc))
