from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import time
import logging

from app.config.settings import settings
from app.core.exceptions import AppError, PersistenceError
from app.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

def _error_response(status_code: int, body: ErrorResponse, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers
    )

def setup_exception_handlers(app: FastAPI):
    """Traducir errores de dominio a ErrorResponse"""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.warning(f"{request.method} {request.url.path} - {exc.error_code}: {exc.message}")
        return _error_response(
            exc.status_code,
            ErrorResponse(message=exc.message, error_code=exc.error_code, details=exc.details),
            headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            422,
            ErrorResponse(
                message="Datos inválidos en la petición",
                error_code="validation_error",
                details={"errors": jsonable_encoder(exc.errors(), exclude={"ctx", "input", "url"})}
            )
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        # Errores de BD no traducidos por un servicio; el detalle solo va al log
        logger.error(f"{request.method} {request.url.path} - error de base de datos", exc_info=exc)
        return _error_response(
            500,
            ErrorResponse(
                message="Error de acceso a la base de datos",
                error_code=PersistenceError.error_code
            )
        )

def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response
