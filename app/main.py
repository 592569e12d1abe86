"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import api_router
from app.config import settings
from app.core.exceptions import (
    AppException,
    LLMError,
    ScriptGenerationError,
    ScriptStateError,
    TTSError,
)
from app.core.logging_config import setup_logging
from app.database import init_db
from app.schemas.common import ApiResponse, ErrorDetail

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager."""
    await init_db()
    logger.info(f"{settings.app_name} {settings.app_version} started")

    yield


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ApiResponse[dict](
        success=False,
        error=ErrorDetail(code=code, message=message, details=details),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error in the ApiResponse envelope."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        return _error_response(
            exc.status_code,
            exc.error_code or "ERROR",
            str(exc.detail),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(
            exc.status_code,
            "HTTP_ERROR",
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Invalid payload",
            details={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(ScriptGenerationError)
    async def script_generation_handler(request: Request, exc: ScriptGenerationError):
        return _error_response(
            status.HTTP_502_BAD_GATEWAY,
            "GENERATION_FAILED",
            exc.message,
            details={"script_id": exc.script_id},
        )

    @app.exception_handler(LLMError)
    async def llm_error_handler(request: Request, exc: LLMError):
        return _error_response(status.HTTP_502_BAD_GATEWAY, "LLM_ERROR", exc.message)

    @app.exception_handler(TTSError)
    async def tts_error_handler(request: Request, exc: TTSError):
        logger.error(f"Voice synthesis failed: {exc.message}")
        return _error_response(status.HTTP_502_BAD_GATEWAY, "TTS_ERROR", exc.message)

    @app.exception_handler(ScriptStateError)
    async def script_state_handler(request: Request, exc: ScriptStateError):
        return _error_response(status.HTTP_409_CONFLICT, "INVALID_STATE", exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            str(exc) if settings.debug else "Internal server error",
        )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    setup_logging(settings.log_level, settings.log_dir)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Wildcard origins in debug mode
    cors_origins = settings.cors_origins
    if settings.debug:
        cors_origins = ["*"] + settings.cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.app_version}

    @app.get("/")
    async def root():
        return {
            "message": f"{settings.app_name} API",
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
