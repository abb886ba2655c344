from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hostel_admin import __version__
from hostel_admin.api.v1.router import router as api_v1_router
from hostel_admin.config.settings import settings
from hostel_admin.core.exceptions import BaseAppException, ErrorCode
from hostel_admin.core.logging import get_logger, setup_logging
from hostel_admin.core.middleware import register_middlewares
from hostel_admin.db.init_db import init_db
from hostel_admin.schemas.common import SuccessResponse

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error in the ``{success: false, error: {...}}`` envelope."""

    @app.exception_handler(BaseAppException)
    async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg"),
                "type": err.get("type"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(
                {
                    "success": False,
                    "error": {
                        "code": ErrorCode.VALIDATION_ERROR.value,
                        "message": "Request validation failed",
                        "details": {"errors": errors},
                    },
                }
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": {
                    "code": ErrorCode.INTERNAL_ERROR.value,
                    "message": "Internal server error",
                    "details": {},
                },
            },
        )


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, title, version and debug mode from Settings.
    - Registers CORS, core middleware and exception handlers.
    - Includes the versioned API router under API_V1_STR.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    if settings.CORS_ORIGINS and settings.CORS_ORIGINS != ["*"]:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Credentials cannot be combined with a wildcard origin
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get(
        "/health",
        tags=["Health"],
        response_model=SuccessResponse[Dict[str, Any]],
        response_model_exclude_none=True,
    )
    def health() -> dict:
        return {
            "success": True,
            "data": {
                "status": "healthy",
                "service": settings.APP_NAME,
                "version": __version__,
                "environment": settings.ENVIRONMENT,
            },
        }

    # Development convenience; production schemas come from migrations
    @app.on_event("startup")
    async def on_startup() -> None:
        if settings.AUTO_CREATE_TABLES:
            init_db()
        logger.info(
            f"{settings.APP_NAME} started",
            extra={"environment": settings.ENVIRONMENT, "api_prefix": settings.API_V1_STR},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hostel_admin.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        workers=1 if settings.RELOAD else settings.WORKERS,
    )
