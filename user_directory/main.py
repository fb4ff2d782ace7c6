import logging
from contextlib import asynccontextmanager

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from user_directory.core.config import Settings, get_settings
from user_directory.core.database import connect_table
from user_directory.core.errors import ApiError, UserDirectoryError, format_validation_errors
from user_directory.core.log import configure_logging
from user_directory.dao.user_dao import UserDAO
from user_directory.services.user_service import UserService

logger = logging.getLogger(__name__)

API_ENDPOINTS = (
    "GET    /api/users",
    "GET    /api/users/{userUniqueId}",
    "POST   /api/users",
    "PUT    /api/users/{userUniqueId}",
    "DELETE /api/users/{userUniqueId}",
)


def _is_api_request(request: Request) -> bool:
    return request.url.path == "/api" or request.url.path.startswith("/api/")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: one DynamoDB table handle for the whole process.
        # Failing to reach it aborts startup.
        try:
            table = connect_table(settings)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB connection error: %s", exc)
            raise

        svc = UserService(UserDAO(table), default_country=settings.default_country)
        if settings.seed_sample_users:
            try:
                svc.seed_if_empty()
            except UserDirectoryError as exc:
                logger.error("Error seeding sample users: %s", exc)
        app.state.user_service = svc

        logger.info("Server running at http://%s:%s", settings.host, settings.port)
        logger.info("API endpoints available at:")
        for endpoint in API_ENDPOINTS:
            logger.info("- %s", endpoint)
        yield
        logger.info("%s shutting down", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error envelopes ──────────────────────────────────────────────────────
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        if not _is_api_request(request):
            return await request_validation_exception_handler(request, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": format_validation_errors(list(exc.errors()))},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(exc)},
        )

    # ── Routers ──────────────────────────────────────────────────────────────
    from user_directory.api.routes import users, web

    app.include_router(users.router, prefix="/api/users", tags=["Users API"])
    app.include_router(web.router, tags=["Web"])

    # ── Health check ─────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    async def health() -> dict:
        return {"status": "ok", "version": settings.app_version}

    return app


app = create_app()
