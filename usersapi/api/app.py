"""FastAPI web application for usersapi."""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from usersapi import __version__
from usersapi.api.routes import auth as auth_routes
from usersapi.api.routes import users as user_routes
from usersapi.auth.credentials import CredentialValidator
from usersapi.auth.jwt import TokenService
from usersapi.config import Settings, load_settings
from usersapi.database.database import build_engine, build_session_factory, init_db
from usersapi.errors import ApiError, RequestTimeoutError, status_code_for

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine)
    logger.info("Database schema ready")
    try:
        yield
    finally:
        app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Runtime configuration. Loaded from the environment when omitted,
            which raises ConfigError if DATABASE_URL or JWT_SECRET_KEY is unset.
        engine: Pre-built engine (tests). Built from `settings` when omitted.
    """
    if settings is None:
        settings = load_settings()
    if engine is None:
        engine = build_engine(settings)

    app = FastAPI(
        title="usersapi",
        description="CRUD users API guarded by bearer tokens",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expiration_hours=settings.jwt_expiration_hours,
    )
    app.state.credential_validator = CredentialValidator(settings.accepted_login)

    timeout = settings.request_timeout_sec

    # Middleware added last runs first: CORS -> request log -> timeout.
    @app.middleware("http")
    async def enforce_timeout(request: Request, call_next):
        request.state.deadline = time.monotonic() + timeout
        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{request.method} {request.url.path} exceeded {timeout}s")
            return JSONResponse(
                status_code=status_code_for(RequestTimeoutError()),
                content={"error": RequestTimeoutError.message},
            )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f} ms)"
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError):
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path}: {type(exc).__name__}: {exc.message}",
                exc_info=exc.__cause__,
            )
        else:
            logger.info(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            logger.info(f"404 {request.url.path}")
            return JSONResponse(status_code=404, content={"error": "Not available"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    app.include_router(auth_routes.router)
    app.include_router(user_routes.router)

    return app
