from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.db.init_db import init_db
from app.db.session import build_engine, build_session_factory
from app.errors import ApiError, AuthenticationError
from app.logging_config import configure_app_logging
from app.routers import auth, employees, health
from app.security.auth import INVALID_TOKEN
from app.security.config import load_security_config
from app.security.dependencies import enforce_security
from app.settings import Settings, get_settings
from app.token_util import (
    InvalidCredentialsError,
    InvalidTokenError,
    StaticCredentialVerifier,
    TokenConfig,
    TokenService,
)

logger = logging.getLogger(__name__)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def build_token_service(settings: Settings) -> TokenService:
    # Raises ConfigurationError when the signing key is missing: the app must not start.
    config = TokenConfig.from_settings(settings)
    verifier = StaticCredentialVerifier(settings.admin_username, settings.admin_password)
    if not verifier.configured:
        logger.warning("APP_ADMIN_PASSWORD is not set; every login will be rejected")
    return TokenService(config, verifier)


def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    headers = _BEARER_CHALLENGE if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


def _invalid_credentials_handler(request: Request, exc: InvalidCredentialsError) -> JSONResponse:
    # Same body for wrong username and wrong password.
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": "Invalid username or password"},
        headers=_BEARER_CHALLENGE,
    )


def _invalid_token_handler(request: Request, exc: InvalidTokenError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": INVALID_TOKEN},
        headers=_BEARER_CHALLENGE,
    )


def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()

    # A path parameter that is not a valid id means the URL names no resource.
    if any(err.get("loc", ())[:1] == ("path",) for err in errors):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": "Resource not found."})

    fields = [
        {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg", "")}
        for err in errors
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"message": "One or more validation errors occurred.", "errors": fields}),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the app. `settings` is read once at startup; without it the
    environment (`APP_*`) is used.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        resolved = settings or get_settings()
        configure_app_logging(resolved.log_level)
        logger.info("App startup beginning")

        app.state.token_service = build_token_service(resolved)
        logger.info("Token service ready issuer=%s", resolved.jwt_issuer)

        app.state.security_config = load_security_config(resolved.resolved_security_config_path())
        logger.info("Loaded security config: %s", resolved.resolved_security_config_path())

        engine = build_engine(resolved.resolved_db_url())
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        init_db(engine, seed=resolved.seed_demo_data)
        logger.info("Database initialized (tables ensured, seed=%s)", resolved.seed_demo_data)

        yield

        # Shutdown
        engine.dispose()

    # Global dependency: route protection comes from config, not from the handlers.
    app = FastAPI(title="Employee Records API", dependencies=[Depends(enforce_security)], lifespan=lifespan)

    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(InvalidCredentialsError, _invalid_credentials_handler)
    app.add_exception_handler(InvalidTokenError, _invalid_token_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(employees.router)

    return app


app = create_app()
