"""Process configuration for usersapi.

Settings are read once at startup from the environment (and a `.env` file, if
present) and handed to the application factory. Nothing else in the package
reads configuration from the environment.
"""

import logging
import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


class Settings(BaseModel):
    """Immutable runtime configuration."""

    model_config = ConfigDict(frozen=True)

    database_url: str = Field(..., description="SQLAlchemy database URL")
    jwt_secret_key: str = Field(..., description="Secret used to sign access tokens")
    jwt_algorithm: str = Field("HS256", description="JWT signing algorithm (HMAC family)")
    jwt_expiration_hours: int = Field(24, ge=1, description="Access token lifetime in hours")
    request_timeout_sec: float = Field(10.0, gt=0, description="Per-request timeout in seconds")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    accepted_login: str = Field("claytonfaria", description="Identity accepted by the placeholder login check")
    db_pool_size: int = Field(5, ge=1)
    db_max_overflow: int = Field(5, ge=0)
    db_pool_timeout_sec: int = Field(30, ge=1)
    debug: bool = Field(False, description="Echo SQL statements")
    log_level: str = Field("INFO")


def _require(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigError(f"{name} must be set")
    return value


def _as_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def _as_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        env: Mapping to read from. Defaults to `os.environ` after loading `.env`.

    Returns:
        Validated Settings

    Raises:
        ConfigError: If DATABASE_URL or JWT_SECRET_KEY is missing, or a value
            cannot be parsed.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    origins = [o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()]

    try:
        return Settings(
            database_url=_require(env, "DATABASE_URL"),
            jwt_secret_key=_require(env, "JWT_SECRET_KEY"),
            jwt_algorithm=env.get("JWT_ALGORITHM", "HS256"),
            jwt_expiration_hours=_as_int(env, "JWT_EXPIRATION_HOURS", 24),
            request_timeout_sec=_as_float(env, "REQUEST_TIMEOUT_SEC", 10.0),
            cors_origins=origins or ["*"],
            accepted_login=env.get("ACCEPTED_LOGIN", "claytonfaria"),
            db_pool_size=_as_int(env, "DB_POOL_SIZE", 5),
            db_max_overflow=_as_int(env, "DB_MAX_OVERFLOW", 5),
            db_pool_timeout_sec=_as_int(env, "DB_POOL_TIMEOUT_SEC", 30),
            debug=env.get("DEBUG", "False").lower() == "true",
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        raise ConfigError(str(e)) from e


def configure_logging(level: str = "INFO") -> None:
    """Install the root log handler used by the server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=True,
    )
