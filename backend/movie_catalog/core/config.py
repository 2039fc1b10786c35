"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Placeholders shipped for local development only
DEV_JWT_SECRET: Final[str] = "CHANGE_ME_JWT"
DEV_RT_SECRET: Final[str] = "CHANGE_ME_RT"

# Load .env in development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    JWT_SECRET: str
        Secret used to sign access tokens.
    RT_SECRET: str
        Distinct secret used to sign refresh tokens.
    JWT_SECRET_KEY: str
        Mirror of ``JWT_SECRET`` consumed by ``flask-jwt-extended`` when it
        verifies bearer access tokens.
    JWT_IDENTITY_CLAIM: str
        Claim holding the user id (``"id"``).
    ACCESS_TOKEN_EXPIRES / REFRESH_TOKEN_EXPIRES: timedelta
        Token lifetimes (1 hour and 7 days).
    BCRYPT_ROUNDS: int
        Cost factor for password hashing.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    REDIS_URL: str | None
        Cache backend. When unset the cache degrades to a no-op store.
    CACHE_TTL_SECONDS: int
        Lifetime of cached read models.
    TMDB_API_KEY / TMDB_BASE_URL: str
        Movie metadata provider credentials and endpoint.
    REFRESH_COOKIE_NAME / REFRESH_COOKIE_SECURE / REFRESH_COOKIE_SAMESITE
        Attributes of the refresh-token cookie.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"
    APP_ENV = "development"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET = os.getenv("JWT_SECRET", DEV_JWT_SECRET)
    RT_SECRET = os.getenv("RT_SECRET", DEV_RT_SECRET)
    JWT_SECRET_KEY = JWT_SECRET
    JWT_ALGORITHM = "HS256"
    JWT_IDENTITY_CLAIM = "id"
    JWT_TOKEN_LOCATION = ["headers"]
    ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    REFRESH_TOKEN_EXPIRES = timedelta(days=7)
    JWT_ACCESS_TOKEN_EXPIRES = ACCESS_TOKEN_EXPIRES
    BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 12)

    # Refresh cookie
    REFRESH_COOKIE_NAME = "refresh_token"
    REFRESH_COOKIE_SECURE = False
    REFRESH_COOKIE_SAMESITE = "Lax"
    REFRESH_TOKEN_HEADER = "Refresh-Token"

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Cache
    REDIS_URL = os.getenv("REDIS_URL")
    CACHE_TTL_SECONDS = env_int("CACHE_TTL_SECONDS", 300)

    # Movie metadata provider
    TMDB_API_KEY = os.getenv("TMDB_API_KEY", "")
    TMDB_BASE_URL = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    TMDB_TIMEOUT = 10
    TMDB_SYNC_PAGES = 5

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Lowers the bcrypt cost so suites stay fast.
    - Never talks to Redis or the metadata provider.
    """

    APP_ENV = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    JWT_SECRET = "test-access-secret"
    JWT_SECRET_KEY = JWT_SECRET
    RT_SECRET = "test-refresh-secret"
    BCRYPT_ROUNDS = 4
    REDIS_URL = None
    TMDB_API_KEY = "test-tmdb-key"
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled and marks the refresh cookie as
    ``Secure``.
    """

    APP_ENV = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    REFRESH_COOKIE_SECURE = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def validate_config(config: Mapping[str, Any]) -> None:
    """Fail fast on unusable settings.

    :param config: Loaded Flask config mapping.
    :raises RuntimeError: When token secrets collide, or when production is
        missing a required secret or connection string.
    """
    if config.get("JWT_SECRET") == config.get("RT_SECRET"):
        raise RuntimeError("JWT_SECRET and RT_SECRET must be different values.")

    if str(config.get("APP_ENV", "")).lower() != "production":
        return

    problems: list[str] = []
    if config.get("JWT_SECRET") in (None, "", DEV_JWT_SECRET):
        problems.append("JWT_SECRET")
    if config.get("RT_SECRET") in (None, "", DEV_RT_SECRET):
        problems.append("RT_SECRET")
    if not config.get("TMDB_API_KEY"):
        problems.append("TMDB_API_KEY")
    if not os.getenv("DATABASE_URL"):
        problems.append("DATABASE_URL")
    if problems:
        raise RuntimeError(f"Missing required configuration: {', '.join(problems)}")
