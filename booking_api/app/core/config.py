"""
Configuration management.

The ``Settings`` dataclass reads configuration from environment
variables.  A ``.env`` file in the working directory is loaded first
so that database credentials and the token signing secret can be kept
out of the shell environment during development.  Defaults are
provided for everything except the credentials themselves.

Values are read when a ``Settings`` instance is created, not when this
module is imported, so tests can adjust the environment and build a
fresh instance.
"""

import os
from dataclasses import dataclass, field
from typing import List
from urllib.parse import quote_plus

from dotenv import load_dotenv


load_dotenv()

_SAMESITE_VALUES = {"strict", "lax", "none"}


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Booking Services API"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    # When enabled, 500 responses also carry the repr of the underlying
    # driver error.  Never enable this in production.
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: _env("LOG_FILE"))

    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 5000))

    secret_key: str = field(default_factory=lambda: _env("ACCESS_TOKEN_SECRET", "change_me"))
    access_token_expire_minutes: int = field(default_factory=lambda: _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    algorithm: str = field(default_factory=lambda: _env("ALGORITHM", "HS256"))

    # Session cookie attributes.  The defaults allow the cookie to be sent
    # by a frontend served from another origin over HTTPS.
    cookie_name: str = field(default_factory=lambda: _env("COOKIE_NAME", "token"))
    cookie_secure: bool = field(default_factory=lambda: _env_flag("COOKIE_SECURE", "true"))
    cookie_samesite: str = field(default_factory=lambda: _env("COOKIE_SAMESITE", "none"))

    # Comma-separated list of origins allowed by CORS.  ``*`` allows any.
    cors_origins: str = field(default_factory=lambda: _env("CORS_ORIGINS", "*"))

    # Gate the booking routes behind the session cookie.  Services routes
    # are always public and ``/session`` is always protected.
    bookings_require_auth: bool = field(default_factory=lambda: _env_flag("BOOKINGS_REQUIRE_AUTH"))

    # MongoDB connection.  ``MONGO_URI`` wins when set; otherwise an Atlas
    # SRV URI is assembled from the credentials and cluster host.
    mongo_uri_override: str = field(default_factory=lambda: _env("MONGO_URI"))
    db_user: str = field(default_factory=lambda: _env("DB_USER"))
    db_pass: str = field(default_factory=lambda: _env("DB_PASS"))
    db_cluster_host: str = field(default_factory=lambda: _env("DB_CLUSTER_HOST", "cluster0.1pple.mongodb.net"))
    db_app_name: str = field(default_factory=lambda: _env("DB_APP_NAME", "Cluster0"))
    db_name: str = field(default_factory=lambda: _env("DB_NAME", "HexaaDB"))
    services_collection: str = field(default_factory=lambda: _env("SERVICES_COLLECTION", "services"))
    booking_collection: str = field(default_factory=lambda: _env("BOOKING_COLLECTION", "booking"))
    db_timeout_ms: int = field(default_factory=lambda: _env_int("DB_TIMEOUT_MS", 5000))

    def __post_init__(self) -> None:
        self.cookie_samesite = self.cookie_samesite.lower()
        if self.cookie_samesite not in _SAMESITE_VALUES:
            raise ValueError(
                f"COOKIE_SAMESITE must be one of {', '.join(sorted(_SAMESITE_VALUES))}, "
                f"got {self.cookie_samesite!r}"
            )

    @property
    def mongo_uri(self) -> str:
        """Connection string handed to ``MongoClient``."""
        if self.mongo_uri_override:
            return self.mongo_uri_override
        user = quote_plus(self.db_user)
        password = quote_plus(self.db_pass)
        return (
            f"mongodb+srv://{user}:{password}@{self.db_cluster_host}/"
            f"?retryWrites=true&w=majority&appName={self.db_app_name}"
        )

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def token_lifetime_seconds(self) -> int:
        return self.access_token_expire_minutes * 60


# Shared instance used by ``main`` and the command line scripts.  Tests
# build their own ``Settings`` and pass it to ``create_app``.
settings = Settings()
