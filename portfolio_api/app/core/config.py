"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for every field except
the secrets, which fall back to development placeholders.  In a
production deployment you should override these via environment
variables (``MONGODB_URI``, ``JWT_SECRET``, ``EXPIRES_IN``...).
"""

import os
import re
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 60 * 60, "d": 24 * 60 * 60, "w": 7 * 24 * 60 * 60}


def parse_duration(value: str) -> int:
    """Convert a token lifetime such as ``"3600"``, ``"15m"`` or ``"1d"`` to seconds.

    Accepts plain seconds or a number followed by one of ``s``, ``m``,
    ``h``, ``d`` or ``w``.  Raises ``ValueError`` for anything else.
    """
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNITS[unit.lower()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Portfolio API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # Comma-separated list of allowed origins; ``*`` allows every origin.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # MongoDB connection.  The client is created once at startup and
    # shared by all requests.
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    mongodb_db_name: str = os.getenv("MONGODB_DB_NAME", "portfolio")
    mongodb_timeout_ms: int = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    jwt_secret: str = os.getenv("JWT_SECRET", "change_me")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    # Same notation as the ``expiresIn`` option of jsonwebtoken: seconds
    # or a number with a unit suffix.
    expires_in: str = os.getenv("EXPIRES_IN", "1d")

    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # When enabled, account documents returned by the API include the
    # stored password hash, matching the legacy payloads byte for byte.
    expose_password_hash: bool = _env_flag("EXPOSE_PASSWORD_HASH")

    @property
    def expires_in_seconds(self) -> int:
        return parse_duration(self.expires_in)

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
