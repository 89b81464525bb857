"""Centralised configuration helper.

This module eliminates scattered ``os.getenv`` calls by exposing a **single**
:class:`Settings` container (retrieved via :func:`get_settings`).  Values are
read from the process environment after the project ``.env`` file has been
loaded through *python-dotenv*.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import List

from dotenv import load_dotenv

# ``_REPO_ROOT`` points to the top-level repository directory (one level
# **above** the "backend" package).  We use ``parents[3]`` because this file is
# located at ``backend/boostkit/config/__init__.py``.

_REPO_ROOT = Path(__file__).resolve().parents[3]


def _truthy(value: str | None) -> bool:  # noqa: D401 – small helper
    """Return *True* when *value* looks like an affirmative string."""

    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:  # noqa: D401 – simple data container
    """Lightweight settings container populated from environment variables."""

    # Runtime flags -----------------------------------------------------
    testing: bool
    environment: Any

    # Database ---------------------------------------------------------
    database_url: str
    table_prefix: str

    # Option store -----------------------------------------------------
    option_prefix: str

    # Misc
    log_level: str
    allowed_cors_origins: str

    @property
    def resolved_database_url(self) -> str:
        """Return the configured URL or the local fallback for dev / tests."""
        if self.database_url:
            return self.database_url
        return "sqlite:///:memory:" if self.testing else "sqlite:///./boostkit.db"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_cors_origins.split(",") if origin.strip()]

    # Helper for tests to override values at runtime -------------------
    def override(self, **kwargs: Any) -> None:
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"Settings has no attribute '{key}'")
            setattr(self, key, value)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def _load_settings() -> Settings:  # noqa: D401 – helper
    """Populate :class:`Settings` from environment variables."""

    # Load environment file based on NODE_ENV
    node_env = os.getenv("NODE_ENV", "development")

    if node_env == "test":
        env_path = _REPO_ROOT / ".env.test"
        if not env_path.exists():
            env_path = _REPO_ROOT / ".env"  # Fallback to main .env
    else:
        env_path = _REPO_ROOT / ".env"

    if env_path.exists():
        # Explicit TESTING from the caller wins over the .env file
        current_testing = os.getenv("TESTING")
        load_dotenv(env_path, override=True)
        if current_testing:
            os.environ["TESTING"] = current_testing

    return Settings(
        testing=_truthy(os.getenv("TESTING")),
        environment=os.getenv("ENVIRONMENT"),
        database_url=os.getenv("DATABASE_URL", ""),
        table_prefix=os.getenv("TABLE_PREFIX", ""),
        option_prefix=os.getenv("OPTION_PREFIX", "boostkit_"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        allowed_cors_origins=os.getenv("ALLOWED_CORS_ORIGINS", ""),
    )


def _validate_required(settings: Settings) -> None:  # noqa: D401 – helper
    """Abort startup when mandatory configuration is missing.

    Only production deployments are strict: an implicit SQLite file is fine
    for development and tests but never for a real store.
    """

    if settings.testing or settings.environment != "production":
        return

    missing_vars = []

    if not settings.database_url:
        missing_vars.append("DATABASE_URL")

    if missing_vars:
        raise RuntimeError(
            f"CRITICAL: Missing required environment variables: {', '.join(missing_vars)}\n"
            f"Set these in your .env file or deployment environment."
        )


def get_settings() -> Settings:  # noqa: D401 – public accessor
    """Return :class:`Settings` instance loaded from environment."""

    settings = _load_settings()
    _validate_required(settings)
    return settings
