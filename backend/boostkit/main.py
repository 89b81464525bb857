import logging
from typing import Iterable
from typing import Optional

from dotenv import load_dotenv

# Load environment variables FIRST - before any other imports
load_dotenv()

# ruff: noqa: E402
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from boostkit.bootstrap import Addon
from boostkit.config import get_settings
from boostkit.constants import API_PREFIX
from boostkit.constants import FEATURES_PREFIX
from boostkit.database import get_session_factory
from boostkit.database import initialize_database
from boostkit.routers.entities import router as entities_router
from boostkit.routers.features import router as features_router

_settings = get_settings()

# --------------------------------------------------------------------------
# LOGGING CONFIGURATION
# --------------------------------------------------------------------------
#
# - Default log level: INFO
# - Can be set at runtime with LOG_LEVEL env (e.g. LOG_LEVEL=WARNING for CI)
#
_log_level_name = _settings.log_level.upper()
_log_level = getattr(logging, _log_level_name, None)
if not isinstance(_log_level, int):
    _log_level = logging.INFO
logging.basicConfig(level=_log_level, format="%(levelname)s - %(message)s", handlers=[logging.StreamHandler()])

logger = logging.getLogger(__name__)


def create_app(session_factory: Optional[sessionmaker] = None, addons: Iterable[Addon] = ()) -> FastAPI:
    """Build the HTTP application.

    Every request boots its own container from *session_factory* (the
    module default when omitted) and *addons*.
    """
    factory = session_factory or get_session_factory()

    app = FastAPI(redirect_slashes=True)
    app.state.session_factory = factory
    app.state.addons = tuple(addons)

    # CORS – open wildcard unless ALLOWED_CORS_ORIGINS restricts it
    cors_origins = _settings.cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Entity routes first: their prefix also starts with ``/{feature_id}``
    app.include_router(entities_router, prefix=f"{API_PREFIX}{FEATURES_PREFIX}")
    app.include_router(features_router, prefix=f"{API_PREFIX}{FEATURES_PREFIX}")

    initialize_database(factory.kw.get("bind"))
    logger.info("Application ready, API mounted at %s%s", API_PREFIX, FEATURES_PREFIX)

    return app


app = create_app()
