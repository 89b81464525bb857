"""Schema owner for the shared entity table.

Creation, existence check and drop only – no business logic lives here.
"""

import logging

from sqlalchemy import Engine
from sqlalchemy import inspect

from boostkit.models.models import Entity

logger = logging.getLogger(__name__)


class EntityTable:
    """Handles entity table creation and management."""

    VERSION = "1.0.0"

    @staticmethod
    def get_table_name() -> str:
        """Return the physical table name (prefix included)."""
        return Entity.__table__.name

    @classmethod
    def create(cls, engine: Engine) -> bool:
        """Create the table and its indexes when missing.

        Returns whether the table exists afterwards.
        """
        Entity.__table__.create(bind=engine, checkfirst=True)
        created = cls.exists(engine)
        logger.info("Entity table %s ready: %s", cls.get_table_name(), created)
        return created

    @classmethod
    def exists(cls, engine: Engine) -> bool:
        return inspect(engine).has_table(cls.get_table_name())

    @classmethod
    def drop(cls, engine: Engine) -> bool:
        """Drop the table; returns ``True`` once it is gone."""
        Entity.__table__.drop(bind=engine, checkfirst=True)
        return not cls.exists(engine)

    @classmethod
    def get_version(cls) -> str:
        return cls.VERSION
