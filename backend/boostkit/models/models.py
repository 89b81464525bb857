from sqlalchemy import JSON
from sqlalchemy import Column
from sqlalchemy import DateTime
from sqlalchemy import Index
from sqlalchemy import Integer
from sqlalchemy import String
from sqlalchemy import Text
from sqlalchemy.sql import func

from boostkit.config import get_settings
from boostkit.database import Base
from boostkit.models.enums import EntityStatus

_settings = get_settings()

ENTITY_TABLE_NAME = "boost_entities"
OPTION_TABLE_NAME = "boost_options"

# ---------------------------------------------------------------------------
# Entities – one physical table shared by every feature
# ---------------------------------------------------------------------------


class Entity(Base):
    """Configurable item owned by a feature (one bump, one rule, ...).

    ``feature_id`` + ``entity_type`` select the logical collection; all
    repository access is filtered by both before ``id`` is considered.
    """

    __tablename__ = f"{_settings.table_prefix}{ENTITY_TABLE_NAME}"
    __table_args__ = (
        Index(f"ix_{__tablename__}_feature", "feature_id", "entity_type", "status"),
        Index(f"ix_{__tablename__}_status", "status"),
        Index(f"ix_{__tablename__}_priority", "priority"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    feature_id = Column(String(50), nullable=False)
    entity_type = Column(String(50), nullable=False)
    name = Column(String(255), default="")

    # Serialised settings blob – encoded/decoded by boostkit.utils.sanitize
    settings = Column(Text, nullable=True)

    status = Column(String(20), default=EntityStatus.ACTIVE.value)
    priority = Column(Integer, default=10)

    # Timestamps -------------------------------------------------------------
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


# ---------------------------------------------------------------------------
# Options – key/value store backing feature settings
# ---------------------------------------------------------------------------


class Option(Base):
    __tablename__ = f"{_settings.table_prefix}{OPTION_TABLE_NAME}"

    id = Column(Integer, primary_key=True, autoincrement=True)
    option_name = Column(String(191), unique=True, nullable=False, index=True)
    option_value = Column(JSON, nullable=True)

    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
