"""Generic repository over the shared entity table.

Every repository instance is bound to one *scope* – a ``(feature_id,
entity_type)`` pair – and every query it issues filters on both columns
first, so one feature can never touch another feature's rows even with a
guessed ``id``.

Storage failures never raise out of this module: reads fall back to
``None`` / ``[]`` / ``0`` and writes return ``None`` / ``False`` / ``0``
after logging the error.  Callers must check return values.
"""

import functools
import logging
from typing import Any
from typing import Callable
from typing import Dict
from typing import Iterable
from typing import List
from typing import Mapping
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker

from boostkit.database import db_session
from boostkit.models.enums import EntityStatus
from boostkit.models.enums import OrderBy
from boostkit.models.enums import SortOrder
from boostkit.models.models import Entity
from boostkit.schemas import schemas
from boostkit.utils.sanitize import coerce_int
from boostkit.utils.sanitize import decode_settings
from boostkit.utils.sanitize import encode_settings
from boostkit.utils.sanitize import sanitize_settings
from boostkit.utils.sanitize import sanitize_status
from boostkit.utils.sanitize import sanitize_text_field
from boostkit.utils.time import utc_now_naive

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

_MISSING = object()


def storage_guard(fallback: Any):
    """Turn ``SQLAlchemyError`` into a logged *fallback* return value.

    *fallback* may be a zero-argument callable (e.g. ``list``) so mutable
    defaults are never shared.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(self: "EntityRepository", *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except SQLAlchemyError as exc:
                logger.error(
                    "Entity storage error in %s for %s/%s: %s",
                    func.__name__,
                    self.feature_id,
                    self.entity_type,
                    exc,
                )
                return fallback() if callable(fallback) else fallback

        return wrapper

    return decorator


def _lookup(settings: Mapping[str, Any], key: str) -> Any:
    """Resolve a dotted *key* (``"display.mode"``) inside nested settings."""
    current: Any = settings
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _strict_equals(left: Any, right: Any) -> bool:
    # 1 must not match True, 1 must not match 1.0
    return type(left) is type(right) and left == right


class EntityRepository:
    """CRUD, counting and bulk operations for one entity scope."""

    allowed_orderby = tuple(member.value for member in OrderBy)

    default_query: Dict[str, Any] = {
        "status": None,
        "orderby": OrderBy.PRIORITY.value,
        "order": SortOrder.ASC.value,
        "limit": 100,
        "offset": 0,
    }

    def __init__(self, feature_id: str, entity_type: str, session_factory: Optional[sessionmaker] = None):
        self.feature_id = feature_id
        self.entity_type = entity_type
        self._session_factory = session_factory

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.feature_id}/{self.entity_type}>"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _scoped(self, db: Session) -> Query:
        return db.query(Entity).filter(
            Entity.feature_id == self.feature_id,
            Entity.entity_type == self.entity_type,
        )

    @staticmethod
    def _hydrate(row: Entity) -> schemas.Entity:
        return schemas.Entity(
            id=int(row.id),
            feature_id=row.feature_id,
            entity_type=row.entity_type,
            name=row.name or "",
            settings=decode_settings(row.settings),
            status=row.status,
            priority=coerce_int(row.priority, DEFAULT_PRIORITY),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _normalise_ids(ids: Iterable[Any]) -> List[int]:
        return [coerce_int(entity_id) for entity_id in ids]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @storage_guard(None)
    def find(self, entity_id: Any) -> Optional[schemas.Entity]:
        """Return the scoped entity or ``None`` when absent."""
        with db_session(self._session_factory) as db:
            row = self._scoped(db).filter(Entity.id == coerce_int(entity_id)).first()
            return self._hydrate(row) if row is not None else None

    @storage_guard(list)
    def get_all(self, args: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> List[schemas.Entity]:
        """List scoped entities.

        Options: ``status``, ``orderby`` (allow-listed, else ``priority``),
        ``order`` (``DESC`` case-insensitively, else ``ASC``), ``limit`` and
        ``offset``.
        """
        options = {**self.default_query, **(args or {}), **kwargs}

        column = getattr(Entity, OrderBy.coerce(options["orderby"]).value)
        direction = SortOrder.coerce(options["order"])
        ordering = column.desc() if direction is SortOrder.DESC else column.asc()

        limit = max(coerce_int(options["limit"], self.default_query["limit"]), 0)
        offset = max(coerce_int(options["offset"], 0), 0)

        with db_session(self._session_factory) as db:
            query = self._scoped(db)
            if options["status"]:
                query = query.filter(Entity.status == options["status"])
            rows = query.order_by(ordering, Entity.id.asc()).offset(offset).limit(limit).all()
            return [self._hydrate(row) for row in rows]

    def get_active(self) -> List[schemas.Entity]:
        return self.get_all({"status": EntityStatus.ACTIVE.value})

    @storage_guard(0)
    def count(self, status: Optional[str] = None) -> int:
        with db_session(self._session_factory) as db:
            query = self._scoped(db)
            if status:
                query = query.filter(Entity.status == status)
            return query.count()

    def find_by_setting(self, key: str, value: Any) -> List[schemas.Entity]:
        """Active entities whose settings hold exactly *value* at *key*.

        *key* may be dotted to reach into nested mappings.  Settings are an
        opaque blob to the database, so the filter runs in memory.
        """
        return [
            entity for entity in self.get_active() if _strict_equals(_lookup(entity.settings, key), value)
        ]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @storage_guard(None)
    def create(self, data: Mapping[str, Any]) -> Optional[int]:
        """Insert a sanitised row; returns the new id or ``None`` on failure."""
        settings = data.get("settings")
        now = utc_now_naive()

        row = Entity(
            feature_id=self.feature_id,
            entity_type=self.entity_type,
            name=sanitize_text_field(data.get("name") or ""),
            settings=encode_settings(sanitize_settings(settings if isinstance(settings, Mapping) else {})),
            status=sanitize_status(data.get("status") or EntityStatus.ACTIVE.value),
            priority=coerce_int(data.get("priority", DEFAULT_PRIORITY), DEFAULT_PRIORITY),
            created_at=now,
            updated_at=now,
        )

        with db_session(self._session_factory) as db:
            db.add(row)
            db.flush()
            new_id = int(row.id)

        logger.debug("Created entity %s in %s/%s", new_id, self.feature_id, self.entity_type)
        return new_id

    @storage_guard(False)
    def update(self, entity_id: Any, data: Mapping[str, Any]) -> bool:
        """Partial update of the keys present in *data*.

        A key whose value is ``None`` counts as absent and leaves the column
        untouched; there is no way to null a column through here.
        ``updated_at`` is always refreshed.  Returns ``False`` when no scoped
        row matched or the write failed.
        """
        values: Dict[str, Any] = {"updated_at": utc_now_naive()}

        if data.get("name") is not None:
            values["name"] = sanitize_text_field(data["name"])
        if data.get("settings") is not None:
            settings = data["settings"]
            values["settings"] = encode_settings(sanitize_settings(settings if isinstance(settings, Mapping) else {}))
        if data.get("status") is not None:
            values["status"] = sanitize_status(data["status"])
        if data.get("priority") is not None:
            values["priority"] = coerce_int(data["priority"], DEFAULT_PRIORITY)

        with db_session(self._session_factory) as db:
            matched = (
                self._scoped(db)
                .filter(Entity.id == coerce_int(entity_id))
                .update(values, synchronize_session=False)
            )
        return matched > 0

    @storage_guard(False)
    def delete(self, entity_id: Any) -> bool:
        """Remove the scoped row; ``False`` when nothing matched or on failure."""
        with db_session(self._session_factory) as db:
            removed = self._scoped(db).filter(Entity.id == coerce_int(entity_id)).delete(synchronize_session=False)
        return removed > 0

    @storage_guard(0)
    def bulk_update_status(self, ids: Iterable[Any], status: str) -> int:
        """Set *status* on every scoped id in one statement; returns rows affected."""
        ids = self._normalise_ids(ids)
        if not ids:
            return 0

        with db_session(self._session_factory) as db:
            return (
                self._scoped(db)
                .filter(Entity.id.in_(ids))
                .update(
                    {"status": sanitize_status(status), "updated_at": utc_now_naive()},
                    synchronize_session=False,
                )
            )

    @storage_guard(0)
    def bulk_delete(self, ids: Iterable[Any]) -> int:
        ids = self._normalise_ids(ids)
        if not ids:
            return 0

        with db_session(self._session_factory) as db:
            return self._scoped(db).filter(Entity.id.in_(ids)).delete(synchronize_session=False)

    def reorder(self, priorities: Mapping[Any, Any]) -> bool:
        """Write one ``priority`` per id.

        Each write commits on its own; a failure part-way leaves the earlier
        writes applied.  Always returns ``True`` once every write was issued.
        """
        for entity_id, priority in priorities.items():
            try:
                with db_session(self._session_factory) as db:
                    self._scoped(db).filter(Entity.id == coerce_int(entity_id)).update(
                        {"priority": coerce_int(priority, DEFAULT_PRIORITY), "updated_at": utc_now_naive()},
                        synchronize_session=False,
                    )
            except SQLAlchemyError as exc:
                logger.error(
                    "Entity storage error in reorder for %s/%s (id=%s): %s",
                    self.feature_id,
                    self.entity_type,
                    entity_id,
                    exc,
                )
        return True

    def duplicate(self, entity_id: Any) -> Optional[int]:
        """Copy an entity as an inactive sibling ranked right after it."""
        entity = self.find(entity_id)
        if entity is None:
            return None

        return self.create(
            {
                "name": f"{entity.name} (Copy)",
                "settings": entity.settings,
                "status": EntityStatus.INACTIVE.value,
                "priority": entity.priority + 1,
            }
        )
