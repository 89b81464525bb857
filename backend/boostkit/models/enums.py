"""Shared *Enum* definitions for SQLAlchemy & Pydantic models.

The Enums inherit from ``str`` so that:

* JSON serialisation remains unchanged (values render as plain strings).
* Equality checks against raw literals (``status == "active"``) keep working.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class EntityStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class OrderBy(str, Enum):
    """Columns an entity listing may be sorted by.

    This is the complete allow-list: anything else (including real column
    names such as ``settings`` or ``feature_id``) maps to ``PRIORITY``.
    """

    ID = "id"
    NAME = "name"
    STATUS = "status"
    PRIORITY = "priority"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    @classmethod
    def coerce(cls, value: Any) -> "OrderBy":
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        return cls.PRIORITY


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def coerce(cls, value: Any) -> "SortOrder":
        if isinstance(value, str) and value.upper() == "DESC":
            return cls.DESC
        return cls.ASC


__all__ = [
    "EntityStatus",
    "OrderBy",
    "SortOrder",
]
