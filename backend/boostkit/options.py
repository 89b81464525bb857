"""Key/value option store backing feature settings.

Features only ever call ``get`` / ``set`` on it; values are stored as-is in
a JSON column, so whatever mapping a feature saves is what it reads back.
"""

import logging
from typing import Any
from typing import Optional
from typing import Protocol
from typing import runtime_checkable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from boostkit.database import db_session
from boostkit.models.models import Option
from boostkit.utils.time import utc_now_naive

logger = logging.getLogger(__name__)


@runtime_checkable
class OptionStore(Protocol):
    def get(self, name: str, default: Any = None) -> Any: ...

    def set(self, name: str, value: Any) -> bool: ...

    def delete(self, name: str) -> bool: ...


class SqlOptionStore:
    """Option store persisted in the ``boost_options`` table."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    def get(self, name: str, default: Any = None) -> Any:
        """Stored value of *name*; *default* when absent or unreadable."""
        try:
            with db_session(self._session_factory) as db:
                row = db.query(Option).filter(Option.option_name == name).first()
                value = row.option_value if row is not None else None
        except SQLAlchemyError as exc:
            logger.error("Failed to read option %s: %s", name, exc)
            return default
        return default if value is None else value

    def set(self, name: str, value: Any) -> bool:
        """Insert or replace *name*; ``False`` when the write failed."""
        try:
            with db_session(self._session_factory) as db:
                row = db.query(Option).filter(Option.option_name == name).first()
                if row is None:
                    db.add(Option(option_name=name, option_value=value))
                else:
                    row.option_value = value
                    row.updated_at = utc_now_naive()
        except SQLAlchemyError as exc:
            logger.error("Failed to save option %s: %s", name, exc)
            return False
        return True

    def delete(self, name: str) -> bool:
        try:
            with db_session(self._session_factory) as db:
                removed = db.query(Option).filter(Option.option_name == name).delete(synchronize_session=False)
        except SQLAlchemyError as exc:
            logger.error("Failed to delete option %s: %s", name, exc)
            return False
        return removed > 0
