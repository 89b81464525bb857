"""Timezone helpers – provide a single UTC *now()* for the storage layer.

Entity timestamps are written explicitly on every insert/update, so every
caller goes through :pyfunc:`utc_now_naive` instead of the stdlib helpers.
"""

from datetime import datetime
from datetime import timezone


def utc_now_naive() -> datetime:  # noqa: D401 – simple utility
    """Return *naive* current time in UTC for database compatibility.

    SQLAlchemy DateTime columns without timezone info store naive datetimes.
    This function provides UTC time in the format expected by the database.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


__all__ = ["utc_now_naive"]
