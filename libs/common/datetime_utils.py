"""Datetime utilities for timezone-aware UTC timestamps.

Usage:
    from libs.common.datetime_utils import utc_now

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Always use this for timestamps in the database.
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to aware UTC.

    Naive values are taken to already be UTC. Backends without a native
    timezone type (SQLite) hand back naive datetimes, so anything read from
    the database should pass through here before being compared with
    request input.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Pydantic field type that always validates to an aware UTC datetime.
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]
