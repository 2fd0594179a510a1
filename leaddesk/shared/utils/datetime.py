"""Timezone-aware UTC timestamps.

Recent-search ordering compares created_at values written by Python with
values read back from the database; SQLite hands them back naive, PostgreSQL
in the session time zone. Everything is normalised to aware UTC here.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Naive values are taken to be UTC already; aware ones are converted."""
    if value is None:
        return None
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
