from sqlalchemy import Column, DateTime

from utils.dates import now


class TimestampMixin:
    """Mixin that provides created/updated timestamps.

    Timestamps are timezone-aware and taken in the configured APP_TIMEZONE.
    DateTime(timezone=True) ensures the timezone info is persisted in the database.
    """
    created_at = Column(DateTime(timezone=True), default=now)
    updated_at = Column(DateTime(timezone=True), onupdate=now)
