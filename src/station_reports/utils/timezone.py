"""
Station Reports - Timezone Utilities
Provides report-zone handling for listener statistics bucketing.

The time-series store stamps points in UTC epoch milliseconds. Weekday and
hour-of-day buckets are derived in REPORT_TIMEZONE so that the result does
not depend on the server's local zone.
"""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from .config import REPORT_TIMEZONE

UTC_TZ = ZoneInfo('UTC')

# Trailing windows used by the overview report
DAILY_WINDOW = timedelta(days=30)
DELTA_WINDOW = timedelta(weeks=2)
TOP_SONGS_WINDOW_MONTHS = 1


def get_report_timezone() -> ZoneInfo:
    """Get the zone used for weekday and hour-of-day buckets."""
    return ZoneInfo(REPORT_TIMEZONE)


def get_now_utc() -> datetime:
    """
    Get current datetime in UTC.

    Returns:
        datetime: Current datetime with UTC timezone
    """
    return datetime.now(UTC_TZ)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC_TZ)
    return value


def from_epoch_ms(timestamp_ms: float, tz: ZoneInfo = None) -> datetime:
    """
    Convert an epoch-milliseconds timestamp to an aware datetime.

    Args:
        timestamp_ms: Milliseconds since the Unix epoch
        tz: Target zone (defaults to the report zone)

    Returns:
        datetime: Aware datetime in the target zone
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz or get_report_timezone())


def to_epoch_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds."""
    return int(ensure_aware(value).timestamp() * 1000)


def to_epoch_seconds(value: datetime) -> int:
    """Convert a datetime to epoch seconds."""
    return int(ensure_aware(value).timestamp())

