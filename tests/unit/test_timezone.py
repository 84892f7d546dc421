"""
Station Reports - Timezone Utilities Unit Tests
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from freezegun import freeze_time

from station_reports.utils.timezone import (
    ensure_aware,
    from_epoch_ms,
    get_now_utc,
    to_epoch_ms,
    to_epoch_seconds,
)


@freeze_time("2024-01-15 12:00:00")
def test_get_now_utc_is_aware():
    now = get_now_utc()

    assert now.utcoffset().total_seconds() == 0
    assert now == datetime(2024, 1, 15, 12, tzinfo=timezone.utc)


def test_naive_datetimes_are_treated_as_utc():
    assert ensure_aware(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_epoch_conversions():
    value = datetime(2024, 1, 1, 0, 0, 1, tzinfo=timezone.utc)

    assert to_epoch_seconds(value) == 1704067201
    assert to_epoch_ms(value) == 1704067201000


def test_from_epoch_ms_in_zone():
    local = from_epoch_ms(1704067200000, ZoneInfo('America/New_York'))

    assert (local.year, local.month, local.day, local.hour) == (2023, 12, 31, 19)

