"""
Station Reports - Statistics Aggregator
Builds the station overview report from listener rollups and play history.

Pipeline (single synchronous pass per request):
1. Daily rollups (trailing 30 days) -> ranges, averages, per-weekday means
2. Hourly rollups (whole retention) -> ranges, averages, 24 hour-of-day means
3. Song play counts (trailing month) -> top songs
4. Finished plays with listener counts (trailing 2 weeks) -> best/worst deltas

Nothing is persisted; every report is recomputed from the stores.
"""

import time
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from operator import attrgetter
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from ..database.repositories.listener_stats_repository import ListenerStatsRepository
from ..database.repositories.settings_repository import SettingsRepository
from ..database.repositories.song_history_repository import (
    SongHistoryRepository, SONG_TOTALS_FETCH_LIMIT
)
from ..models.orm_settings import Settings, AnalyticsLevel
from ..models.statistics import (
    ListenerSample, DailySeries, HourlySeries,
    SongPlayCount, SongPlayDelta, SongDeltaRanking, StationReport
)
from ..utils.logger import (
    log_report_start, log_report_complete, log_report_restricted, log_report_error
)
from ..utils.timezone import (
    DAILY_WINDOW, DELTA_WINDOW, TOP_SONGS_WINDOW_MONTHS,
    get_report_timezone, get_now_utc, ensure_aware, from_epoch_ms,
    to_epoch_seconds
)

WEEKDAY_NAMES = (
    'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday'
)
HOURS_PER_DAY = 24

# Daily rollups are stamped at the start of the day they summarize
DAY_SHIFT_MS = 12 * 60 * 60 * 1000

TOP_SONGS_LIMIT = 10
PERFORMANCE_LIST_SIZE = 5

_TWO_PLACES = Decimal('0.01')


def round_half_up(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    return float(Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def bucket_daily_samples(samples: Iterable[ListenerSample], tz: ZoneInfo) -> DailySeries:
    """
    Shift daily rollups into the day they represent and bucket by weekday.

    Weekday means are emitted in first-seen order, one per weekday present.

    Args:
        samples: Daily samples in chronological order
        tz: Zone the weekday is derived in

    Returns:
        DailySeries (all lists empty for empty input)
    """
    series = DailySeries()
    totals_by_weekday: List[List[float]] = [[] for _ in WEEKDAY_NAMES]
    weekdays_seen: List[int] = []

    for sample in samples:
        timestamp = sample.timestamp + DAY_SHIFT_MS

        series.ranges.append((timestamp, sample.min, sample.max))
        series.averages.append((timestamp, round_half_up(sample.value)))

        weekday = from_epoch_ms(timestamp, tz).weekday()
        if not totals_by_weekday[weekday]:
            weekdays_seen.append(weekday)
        totals_by_weekday[weekday].append(sample.value)

    series.weekday_averages = [
        (WEEKDAY_NAMES[weekday], round_half_up(_mean(totals_by_weekday[weekday])))
        for weekday in weekdays_seen
    ]
    return series


def bucket_hourly_samples(samples: Iterable[ListenerSample], tz: ZoneInfo) -> HourlySeries:
    """
    Bucket hourly rollups by hour of day.

    Always emits 24 hour-of-day means in order 0:00..23:00; an hour with no
    observations averages a single zero observation.

    Args:
        samples: Hourly samples in chronological order
        tz: Zone the hour is derived in

    Returns:
        HourlySeries
    """
    series = HourlySeries()
    totals_by_hour: List[List[float]] = [[] for _ in range(HOURS_PER_DAY)]

    for sample in samples:
        series.ranges.append((sample.timestamp, sample.min, sample.max))
        series.averages.append((sample.timestamp, round_half_up(sample.value)))

        hour = from_epoch_ms(sample.timestamp, tz).hour
        totals_by_hour[hour].append(sample.value)

    series.hour_of_day_averages = [
        (f"{hour}:00", round_half_up(_mean(totals_by_hour[hour] or [0])))
        for hour in range(HOURS_PER_DAY)
    ]
    return series


def rank_song_deltas(plays: Iterable[SongPlayDelta], size: int = PERFORMANCE_LIST_SIZE) -> SongDeltaRanking:
    """
    Pick the highest- and lowest-delta plays.

    The sort is stable, so plays with equal deltas keep their chronological
    order. With fewer than 2 * size plays the two lists share entries.

    Args:
        plays: Finished plays, oldest first
        size: Length of each list

    Returns:
        SongDeltaRanking with best (descending delta) and worst (ascending delta)
    """
    ordered = sorted(plays, key=attrgetter('delta'))
    return SongDeltaRanking(
        best_performing=list(reversed(ordered[-size:])) if size > 0 else [],
        worst_performing=ordered[:size],
    )


class MissingSongError(Exception):
    """Raised when a play references a song that cannot be resolved."""

    def __init__(self, song_id: str, station_id: int):
        super().__init__(f"Song '{song_id}' referenced by station {station_id} play history does not exist")
        self.song_id = song_id
        self.station_id = station_id


class StatisticsAggregator:
    """
    Aggregates listener statistics and play history for one station.

    All collaborators are read-only; the aggregator holds no state between
    reports.
    """

    def __init__(
        self,
        listener_stats: ListenerStatsRepository,
        song_history: SongHistoryRepository,
        settings: SettingsRepository,
        tz: Optional[ZoneInfo] = None,
    ):
        """
        Initialize aggregator.

        Args:
            listener_stats: Time-series rollup reader
            song_history: Play history reader
            settings: Settings provider (analytics level)
            tz: Zone for weekday/hour buckets (defaults to REPORT_TIMEZONE)
        """
        self.listener_stats = listener_stats
        self.song_history = song_history
        self.settings = settings
        self.tz = tz or get_report_timezone()

    def build_daily_series(self, station_id: int, now: datetime) -> DailySeries:
        """Daily ranges, averages and weekday means over the trailing 30 days."""
        since = ensure_aware(now) - DAILY_WINDOW
        samples = self.listener_stats.get_daily_samples(station_id, since)
        return bucket_daily_samples(samples, self.tz)

    def build_hourly_series(self, station_id: int) -> HourlySeries:
        """Hourly ranges, averages and the 24 hour-of-day means."""
        samples = self.listener_stats.get_hourly_samples(station_id)
        return bucket_hourly_samples(samples, self.tz)

    def top_played_songs(
        self,
        station_id: int,
        now: datetime,
        limit: int = TOP_SONGS_LIMIT,
    ) -> List[SongPlayCount]:
        """
        Most played songs over the trailing calendar month.

        Args:
            station_id: Station ID
            now: Reference instant
            limit: Maximum entries returned

        Returns:
            SongPlayCount list, most played first

        Raises:
            MissingSongError: If a counted song has no song record
        """
        since = to_epoch_seconds(ensure_aware(now) - relativedelta(months=TOP_SONGS_WINDOW_MONTHS))
        raw_totals = self.song_history.get_song_play_counts(
            station_id, since, limit=SONG_TOTALS_FETCH_LIMIT
        )
        songs = self.song_history.get_songs_by_ids([record['song_id'] for record in raw_totals])

        totals = []
        for record in raw_totals:
            song = songs.get(record['song_id'])
            if song is None:
                raise MissingSongError(record['song_id'], station_id)
            totals.append(SongPlayCount(song=song, play_count=int(record['records'])))

        return totals[:limit]

    def song_listener_deltas(self, station_id: int, now: datetime) -> SongDeltaRanking:
        """
        Best and worst performing plays over the trailing two weeks.

        Plays that have not ended (timestamp_end == 0) are skipped. The
        stored delta_total is used as-is.

        Raises:
            MissingSongError: If a finished play has no song record
        """
        since = to_epoch_seconds(ensure_aware(now) - DELTA_WINDOW)

        plays = []
        for row in self.song_history.get_plays_with_listeners(station_id, since):
            if row['timestamp_end'] == 0:
                continue
            if row['song'] is None:
                raise MissingSongError(row['song_id'], station_id)

            plays.append(SongPlayDelta(
                history_id=row['id'],
                song=row['song'],
                timestamp_start=row['timestamp_start'],
                timestamp_end=row['timestamp_end'],
                listener_start=row['listeners_start'],
                listener_end=row['listeners_end'],
                delta=row['delta_total'],
            ))

        return rank_song_deltas(plays)

    def build_report(self, station_id: int, now: Optional[datetime] = None) -> StationReport:
        """
        Build the full overview report, or the restricted marker when the
        analytics level is "none" (checked before any statistics query).

        Args:
            station_id: Station ID
            now: Reference instant (defaults to current UTC time)

        Returns:
            StationReport
        """
        analytics_level = self.settings.get_setting(
            Settings.LISTENER_ANALYTICS, AnalyticsLevel.ALL.value
        )
        if analytics_level == AnalyticsLevel.NONE.value:
            log_report_restricted(station_id)
            return StationReport.restricted_marker(station_id)

        now = ensure_aware(now or get_now_utc())
        log_report_start(station_id)
        started = time.monotonic()

        try:
            report = StationReport(
                station_id=station_id,
                daily=self.build_daily_series(station_id, now),
                hourly=self.build_hourly_series(station_id),
                song_totals=self.top_played_songs(station_id, now),
                deltas=self.song_listener_deltas(station_id, now),
            )
        except Exception as e:
            log_report_error(e, station_id)
            raise

        log_report_complete(
            station_id,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
            songs_ranked=len(report.song_totals),
            plays_ranked=len(report.deltas.best_performing) + len(report.deltas.worst_performing),
        )
        return report
