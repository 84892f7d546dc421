"""
Station Reports - Statistics Entity Models
Raw listener samples and the derived view data of the overview report.

Chart series are JSON-compatible lists: ranges are [timestamp_ms, min, max]
and averages are [timestamp_ms, value] or [label, value].
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ListenerSample:
    """One rollup point from the time-series store."""
    timestamp: int  # epoch milliseconds
    value: float
    min: Optional[float]
    max: Optional[float]

    @classmethod
    def from_point(cls, point: Dict[str, Any]) -> "ListenerSample":
        """Build a sample from an InfluxDB point dict (epoch='ms')."""
        return cls(
            timestamp=int(point['time']),
            value=float(point.get('value') or 0),
            min=point.get('min'),
            max=point.get('max'),
        )


@dataclass
class DailySeries:
    """Daily listener ranges and averages, plus the per-weekday means."""
    ranges: List[Tuple[int, Any, Any]] = field(default_factory=list)
    averages: List[Tuple[int, float]] = field(default_factory=list)
    weekday_averages: List[Tuple[str, float]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "daily_ranges": [list(row) for row in self.ranges],
            "daily_averages": [list(row) for row in self.averages],
            "day_of_week_stats": [list(row) for row in self.weekday_averages],
        }


@dataclass
class HourlySeries:
    """Hourly listener ranges and averages, plus the 24 hour-of-day means."""
    ranges: List[Tuple[int, Any, Any]] = field(default_factory=list)
    averages: List[Tuple[int, float]] = field(default_factory=list)
    hour_of_day_averages: List[Tuple[str, float]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "hourly_ranges": [list(row) for row in self.ranges],
            "hourly_averages": [list(row) for row in self.averages],
            "averages_by_hour": [list(row) for row in self.hour_of_day_averages],
        }


@dataclass
class SongPlayCount:
    """Number of plays of one song in the trailing month."""
    song: Dict[str, Any]
    play_count: int

    @property
    def song_id(self) -> str:
        return self.song['id']

    def to_dict(self) -> dict:
        return {
            "song_id": self.song_id,
            "play_count": self.play_count,
            "song": self.song,
        }


@dataclass
class SongPlayDelta:
    """Listener change over one finished play."""
    history_id: int
    song: Dict[str, Any]
    timestamp_start: int
    timestamp_end: int
    listener_start: int
    listener_end: Optional[int]
    delta: int

    def to_dict(self) -> dict:
        return {
            "id": self.history_id,
            "song": self.song,
            "timestamp_start": self.timestamp_start,
            "timestamp_end": self.timestamp_end,
            "stat_start": self.listener_start,
            "stat_end": self.listener_end,
            "stat_delta": self.delta,
        }


@dataclass
class SongDeltaRanking:
    """Five best and five worst plays by listener delta."""
    best_performing: List[SongPlayDelta] = field(default_factory=list)
    worst_performing: List[SongPlayDelta] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "best_performing_songs": [play.to_dict() for play in self.best_performing],
            "worst_performing_songs": [play.to_dict() for play in self.worst_performing],
        }


@dataclass
class StationReport:
    """
    Overview report for one station.

    A restricted report carries no data; it marks that the analytics level
    forbids computing statistics.
    """
    station_id: int
    restricted: bool = False
    daily: Optional[DailySeries] = None
    hourly: Optional[HourlySeries] = None
    song_totals: List[SongPlayCount] = field(default_factory=list)
    deltas: Optional[SongDeltaRanking] = None

    @classmethod
    def restricted_marker(cls, station_id: int) -> "StationReport":
        return cls(station_id=station_id, restricted=True)

    def to_dict(self) -> dict:
        if self.restricted:
            return {"station_id": self.station_id, "restricted": True}

        result = {"station_id": self.station_id, "restricted": False}
        result.update(self.daily.to_dict())
        result.update(self.hourly.to_dict())
        result["song_totals"] = {
            "played": [total.to_dict() for total in self.song_totals]
        }
        result.update(self.deltas.to_dict())
        return result
