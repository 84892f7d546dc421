"""
Station Reports - Statistics Entity Model Unit Tests
"""

from station_reports.models.statistics import (
    ListenerSample,
    SongPlayCount,
    SongPlayDelta,
    SongDeltaRanking,
    StationReport,
    DailySeries,
    HourlySeries,
)


def test_sample_from_point_keeps_missing_bounds():
    sample = ListenerSample.from_point({"time": 1704067200000.0, "value": 3, "min": None})

    assert sample == ListenerSample(timestamp=1704067200000, value=3.0, min=None, max=None)


def test_song_play_count_serializes_song():
    total = SongPlayCount(song={"id": "abc", "text": "Artist - Title"}, play_count=12)

    assert total.song_id == "abc"
    assert total.to_dict() == {
        "song_id": "abc",
        "play_count": 12,
        "song": {"id": "abc", "text": "Artist - Title"},
    }


def test_play_delta_uses_stat_keys():
    play = SongPlayDelta(
        history_id=9, song={"id": "abc"}, timestamp_start=100, timestamp_end=300,
        listener_start=10, listener_end=14, delta=4,
    )

    assert play.to_dict() == {
        "id": 9,
        "song": {"id": "abc"},
        "timestamp_start": 100,
        "timestamp_end": 300,
        "stat_start": 10,
        "stat_end": 14,
        "stat_delta": 4,
    }


def test_restricted_report_has_no_data():
    report = StationReport.restricted_marker(5)

    assert report.restricted is True
    assert report.daily is None
    assert report.to_dict() == {"station_id": 5, "restricted": True}


def test_full_report_keys_in_order():
    report = StationReport(
        station_id=5,
        daily=DailySeries(weekday_averages=[("Monday", 15.0)]),
        hourly=HourlySeries(hour_of_day_averages=[("0:00", 0.0)]),
        song_totals=[],
        deltas=SongDeltaRanking(),
    )

    result = report.to_dict()

    assert list(result) == [
        "station_id", "restricted",
        "daily_ranges", "daily_averages", "day_of_week_stats",
        "hourly_ranges", "hourly_averages", "averages_by_hour",
        "song_totals",
        "best_performing_songs", "worst_performing_songs",
    ]
    assert result["day_of_week_stats"] == [["Monday", 15.0]]
