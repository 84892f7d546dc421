"""
Station Reports - Listener Statistics Repository Unit Tests
"""

from datetime import datetime, timezone
from unittest.mock import Mock

from station_reports.database.repositories.listener_stats_repository import ListenerStatsRepository
from station_reports.database.timeseries import TimeSeriesConnection
from station_reports.models.statistics import ListenerSample
from tests.conftest import epoch_ms


def _repo(points):
    connection = Mock(spec=TimeSeriesConnection)
    connection.query.return_value = points
    return ListenerStatsRepository(connection), connection


def test_measurement_name():
    assert ListenerStatsRepository.measurement(12) == "station.12.listeners"


def test_daily_samples_query_window():
    repo, connection = _repo([])

    repo.get_daily_samples(3, datetime(2024, 1, 1, tzinfo=timezone.utc))

    connection.query.assert_called_once_with(
        f'SELECT * FROM "1d"."station.3.listeners" WHERE time > {epoch_ms(2024, 1, 1)}ms',
        epoch='ms'
    )


def test_daily_samples_are_converted():
    repo, _ = _repo([
        {"time": 1000, "value": 12.5, "min": 3, "max": 20},
        {"time": 2000, "value": None, "min": None, "max": None},
    ])

    samples = repo.get_daily_samples(3, datetime(2024, 1, 1, tzinfo=timezone.utc))

    assert samples == [
        ListenerSample(timestamp=1000, value=12.5, min=3, max=20),
        ListenerSample(timestamp=2000, value=0.0, min=None, max=None),
    ]


def test_hourly_samples_read_whole_retention():
    repo, connection = _repo([{"time": 3600000, "value": 7, "min": 5, "max": 9}])

    samples = repo.get_hourly_samples(3)

    connection.query.assert_called_once_with('SELECT * FROM "1h"."station.3.listeners"', epoch='ms')
    assert samples == [ListenerSample(timestamp=3600000, value=7.0, min=5, max=9)]
