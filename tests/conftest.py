"""
Station Reports - pytest Configuration and Fixtures

Provides shared test fixtures for:
- In-memory SQLite sessions with the full ORM schema
- Sample listener samples and play history rows
- Mock repositories for aggregator tests
- Flask app and test client
"""

import pytest
from contextlib import contextmanager
from datetime import datetime, timezone
from unittest.mock import Mock

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from station_reports.models import Base
from station_reports.models.statistics import ListenerSample
from station_reports.database.repositories.listener_stats_repository import ListenerStatsRepository
from station_reports.database.repositories.settings_repository import SettingsRepository
from station_reports.database.repositories.song_history_repository import SongHistoryRepository


def epoch_ms(year, month, day, hour=0, minute=0) -> int:
    """Epoch milliseconds for a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, minute, tzinfo=timezone.utc).timestamp() * 1000)


def epoch_s(year, month, day, hour=0, minute=0) -> int:
    """Epoch seconds for a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, minute, tzinfo=timezone.utc).timestamp())


def make_sample(timestamp_ms: int, value: float, min_value: float = None, max_value: float = None) -> ListenerSample:
    return ListenerSample(
        timestamp=timestamp_ms,
        value=value,
        min=value if min_value is None else min_value,
        max=value if max_value is None else max_value,
    )


def make_play(history_id: int, delta: int, timestamp_start: int = None, timestamp_end: int = None,
              listeners_start: int = 10, song: dict = None) -> dict:
    """Play history row as returned by SongHistoryRepository.get_plays_with_listeners()."""
    timestamp_start = timestamp_start if timestamp_start is not None else 1_700_000_000 + history_id * 300
    song = song if song is not None else {"id": f"song-{history_id}", "text": f"Artist - Song {history_id}"}
    return {
        "id": history_id,
        "song_id": song["id"],
        "timestamp_start": timestamp_start,
        "timestamp_end": timestamp_end if timestamp_end is not None else timestamp_start + 240,
        "listeners_start": listeners_start,
        "listeners_end": listeners_start + delta,
        "delta_total": delta,
        "song": song,
    }


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine with every ORM table created."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine):
    """
    SQLAlchemy session bound to the in-memory database.

    Yields:
        Session (closed after the test)
    """
    session = Session(sqlite_engine, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def session_scope(sqlite_session):
    """Drop-in replacement for get_db_session() backed by the SQLite session."""
    @contextmanager
    def _session_scope():
        try:
            yield sqlite_session
            sqlite_session.commit()
        except Exception:
            sqlite_session.rollback()
            raise
    return _session_scope


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_listener_stats():
    """Mock time-series repository returning no samples."""
    repo = Mock(spec=ListenerStatsRepository)
    repo.get_daily_samples.return_value = []
    repo.get_hourly_samples.return_value = []
    return repo


@pytest.fixture
def mock_song_history():
    """Mock play history repository returning no rows."""
    repo = Mock(spec=SongHistoryRepository)
    repo.get_song_play_counts.return_value = []
    repo.get_songs_by_ids.return_value = {}
    repo.get_plays_with_listeners.return_value = []
    return repo


@pytest.fixture
def mock_settings():
    """Mock settings provider with analytics fully enabled."""
    repo = Mock(spec=SettingsRepository)
    repo.get_setting.return_value = 'all'
    return repo


# ============================================================================
# Flask Fixtures
# ============================================================================

@pytest.fixture
def app():
    from station_reports.api.app import create_app
    app = create_app()
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
