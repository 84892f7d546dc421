"""
Station Reports - Song History Repository Integration Tests

Runs the play history queries against an in-memory SQLite database with
the full ORM schema.
"""

import pytest

from station_reports.database.repositories.song_history_repository import SongHistoryRepository
from station_reports.models.orm_song import Song, SongHistory
from station_reports.models.orm_station import Station

SINCE = 1_700_000_000


@pytest.fixture
def stations(sqlite_session):
    home = Station(name="Home", short_name="home")
    other = Station(name="Other", short_name="other")
    sqlite_session.add_all([home, other])
    sqlite_session.flush()
    return home, other


def _play(session, station, song_id, start, end=None, listeners_start=10, delta=0):
    history = SongHistory(
        song_id=song_id,
        station_id=station.id,
        timestamp_start=start,
        timestamp_end=start + 180 if end is None else end,
        listeners_start=listeners_start,
        listeners_end=None if listeners_start is None else listeners_start + delta,
        delta_total=delta,
    )
    session.add(history)
    session.flush()
    return history


@pytest.fixture
def repo(sqlite_session):
    return SongHistoryRepository(sqlite_session)


class TestSongPlayCounts:

    def test_counts_per_song_most_played_first(self, sqlite_session, repo, stations):
        home, other = stations
        sqlite_session.add_all([Song(id="a"), Song(id="b"), Song(id="c")])
        for offset in range(3):
            _play(sqlite_session, home, "b", SINCE + offset)
        _play(sqlite_session, home, "a", SINCE + 10)
        _play(sqlite_session, home, "c", SINCE + 11)
        _play(sqlite_session, other, "a", SINCE + 12)
        _play(sqlite_session, home, "a", SINCE - 1)

        totals = repo.get_song_play_counts(home.id, SINCE)

        assert totals == [
            {"song_id": "b", "records": 3},
            {"song_id": "a", "records": 1},
            {"song_id": "c", "records": 1},
        ]

    def test_limit(self, sqlite_session, repo, stations):
        home, _ = stations
        for index in range(5):
            _play(sqlite_session, home, f"s{index}", SINCE + index)

        assert len(repo.get_song_play_counts(home.id, SINCE, limit=2)) == 2


class TestSongsByIds:

    def test_resolves_known_ids_only(self, sqlite_session, repo):
        sqlite_session.add_all([
            Song(id="a", text="Artist - A", artist="Artist", title="A"),
            Song(id="b", text="Artist - B"),
        ])
        sqlite_session.flush()

        songs = repo.get_songs_by_ids(["a", "missing"])

        assert list(songs) == ["a"]
        assert songs["a"]["title"] == "A"

    def test_empty_request_skips_query(self, repo):
        assert repo.get_songs_by_ids([]) == {}


class TestPlaysWithListeners:

    def test_returns_plays_oldest_first_with_song(self, sqlite_session, repo, stations):
        home, _ = stations
        sqlite_session.add(Song(id="a", text="Artist - A"))
        later = _play(sqlite_session, home, "a", SINCE + 600, delta=-3)
        earlier = _play(sqlite_session, home, "a", SINCE + 60, delta=5)

        plays = repo.get_plays_with_listeners(home.id, SINCE)

        assert [play["id"] for play in plays] == [earlier.id, later.id]
        assert plays[0]["delta_total"] == 5
        assert plays[0]["listeners_end"] == 15
        assert plays[0]["song"]["text"] == "Artist - A"

    def test_excludes_plays_without_listener_count_and_old_plays(self, sqlite_session, repo, stations):
        home, other = stations
        sqlite_session.add(Song(id="a"))
        _play(sqlite_session, home, "a", SINCE + 60, listeners_start=None)
        _play(sqlite_session, home, "a", SINCE - 60)
        _play(sqlite_session, other, "a", SINCE + 60)
        kept = _play(sqlite_session, home, "a", SINCE)

        plays = repo.get_plays_with_listeners(home.id, SINCE)

        assert [play["id"] for play in plays] == [kept.id]

    def test_unfinished_plays_are_returned(self, sqlite_session, repo, stations):
        home, _ = stations
        sqlite_session.add(Song(id="a"))
        _play(sqlite_session, home, "a", SINCE + 60, end=0)

        plays = repo.get_plays_with_listeners(home.id, SINCE)

        assert plays[0]["timestamp_end"] == 0

    def test_play_of_deleted_song_has_no_song(self, sqlite_session, repo, stations):
        home, _ = stations
        _play(sqlite_session, home, "gone", SINCE + 60)

        plays = repo.get_plays_with_listeners(home.id, SINCE)

        assert plays[0]["song"] is None
        assert plays[0]["song_id"] == "gone"
