"""
Station Reports - Song History Repository
Provides read access to song plays and song metadata using SQLAlchemy ORM.

All timestamps are epoch seconds, matching the song_history columns.
"""

from typing import Any, Dict, Iterable, List

from sqlalchemy import select, func, and_, desc
from sqlalchemy.orm import Session

from ...models.orm_song import Song, SongHistory

# Upper bound on grouped song totals fetched before presentation trimming
SONG_TOTALS_FETCH_LIMIT = 40


class SongHistoryRepository:
    """Repository for song play history queries."""

    def __init__(self, session: Session):
        """
        Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy session object
        """
        self.session = session

    def get_song_play_counts(
        self,
        station_id: int,
        since: int,
        limit: int = SONG_TOTALS_FETCH_LIMIT,
    ) -> List[Dict[str, Any]]:
        """
        Count plays per song on a station since a given time.

        Args:
            station_id: Station ID
            since: Inclusive lower bound on timestamp_start (epoch seconds)
            limit: Maximum number of songs returned

        Returns:
            List of {"song_id", "records"} dicts, most played first
        """
        records = func.count(SongHistory.id).label("records")
        stmt = (
            select(SongHistory.song_id, records)
            .where(
                and_(
                    SongHistory.station_id == station_id,
                    SongHistory.timestamp_start >= since,
                )
            )
            .group_by(SongHistory.song_id)
            .order_by(desc(records), SongHistory.song_id)
            .limit(limit)
        )

        result = self.session.execute(stmt)
        return [dict(row._mapping) for row in result]

    def get_songs_by_ids(self, song_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        Resolve song metadata for a batch of IDs in one query.

        Args:
            song_ids: Song IDs to look up

        Returns:
            Dict mapping song ID to song dict; unknown IDs are absent
        """
        song_ids = list(song_ids)
        if not song_ids:
            return {}

        songs = self.session.scalars(select(Song).where(Song.id.in_(song_ids)))
        return {song.id: song.to_dict() for song in songs}

    def get_plays_with_listeners(self, station_id: int, since: int) -> List[Dict[str, Any]]:
        """
        Fetch plays with a recorded starting listener count, oldest first.

        Song metadata is left-joined, so a play whose song row is gone comes
        back with song=None.

        Args:
            station_id: Station ID
            since: Inclusive lower bound on timestamp_start (epoch seconds)

        Returns:
            List of play dicts with a nested "song" dict (or None)
        """
        stmt = (
            select(SongHistory, Song)
            .outerjoin(Song, SongHistory.song_id == Song.id)
            .where(
                and_(
                    SongHistory.station_id == station_id,
                    SongHistory.timestamp_start >= since,
                    SongHistory.listeners_start.isnot(None),
                )
            )
            .order_by(SongHistory.timestamp_start.asc(), SongHistory.id.asc())
        )

        plays = []
        for history, song in self.session.execute(stmt):
            plays.append({
                "id": history.id,
                "song_id": history.song_id,
                "timestamp_start": history.timestamp_start,
                "timestamp_end": history.timestamp_end,
                "listeners_start": history.listeners_start,
                "listeners_end": history.listeners_end,
                "delta_total": history.delta_total,
                "song": song.to_dict() if song is not None else None,
            })
        return plays
