"""
SQLAlchemy ORM Models: Song and SongHistory
Song metadata and one row per song play on a station.
"""

from sqlalchemy import Integer, String, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base
from typing import List, Optional


class Song(Base):
    """Song metadata, keyed by a hash of artist and title."""
    __tablename__ = "songs"
    __table_args__ = {'extend_existing': True}

    id: Mapped[str] = mapped_column(String(50), primary_key=True)

    text: Mapped[Optional[str]] = mapped_column(String(150))
    artist: Mapped[Optional[str]] = mapped_column(String(150))
    title: Mapped[Optional[str]] = mapped_column(String(150))

    created: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    play_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_played: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    history: Mapped[List["SongHistory"]] = relationship(
        "SongHistory",
        back_populates="song"
    )

    def __repr__(self) -> str:
        return f"<Song(id='{self.id}', text='{self.text}')>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "artist": self.artist,
            "title": self.title,
            "created": self.created,
            "play_count": self.play_count,
            "last_played": self.last_played,
        }


class SongHistory(Base):
    """
    A single play of a song on a station.

    Timestamps are epoch seconds; timestamp_end stays 0 until the play ends.
    Listener counts are sampled at start and end, and the deltas are
    computed when the play is closed.
    """
    __tablename__ = "song_history"

    id: Mapped[int] = mapped_column(primary_key=True)

    song_id: Mapped[str] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"),
        nullable=False
    )
    station_id: Mapped[int] = mapped_column(
        ForeignKey("station.id", ondelete="CASCADE"),
        nullable=False
    )

    timestamp_start: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    timestamp_end: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    listeners_start: Mapped[Optional[int]] = mapped_column(Integer)
    listeners_end: Mapped[Optional[int]] = mapped_column(Integer)

    delta_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    delta_positive: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    delta_negative: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index('idx_song_history_station_start', 'station_id', 'timestamp_start'),
        Index('idx_song_history_song', 'song_id'),
        {'extend_existing': True}
    )

    song: Mapped[Optional["Song"]] = relationship("Song", back_populates="history")
    station: Mapped["Station"] = relationship("Station", back_populates="history")

    def __repr__(self) -> str:
        return (
            f"<SongHistory(id={self.id}, station_id={self.station_id}, "
            f"song_id='{self.song_id}', delta={self.delta_total})>"
        )
