"""
SQLAlchemy ORM Model: Station
Represents a broadcast station whose listeners and plays are reported on.
"""

from sqlalchemy import String, Boolean, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base
from datetime import datetime
from typing import List, Optional


class Station(Base):
    __tablename__ = "station"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    short_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="URL-safe identifier derived from the name"
    )
    description: Mapped[Optional[str]] = mapped_column(Text)

    frontend_type: Mapped[Optional[str]] = mapped_column(String(100))
    backend_type: Mapped[Optional[str]] = mapped_column(String(100))

    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now()
    )

    history: Mapped[List["SongHistory"]] = relationship(
        "SongHistory",
        back_populates="station",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Station(id={self.id}, name='{self.name}')>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "description": self.description,
            "frontend_type": self.frontend_type,
            "backend_type": self.backend_type,
            "is_enabled": self.is_enabled,
        }
