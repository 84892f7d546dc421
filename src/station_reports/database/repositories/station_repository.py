"""
Station Reports - Station Repository
Provides data access layer for the station table using SQLAlchemy ORM.
"""

from typing import Any, Dict, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from ...models.orm_station import Station


class StationRepository:
    """Repository for station entity operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, station_id: int) -> Optional[Station]:
        """
        Fetch station by ID.

        Returns:
            Station or None if not found
        """
        return self.session.get(Station, station_id)

    def get_required(self, station_id: int) -> Station:
        """
        Fetch station by ID, failing when it does not exist.

        Raises:
            StationNotFoundError: If no station has this ID
        """
        station = self.get_by_id(station_id)
        if station is None:
            raise StationNotFoundError(station_id)
        return station

    def count(self) -> int:
        return self.session.scalar(select(func.count(Station.id))) or 0

    def short_name_exists(self, short_name: str) -> bool:
        stmt = select(func.count(Station.id)).where(Station.short_name == short_name)
        return bool(self.session.scalar(stmt))

    def create(self, station_data: Dict[str, Any]) -> Station:
        """
        Create new station record.

        Args:
            station_data: Column values for the new station

        Returns:
            The persisted Station (with its ID assigned)
        """
        station = Station(**station_data)
        self.session.add(station)
        self.session.flush()
        return station


class StationNotFoundError(Exception):
    """Raised when a report is requested for an unknown station."""

    def __init__(self, station_id: int):
        super().__init__(f"Station {station_id} does not exist")
        self.station_id = station_id
