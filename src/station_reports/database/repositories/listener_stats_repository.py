"""
Station Reports - Listener Statistics Repository
Reads per-station listener rollups from the time-series store.

Series layout
-------------
Retention policy "1d" holds one point per day, "1h" one point per hour,
both under the measurement station.<id>.listeners with fields
value (mean), min and max.
"""

from datetime import datetime
from typing import List

from ..timeseries import TimeSeriesConnection
from ...models.statistics import ListenerSample
from ...utils.timezone import to_epoch_ms


class ListenerStatsRepository:
    """Repository for listener-count rollups."""

    def __init__(self, connection: TimeSeriesConnection):
        self.conn = connection

    @staticmethod
    def measurement(station_id: int) -> str:
        return f"station.{int(station_id)}.listeners"

    def get_daily_samples(self, station_id: int, since: datetime) -> List[ListenerSample]:
        """
        Fetch daily rollups newer than `since`, oldest first.

        Args:
            station_id: Station ID
            since: Exclusive lower bound of the window

        Returns:
            List of ListenerSample in chronological order
        """
        statement = (
            f'SELECT * FROM "1d"."{self.measurement(station_id)}" '
            f'WHERE time > {to_epoch_ms(since)}ms'
        )
        return [ListenerSample.from_point(point) for point in self.conn.query(statement, epoch='ms')]

    def get_hourly_samples(self, station_id: int) -> List[ListenerSample]:
        """
        Fetch every hourly rollup the retention policy still holds, oldest first.
        """
        statement = f'SELECT * FROM "1h"."{self.measurement(station_id)}"'
        return [ListenerSample.from_point(point) for point in self.conn.query(statement, epoch='ms')]
