"""
Station Reports - Time-Series Store Connection
Wraps the InfluxDB client that holds the per-station listener rollups,
with retry logic using tenacity for transient transport failures.
"""

from typing import Any, Dict, List

import requests
from influxdb import InfluxDBClient
from influxdb.exceptions import InfluxDBClientError, InfluxDBServerError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ..utils.config import (
    INFLUX_HOST, INFLUX_PORT, INFLUX_DB_NAME, INFLUX_USERNAME, INFLUX_PASSWORD,
    INFLUX_TIMEOUT_SECONDS, MAX_RETRY_ATTEMPTS, RETRY_BACKOFF_MULTIPLIER
)
from ..utils.logger import logger, log_timeseries_error


class TimeSeriesConnection:
    """
    Lazily-created InfluxDB client.

    Connection errors and timeouts are retried with exponential backoff;
    anything still failing surfaces as TimeSeriesUnavailableError.
    """

    def __init__(self, client: InfluxDBClient = None):
        self._client = client

    def get_client(self) -> InfluxDBClient:
        if self._client is None:
            self._client = InfluxDBClient(
                host=INFLUX_HOST,
                port=INFLUX_PORT,
                username=INFLUX_USERNAME,
                password=INFLUX_PASSWORD,
                database=INFLUX_DB_NAME,
                timeout=INFLUX_TIMEOUT_SECONDS,
            )
            logger.info("Time-series client initialized", extra={
                "host": INFLUX_HOST,
                "database": INFLUX_DB_NAME
            })
        return self._client

    def query(self, statement: str, epoch: str = 'ms') -> List[Dict[str, Any]]:
        """
        Run an InfluxQL statement and return its points.

        Args:
            statement: InfluxQL SELECT statement
            epoch: Timestamp precision of the returned 'time' field

        Returns:
            List of point dicts, in the order the store returned them

        Raises:
            TimeSeriesUnavailableError: If the store cannot answer
        """
        try:
            result = self._execute(statement, epoch)
        except (requests.ConnectionError, requests.Timeout,
                InfluxDBClientError, InfluxDBServerError) as e:
            log_timeseries_error(e, statement)
            raise TimeSeriesUnavailableError(f"Cannot query time-series store: {e}") from e

        return list(result.get_points())

    @retry(
        stop=stop_after_attempt(MAX_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=RETRY_BACKOFF_MULTIPLIER, min=1, max=30),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True
    )
    def _execute(self, statement: str, epoch: str):
        logger.debug(f"Querying time-series store: {statement}")
        return self.get_client().query(statement, epoch=epoch)

    def test_connection(self) -> bool:
        """
        Ping the time-series store.

        Returns:
            True if the store answered, False otherwise
        """
        try:
            self.get_client().ping()
            return True
        except Exception as e:
            logger.error("Time-series connection test failed", extra={
                "error": str(e)
            })
            return False


class TimeSeriesUnavailableError(Exception):
    """Raised when the time-series store is unreachable or rejects a query."""
    pass


# Global time-series connection instance
timeseries = TimeSeriesConnection()
