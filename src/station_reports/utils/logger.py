"""
Station Reports - Structured Logging
Provides JSON-formatted logging for log aggregation queries.
"""

import logging
import sys
from pythonjsonlogger import jsonlogger

from .config import LOG_LEVEL, config


def setup_logger(name: str = __name__) -> logging.Logger:
    """
    Configure structured JSON logger.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger(__name__)
        >>> logger.info("Report built", extra={
        ...     "station_id": 1,
        ...     "duration_ms": 142.0
        ... })
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.hasHandlers():
        return logger

    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logger('station_reports')


def log_report_start(station_id: int):
    """Log the start of a station report build."""
    logger.info("Station report started", extra={
        "event_type": "report_start",
        "station_id": station_id,
        "environment": config.environment
    })


def log_report_complete(station_id: int, duration_ms: float, songs_ranked: int, plays_ranked: int):
    """Log a successfully built station report."""
    logger.info("Station report completed", extra={
        "event_type": "report_complete",
        "station_id": station_id,
        "duration_ms": duration_ms,
        "songs_ranked": songs_ranked,
        "plays_ranked": plays_ranked
    })


def log_report_restricted(station_id: int):
    """Log a report request refused by the analytics level."""
    logger.info("Station report restricted", extra={
        "event_type": "report_restricted",
        "station_id": station_id
    })


def log_report_error(error: Exception, station_id: int = None):
    """Log report failure with context."""
    logger.error("Station report failed", extra={
        "event_type": "report_error",
        "error_type": type(error).__name__,
        "error_message": str(error),
        "station_id": station_id
    }, exc_info=True)


def log_setup_step(step: str, action: str):
    """Log a setup wizard transition."""
    logger.info("Setup step", extra={
        "event_type": "setup_step",
        "step": step,
        "action": action
    })


def log_api_request(method: str, path: str, status_code: int, duration_ms: float):
    """Log API request metrics."""
    logger.info("API request", extra={
        "event_type": "api_request",
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": duration_ms
    })


def log_database_error(error: Exception, query_context: str = None):
    """Log database error with context."""
    logger.error("Database error", extra={
        "event_type": "database_error",
        "error_type": type(error).__name__,
        "error_message": str(error),
        "query_context": query_context
    }, exc_info=True)


def log_timeseries_error(error: Exception, query: str = None):
    """Log time-series store error with the failing statement."""
    logger.error("Time-series store error", extra={
        "event_type": "timeseries_error",
        "error_type": type(error).__name__,
        "error_message": str(error),
        "query": query
    }, exc_info=True)
