"""
Station Reports - Health Check Endpoint
Provides API health status and backing store connectivity.
"""

from flask import Blueprint, jsonify
from datetime import datetime, timezone

from ...database.connection import check_database_connection
from ...database.timeseries import timeseries

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Health check endpoint.

    Response:
        200 OK: All systems operational
        503 Service Unavailable: A backing store is unreachable
    """
    checks = {
        "database": check_database_connection(),
        "timeseries": timeseries.test_connection(),
    }

    health_data = {
        "status": "healthy" if all(checks.values()) else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "api_version": "1.0.0",
        "checks": {
            name: {"status": "healthy" if ok else "unhealthy"}
            for name, ok in checks.items()
        }
    }

    status_code = 200 if health_data["status"] == "healthy" else 503
    return jsonify(health_data), status_code
