"""
Station Reports - Reports API Routes
====================================

GET /stations/<id>/reports/overview → processor/statistics_aggregator.py

Chart series are returned as [timestamp_ms, value] and
[timestamp_ms, min, max] arrays, ready for client-side charting.
"""

from flask import Blueprint, jsonify

from ...database.connection import get_db_session
from ...database.timeseries import timeseries
from ...database.repositories.listener_stats_repository import ListenerStatsRepository
from ...database.repositories.settings_repository import SettingsRepository
from ...database.repositories.song_history_repository import SongHistoryRepository
from ...database.repositories.station_repository import StationRepository
from ...processor.statistics_aggregator import StatisticsAggregator

reports_bp = Blueprint('reports', __name__)


@reports_bp.route('/stations/<int:station_id>/reports/overview', methods=['GET'])
def station_overview(station_id: int):
    """
    Listener and song performance overview for one station.

    Response:
        200 OK: Report, or {"restricted": true} when analytics are disabled
        404 Not Found: Unknown station
        503 Service Unavailable: A backing store is unreachable
    """
    with get_db_session() as session:
        station = StationRepository(session).get_required(station_id)
        aggregator = StatisticsAggregator(
            listener_stats=ListenerStatsRepository(timeseries),
            song_history=SongHistoryRepository(session),
            settings=SettingsRepository(session),
        )
        report = aggregator.build_report(station_id)
        station_data = station.to_dict()

    response = {"success": True, "station": station_data}
    response.update(report.to_dict())
    return jsonify(response)
