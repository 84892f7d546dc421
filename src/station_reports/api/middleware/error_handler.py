"""
Station Reports - Error Handler Middleware
Standardized error responses for all API endpoints.
"""

from flask import jsonify, Flask
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException

from ...database.connection import DatabaseConnectionError
from ...database.repositories.station_repository import StationNotFoundError
from ...database.timeseries import TimeSeriesUnavailableError
from ...processor.setup_wizard import NotLoggedInError, SetupStepError, SetupValidationError
from ...processor.statistics_aggregator import MissingSongError
from ...utils.logger import logger


def register_error_handlers(app: Flask):
    """
    Register error handlers for Flask app.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 Bad Request errors."""
        logger.warning(f"Bad request: {error}")
        return jsonify({
            "error": "Bad Request",
            "message": str(error.description) if hasattr(error, 'description') else "Invalid request"
        }), 400

    @app.errorhandler(401)
    def unauthorized(error):
        """Handle 401 Unauthorized errors."""
        logger.warning(f"Unauthorized access: {error}")
        return jsonify({
            "error": "Unauthorized",
            "message": "Invalid or missing authentication credentials"
        }), 401

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found errors."""
        logger.info(f"Not found: {error}")
        return jsonify({
            "error": "Not Found",
            "message": "The requested resource was not found"
        }), 404

    @app.errorhandler(500)
    def internal_server_error(error):
        """Handle 500 Internal Server Error."""
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please try again later."
        }), 500

    @app.errorhandler(StationNotFoundError)
    def station_not_found(error):
        """Handle reports requested for unknown stations."""
        logger.info(f"Station not found: {error}")
        return jsonify({
            "error": "Not Found",
            "message": str(error)
        }), 404

    @app.errorhandler(SetupValidationError)
    def setup_validation_error(error):
        """Handle invalid setup form submissions."""
        logger.info(f"Setup validation failed: {error}")
        return jsonify({
            "error": "Bad Request",
            "message": "Submitted form is invalid",
            "fields": error.errors
        }), 400

    @app.errorhandler(NotLoggedInError)
    def not_logged_in(error):
        """Handle anonymous access to steps past registration."""
        logger.info(f"Not logged in: {error}")
        return jsonify({
            "error": "Unauthorized",
            "message": str(error)
        }), 401

    @app.errorhandler(SetupStepError)
    def setup_step_conflict(error):
        """Handle setup steps requested out of order."""
        logger.info(f"Setup step conflict: {error}")
        return jsonify({
            "error": "Conflict",
            "message": str(error),
            "step": error.current_step
        }), 409

    @app.errorhandler(MissingSongError)
    def missing_song(error):
        """Handle play history pointing at songs that no longer exist."""
        logger.error(f"Report integrity error: {error}", extra={
            "station_id": error.station_id,
            "song_id": error.song_id
        })
        return jsonify({
            "error": "Internal Server Error",
            "message": "Play history references an unknown song; report not generated"
        }), 500

    @app.errorhandler(TimeSeriesUnavailableError)
    @app.errorhandler(DatabaseConnectionError)
    @app.errorhandler(OperationalError)
    def upstream_unavailable(error):
        """Handle unreachable backing stores."""
        logger.error(f"Upstream store unavailable: {error}")
        return jsonify({
            "error": "Service Unavailable",
            "message": "A backing data store is unavailable. Please try again later."
        }), 503

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        """Handle all unhandled exceptions."""
        if isinstance(error, HTTPException):
            return error

        logger.error(f"Unexpected error: {error}", exc_info=True)

        return jsonify({
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please try again later."
        }), 500

    logger.info("Error handlers registered")
