"""
Station Reports - Flask API Application
Main API application with Blueprints, CORS, and middleware.
"""

import time

from flask import Flask, jsonify, g, request
from flask_cors import CORS

from ..utils.config import FLASK_ENV, FLASK_DEBUG, SECRET_KEY
from ..utils.logger import logger, log_api_request
from .routes.health import health_bp
from .routes.reports import reports_bp
from .routes.setup import setup_bp
from .middleware.error_handler import register_error_handlers


def create_app() -> Flask:
    """
    Create and configure Flask application.

    Returns:
        Configured Flask app instance
    """
    app = Flask(__name__)

    app.config['ENV'] = FLASK_ENV
    app.config['DEBUG'] = FLASK_DEBUG
    app.config['SECRET_KEY'] = SECRET_KEY
    app.json.sort_keys = False

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"]
        }
    })

    app.register_blueprint(health_bp, url_prefix='/api')
    app.register_blueprint(reports_bp, url_prefix='/api')
    app.register_blueprint(setup_bp, url_prefix='/api')

    register_error_handlers(app)

    @app.before_request
    def start_timer():
        g.request_started = time.monotonic()

    @app.after_request
    def record_request(response):
        started = g.get('request_started')
        duration_ms = round((time.monotonic() - started) * 1000, 2) if started else 0.0
        log_api_request(request.method, request.path, response.status_code, duration_ms)
        return response

    logger.info(f"Flask app created (env={FLASK_ENV}, debug={FLASK_DEBUG})")

    @app.route('/')
    def index():
        """Root endpoint with API information."""
        return jsonify({
            "name": "Station Reports API",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "health": "/api/health",
                "overview": "/api/stations/<id>/reports/overview",
                "setup": "/api/setup"
            }
        })

    return app


if __name__ == '__main__':
    create_app().run(
        host='0.0.0.0',
        port=5000,
        debug=FLASK_DEBUG
    )
