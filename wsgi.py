#!/usr/bin/env python3
"""
WSGI entry point for the Station Reports API.

Usage:
    gunicorn --bind 127.0.0.1:5001 wsgi:application

For development, use the Flask development server instead:
    python -m station_reports.api.app
"""

import os

# Load environment variables from .env file before configuration is read
from dotenv import load_dotenv
env_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), '.env')
if os.path.exists(env_path):
    load_dotenv(env_path)

from station_reports.api.app import create_app

application = create_app()

if __name__ == "__main__":
    application.run(host='0.0.0.0', port=5001, debug=False)
