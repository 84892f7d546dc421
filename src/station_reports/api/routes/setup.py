"""
Station Reports - Setup API Routes
==================================

GET  /setup            → current step
POST /setup/register   → step 1, create super administrator (logs in)
POST /setup/station    → step 2, create first station
POST /setup/settings   → step 3, store settings and finish
GET  /setup/complete   → setup already finished

Steps requested out of order answer 409 with the active step.
"""

from flask import Blueprint, jsonify, request, session as http_session

from ...database.connection import get_db_session
from ...processor.setup_wizard import (
    SetupWizard, STEP_STATION, STEP_SETTINGS, STEP_COMPLETE
)

setup_bp = Blueprint('setup', __name__)

SESSION_USER_KEY = 'user_id'


def _form_data() -> dict:
    """Submitted fields from a JSON body or a form post."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def _wizard(db_session) -> SetupWizard:
    return SetupWizard(db_session, is_logged_in=SESSION_USER_KEY in http_session)


@setup_bp.route('/setup', methods=['GET'])
def setup_index():
    """Report the active setup step."""
    with get_db_session() as db_session:
        step = _wizard(db_session).current_step()
    return jsonify({"success": True, "step": step})


@setup_bp.route('/setup/register', methods=['POST'])
def setup_register():
    """Create the first account and log it in."""
    with get_db_session() as db_session:
        user = _wizard(db_session).register(_form_data())
        user_id = user.uid

    http_session[SESSION_USER_KEY] = user_id
    return jsonify({"success": True, "user_id": user_id, "next_step": STEP_STATION}), 201


@setup_bp.route('/setup/station', methods=['POST'])
def setup_station():
    """Create the first station."""
    with get_db_session() as db_session:
        station = _wizard(db_session).create_station(_form_data())
        station_data = station.to_dict()

    return jsonify({"success": True, "station": station_data, "next_step": STEP_SETTINGS}), 201


@setup_bp.route('/setup/settings', methods=['GET', 'POST'])
def setup_settings():
    """Show current settings values, or store them and finish setup."""
    with get_db_session() as db_session:
        wizard = _wizard(db_session)
        if request.method == 'GET':
            wizard.require_step(STEP_SETTINGS)
            return jsonify({"success": True, "settings": wizard.settings_form_values()})

        values = wizard.save_settings(_form_data())
        message = wizard.completion_message()

    return jsonify({
        "success": True,
        "settings": values,
        "message": message,
        "next_step": STEP_COMPLETE
    })


@setup_bp.route('/setup/complete', methods=['GET'])
def setup_complete():
    """Placeholder for visits after setup has finished."""
    with get_db_session() as db_session:
        wizard = _wizard(db_session)
        step = wizard.current_step()
        message = wizard.already_complete_message()

    if step != STEP_COMPLETE:
        return jsonify({"success": False, "step": step}), 409
    return jsonify({"success": True, "step": STEP_COMPLETE, "message": message})

