"""
Station Reports - First-Run Setup Wizard
Walks a fresh deployment through account, station and settings creation.

Steps, in order:
    register -> station -> settings -> complete

The current step is derived from stored state on every call, so the wizard
resumes wherever a previous visit stopped.
"""

import re
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from sqlalchemy.orm import Session

from ..database.repositories.settings_repository import SettingsRepository
from ..database.repositories.station_repository import StationRepository
from ..database.repositories.user_repository import UserRepository, SUPER_ADMINISTRATOR_ROLE
from ..models.orm_settings import Settings, AnalyticsLevel
from ..models.orm_station import Station
from ..models.orm_user import User
from ..utils.logger import log_setup_step
from ..utils.timezone import get_now_utc, to_epoch_seconds

STEP_REGISTER = 'register'
STEP_STATION = 'station'
STEP_SETTINGS = 'settings'
STEP_COMPLETE = 'complete'

SETUP_STEPS = (STEP_REGISTER, STEP_STATION, STEP_SETTINGS, STEP_COMPLETE)

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off', '')


class NotLoggedInError(Exception):
    """Raised when a step past registration is requested anonymously."""
    pass


class SetupStepError(Exception):
    """Raised when a step action is requested out of order."""

    def __init__(self, requested_step: str, current_step: str):
        super().__init__(f"Setup step '{requested_step}' is not active; current step is '{current_step}'")
        self.requested_step = requested_step
        self.current_step = current_step


class SetupValidationError(ValueError):
    """Raised when submitted form data is invalid."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError("must be a boolean")


def _parse_non_negative_int(value: Any) -> int:
    number = int(value)
    if number < 0:
        raise ValueError("must be zero or greater")
    return number


def _parse_analytics_level(value: Any) -> str:
    return AnalyticsLevel(str(value)).value


def _parse_text(value: Any) -> str:
    return str(value).strip()


# Settings form: field -> (parser, default)
SETTINGS_FORM_FIELDS: Dict[str, tuple] = {
    Settings.BASE_URL: (_parse_text, ''),
    Settings.INSTANCE_NAME: (_parse_text, ''),
    Settings.PREFER_BROWSER_URL: (_parse_bool, False),
    Settings.USE_RADIO_PROXY: (_parse_bool, False),
    Settings.HISTORY_KEEP_DAYS: (_parse_non_negative_int, 7),
    Settings.ALWAYS_USE_SSL: (_parse_bool, False),
    Settings.LISTENER_ANALYTICS: (_parse_analytics_level, AnalyticsLevel.ALL.value),
}


def make_short_name(name: str) -> str:
    """Derive a URL-safe station identifier from its display name."""
    short_name = re.sub(r'[^a-z0-9]+', '_', name.lower()).strip('_')
    return short_name or 'station'


class SetupWizard:
    """
    First-run setup state machine.

    Request data, the caller's login state and the translator are passed in
    explicitly.
    """

    def __init__(
        self,
        session: Session,
        is_logged_in: bool = False,
        translate: Optional[Callable[[str], str]] = None,
    ):
        """
        Initialize wizard.

        Args:
            session: SQLAlchemy session object
            is_logged_in: Whether the caller has an authenticated session
            translate: Message translation function (identity by default)
        """
        self.settings = SettingsRepository(session)
        self.users = UserRepository(session)
        self.stations = StationRepository(session)
        self.is_logged_in = is_logged_in
        self._ = translate or (lambda message: message)

    def current_step(self) -> str:
        """
        Determine which step of setup is currently active.

        Raises:
            NotLoggedInError: If an account exists but the caller is anonymous
        """
        if int(self.settings.get_setting(Settings.SETUP_COMPLETE, 0) or 0) != 0:
            return STEP_COMPLETE

        if self.users.count() == 0:
            return STEP_REGISTER

        if not self.is_logged_in:
            raise NotLoggedInError("Log in to continue setup")

        if self.stations.count() == 0:
            return STEP_STATION

        return STEP_SETTINGS

    def require_step(self, step: str):
        """Raise SetupStepError unless `step` is the active step."""
        if step not in SETUP_STEPS:
            raise ValueError(f"Unknown setup step '{step}'")
        current = self.current_step()
        if current != step:
            raise SetupStepError(step, current)

    def register(self, form_data: Mapping[str, Any]) -> User:
        """
        Step 1: create the super administrator account.

        Args:
            form_data: Submitted form with "username" and "password"

        Returns:
            The new User
        """
        self.require_step(STEP_REGISTER)

        username = _parse_text(form_data.get('username') or '')
        password = form_data.get('password') or ''

        errors = {}
        if not username:
            errors['username'] = self._("This field is required.")
        if not password:
            errors['password'] = self._("This field is required.")
        if errors:
            raise SetupValidationError(errors)

        user = self.users.create_super_administrator(
            username, password, role_name=self._(SUPER_ADMINISTRATOR_ROLE)
        )
        log_setup_step(STEP_REGISTER, "account_created")
        return user

    def create_station(self, form_data: Mapping[str, Any]) -> Station:
        """
        Step 2: create the first station.

        Args:
            form_data: Submitted form with "name" and optional
                "description", "frontend_type", "backend_type"

        Returns:
            The new Station
        """
        self.require_step(STEP_STATION)

        name = _parse_text(form_data.get('name') or '')
        if not name:
            raise SetupValidationError({'name': self._("This field is required.")})

        short_name = base = make_short_name(name)
        suffix = 1
        while self.stations.short_name_exists(short_name):
            suffix += 1
            short_name = f"{base}_{suffix}"

        station = self.stations.create({
            'name': name,
            'short_name': short_name,
            'description': _parse_text(form_data.get('description') or '') or None,
            'frontend_type': form_data.get('frontend_type') or None,
            'backend_type': form_data.get('backend_type') or None,
        })
        log_setup_step(STEP_STATION, "station_created")
        return station

    def settings_form_values(self) -> Dict[str, Any]:
        """Current settings form values: defaults overlaid with stored settings."""
        stored = self.settings.fetch_all()
        return {
            key: stored.get(key, default)
            for key, (_, default) in SETTINGS_FORM_FIELDS.items()
        }

    def save_settings(self, form_data: Mapping[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Step 3: store site settings and mark setup complete.

        Args:
            form_data: Submitted settings form
            now: Completion instant (defaults to current UTC time)

        Returns:
            The settings that were stored
        """
        self.require_step(STEP_SETTINGS)

        values = self.settings_form_values()
        errors = {}
        for key, (parse, _) in SETTINGS_FORM_FIELDS.items():
            if key not in form_data:
                continue
            try:
                values[key] = parse(form_data[key])
            except (ValueError, TypeError) as e:
                errors[key] = self._(str(e) or "Invalid value.")
        if errors:
            raise SetupValidationError(errors)

        values[Settings.SETUP_COMPLETE] = to_epoch_seconds(now or get_now_utc())
        self.settings.set_settings(values)
        log_setup_step(STEP_SETTINGS, "setup_completed")
        return values

    def completion_message(self) -> str:
        return " ".join([
            self._("Setup is now complete!"),
            self._("Continue setting up your station in the main app."),
        ])

    def already_complete_message(self) -> str:
        return self._("Setup has already been completed!")
