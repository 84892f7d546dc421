"""
Station Reports - Settings Repository
Key/value access to deployment-wide settings.
"""

from typing import Any, Dict, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from ...models.orm_settings import Settings
from ...utils.logger import logger


class SettingsRepository:
    """Repository for the settings table."""

    def __init__(self, session: Session):
        self.session = session

    def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Fetch one setting.

        Args:
            key: Setting key
            default: Returned when the key is unset or stored as null

        Returns:
            Stored value or default
        """
        record = self.session.get(Settings, key)
        if record is None or record.setting_value is None:
            return default
        return record.setting_value

    def fetch_all(self) -> Dict[str, Any]:
        """Fetch every stored setting as a dict."""
        records = self.session.scalars(select(Settings))
        return {record.setting_key: record.setting_value for record in records}

    def set_settings(self, values: Mapping[str, Any]):
        """
        Insert or update several settings.

        Args:
            values: Mapping of setting key to new value
        """
        for key, value in values.items():
            record = self.session.get(Settings, key)
            if record is None:
                self.session.add(Settings(setting_key=key, setting_value=value))
            else:
                record.setting_value = value

        self.session.flush()
        logger.info("Settings updated", extra={"keys": sorted(values.keys())})
