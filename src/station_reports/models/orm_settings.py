"""
SQLAlchemy ORM Model: Settings
Deployment-wide key/value settings, with the analytics level constants.
"""

import enum

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base
from typing import Any, Optional


class Settings(Base):
    __tablename__ = "settings"
    __table_args__ = {'extend_existing': True}

    setting_key: Mapped[str] = mapped_column(String(64), primary_key=True)
    setting_value: Mapped[Optional[Any]] = mapped_column(JSON)

    # Setting keys
    SETUP_COMPLETE = 'setup_complete'
    LISTENER_ANALYTICS = 'analytics'
    BASE_URL = 'base_url'
    INSTANCE_NAME = 'instance_name'
    PREFER_BROWSER_URL = 'prefer_browser_url'
    USE_RADIO_PROXY = 'use_radio_proxy'
    HISTORY_KEEP_DAYS = 'history_keep_days'
    ALWAYS_USE_SSL = 'always_use_ssl'

    def __repr__(self) -> str:
        return f"<Settings(key='{self.setting_key}', value={self.setting_value!r})>"


class AnalyticsLevel(str, enum.Enum):
    """How much listener analytics the deployment computes."""
    NONE = 'none'
    RESTRICTED = 'restricted'
    ALL = 'all'
