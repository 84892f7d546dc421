# Station Reports - Models Package

# Import all ORM models to register them with SQLAlchemy's declarative base
# so string-based relationship() forward references can be resolved
from .base import Base, SessionLocal, db_session, create_session
from .orm_station import Station
from .orm_song import Song, SongHistory
from .orm_settings import Settings, AnalyticsLevel
from .orm_user import User, Role, RolePermission

__all__ = [
    'Base',
    'SessionLocal',
    'db_session',
    'create_session',
    'Station',
    'Song',
    'SongHistory',
    'Settings',
    'AnalyticsLevel',
    'User',
    'Role',
    'RolePermission',
]
