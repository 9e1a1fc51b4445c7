from .settings import Settings, get_settings
from .database import Base, create_db_engine, create_session_factory, init_db

__all__ = [
    "Settings",
    "get_settings",
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
]
