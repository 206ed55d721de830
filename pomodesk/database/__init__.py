"""Database package."""

from .db import get_session, init_db, configure_engine
from .models import StoredValue
from .store import KeyValueStore

__all__ = ["get_session", "init_db", "configure_engine", "StoredValue", "KeyValueStore"]
