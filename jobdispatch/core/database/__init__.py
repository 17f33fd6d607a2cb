"""
Database layer for JobDispatch.

Structure:
- entities/: Database entity models, one module per table
- repositories/: Data access layer, one repository per table
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session factory, DDL helpers)
"""

from .base import Base, new_id, utc_now
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    drop_all,
    normalize_database_url,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "drop_all",
    "engine",
    "get_session",
    "init_db",
    "new_id",
    "normalize_database_url",
    "utc_now",
]
