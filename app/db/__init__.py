"""
Database module - SQL connection and schema.
"""
from app.db.database import get_db_session, execute_raw_sql, check_database_connection
from app.db.schema import init_schema, clear_tables

__all__ = [
    "get_db_session",
    "execute_raw_sql",
    "check_database_connection",
    "init_schema",
    "clear_tables"
]
