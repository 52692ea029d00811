"""
Table definitions for the placement store.

Tables:
- students:      student records read by the eligibility engine
- companies:     company offers
- policy_config: single-row table holding the active policy document (JSON)

The DDL sticks to types and syntax shared by SQLite and PostgreSQL.
"""
import logging

from sqlalchemy import text

from app.db.database import get_db_session

logger = logging.getLogger(__name__)

# Table name constants (avoid typos)
TABLES = {
    "students": "students",
    "companies": "companies",
    "policy_config": "policy_config"
}

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS students (
        student_id INTEGER PRIMARY KEY,
        full_name VARCHAR(100) NOT NULL,
        cgpa NUMERIC(4, 2) NOT NULL DEFAULT 0,
        is_placed BOOLEAN NOT NULL DEFAULT FALSE,
        current_salary NUMERIC(14, 2) NOT NULL DEFAULT 0,
        companies_applied INTEGER NOT NULL DEFAULT 0,
        dream_offer NUMERIC(14, 2) NOT NULL DEFAULT 0,
        dream_company VARCHAR(200) NOT NULL DEFAULT '',
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS companies (
        company_id VARCHAR(64) PRIMARY KEY,
        company_name VARCHAR(200) NOT NULL,
        offered_salary NUMERIC(14, 2) NOT NULL DEFAULT 0,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS policy_config (
        config_id INTEGER PRIMARY KEY,
        document TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_students_is_placed ON students (is_placed)",
]


def init_schema():
    """
    Create tables and indexes if they don't exist.
    Call this once during app startup.
    """
    with get_db_session() as db:
        for statement in SCHEMA_STATEMENTS:
            db.execute(text(statement))
    logger.info("Database schema ready")


def clear_tables():
    """Delete every row from every table (schema is kept)."""
    with get_db_session() as db:
        for table in TABLES.values():
            db.execute(text(f"DELETE FROM {table}"))
