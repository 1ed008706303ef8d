"""
Database bootstrap.

Runs once before the server accepts traffic and is safe to run again:
  - create the ``users`` table if it is missing
  - install (or replace) the trigger that refreshes ``users.updated_at``
  - seed the example users, skipping emails that already exist
"""

import logging

from sqlalchemy import text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Connection, Engine

from app.models.base import Base
from app.models.user import User

logger = logging.getLogger(__name__)

SEED_USERS = [
    {"name": "John Doe", "email": "john.doe@example.com"},
    {"name": "Jane Smith", "email": "jane.smith@example.com"},
    {"name": "Alice Johnson", "email": "alice.johnson@example.com"},
    {"name": "Bob Wilson", "email": "bob.wilson@example.com"},
]

_POSTGRES_TRIGGER = [
    """
    CREATE OR REPLACE FUNCTION update_updated_at_column()
    RETURNS TRIGGER AS $$
    BEGIN
        NEW.updated_at = CURRENT_TIMESTAMP;
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    "DROP TRIGGER IF EXISTS update_users_updated_at ON users",
    """
    CREATE TRIGGER update_users_updated_at
        BEFORE UPDATE ON users
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column()
    """,
]

# SQLite has no BEFORE-UPDATE assignment to NEW, so touch the row afterwards.
# The WHEN clause leaves explicit writes to updated_at alone.
_SQLITE_TRIGGER = [
    "DROP TRIGGER IF EXISTS update_users_updated_at",
    """
    CREATE TRIGGER update_users_updated_at
        AFTER UPDATE ON users
        FOR EACH ROW
        WHEN NEW.updated_at IS OLD.updated_at
    BEGIN
        UPDATE users SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
    END
    """,
]

_TRIGGERS = {
    "postgresql": _POSTGRES_TRIGGER,
    "sqlite": _SQLITE_TRIGGER,
}

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _dialect(conn: Connection) -> str:
    name = conn.dialect.name
    if name not in _TRIGGERS:
        raise RuntimeError(f"Unsupported database dialect: {name}")
    return name


def create_tables(conn: Connection) -> None:
    Base.metadata.create_all(bind=conn, tables=[User.__table__])


def install_updated_at_trigger(conn: Connection) -> None:
    for statement in _TRIGGERS[_dialect(conn)]:
        conn.execute(text(statement))


def seed_initial_data(conn: Connection) -> None:
    insert = _INSERTS[_dialect(conn)]
    stmt = insert(User).values(SEED_USERS).on_conflict_do_nothing(index_elements=["email"])
    conn.execute(stmt)


def init_db(engine: Engine) -> None:
    """
    Create the schema and seed rows in a single transaction.

    Any failure is logged and re-raised; the caller must not start serving.
    """
    try:
        with engine.begin() as conn:
            create_tables(conn)
            install_updated_at_trigger(conn)
            seed_initial_data(conn)
    except Exception:
        logger.exception("Database initialization error")
        raise
    logger.info("Database initialized successfully")
