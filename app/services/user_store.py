# File: app/services/user_store.py

"""
Relational store adapter for the users API.

Wraps the SQLAlchemy engine (the connection pool) and runs the handful of
statements the HTTP layer needs. Every statement goes through SQLAlchemy
with bound parameters.

Database errors come back as ``StoreFailure`` / ``Conflict`` values rather
than exceptions; nothing is retried here.
"""

import enum
import logging
from typing import List

from sqlalchemy import func, select, text
from sqlalchemy import insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.db.init_db import init_db
from app.db.session import create_session_factory
from app.models.user import User
from app.schemas.user import DatabaseStatus, UserDetail, UserRead
from app.services.results import Conflict, NotFound, Ok, StoreFailure, StoreResult

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class StoreState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    BOOTSTRAPPING = "bootstrapping"
    READY = "ready"
    FAILED = "failed"


def _error_message(exc: SQLAlchemyError) -> str:
    # Prefer the driver's own text over SQLAlchemy's wrapper with SQL and links
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc).strip()


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION:
        return True
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig)


def _version_function(dialect_name: str):
    if dialect_name == "sqlite":
        return func.sqlite_version()
    return func.version()


class UserStore:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        self.state = StoreState.UNINITIALIZED

    def bootstrap(self) -> None:
        """
        Run the one-time schema and seed setup.

        A failure leaves the store in ``FAILED`` and propagates; the process
        is expected to stop.
        """
        self.state = StoreState.BOOTSTRAPPING
        try:
            init_db(self.engine)
        except Exception:
            self.state = StoreState.FAILED
            raise
        self.state = StoreState.READY

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")

    def ping(self) -> StoreResult[None]:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error("Readiness check failed: %s", _error_message(exc))
            return StoreFailure(_error_message(exc))
        return Ok(None)

    def database_status(self) -> StoreResult[DatabaseStatus]:
        stmt = select(
            func.now().label("timestamp"),
            _version_function(self.engine.dialect.name).label("db_version"),
        )
        try:
            with self.engine.connect() as conn:
                row = conn.execute(stmt).one()
        except SQLAlchemyError as exc:
            logger.error("Database error: %s", _error_message(exc))
            return StoreFailure(_error_message(exc))
        return Ok(DatabaseStatus(database_time=row.timestamp, database_version=str(row.db_version)))

    def list_users(self) -> StoreResult[List[UserRead]]:
        stmt = select(User).order_by(User.created_at.desc(), User.id.desc())
        try:
            with self.session_factory() as session:
                users = session.scalars(stmt).all()
                return Ok([UserRead.model_validate(user) for user in users])
        except SQLAlchemyError as exc:
            logger.error("Error fetching users: %s", _error_message(exc))
            return StoreFailure(_error_message(exc))

    def create_user(self, name: str, email: str) -> StoreResult[UserDetail]:
        stmt = insert(User).values(name=name, email=email).returning(User)
        try:
            with self.session_factory() as session:
                user = session.scalars(stmt).one()
                session.commit()
                return Ok(UserDetail.model_validate(user))
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                logger.info("Rejected duplicate email %s", email)
                return Conflict("Email already exists")
            logger.error("Error creating user: %s", _error_message(exc))
            return StoreFailure(_error_message(exc))
        except SQLAlchemyError as exc:
            logger.error("Error creating user: %s", _error_message(exc))
            return StoreFailure(_error_message(exc))

    def get_user(self, user_id: int) -> StoreResult[UserRead]:
        stmt = select(User).where(User.id == user_id)
        try:
            with self.session_factory() as session:
                user = session.scalars(stmt).first()
                if user is None:
                    return NotFound("User not found")
                return Ok(UserRead.model_validate(user))
        except SQLAlchemyError as exc:
            logger.error("Error fetching user: %s", _error_message(exc))
            return StoreFailure(_error_message(exc))
