# File: app/schemas/user.py

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer, model_validator

from app.core.errors import ValidationError

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
USER_ID_PATTERN = re.compile(r"-?[0-9]+", re.ASCII)

# Signed 64-bit, the widest integer any supported store accepts
MIN_USER_ID = -(2**63)
MAX_USER_ID = 2**63 - 1


def isoformat_utc(value: datetime) -> str:
    """ISO 8601 in UTC with millisecond precision and a ``Z`` suffix.

    Naive values are taken as UTC, which is what CURRENT_TIMESTAMP gives on SQLite.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UserCreate(BaseModel):
    """
    Body of ``POST /api/users``.

    Both fields are optional at the type level so that a missing field and an
    empty one produce the same "required" message.
    """

    name: Optional[str] = None
    email: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self) -> "UserCreate":
        if not self.name or not self.email:
            raise ValueError("Name and email are required")
        if not EMAIL_PATTERN.fullmatch(self.email):
            raise ValueError("Invalid email format")
        return self


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return isoformat_utc(value)


class UserDetail(UserRead):
    updated_at: datetime

    @field_serializer("updated_at")
    def serialize_updated_at(self, value: datetime) -> str:
        return isoformat_utc(value)


class DatabaseStatus(BaseModel):
    # SQLite returns CURRENT_TIMESTAMP as text, PostgreSQL as a datetime
    database_time: datetime | str
    database_version: str

    @field_serializer("database_time")
    def serialize_database_time(self, value: datetime | str) -> str:
        if isinstance(value, datetime):
            return isoformat_utc(value)
        return value


def parse_user_id(raw: str) -> int:
    candidate = raw.strip()
    if not USER_ID_PATTERN.fullmatch(candidate):
        raise ValidationError("Invalid user ID")
    user_id = int(candidate)
    if not MIN_USER_ID <= user_id <= MAX_USER_ID:
        raise ValidationError("Invalid user ID")
    return user_id
