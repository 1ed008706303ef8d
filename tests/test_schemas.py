# File: tests/test_schemas.py

from datetime import datetime, timedelta, timezone

import pytest

from app.core.errors import ValidationError
from app.schemas.user import UserDetail, isoformat_utc, parse_user_id


def test_isoformat_utc_converts_aware_values():
    # PostgreSQL hands back timestamptz in the session's zone
    value = datetime(2026, 10, 19, 8, 30, 0, tzinfo=timezone(timedelta(hours=2)))
    assert isoformat_utc(value) == "2026-10-19T06:30:00.000Z"


def test_isoformat_utc_treats_naive_values_as_utc():
    assert isoformat_utc(datetime(2026, 10, 19, 6, 30, 0)) == "2026-10-19T06:30:00.000Z"


def test_user_detail_serializes_both_timestamps():
    user = UserDetail(
        id=1,
        name="John Doe",
        email="john.doe@example.com",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2026, 1, 2, tzinfo=timezone.utc),
    )
    data = user.model_dump(mode="json")
    assert data["created_at"] == "2026-01-01T00:00:00.000Z"
    assert data["updated_at"] == "2026-01-02T00:00:00.000Z"


def test_parse_user_id_accepts_plain_integers():
    assert parse_user_id("42") == 42
    assert parse_user_id(" 7 ") == 7
    assert parse_user_id("-3") == -3


@pytest.mark.parametrize("raw", ["", "abc", "1_0", "١", "1.0", "9223372036854775808"])
def test_parse_user_id_rejects(raw):
    with pytest.raises(ValidationError) as excinfo:
        parse_user_id(raw)
    assert excinfo.value.message == "Invalid user ID"
