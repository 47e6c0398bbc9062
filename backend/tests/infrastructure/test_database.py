"""Database Session Manager — error translation, schema creation, health checks."""

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError

from userhub.core.errors import DatabaseError
from userhub.infrastructure.database import (
    DatabaseSessionManager, is_unique_violation, raw_message,
)
from userhub.models.user import User


class _PgUniqueViolation(Exception):
    sqlstate = "23505"


class _PgNotNullViolation(Exception):
    sqlstate = "23502"


def _integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, orig)


# ─── is_unique_violation ─────────────────────────────────────────

def test_sqlite_unique_violation_detected():
    err = _integrity_error(Exception("UNIQUE constraint failed: users.email"))
    assert is_unique_violation(err) is True


def test_postgres_sqlstate_detected():
    assert is_unique_violation(_integrity_error(_PgUniqueViolation("dup"))) is True


def test_postgres_message_detected():
    err = _integrity_error(Exception(
        'duplicate key value violates unique constraint "uq_users_email"',
    ))
    assert is_unique_violation(err) is True


def test_other_integrity_errors_are_not_conflicts():
    assert is_unique_violation(_integrity_error(
        Exception("NOT NULL constraint failed: users.name"),
    )) is False
    assert is_unique_violation(
        _integrity_error(_PgNotNullViolation("null value")),
    ) is False


def test_raw_message_uses_driver_error():
    err = _integrity_error(Exception("UNIQUE constraint failed: users.email"))
    assert raw_message(err) == "UNIQUE constraint failed: users.email"


# ─── DatabaseSessionManager ──────────────────────────────────────

@pytest.fixture
async def manager(tmp_path):
    mgr = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    yield mgr
    await mgr.dispose()


async def test_session_translates_sqlalchemy_errors(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))
    assert exc_info.value.message == "no such table: missing_table"


async def test_session_propagates_other_errors(manager):
    with pytest.raises(KeyError):
        async with manager.session():
            raise KeyError("x")


async def test_create_schema_is_idempotent(manager):
    await manager.create_schema()
    await manager.create_schema()
    async with manager.session() as db:
        db.add(User(name="Jane", email="jane@example.com"))
        await db.commit()
        result = await db.execute(select(User))
        assert [u.email for u in result.scalars()] == ["jane@example.com"]


async def test_health_check(manager):
    assert await manager.health_check() is True
