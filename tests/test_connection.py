# tests/test_connection.py

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from tasks_api.db.connection import POOL_TIMEOUT_MESSAGE, Database
from tasks_api.db.errors import StorageError

from .fakes import FakeConnection, FakePool


@pytest.mark.asyncio
async def test_queries_use_acquire_timeout_and_release() -> None:
    conn = FakeConnection(result="UPDATE 1")
    db = Database("postgresql://example/db", acquire_timeout=2.5)
    db.pool = FakePool(conn)

    status = await db.execute("UPDATE tasks SET name = $1 WHERE task_id = $2", "x", 1)

    assert status == "UPDATE 1"
    assert conn.calls == [("execute", "UPDATE tasks SET name = $1 WHERE task_id = $2", ("x", 1))]
    assert db.pool.timeouts == [2.5]
    assert db.pool.released == 1


@pytest.mark.asyncio
async def test_acquire_timeout_becomes_storage_error() -> None:
    db = Database("postgresql://example/db")
    db.pool = FakePool(FakeConnection(), acquire_error=asyncio.TimeoutError())

    with pytest.raises(StorageError) as excinfo:
        await db.fetch("SELECT 1")

    assert str(excinfo.value) == POOL_TIMEOUT_MESSAGE


@pytest.mark.asyncio
async def test_driver_error_text_is_kept() -> None:
    db = Database("postgresql://example/db")
    db.pool = FakePool(FakeConnection(error=ConnectionResetError("connection reset by peer")))

    with pytest.raises(StorageError, match="connection reset by peer"):
        await db.fetchrow("SELECT 1")


@pytest.mark.asyncio
async def test_query_before_connect_fails() -> None:
    db = Database("postgresql://example/db")

    with pytest.raises(StorageError, match="not initialized"):
        await db.fetch("SELECT 1")


@pytest.mark.asyncio
async def test_close_is_idempotent() -> None:
    db = Database("postgresql://example/db")
    pool = FakePool(FakeConnection())
    db.pool = pool

    await db.close()
    await db.close()

    assert pool.closed
    assert db.pool is None


def test_from_settings() -> None:
    settings = SimpleNamespace(
        DATABASE_URL="postgresql://u:p@h/db",
        DB_POOL_MIN_SIZE=2,
        DB_POOL_MAX_SIZE=64,
        DB_ACQUIRE_TIMEOUT=5.0,
    )

    db = Database.from_settings(settings)

    assert (db.dsn, db.min_size, db.max_size, db.acquire_timeout) == ("postgresql://u:p@h/db", 2, 64, 5.0)


@pytest.mark.asyncio
async def test_connect_opens_pool_and_checks_it(monkeypatch: pytest.MonkeyPatch) -> None:
    conn = FakeConnection(result={"?column?": 1})
    pool = FakePool(conn)
    created: list[tuple[tuple, dict]] = []

    async def create_pool(*args, **kwargs):
        created.append((args, kwargs))
        return pool

    monkeypatch.setattr("tasks_api.db.connection.asyncpg.create_pool", create_pool)
    db = Database("postgresql://example/db", min_size=2, max_size=64)

    await db.connect()

    assert created == [(("postgresql://example/db",), {"min_size": 2, "max_size": 64})]
    assert conn.calls == [("fetchrow", "SELECT 1", ())]
    assert db.pool is pool


@pytest.mark.asyncio
async def test_connect_closes_pool_when_check_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    pool = FakePool(FakeConnection(error=ConnectionResetError("connection reset by peer")))

    async def create_pool(*args, **kwargs):
        return pool

    monkeypatch.setattr("tasks_api.db.connection.asyncpg.create_pool", create_pool)
    db = Database("postgresql://example/db")

    with pytest.raises(StorageError, match="connection reset by peer"):
        await db.connect()

    assert pool.closed
    assert db.pool is None


@pytest.mark.asyncio
async def test_connect_propagates_unreachable_database(monkeypatch: pytest.MonkeyPatch) -> None:
    async def create_pool(*args, **kwargs):
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr("tasks_api.db.connection.asyncpg.create_pool", create_pool)
    db = Database("postgresql://example/db")

    with pytest.raises(ConnectionRefusedError):
        await db.connect()

    assert db.pool is None
