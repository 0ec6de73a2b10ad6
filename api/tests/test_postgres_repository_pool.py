from __future__ import annotations

import asyncio
from typing import Any

import pytest

from app.core.errors import StorageError
from app.services import repository as repository_module
from app.services.repository import PostgresRepository


class _BrokenConnection:
    async def __aenter__(self) -> "_BrokenConnection":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    async def execute(self, query: str) -> None:
        raise OSError("schema setup failed")


class _FakePool:
    def __init__(self) -> None:
        self.closed = False

    def acquire(self) -> _BrokenConnection:
        return _BrokenConnection()

    async def close(self) -> None:
        self.closed = True


def test_pool_is_closed_when_schema_setup_fails(monkeypatch) -> None:
    created: list[_FakePool] = []

    async def fake_create_pool(**kwargs: Any) -> _FakePool:
        pool = _FakePool()
        created.append(pool)
        return pool

    monkeypatch.setattr(repository_module.asyncpg, "create_pool", fake_create_pool)
    repository = PostgresRepository("postgresql://example/careers", min_pool_size=1, max_pool_size=2)

    async def scenario() -> None:
        for _ in range(2):
            with pytest.raises(StorageError):
                await repository.find_companies()

    asyncio.run(scenario())

    assert len(created) == 2
    assert all(pool.closed for pool in created)
    assert repository._pool is None


def test_concurrent_first_requests_share_one_pool(monkeypatch) -> None:
    created: list[Any] = []

    class _Connection:
        async def __aenter__(self) -> "_Connection":
            return self

        async def __aexit__(self, *exc_info: Any) -> None:
            return None

        async def execute(self, query: str) -> None:
            await asyncio.sleep(0)

    class _Pool:
        def acquire(self) -> _Connection:
            return _Connection()

        async def fetch(self, query: str, *args: Any) -> list[Any]:
            return []

        async def close(self) -> None:
            return None

    async def fake_create_pool(**kwargs: Any) -> _Pool:
        await asyncio.sleep(0)
        pool = _Pool()
        created.append(pool)
        return pool

    monkeypatch.setattr(repository_module.asyncpg, "create_pool", fake_create_pool)
    repository = PostgresRepository("postgresql://example/careers", min_pool_size=1, max_pool_size=2)

    async def scenario() -> None:
        results = await asyncio.gather(*(repository.find_companies() for _ in range(5)))
        assert results == [[]] * 5

    asyncio.run(scenario())

    assert len(created) == 1


def test_missing_database_url_is_a_storage_error() -> None:
    repository = PostgresRepository(None, min_pool_size=1, max_pool_size=2)
    with pytest.raises(StorageError):
        asyncio.run(repository.find_companies())
