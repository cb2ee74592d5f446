# db/connection.py
import asyncio
import logging
from contextlib import asynccontextmanager

import asyncpg

from .errors import StorageError

POOL_TIMEOUT_MESSAGE = "pool timed out while waiting for an open connection"


class Database:
    """
    Пул подключений к PostgreSQL.

    Соединение берётся из пула на время одного запроса и возвращается обратно.
    Все ошибки драйвера превращаются в StorageError с исходным текстом.
    """

    def __init__(self, dsn: str, min_size: int = 1, max_size: int = 64, acquire_timeout: float = 5.0):
        self.dsn = dsn  # Строка подключения
        self.min_size = min_size
        self.max_size = max_size
        self.acquire_timeout = acquire_timeout
        self.pool = None

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            acquire_timeout=settings.DB_ACQUIRE_TIMEOUT,
        )

    async def connect(self):
        # Создаём пул; при недоступной базе ошибка уходит наверх и процесс не стартует
        self.pool = await asyncpg.create_pool(
            self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
        )
        logging.info(f"Database pool opened (max_size={self.max_size})")

        # Простой запрос для проверки; при ошибке пул не оставляем открытым
        try:
            await self.fetchrow("SELECT 1")
        except Exception:
            await self.close()
            raise

    async def close(self):
        if self.pool:
            await self.pool.close()
            self.pool = None
            logging.info("Database pool closed")

    @asynccontextmanager
    async def connection(self):
        if self.pool is None:
            raise StorageError("Database pool is not initialized")
        try:
            async with self.pool.acquire(timeout=self.acquire_timeout) as conn:
                yield conn
        except asyncio.TimeoutError as e:
            raise StorageError(POOL_TIMEOUT_MESSAGE) from e
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            raise StorageError(str(e)) from e

    async def fetch(self, query: str, *args):
        async with self.connection() as conn:
            return await conn.fetch(query, *args)

    async def fetchrow(self, query: str, *args):
        async with self.connection() as conn:
            return await conn.fetchrow(query, *args)

    async def execute(self, query: str, *args) -> str:
        # Возвращает статус команды, например "UPDATE 1"
        async with self.connection() as conn:
            return await conn.execute(query, *args)
