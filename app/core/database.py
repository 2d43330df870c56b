# app/core/database.py

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg

from app.core.config import settings


class Database:
    """
    Central asyncpg connection pool wrapper.

    - connect() / disconnect() manage the pool lifecycle.
    - connection(zone_id) yields a connection with RLS zone context set.
    - ping() is used by /health and startup checks.
    """

    def __init__(self) -> None:
        self.pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> None:
        if self.pool is not None:
            return

        self.pool = await asyncpg.create_pool(
            host=settings.DATABASE_HOST,
            port=settings.DATABASE_PORT,
            user=settings.DATABASE_USER,
            password=settings.DATABASE_PASSWORD,
            database=settings.DATABASE_NAME,
            min_size=settings.DATABASE_POOL_MIN_SIZE,
            max_size=settings.DATABASE_POOL_SIZE,
        )

    async def disconnect(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None

    async def ping(self) -> bool:
        """
        Lightweight health check used by /health and startup.

        Returns True if the database responds to a simple query.
        """
        try:
            if self.pool is None:
                await self.connect()
            async with self.pool.acquire() as conn:
                await conn.execute("SELECT 1")
            return True
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError):
            return False

    @asynccontextmanager
    async def connection(self, zone_id: str) -> AsyncIterator[asyncpg.Connection]:
        """
        Acquire a connection and set the RLS zone context for the duration
        of the transaction:

            SELECT set_config('app.current_zone_id', <zone_id>, true);

        Repositories still filter on identity_zone_id explicitly; the RLS
        policy is a second fence, not the only one.
        """
        if self.pool is None:
            await self.connect()

        async with self.pool.acquire() as conn:
            async with conn.transaction():
                # set_config() instead of "SET LOCAL ... = $1", which
                # Postgres can't parameterize.
                await conn.execute(
                    "SELECT set_config('app.current_zone_id', $1, true)",
                    zone_id,
                )
                yield conn


db = Database()
