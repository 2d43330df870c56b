import asyncio
import logging
import sys

import asyncpg
from app.core.config import settings

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("connection_check")

MAX_RETRIES = 30
RETRY_INTERVAL = 2  # seconds


async def check_postgres():
    """Attempt to connect to PostgreSQL."""
    dsn = settings.DATABASE_URL
    for attempt in range(1, MAX_RETRIES + 1):
        try:
            logger.info(f"Checking PostgreSQL connection (Attempt {attempt}/{MAX_RETRIES})...")
            conn = await asyncpg.connect(dsn)
            await conn.close()
            logger.info("PostgreSQL is ready!")
            return True
        except (asyncpg.PostgresError, OSError) as e:
            logger.warning(f"PostgreSQL not ready yet: {e}")
            await asyncio.sleep(RETRY_INTERVAL)
    return False


async def main():
    if settings.STORAGE_BACKEND == "memory":
        logger.info("In-memory storage configured; nothing to wait for.")
        sys.exit(0)

    if await check_postgres():
        logger.info("Storage is UP. Starting application...")
        sys.exit(0)
    else:
        logger.error("Storage failed to come up. Aborting.")
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Connection check cancelled.")
        sys.exit(1)
