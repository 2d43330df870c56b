import asyncio
import logging

import asyncpg

from app.core.config import settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("seed_db")


async def seed_database():
    logger.info("Seeding database at %s...", settings.DATABASE_HOST)

    try:
        with open("schema.sql", "r") as f:
            sql = f.read()
    except FileNotFoundError:
        logger.error("'schema.sql' file not found.")
        return

    conn = None
    try:
        conn = await asyncpg.connect(settings.DATABASE_URL)

        await conn.execute(sql)

        # Platform zone: its uaa.admin scope may administer every zone
        await conn.execute(
            """
            INSERT INTO identity_zones (id, subdomain, name)
            VALUES ($1, lower($2), $3)
            ON CONFLICT (id) DO NOTHING
            """,
            settings.PLATFORM_ZONE_ID,
            settings.PLATFORM_ZONE_SUBDOMAIN,
            settings.PLATFORM_ZONE_NAME,
        )

        logger.info("Schema applied and platform zone '%s' seeded.", settings.PLATFORM_ZONE_ID)

    except (asyncpg.PostgresError, OSError) as e:
        logger.error("Database error: %s", e)
    finally:
        if conn is not None:
            await conn.close()


if __name__ == "__main__":
    asyncio.run(seed_database())
