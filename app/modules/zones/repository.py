# app/modules/zones/repository.py

from typing import Dict, Iterable, Optional

import asyncpg

from app.core.database import Database
from app.core.exceptions import StorageError
from app.modules.zones.schemas import IdentityZone


class ZoneRepository:
    """
    Read-only zone lookup used by the resolver and the service.
    """

    async def get_by_id(self, zone_id: str) -> Optional[IdentityZone]:
        raise NotImplementedError

    async def get_by_subdomain(self, subdomain: str) -> Optional[IdentityZone]:
        raise NotImplementedError


class InMemoryZoneRepository(ZoneRepository):
    def __init__(self, zones: Iterable[IdentityZone] = ()):
        self._zones: Dict[str, IdentityZone] = {}
        for zone in zones:
            self.add(zone)

    def add(self, zone: IdentityZone) -> None:
        self._zones[zone.id] = zone

    async def get_by_id(self, zone_id: str) -> Optional[IdentityZone]:
        return self._zones.get(zone_id)

    async def get_by_subdomain(self, subdomain: str) -> Optional[IdentityZone]:
        wanted = subdomain.lower()
        for zone in self._zones.values():
            if zone.subdomain.lower() == wanted:
                return zone
        return None


class PostgresZoneRepository(ZoneRepository):
    """
    Table: identity_zones
      - id                TEXT PRIMARY KEY
      - subdomain         TEXT UNIQUE (stored lowercase)
      - name              TEXT
      - mfa_provider_name TEXT NULL
    """

    def __init__(self, database: Database):
        self.db = database

    async def _fetch_one(self, sql: str, arg: str) -> Optional[IdentityZone]:
        try:
            if self.db.pool is None:
                await self.db.connect()
            async with self.db.pool.acquire() as conn:
                row = await conn.fetchrow(sql, arg)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
            raise StorageError() from exc
        return IdentityZone(**row) if row else None

    async def get_by_id(self, zone_id: str) -> Optional[IdentityZone]:
        return await self._fetch_one(
            """
            SELECT id, subdomain, name, mfa_provider_name
            FROM identity_zones
            WHERE id = $1
            """,
            zone_id,
        )

    async def get_by_subdomain(self, subdomain: str) -> Optional[IdentityZone]:
        return await self._fetch_one(
            """
            SELECT id, subdomain, name, mfa_provider_name
            FROM identity_zones
            WHERE subdomain = lower($1)
            """,
            subdomain,
        )
