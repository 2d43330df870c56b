# app/modules/mfa_providers/repository.py

import asyncio
import json
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

import asyncpg

from app.core.database import Database
from app.core.exceptions import ConflictError, StorageError
from app.modules.mfa_providers.schemas import MfaProvider, MfaProviderType


class MfaProviderRepository:
    """
    Zone-scoped MFA provider store.

    Every read and delete is constrained by zone id as well as provider
    id. create() must enforce (zone, name) uniqueness atomically and
    raise ConflictError on collision; the service never pre-checks.
    """

    async def create(
        self,
        zone_id: str,
        name: str,
        provider_type: MfaProviderType,
        config: Dict[str, Any],
    ) -> MfaProvider:
        raise NotImplementedError

    async def get(self, zone_id: str, provider_id: str) -> Optional[MfaProvider]:
        raise NotImplementedError

    async def list_by_zone(self, zone_id: str) -> List[MfaProvider]:
        raise NotImplementedError

    async def delete(self, zone_id: str, provider_id: str) -> Optional[MfaProvider]:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class InMemoryMfaProviderRepository(MfaProviderRepository):
    """
    Reference store for local runs and tests.

    Check and insert happen under one lock with no await in between,
    so concurrent creates of the same name cannot both succeed.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        # Insertion order == creation order
        self._records: Dict[str, MfaProvider] = {}
        self._names: Dict[tuple, str] = {}
        # Ids are never handed out twice, even after delete
        self._issued_ids: set = set()

    def _new_id(self) -> str:
        provider_id = str(uuid4())
        while provider_id in self._issued_ids:
            provider_id = str(uuid4())
        self._issued_ids.add(provider_id)
        return provider_id

    async def create(self, zone_id, name, provider_type, config) -> MfaProvider:
        async with self._lock:
            key = (zone_id, name)
            if key in self._names:
                raise ConflictError()

            now = datetime.now(timezone.utc)
            record = MfaProvider(
                id=self._new_id(),
                name=name,
                type=provider_type,
                config=dict(config),
                identity_zone_id=zone_id,
                created=now,
                last_modified=now,
            )
            self._records[record.id] = record
            self._names[key] = record.id
            return record

    async def get(self, zone_id, provider_id) -> Optional[MfaProvider]:
        record = self._records.get(provider_id)
        if record is None or record.identity_zone_id != zone_id:
            return None
        return record

    async def list_by_zone(self, zone_id) -> List[MfaProvider]:
        return [r for r in self._records.values() if r.identity_zone_id == zone_id]

    async def delete(self, zone_id, provider_id) -> Optional[MfaProvider]:
        async with self._lock:
            record = self._records.get(provider_id)
            if record is None or record.identity_zone_id != zone_id:
                return None
            del self._records[provider_id]
            del self._names[(zone_id, record.name)]
            return record


# ---------------------------------------------------------------------------
# PostgreSQL store
# ---------------------------------------------------------------------------

_COLUMNS = "id, name, type, config, identity_zone_id, created, last_modified"


class PostgresMfaProviderRepository(MfaProviderRepository):
    """
    asyncpg-backed store.

    Table: mfa_providers (see schema.sql)
      - id               TEXT PRIMARY KEY
      - seq              BIGSERIAL (creation order tiebreak)
      - identity_zone_id TEXT
      - name             TEXT
      - type             TEXT
      - config           JSONB
      - created          TIMESTAMPTZ
      - last_modified    TIMESTAMPTZ
      - UNIQUE (identity_zone_id, name)
    """

    def __init__(self, database: Database):
        self.db = database

    @asynccontextmanager
    async def _connection(self, zone_id: str):
        try:
            async with self.db.connection(zone_id) as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
            raise StorageError() from exc

    # ------------------------------------------------------------------
    # CREATE
    # ------------------------------------------------------------------
    async def create(self, zone_id, name, provider_type, config) -> MfaProvider:
        async with self._connection(zone_id) as conn:
            # ON CONFLICT keeps the uniqueness check inside the insert
            row = await conn.fetchrow(
                f"""
                INSERT INTO mfa_providers (
                    id,
                    identity_zone_id,
                    name,
                    type,
                    config,
                    created,
                    last_modified
                )
                VALUES ($1, $2, $3, $4, $5::jsonb, now(), now())
                ON CONFLICT (identity_zone_id, name) DO NOTHING
                RETURNING {_COLUMNS}
                """,
                str(uuid4()),
                zone_id,
                name,
                MfaProviderType(provider_type).value,
                json.dumps(config),
            )

        if row is None:
            raise ConflictError()
        return self._to_model(row)

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    async def get(self, zone_id, provider_id) -> Optional[MfaProvider]:
        async with self._connection(zone_id) as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {_COLUMNS}
                FROM mfa_providers
                WHERE id = $1 AND identity_zone_id = $2
                """,
                provider_id,
                zone_id,
            )
        return self._to_model(row) if row else None

    async def list_by_zone(self, zone_id) -> List[MfaProvider]:
        async with self._connection(zone_id) as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_COLUMNS}
                FROM mfa_providers
                WHERE identity_zone_id = $1
                ORDER BY created ASC, seq ASC
                """,
                zone_id,
            )
        return [self._to_model(r) for r in rows]

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------
    async def delete(self, zone_id, provider_id) -> Optional[MfaProvider]:
        async with self._connection(zone_id) as conn:
            row = await conn.fetchrow(
                f"""
                DELETE FROM mfa_providers
                WHERE id = $1 AND identity_zone_id = $2
                RETURNING {_COLUMNS}
                """,
                provider_id,
                zone_id,
            )
        return self._to_model(row) if row else None

    @staticmethod
    def _to_model(row) -> MfaProvider:
        config = row["config"]
        # asyncpg hands back jsonb as text unless a codec is registered
        if isinstance(config, str):
            config = json.loads(config)
        return MfaProvider(
            id=row["id"],
            name=row["name"],
            type=row["type"],
            config=config or {},
            identity_zone_id=row["identity_zone_id"],
            created=row["created"],
            last_modified=row["last_modified"],
        )
