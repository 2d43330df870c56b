# app/dependencies/stores.py

from app.core.config import settings
from app.core.database import db
from app.modules.mfa_providers.repository import (
    InMemoryMfaProviderRepository,
    MfaProviderRepository,
    PostgresMfaProviderRepository,
)
from app.modules.zones.repository import (
    InMemoryZoneRepository,
    PostgresZoneRepository,
    ZoneRepository,
)
from app.modules.zones.schemas import IdentityZone

# Process-wide stores for STORAGE_BACKEND=memory
memory_zones = InMemoryZoneRepository(
    [
        IdentityZone(
            id=settings.PLATFORM_ZONE_ID,
            subdomain=settings.PLATFORM_ZONE_SUBDOMAIN,
            name=settings.PLATFORM_ZONE_NAME,
        )
    ]
)
memory_mfa_providers = InMemoryMfaProviderRepository()


def get_zone_repository() -> ZoneRepository:
    if settings.STORAGE_BACKEND == "memory":
        return memory_zones
    return PostgresZoneRepository(db)


def get_mfa_provider_repository() -> MfaProviderRepository:
    """
    Tests override this to inject a fresh in-memory store.
    """
    if settings.STORAGE_BACKEND == "memory":
        return memory_mfa_providers
    return PostgresMfaProviderRepository(db)
