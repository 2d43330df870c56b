import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.core.security import create_access_token
from app.dependencies.stores import get_mfa_provider_repository, get_zone_repository
from app.modules.mfa_providers.registry import build_default_registry
from app.modules.mfa_providers.repository import InMemoryMfaProviderRepository
from app.modules.mfa_providers.service import MfaProviderService
from app.modules.zones.repository import InMemoryZoneRepository
from app.modules.zones.schemas import IdentityZone, Principal, ZoneContext
from tests.support import PLATFORM_ZONE, ZONE_ACTIVE, ZONE_ONE, ZONE_TWO


# 1. Stores
@pytest.fixture
def zones():
    return InMemoryZoneRepository([PLATFORM_ZONE, ZONE_ONE, ZONE_TWO, ZONE_ACTIVE])


@pytest.fixture
def providers():
    return InMemoryMfaProviderRepository()


@pytest.fixture
def service(providers):
    return MfaProviderService(providers, build_default_registry(), delete_active_policy="block")


# 2. Zone contexts for calling the service directly
@pytest.fixture
def zone_ctx():
    def _make(zone: IdentityZone, delegated: bool = False) -> ZoneContext:
        principal = Principal(
            subject="admin",
            zone_id=zone.id,
            scopes=frozenset({f"zones.{zone.id}.admin"}),
        )
        return ZoneContext(zone=zone, principal=principal, delegated=delegated)

    return _make


# 3. Tokens
@pytest.fixture
def make_headers():
    def _make(zone_id: str, scopes, subject: str = "admin", **extra_headers):
        token = create_access_token(subject=subject, zone_id=zone_id, scopes=scopes)
        headers = {"Authorization": f"Bearer {token}"}
        headers.update(extra_headers)
        return headers

    return _make


# 4. API Client
@pytest_asyncio.fixture(scope="function")
async def async_client(zones, providers):
    app.dependency_overrides[get_zone_repository] = lambda: zones
    app.dependency_overrides[get_mfa_provider_repository] = lambda: providers
    try:
        async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test"
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
