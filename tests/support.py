# tests/support.py

from app.core.config import settings
from app.modules.zones.schemas import IdentityZone

PLATFORM_ZONE = IdentityZone(
    id=settings.PLATFORM_ZONE_ID,
    subdomain=settings.PLATFORM_ZONE_SUBDOMAIN,
    name=settings.PLATFORM_ZONE_NAME,
)
ZONE_ONE = IdentityZone(id="z1", subdomain="zone-one", name="Zone One")
ZONE_TWO = IdentityZone(id="z2", subdomain="zone-two", name="Zone Two")
# Zone whose login flow currently uses "activeProvider"
ZONE_ACTIVE = IdentityZone(
    id="z3",
    subdomain="zone-three",
    name="Zone Three",
    mfa_provider_name="activeProvider",
)
