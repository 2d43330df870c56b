# app/modules/zones/resolver.py

"""
Single point where the target identity zone of a request is decided.

Everything downstream trusts the ZoneContext produced here and never
looks at headers or token claims again.
"""

import logging
from typing import Optional

from app.core.config import settings
from app.core.exceptions import AuthorizationError, NotFoundError
from app.modules.zones.repository import ZoneRepository
from app.modules.zones.schemas import IdentityZone, Principal, ZoneContext

logger = logging.getLogger(__name__)

PLATFORM_ADMIN_SCOPE = "uaa.admin"


def zone_admin_scope(zone_id: str) -> str:
    return f"zones.{zone_id}.admin"


def is_platform_admin(principal: Principal) -> bool:
    """
    uaa.admin only spans every zone when it was issued in the platform
    zone; inside an ordinary zone it administers that zone alone.
    """
    return (
        PLATFORM_ADMIN_SCOPE in principal.scopes
        and principal.zone_id == settings.PLATFORM_ZONE_ID
    )


def can_administer(principal: Principal, zone_id: str) -> bool:
    if is_platform_admin(principal):
        return True
    if zone_admin_scope(zone_id) in principal.scopes:
        return True
    return principal.zone_id == zone_id and PLATFORM_ADMIN_SCOPE in principal.scopes


class ZoneResolver:
    def __init__(self, zones: ZoneRepository):
        self.zones = zones

    async def resolve(
        self,
        principal: Principal,
        zone_id_header: Optional[str] = None,
        subdomain_header: Optional[str] = None,
    ) -> ZoneContext:
        zone_id_header = (zone_id_header or "").strip() or None
        # The platform zone's subdomain is "", so an empty header is not absent
        if subdomain_header is not None:
            subdomain_header = subdomain_header.strip()

        if zone_id_header is None and subdomain_header is None:
            zone = await self.zones.get_by_id(principal.zone_id)
            if zone is None:
                # Token names a zone that no longer exists
                raise AuthorizationError("Identity zone of the token is not available")
            return ZoneContext(zone=zone, principal=principal, delegated=False)

        by_id = None
        if zone_id_header is not None:
            by_id = await self._resolve_by_id(principal, zone_id_header)

        by_subdomain = None
        if subdomain_header is not None:
            by_subdomain = await self._resolve_by_subdomain(principal, subdomain_header)

        if by_id is not None and by_subdomain is not None and by_id.id != by_subdomain.id:
            logger.warning(
                "Rejected ambiguous zone delegation by %s: id=%s subdomain=%s",
                principal.subject,
                zone_id_header,
                subdomain_header,
            )
            raise AuthorizationError("Zone id and subdomain headers refer to different zones")

        zone = by_id if by_id is not None else by_subdomain
        delegated = zone.id != principal.zone_id
        if delegated:
            logger.info(
                "Principal %s from zone %s delegated into zone %s",
                principal.subject,
                principal.zone_id,
                zone.id,
            )
        return ZoneContext(zone=zone, principal=principal, delegated=delegated)

    # ------------------------------------------------------------------
    # Header forms
    # ------------------------------------------------------------------
    async def _resolve_by_id(self, principal: Principal, zone_id: str) -> IdentityZone:
        # Scope first, so unauthorized callers learn nothing about the zone
        if not can_administer(principal, zone_id):
            raise AuthorizationError()

        zone = await self.zones.get_by_id(zone_id)
        if zone is None:
            raise NotFoundError(f"Identity zone {zone_id} not found")
        return zone

    async def _resolve_by_subdomain(self, principal: Principal, subdomain: str) -> IdentityZone:
        zone = await self.zones.get_by_subdomain(subdomain)
        if zone is None:
            if is_platform_admin(principal):
                raise NotFoundError(f"Identity zone with subdomain '{subdomain}' not found")
            raise AuthorizationError()

        if not can_administer(principal, zone.id):
            raise AuthorizationError()
        return zone
