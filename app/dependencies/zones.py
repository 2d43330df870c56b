# app/dependencies/zones.py

from typing import Optional

from fastapi import Depends, Header

from app.dependencies.auth_utils import get_current_principal
from app.dependencies.stores import get_zone_repository
from app.modules.zones.repository import ZoneRepository
from app.modules.zones.resolver import ZoneResolver
from app.modules.zones.schemas import Principal, ZoneContext

ZONE_ID_HEADER = "X-Identity-Zone-Id"
ZONE_SUBDOMAIN_HEADER = "X-Identity-Zone-Subdomain"


async def get_zone_context(
    principal: Principal = Depends(get_current_principal),
    zones: ZoneRepository = Depends(get_zone_repository),
    zone_id: Optional[str] = Header(None, alias=ZONE_ID_HEADER),
    zone_subdomain: Optional[str] = Header(None, alias=ZONE_SUBDOMAIN_HEADER),
) -> ZoneContext:
    """
    Resolve the zone this request operates on.

    If both delegation headers are sent they must name the same zone.
    """
    return await ZoneResolver(zones).resolve(
        principal,
        zone_id_header=zone_id,
        subdomain_header=zone_subdomain,
    )
