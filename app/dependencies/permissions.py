# app/dependencies/permissions.py

from fastapi import Depends

from app.core.exceptions import AuthorizationError
from app.dependencies.zones import get_zone_context
from app.modules.zones.resolver import can_administer, zone_admin_scope
from app.modules.zones.schemas import ZoneContext


async def require_zone_admin(ctx: ZoneContext = Depends(get_zone_context)) -> ZoneContext:
    """
    Dependency enforcing admin rights on the *resolved* zone.

    Accepted scopes:
      - uaa.admin issued in the platform zone  => any zone
      - zones.<zoneId>.admin                   => that zone
      - uaa.admin issued in the zone itself    => that zone

    Usage:
        @router.get("/something")
        async def handler(ctx: ZoneContext = Depends(require_zone_admin)):
            ...
    """
    if not can_administer(ctx.principal, ctx.zone_id):
        raise AuthorizationError(
            f"Missing required scope: uaa.admin or {zone_admin_scope(ctx.zone_id)}"
        )
    return ctx
