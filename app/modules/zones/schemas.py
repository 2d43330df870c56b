# app/modules/zones/schemas.py

from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict


class IdentityZone(BaseModel):
    """
    A tenant partition. Only the fields the MFA provider core reads.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    subdomain: str
    name: str
    # Provider the zone currently uses for login MFA, if any
    mfa_provider_name: Optional[str] = None


class Principal(BaseModel):
    """
    Authenticated caller, as decoded from the bearer token.
    """
    model_config = ConfigDict(frozen=True)

    subject: str
    zone_id: str
    scopes: FrozenSet[str] = frozenset()


class ZoneContext(BaseModel):
    """
    Result of zone resolution, computed once per request and passed
    explicitly to every service call.
    """
    model_config = ConfigDict(frozen=True)

    zone: IdentityZone
    principal: Principal
    delegated: bool = False

    @property
    def zone_id(self) -> str:
        return self.zone.id
