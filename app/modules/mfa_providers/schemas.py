# app/modules/mfa_providers/schemas.py

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class MfaProviderType(str, Enum):
    google_authenticator = "google-authenticator"


class GoogleMfaProviderConfig(BaseModel):
    """
    Config payload for the TOTP authenticator type.
    Unknown keys are rejected, never dropped.
    """
    model_config = ConfigDict(extra="forbid")

    provider_description: Optional[StrictStr] = Field(default=None, alias="providerDescription")
    issuer: Optional[StrictStr] = None


class MfaProviderCreate(BaseModel):
    """
    Payload used by POST /mfa-providers.

    Server-owned fields (id, created, last_modified, identityZoneId) are
    ignored if a client sends them. `type` stays a plain string here so
    that unregistered types reach the registry and fail there with a
    single, stable error.
    """
    model_config = ConfigDict(extra="ignore")

    name: str
    type: str
    config: Optional[Any] = None


class MfaProvider(BaseModel):
    """
    Stored record. `config` holds the wire form of the typed config.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: MfaProviderType
    config: Dict[str, Any]
    identity_zone_id: str
    created: datetime
    last_modified: datetime


class MfaProviderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    type: MfaProviderType
    config: Dict[str, Any]
    identity_zone_id: str = Field(alias="identityZoneId")
    created: datetime
    last_modified: datetime
