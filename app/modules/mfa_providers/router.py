# app/modules/mfa_providers/router.py

from typing import List

from fastapi import APIRouter, Depends, status

from app.dependencies.permissions import require_zone_admin
from app.dependencies.stores import get_mfa_provider_repository
from app.modules.mfa_providers.registry import registry
from app.modules.mfa_providers.repository import MfaProviderRepository
from app.modules.mfa_providers.schemas import (
    MfaProvider,
    MfaProviderCreate,
    MfaProviderResponse,
)
from app.modules.mfa_providers.service import MfaProviderService
from app.modules.zones.schemas import ZoneContext

router = APIRouter(
    prefix="/mfa-providers",
    tags=["MFA Providers"],
)


def get_mfa_provider_service(
    repo: MfaProviderRepository = Depends(get_mfa_provider_repository),
) -> MfaProviderService:
    return MfaProviderService(repo, registry)


def _to_response(provider: MfaProvider) -> MfaProviderResponse:
    return MfaProviderResponse.model_validate(provider.model_dump())


@router.post(
    "",
    response_model=MfaProviderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_mfa_provider(
    body: MfaProviderCreate,
    ctx: ZoneContext = Depends(require_zone_admin),
    service: MfaProviderService = Depends(get_mfa_provider_service),
):
    """
    Register an MFA provider in the resolved zone.

    - 201 + record on success.
    - 409 if the name is taken in this zone.
    - 422 for a bad name, unknown type or malformed config.
    """
    provider = await service.create(ctx, body.name, body.type, body.config)
    return _to_response(provider)


@router.get(
    "",
    response_model=List[MfaProviderResponse],
)
async def list_mfa_providers(
    ctx: ZoneContext = Depends(require_zone_admin),
    service: MfaProviderService = Depends(get_mfa_provider_service),
):
    return [_to_response(p) for p in await service.list(ctx)]


@router.get(
    "/{provider_id}",
    response_model=MfaProviderResponse,
)
async def get_mfa_provider(
    provider_id: str,
    ctx: ZoneContext = Depends(require_zone_admin),
    service: MfaProviderService = Depends(get_mfa_provider_service),
):
    return _to_response(await service.get(ctx, provider_id))


@router.delete(
    "/{provider_id}",
    response_model=MfaProviderResponse,
)
async def delete_mfa_provider(
    provider_id: str,
    ctx: ZoneContext = Depends(require_zone_admin),
    service: MfaProviderService = Depends(get_mfa_provider_service),
):
    """
    Delete a provider and return its last state.
    """
    return _to_response(await service.delete(ctx, provider_id))
