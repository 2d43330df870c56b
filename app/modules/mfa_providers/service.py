# app/modules/mfa_providers/service.py

import logging
from typing import Any, List, Optional

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError
from app.modules.mfa_providers.registry import ProviderTypeRegistry
from app.modules.mfa_providers.repository import MfaProviderRepository
from app.modules.mfa_providers.schemas import MfaProvider
from app.modules.mfa_providers.validator import ConfigValidator
from app.modules.zones.schemas import ZoneContext

logger = logging.getLogger(__name__)


class MfaProviderService:
    """
    Lifecycle of MFA provider configuration records within one zone.

    The zone always comes from the ZoneContext handed in by the caller;
    the service keeps no state between calls.
    """

    def __init__(
        self,
        repo: MfaProviderRepository,
        registry: ProviderTypeRegistry,
        delete_active_policy: Optional[str] = None,
    ):
        self.repo = repo
        self.validator = ConfigValidator(registry)
        self.delete_active_policy = delete_active_policy or settings.MFA_ACTIVE_PROVIDER_DELETE_POLICY

    # ---------------------------------------------------------
    # CREATE
    # ---------------------------------------------------------
    async def create(self, ctx: ZoneContext, name: Any, provider_type: Any, raw_config: Any) -> MfaProvider:
        name = self.validator.validate_name(name)
        definition, config = self.validator.validate(provider_type, raw_config)
        config = definition.apply_defaults(config, ctx.zone.name)

        provider = await self.repo.create(
            zone_id=ctx.zone_id,
            name=name,
            provider_type=definition.provider_type,
            config=config.model_dump(by_alias=True, exclude_none=True),
        )

        logger.info(
            "Created MFA provider %s (%s, type=%s) in zone %s%s",
            provider.id,
            provider.name,
            provider.type.value,
            ctx.zone_id,
            " via delegation" if ctx.delegated else "",
        )
        return provider

    # ---------------------------------------------------------
    # READ
    # ---------------------------------------------------------
    async def get(self, ctx: ZoneContext, provider_id: str) -> MfaProvider:
        provider = await self.repo.get(ctx.zone_id, provider_id)
        if provider is None:
            # Same answer whether the id is unknown or lives in another zone
            raise NotFoundError()
        return provider

    async def list(self, ctx: ZoneContext) -> List[MfaProvider]:
        return await self.repo.list_by_zone(ctx.zone_id)

    # ---------------------------------------------------------
    # DELETE
    # ---------------------------------------------------------
    async def delete(self, ctx: ZoneContext, provider_id: str) -> MfaProvider:
        existing = await self.get(ctx, provider_id)

        if existing.name == ctx.zone.mfa_provider_name:
            if self.delete_active_policy == "block":
                raise ConflictError(
                    f"MFA provider {existing.name} is active in identity zone {ctx.zone_id} and cannot be deleted"
                )
            logger.warning(
                "Deleting MFA provider %s which is active in zone %s",
                existing.id,
                ctx.zone_id,
            )

        deleted = await self.repo.delete(ctx.zone_id, provider_id)
        if deleted is None:
            # Lost a race with another delete
            raise NotFoundError()

        logger.info(
            "Deleted MFA provider %s (%s) from zone %s%s",
            deleted.id,
            deleted.name,
            ctx.zone_id,
            " via delegation" if ctx.delegated else "",
        )
        return deleted
