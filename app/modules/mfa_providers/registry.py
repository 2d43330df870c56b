# app/modules/mfa_providers/registry.py

"""
Provider type registry.

Each provider type registers the pydantic model its config must match
and the hook that fills zone-dependent defaults. Adding a type is one
`register()` call; nothing else in the service branches on type.
"""

from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import UnsupportedTypeError, ValidationError
from app.modules.mfa_providers.schemas import GoogleMfaProviderConfig, MfaProviderType

DefaultsHook = Callable[[BaseModel, str], BaseModel]


class ProviderTypeDefinition:
    def __init__(
        self,
        provider_type: MfaProviderType,
        config_model: Type[BaseModel],
        defaults: Optional[DefaultsHook] = None,
    ):
        self.provider_type = provider_type
        self.config_model = config_model
        self._defaults = defaults

    def validate(self, raw_config: Any) -> BaseModel:
        """
        Parse a raw config payload into the type's config model.
        A missing config is treated as an empty object.
        """
        if raw_config is None:
            raw_config = {}
        if not isinstance(raw_config, dict):
            raise ValidationError("MFA provider config must be a JSON object")

        try:
            return self.config_model.model_validate(raw_config)
        except PydanticValidationError as exc:
            raise ValidationError(_describe_errors(exc)) from exc

    def apply_defaults(self, config: BaseModel, zone_display_name: str) -> BaseModel:
        if self._defaults is None:
            return config
        return self._defaults(config, zone_display_name)


def _describe_errors(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "config"
        parts.append(f"config.{field}: {err['msg']}")
    return "Invalid MFA provider config: " + "; ".join(parts)


class ProviderTypeRegistry:
    def __init__(self):
        self._definitions: Dict[MfaProviderType, ProviderTypeDefinition] = {}

    def register(self, definition: ProviderTypeDefinition) -> None:
        self._definitions[definition.provider_type] = definition

    def describe(self, provider_type: Any) -> ProviderTypeDefinition:
        try:
            key = MfaProviderType(provider_type)
        except ValueError:
            raise UnsupportedTypeError(provider_type) from None

        definition = self._definitions.get(key)
        if definition is None:
            raise UnsupportedTypeError(provider_type)
        return definition

    def available_types(self) -> List[str]:
        return [t.value for t in self._definitions]


# ---------------------------------------------------------------------------
# Built-in types
# ---------------------------------------------------------------------------

def _google_authenticator_defaults(config: GoogleMfaProviderConfig, zone_display_name: str) -> GoogleMfaProviderConfig:
    # Issuer is what authenticator apps show next to the code
    if config.issuer is not None:
        return config
    return config.model_copy(update={"issuer": zone_display_name})


def build_default_registry() -> ProviderTypeRegistry:
    registry = ProviderTypeRegistry()
    registry.register(
        ProviderTypeDefinition(
            MfaProviderType.google_authenticator,
            GoogleMfaProviderConfig,
            defaults=_google_authenticator_defaults,
        )
    )
    return registry


registry = build_default_registry()
