# app/modules/mfa_providers/validator.py

import re
from typing import Any, Tuple

from pydantic import BaseModel

from app.core.exceptions import ValidationError
from app.modules.mfa_providers.registry import ProviderTypeDefinition, ProviderTypeRegistry

NAME_PATTERN = re.compile(r"[A-Za-z0-9]+")
NAME_MAX_LENGTH = 255


class ConfigValidator:
    """
    Checks an incoming provider before anything touches storage:
    name rules first, then the type, then the config against the
    type's registered model.
    """

    def __init__(self, registry: ProviderTypeRegistry):
        self.registry = registry

    def validate_name(self, name: Any) -> str:
        if not isinstance(name, str) or not name:
            raise ValidationError("MFA provider name must not be empty")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"MFA provider name must be at most {NAME_MAX_LENGTH} characters")
        if not NAME_PATTERN.fullmatch(name):
            raise ValidationError("MFA provider name must be alphanumeric")
        return name

    def validate(self, provider_type: Any, raw_config: Any) -> Tuple[ProviderTypeDefinition, BaseModel]:
        definition = self.registry.describe(provider_type)
        return definition, definition.validate(raw_config)
