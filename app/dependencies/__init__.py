# app/dependencies/__init__.py

from .auth_utils import get_current_principal
from .permissions import require_zone_admin
from .stores import get_mfa_provider_repository, get_zone_repository
from .zones import get_zone_context

__all__ = [
    "get_current_principal",
    "get_mfa_provider_repository",
    "get_zone_context",
    "get_zone_repository",
    "require_zone_admin",
]
