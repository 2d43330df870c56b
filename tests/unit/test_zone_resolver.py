# tests/unit/test_zone_resolver.py

import pytest

from app.core.exceptions import AuthorizationError, NotFoundError
from app.modules.zones.resolver import ZoneResolver, can_administer
from app.modules.zones.schemas import Principal


def _principal(zone_id, *scopes):
    return Principal(subject="caller", zone_id=zone_id, scopes=frozenset(scopes))


PLATFORM_ADMIN = _principal("uaa", "uaa.admin")
Z1_ADMIN = _principal("z1", "zones.z1.admin")


@pytest.mark.asyncio
async def test_no_header_resolves_own_zone(zones):
    ctx = await ZoneResolver(zones).resolve(_principal("z1"))

    assert ctx.zone_id == "z1"
    assert ctx.zone.name == "Zone One"
    assert ctx.delegated is False


@pytest.mark.asyncio
async def test_own_zone_missing_is_rejected(zones):
    with pytest.raises(AuthorizationError):
        await ZoneResolver(zones).resolve(_principal("gone", "uaa.admin"))


@pytest.mark.asyncio
async def test_zone_admin_cannot_delegate_to_other_zone(zones):
    with pytest.raises(AuthorizationError):
        await ZoneResolver(zones).resolve(Z1_ADMIN, zone_id_header="z2")


@pytest.mark.asyncio
async def test_zone_admin_scope_for_target_allows_delegation(zones):
    caller = _principal("uaa", "zones.z2.admin")

    ctx = await ZoneResolver(zones).resolve(caller, zone_id_header="z2")

    assert ctx.zone_id == "z2"
    assert ctx.delegated is True


@pytest.mark.asyncio
async def test_platform_admin_delegates_anywhere(zones):
    resolver = ZoneResolver(zones)

    by_id = await resolver.resolve(PLATFORM_ADMIN, zone_id_header="z2")
    by_subdomain = await resolver.resolve(PLATFORM_ADMIN, subdomain_header="zone-one")

    assert by_id.zone_id == "z2"
    assert by_subdomain.zone_id == "z1"
    assert by_id.delegated and by_subdomain.delegated


@pytest.mark.asyncio
async def test_uaa_admin_outside_platform_zone_is_not_platform_wide(zones):
    caller = _principal("z1", "uaa.admin")

    with pytest.raises(AuthorizationError):
        await ZoneResolver(zones).resolve(caller, zone_id_header="z2")


@pytest.mark.asyncio
async def test_header_for_own_zone_still_needs_admin_scope(zones):
    with pytest.raises(AuthorizationError):
        await ZoneResolver(zones).resolve(_principal("z1"), zone_id_header="z1")

    ctx = await ZoneResolver(zones).resolve(Z1_ADMIN, zone_id_header="z1")
    assert ctx.zone_id == "z1"
    assert ctx.delegated is False


@pytest.mark.asyncio
async def test_both_headers_same_zone_is_honored(zones):
    ctx = await ZoneResolver(zones).resolve(
        PLATFORM_ADMIN, zone_id_header="z1", subdomain_header="zone-one"
    )

    assert ctx.zone_id == "z1"


@pytest.mark.asyncio
async def test_both_headers_different_zones_is_ambiguous(zones):
    with pytest.raises(AuthorizationError) as exc:
        await ZoneResolver(zones).resolve(
            PLATFORM_ADMIN, zone_id_header="z1", subdomain_header="zone-two"
        )

    assert "different zones" in exc.value.detail


@pytest.mark.asyncio
async def test_unauthorized_caller_learns_nothing_about_zone_existence(zones):
    resolver = ZoneResolver(zones)

    with pytest.raises(AuthorizationError):
        await resolver.resolve(Z1_ADMIN, zone_id_header="does-not-exist")
    with pytest.raises(AuthorizationError):
        await resolver.resolve(Z1_ADMIN, subdomain_header="does-not-exist")
    with pytest.raises(AuthorizationError):
        await resolver.resolve(Z1_ADMIN, subdomain_header="zone-two")


@pytest.mark.asyncio
async def test_platform_admin_unknown_zone_is_not_found(zones):
    resolver = ZoneResolver(zones)

    with pytest.raises(NotFoundError):
        await resolver.resolve(PLATFORM_ADMIN, zone_id_header="does-not-exist")
    with pytest.raises(NotFoundError):
        await resolver.resolve(PLATFORM_ADMIN, subdomain_header="does-not-exist")


@pytest.mark.asyncio
async def test_blank_zone_id_header_is_ignored(zones):
    ctx = await ZoneResolver(zones).resolve(_principal("z1"), zone_id_header="   ")

    assert ctx.zone_id == "z1"
    assert ctx.delegated is False


def test_can_administer_rules():
    assert can_administer(PLATFORM_ADMIN, "z1")
    assert can_administer(Z1_ADMIN, "z1")
    assert not can_administer(Z1_ADMIN, "z2")
    assert can_administer(_principal("z2", "uaa.admin"), "z2")
    assert not can_administer(_principal("z2", "uaa.admin"), "z1")
    assert not can_administer(_principal("z1", "zones.z1.read"), "z1")
