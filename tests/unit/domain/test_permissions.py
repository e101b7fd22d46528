import pytest

from offboard_tenancy.domain.entities import MemberRole
from offboard_tenancy.domain.permissions import (
    Capability,
    ROLE_CAPABILITIES,
    capabilities_for,
    has_capability,
    parse_role,
)


def test_every_role_is_listed():
    assert set(ROLE_CAPABILITIES) == set(MemberRole)


def test_admin_has_every_capability():
    assert capabilities_for(MemberRole.admin) == frozenset(Capability)


def test_hr_manager_can_invite_but_not_remove():
    assert has_capability(MemberRole.hr_manager, Capability.invite_users)
    assert has_capability(MemberRole.hr_manager, Capability.create_offboarding)
    assert not has_capability(MemberRole.hr_manager, Capability.remove_members)
    assert not has_capability(MemberRole.hr_manager, Capability.cancel_invitations)


@pytest.mark.parametrize(
    "role", [MemberRole.it_manager, MemberRole.manager, MemberRole.user]
)
def test_other_roles_cannot_invite(role):
    assert not has_capability(role, Capability.invite_users)


def test_plain_user_has_no_capabilities():
    assert capabilities_for(MemberRole.user) == frozenset()


def test_parse_role():
    assert parse_role(" HR_Manager ") == MemberRole.hr_manager
    with pytest.raises(ValueError):
        parse_role("owner")
