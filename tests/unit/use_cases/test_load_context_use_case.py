from datetime import timedelta
from uuid import uuid4

import pytest

from offboard_tenancy.app.use_cases.organizations import (
    ListMembersUseCase,
    LoadContextUseCase,
)
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import (
    Invitation,
    Membership,
    MemberRole,
    Organization,
    User,
)


@pytest.fixture
def acme(mock_uow, user_table, membership_table):
    owner = User(
        id=uuid4(),
        email="owner@acme.com",
        name="Olive",
        subscription_plan="starter",
        subscription_status="active",
    )
    user_table[owner.id] = owner
    organization = Organization(id=uuid4(), name="Acme", owner_id=owner.id)
    owner.current_organization_id = organization.id
    mock_uow.organizations.get_by_id.side_effect = lambda org_id: (
        organization if org_id == organization.id else None
    )
    mock_uow.organizations.get_by_ids.side_effect = lambda ids: (
        [organization] if organization.id in ids else []
    )
    membership_table.append(
        Membership(
            user_id=owner.id,
            organization_id=organization.id,
            role=MemberRole.admin,
            is_active=True,
        )
    )
    return owner, organization


@pytest.mark.asyncio
async def test_context_for_current_organization(mock_uow, acme, user_table, membership_table):
    owner, organization = acme
    hr = User(id=uuid4(), email="hr@acme.com", current_organization_id=organization.id)
    user_table[hr.id] = hr
    membership_table.append(
        Membership(user_id=hr.id, organization_id=organization.id, role=MemberRole.hr_manager)
    )

    result = await LoadContextUseCase(mock_uow).execute(hr.id)

    assert result.is_ok()
    context = result.value
    assert context.current_organization.id == str(organization.id)
    assert context.role == "hr_manager"
    assert context.capabilities == sorted(
        ["invite_users", "create_offboarding", "view_all_tasks"]
    )
    # Billing comes from the owner, not the requester
    assert context.subscription.subscription_plan == "starter"
    assert context.entitlements.effective_plan == "starter"
    assert context.entitlements.max_team_members == 25
    assert context.entitlements.active_member_count == 2
    assert context.entitlements.remaining_member_slots == 23


@pytest.mark.asyncio
async def test_context_without_current_organization(mock_uow, user_table):
    loner = User(id=uuid4(), email="loner@acme.com")
    user_table[loner.id] = loner

    result = await LoadContextUseCase(mock_uow).execute(loner.id)

    assert result.is_ok()
    assert result.value.current_organization is None
    assert result.value.capabilities == []
    assert result.value.organizations == []


@pytest.mark.asyncio
async def test_context_unknown_user(mock_uow, user_table):
    result = await LoadContextUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_members_lists_active_members_and_live_invitations(
    mock_uow, acme, user_table, membership_table
):
    owner, organization = acme
    gone = User(id=uuid4(), email="gone@acme.com")
    user_table[gone.id] = gone
    membership_table.append(
        Membership(
            user_id=gone.id,
            organization_id=organization.id,
            role=MemberRole.user,
            is_active=False,
        )
    )
    now = utcnow()
    live = Invitation(
        organization_id=organization.id,
        email="new@acme.com",
        role=MemberRole.user,
        token="live",
        invited_by=owner.id,
        created_at=now,
        expires_at=now + timedelta(days=7),
    )
    stale = Invitation(
        organization_id=organization.id,
        email="old@acme.com",
        role=MemberRole.user,
        token="stale",
        invited_by=owner.id,
        created_at=now - timedelta(days=8),
        expires_at=now - timedelta(days=1),
    )
    mock_uow.invitations.get_pending_by_organization_id.return_value = [live, stale]

    result = await ListMembersUseCase(mock_uow).execute(owner.id, organization.id)

    assert result.is_ok()
    assert [m.email for m in result.value.members] == ["owner@acme.com"]
    assert [i.email for i in result.value.pending_invitations] == ["new@acme.com"]
    assert result.value.entitlements.active_member_count == 1


@pytest.mark.asyncio
async def test_members_requires_membership(mock_uow, acme):
    _, organization = acme

    result = await ListMembersUseCase(mock_uow).execute(uuid4(), organization.id)

    assert result.is_err()
    assert result.error.code == "NOT_A_MEMBER"
