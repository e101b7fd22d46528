from uuid import uuid4

import pytest

from offboard_tenancy.app.use_cases.organizations import RemoveMemberUseCase
from offboard_tenancy.domain.entities import Membership, MemberRole, User

ORG_ID = uuid4()


@pytest.fixture
def add_member(membership_table, user_table):
    def add(role, organization_id=ORG_ID, user=None, is_active=True):
        if user is None:
            user = User(
                id=uuid4(),
                email=f"{uuid4().hex[:8]}@acme.com",
                current_organization_id=organization_id,
            )
            user_table[user.id] = user
        membership = Membership(
            id=uuid4(),
            user_id=user.id,
            organization_id=organization_id,
            role=role,
            is_active=is_active,
        )
        membership_table.append(membership)
        return user, membership

    return add


@pytest.mark.asyncio
async def test_admin_removes_member(mock_uow, add_member):
    admin, _ = add_member(MemberRole.admin)
    _, target = add_member(MemberRole.user)

    result = await RemoveMemberUseCase(mock_uow).execute(admin.id, ORG_ID, target.id)

    assert result.is_ok()
    assert result.value.status == "removed"
    assert target.is_active is False
    assert target.deactivated_at is not None
    assert mock_uow.audit_events.create.call_args.args[0].action == "member_removed"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_removed_users_pointer_moves_to_another_membership(
    mock_uow, add_member
):
    admin, _ = add_member(MemberRole.admin)
    member, target = add_member(MemberRole.manager)
    other_org_id = uuid4()
    add_member(MemberRole.user, organization_id=other_org_id, user=member)

    result = await RemoveMemberUseCase(mock_uow).execute(admin.id, ORG_ID, target.id)

    assert result.is_ok()
    assert member.current_organization_id == other_org_id


@pytest.mark.asyncio
async def test_removed_users_pointer_cleared_without_other_membership(
    mock_uow, add_member
):
    admin, _ = add_member(MemberRole.admin)
    member, target = add_member(MemberRole.manager)

    result = await RemoveMemberUseCase(mock_uow).execute(admin.id, ORG_ID, target.id)

    assert result.is_ok()
    assert member.current_organization_id is None


@pytest.mark.asyncio
async def test_member_can_leave(mock_uow, add_member):
    add_member(MemberRole.admin)
    member, own = add_member(MemberRole.it_manager)

    result = await RemoveMemberUseCase(mock_uow).execute(member.id, ORG_ID, own.id)

    assert result.is_ok()
    assert own.is_active is False


@pytest.mark.asyncio
async def test_non_admin_cannot_remove_others(mock_uow, add_member):
    hr, _ = add_member(MemberRole.hr_manager)
    _, target = add_member(MemberRole.user)

    result = await RemoveMemberUseCase(mock_uow).execute(hr.id, ORG_ID, target.id)

    assert result.is_err()
    assert result.error.code == "PERMISSION_DENIED"
    assert target.is_active is True


@pytest.mark.asyncio
async def test_last_admin_cannot_leave(mock_uow, add_member):
    admin, own = add_member(MemberRole.admin)
    add_member(MemberRole.user)

    result = await RemoveMemberUseCase(mock_uow).execute(admin.id, ORG_ID, own.id)

    assert result.is_err()
    assert result.error.code == "LAST_ADMIN"
    assert own.is_active is True
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_admin_removed_when_another_admin_remains(mock_uow, add_member):
    first, _ = add_member(MemberRole.admin)
    _, second = add_member(MemberRole.admin)

    result = await RemoveMemberUseCase(mock_uow).execute(first.id, ORG_ID, second.id)

    assert result.is_ok()
    assert second.is_active is False


@pytest.mark.asyncio
async def test_membership_of_another_organization_is_not_found(mock_uow, add_member):
    admin, _ = add_member(MemberRole.admin)
    _, foreign = add_member(MemberRole.user, organization_id=uuid4())

    result = await RemoveMemberUseCase(mock_uow).execute(admin.id, ORG_ID, foreign.id)

    assert result.is_err()
    assert result.error.code == "MEMBERSHIP_NOT_FOUND"
    assert foreign.is_active is True


@pytest.mark.asyncio
async def test_removing_inactive_member_is_idempotent(mock_uow, add_member):
    admin, _ = add_member(MemberRole.admin)
    _, gone = add_member(MemberRole.user, is_active=False)

    result = await RemoveMemberUseCase(mock_uow).execute(admin.id, ORG_ID, gone.id)

    assert result.is_ok()
    mock_uow.audit_events.create.assert_not_called()
