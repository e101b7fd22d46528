from uuid import uuid4

import pytest

from offboard_tenancy.app.use_cases.organizations import SwitchOrganizationUseCase
from offboard_tenancy.domain.entities import Membership, MemberRole, Organization, User


@pytest.fixture
def user(user_table):
    user = User(id=uuid4(), email="sam@acme.com", current_organization_id=uuid4())
    user_table[user.id] = user
    return user


@pytest.mark.asyncio
async def test_switch_to_organization_with_active_membership(
    mock_uow, membership_table, user
):
    target = Organization(id=uuid4(), name="Beta Corp", owner_id=uuid4())
    mock_uow.organizations.get_by_id.return_value = target
    membership_table.append(
        Membership(
            id=uuid4(),
            user_id=user.id,
            organization_id=target.id,
            role=MemberRole.hr_manager,
            is_active=True,
        )
    )
    previous = user.current_organization_id

    result = await SwitchOrganizationUseCase(mock_uow).execute(user.id, target.id)

    assert result.is_ok()
    assert result.value.organization.id == str(target.id)
    assert result.value.organization.role == "hr_manager"
    assert result.value.organization.is_current is True
    assert user.current_organization_id == target.id

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "organization_switch"
    assert audit.event_metadata["previous_organization_id"] == str(previous)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_non_member_cannot_switch(mock_uow, membership_table, user):
    previous = user.current_organization_id

    result = await SwitchOrganizationUseCase(mock_uow).execute(user.id, uuid4())

    assert result.is_err()
    assert result.error.code == "NOT_A_MEMBER"
    assert user.current_organization_id == previous
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_deactivated_membership_cannot_switch(mock_uow, membership_table, user):
    organization_id = uuid4()
    membership_table.append(
        Membership(
            id=uuid4(),
            user_id=user.id,
            organization_id=organization_id,
            role=MemberRole.admin,
            is_active=False,
        )
    )

    result = await SwitchOrganizationUseCase(mock_uow).execute(user.id, organization_id)

    assert result.is_err()
    assert result.error.code == "NOT_A_MEMBER"


@pytest.mark.asyncio
async def test_unknown_user(mock_uow, user_table):
    result = await SwitchOrganizationUseCase(mock_uow).execute(uuid4(), uuid4())

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
