from datetime import timedelta
from uuid import uuid4

import pytest

from offboard_tenancy.app.use_cases.invitations import ValidateInvitationUseCase
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import (
    Invitation,
    InvitationStatus,
    MemberRole,
    Organization,
)


def make_invitation(organization_id, created_at, status=InvitationStatus.pending):
    return Invitation(
        id=uuid4(),
        organization_id=organization_id,
        email="jane@acme.com",
        role=MemberRole.hr_manager,
        token="tok-123",
        status=status,
        invited_by=uuid4(),
        created_at=created_at,
        expires_at=created_at + timedelta(days=7),
    )


@pytest.fixture
def organization(mock_uow):
    organization = Organization(id=uuid4(), name="Acme", owner_id=uuid4())
    mock_uow.organizations.get_by_id.return_value = organization
    return organization


@pytest.mark.asyncio
async def test_valid_invitation_returns_details(mock_uow, organization):
    invitation = make_invitation(organization.id, utcnow())
    mock_uow.invitations.get_by_token.return_value = invitation

    result = await ValidateInvitationUseCase(mock_uow).execute("tok-123")

    assert result.is_ok()
    details = result.value
    assert details.email == "jane@acme.com"
    assert details.role == "hr_manager"
    assert details.organization_id == str(organization.id)
    assert details.organization_name == "Acme"
    assert details.expires_at == invitation.expires_at.isoformat()
    mock_uow.invitations.get_by_token.assert_called_once_with("tok-123")
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_token(mock_uow, organization):
    mock_uow.invitations.get_by_token.return_value = None

    result = await ValidateInvitationUseCase(mock_uow).execute("nope")

    assert result.is_err()
    assert result.error.code == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_expired_invitation_stays_expired(mock_uow, organization):
    """Created at t0, validated at t0 + 8 days: expired, and again on retry."""
    invitation = make_invitation(organization.id, utcnow() - timedelta(days=8))
    mock_uow.invitations.get_by_token.return_value = invitation

    use_case = ValidateInvitationUseCase(mock_uow)
    first = await use_case.execute("tok-123")

    assert first.is_err()
    assert first.error.code == "INVITATION_EXPIRED"
    assert invitation.status == InvitationStatus.expired
    mock_uow.commit.assert_called_once()

    second = await use_case.execute("tok-123")

    assert second.is_err()
    assert second.error.code == "INVITATION_EXPIRED"
    mock_uow.invitations.transition.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status", [InvitationStatus.accepted, InvitationStatus.cancelled]
)
async def test_used_invitation(mock_uow, organization, status):
    invitation = make_invitation(organization.id, utcnow(), status=status)
    mock_uow.invitations.get_by_token.return_value = invitation

    result = await ValidateInvitationUseCase(mock_uow).execute("tok-123")

    assert result.is_err()
    assert result.error.code == "INVITATION_ALREADY_USED"


@pytest.mark.asyncio
async def test_accepted_invitation_past_expiry_is_not_reported_expired(
    mock_uow, organization
):
    invitation = make_invitation(
        organization.id,
        utcnow() - timedelta(days=30),
        status=InvitationStatus.accepted,
    )
    mock_uow.invitations.get_by_token.return_value = invitation

    result = await ValidateInvitationUseCase(mock_uow).execute("tok-123")

    assert result.error.code == "INVITATION_ALREADY_USED"
    assert invitation.status == InvitationStatus.accepted
    mock_uow.invitations.transition.assert_not_called()
