from unittest.mock import AsyncMock, MagicMock

import pytest

from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import InvitationStatus, MemberRole
from tests.fixtures.email import RecordingEmailDispatcher


def _async_repo(*methods):
    repo = MagicMock()
    for name in methods:
        setattr(repo, name, AsyncMock())
    return repo


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = _async_repo(
        "get_by_id", "get_by_email", "get_by_ids", "create", "update", "get_expired_trials"
    )
    uow.organizations = _async_repo("get_by_id", "get_by_ids", "create")
    uow.memberships = _async_repo(
        "get_by_id",
        "get_by_user_and_organization",
        "get_active_by_user_id",
        "get_active_by_organization_id",
        "count_active",
        "deactivate",
        "create",
        "update",
    )
    uow.invitations = _async_repo(
        "get_by_id",
        "get_by_token",
        "get_pending_by_organization_and_email",
        "get_pending_by_organization_id",
        "create",
        "update",
        "transition",
    )
    uow.trial_usage = _async_repo(
        "get_by_email", "count_by_domain_since", "get_by_user_id", "create", "update"
    )
    uow.audit_events = _async_repo("create")

    # Writes hand back what they were given, like flush + refresh
    for repo in (
        uow.users,
        uow.organizations,
        uow.memberships,
        uow.invitations,
        uow.trial_usage,
        uow.audit_events,
    ):
        repo.create.side_effect = lambda entity: entity
    for repo in (uow.users, uow.memberships, uow.invitations, uow.trial_usage):
        repo.update.side_effect = lambda entity: entity

    uow.users.get_by_ids.return_value = []
    uow.users.get_expired_trials.return_value = []
    uow.organizations.get_by_ids.return_value = []
    uow.memberships.get_active_by_user_id.return_value = []
    uow.memberships.get_active_by_organization_id.return_value = []
    uow.invitations.get_pending_by_organization_id.return_value = []
    uow.trial_usage.get_by_email.return_value = None
    uow.trial_usage.get_by_user_id.return_value = None
    uow.trial_usage.count_by_domain_since.return_value = 0

    async def transition(invitation, to_status, **fields):
        # Conditional on pending, like the SQL UPDATE ... WHERE status = pending
        if invitation.status != InvitationStatus.pending:
            return False
        invitation.status = to_status
        for name, value in fields.items():
            setattr(invitation, name, value)
        return True

    uow.invitations.transition.side_effect = transition

    return uow


@pytest.fixture
def email_dispatcher():
    return RecordingEmailDispatcher()


@pytest.fixture
def user_table(mock_uow):
    """Dict-backed users repository: {user_id: User}"""
    rows = {}

    def create(user):
        rows[user.id] = user
        return user

    mock_uow.users.get_by_id.side_effect = lambda user_id: rows.get(user_id)
    mock_uow.users.get_by_email.side_effect = lambda email: next(
        (u for u in rows.values() if u.email == email), None
    )
    mock_uow.users.get_by_ids.side_effect = lambda ids: [rows[i] for i in ids if i in rows]
    mock_uow.users.create.side_effect = create
    return rows


@pytest.fixture
def membership_table(mock_uow):
    """List-backed memberships repository"""
    rows = []

    def by_pair(user_id, organization_id):
        return next(
            (
                m
                for m in rows
                if m.user_id == user_id and m.organization_id == organization_id
            ),
            None,
        )

    def create(membership):
        rows.append(membership)
        return membership

    def deactivate(membership):
        # Conditional like the SQL UPDATE: active, and not the last admin
        if not membership.is_active:
            return False
        if membership.role == MemberRole.admin and not any(
            m is not membership
            and m.organization_id == membership.organization_id
            and m.role == MemberRole.admin
            and m.is_active
            for m in rows
        ):
            return False
        membership.is_active = False
        membership.deactivated_at = utcnow()
        return True

    def count_active(organization_id, role=None):
        return len(
            [
                m
                for m in rows
                if m.organization_id == organization_id
                and m.is_active
                and (role is None or m.role == role)
            ]
        )

    mock_uow.memberships.get_by_id.side_effect = lambda membership_id: next(
        (m for m in rows if m.id == membership_id), None
    )
    mock_uow.memberships.get_by_user_and_organization.side_effect = by_pair
    mock_uow.memberships.get_active_by_user_id.side_effect = lambda user_id: [
        m for m in rows if m.user_id == user_id and m.is_active
    ]
    mock_uow.memberships.get_active_by_organization_id.side_effect = (
        lambda organization_id: [
            m for m in rows if m.organization_id == organization_id and m.is_active
        ]
    )
    mock_uow.memberships.count_active.side_effect = count_active
    mock_uow.memberships.deactivate.side_effect = deactivate
    mock_uow.memberships.create.side_effect = create
    return rows
