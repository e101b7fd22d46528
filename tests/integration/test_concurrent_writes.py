import asyncio
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.orm import sessionmaker
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from offboard_tenancy.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from offboard_tenancy.app.use_cases.invitations.issue_invitation_use_case import (
    IssueInvitationUseCase,
)
from offboard_tenancy.app.use_cases.organizations.remove_member_use_case import (
    RemoveMemberUseCase,
)
from offboard_tenancy.domain.entities import (
    Invitation,
    InvitationStatus,
    Membership,
    MemberRole,
    Organization,
    User,
)
from tests.fixtures.email import RecordingEmailDispatcher


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def two_admin_org(session_factory):
    """Organization with two active admins; returns (org_id, [(user_id, membership_id)])"""
    first, second = uuid4(), uuid4()
    organization = Organization(name="Acme Corp", owner_id=first)
    admins = []
    async with session_factory() as session:
        session.add(organization)
        for user_id, email in ((first, "a@acme.com"), (second, "b@acme.com")):
            session.add(
                User(id=user_id, email=email, current_organization_id=organization.id)
            )
            membership = Membership(
                user_id=user_id,
                organization_id=organization.id,
                role=MemberRole.admin,
                is_active=True,
            )
            session.add(membership)
            admins.append((user_id, membership.id))
        await session.commit()
    return organization.id, admins


async def _remove_self(session_factory, organization_id, user_id, membership_id):
    async with session_factory() as session:
        return await RemoveMemberUseCase(SqlAlchemyUnitOfWork(session)).execute(
            user_id, organization_id, membership_id
        )


async def _invite(session_factory, organization_id, inviter_id, email):
    async with session_factory() as session:
        use_case = IssueInvitationUseCase(
            SqlAlchemyUnitOfWork(session), RecordingEmailDispatcher(), "http://app.test"
        )
        return await use_case.execute(organization_id, inviter_id, email, "user")


@pytest.mark.asyncio
async def test_concurrent_admin_removals_keep_one_admin(session_factory, two_admin_org):
    organization_id, admins = two_admin_org

    results = await asyncio.gather(
        *(
            _remove_self(session_factory, organization_id, user_id, membership_id)
            for user_id, membership_id in admins
        )
    )

    outcomes = sorted("ok" if r.is_ok() else r.error.code for r in results)
    assert outcomes == ["LAST_ADMIN", "ok"]

    async with session_factory() as session:
        active_admins = (
            await session.exec(
                select(Membership).where(
                    Membership.organization_id == organization_id,
                    Membership.role == MemberRole.admin,
                    col(Membership.is_active).is_(True),
                )
            )
        ).all()
    assert len(active_admins) == 1


@pytest.mark.asyncio
async def test_concurrent_invitations_for_one_email_store_one(
    session_factory, two_admin_org
):
    organization_id, admins = two_admin_org

    results = await asyncio.gather(
        *(
            _invite(session_factory, organization_id, user_id, "new@acme.com")
            for user_id, _ in admins
        )
    )

    outcomes = sorted("ok" if r.is_ok() else r.error.code for r in results)
    assert outcomes == ["INVITE_ALREADY_EXISTS", "ok"]

    async with session_factory() as session:
        pending = (
            await session.exec(
                select(Invitation).where(
                    Invitation.organization_id == organization_id,
                    Invitation.email == "new@acme.com",
                    Invitation.status == InvitationStatus.pending,
                )
            )
        ).all()
    assert len(pending) == 1


@pytest.mark.asyncio
async def test_new_invitation_allowed_once_previous_is_cancelled(
    session_factory, two_admin_org
):
    organization_id, admins = two_admin_org
    inviter_id = admins[0][0]

    first = await _invite(session_factory, organization_id, inviter_id, "new@acme.com")
    async with session_factory() as session:
        invitation = await session.get(Invitation, UUID(first.value.invitation_id))
        invitation.status = InvitationStatus.cancelled
        session.add(invitation)
        await session.commit()

    second = await _invite(session_factory, organization_id, inviter_id, "new@acme.com")

    assert second.is_ok()
    assert second.value.token != first.value.token
