from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import TrialUsageRecord, User


@pytest.mark.asyncio
async def test_expire_trials_requires_admin_key(client: AsyncClient):
    missing = await client.post("/admin/trials/expire")
    wrong = await client.post(
        "/admin/trials/expire", headers={"X-Admin-API-Key": "wrong-key"}
    )

    assert missing.status_code == 401
    assert missing.json()["error"]["code"] == "UNAUTHORIZED"
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_expire_trials_downgrades_and_notifies(
    client: AsyncClient, signup, admin_headers, email_dispatcher, db_session
):
    expired_id, expired_headers, _ = await signup("late@acme.com", "Acme Corp", name="Lee")
    active_id, _, _ = await signup("fresh@beta.io", "Beta Inc")

    user = (await db_session.exec(select(User).where(User.id == expired_id))).one()
    user.trial_ends_at = utcnow() - timedelta(hours=1)
    db_session.add(user)
    await db_session.commit()

    response = await client.post("/admin/trials/expire", headers=admin_headers)
    rerun = await client.post("/admin/trials/expire", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "downgraded": 1,
        "emails_sent": 1,
        "user_emails": ["late@acme.com"],
    }
    assert rerun.json()["downgraded"] == 0

    assert email_dispatcher.sent == [
        {
            "type": "trial_ended",
            "to": ["late@acme.com"],
            "data": {"userName": "Lee", "upgradeLink": "http://app.test/pricing"},
        }
    ]

    expired = (await db_session.exec(select(User).where(User.id == expired_id))).one()
    assert expired.subscription_status == "trial_ended"
    assert expired.subscription_plan is None
    still_trialing = (await db_session.exec(select(User).where(User.id == active_id))).one()
    assert still_trialing.subscription_status == "trialing"

    me = await client.get("/me", headers=expired_headers)
    entitlements = me.json()["entitlements"]
    assert entitlements["effective_plan"] == "free"
    assert entitlements["max_team_members"] == 5
    assert entitlements["features"] == []
    locked = {f["feature"]: f for f in entitlements["locked_features"]}
    assert len(locked) == 6
    assert locked["ai_insights"] == {
        "feature": "ai_insights",
        "display_name": "AI Insights",
        "required_plan": "professional",
        "upgrade_message": "AI Insights is available on the Professional plan",
    }
    assert locked["api"]["required_plan"] == "enterprise"


@pytest.mark.asyncio
async def test_sync_subscription_converts_trial(
    client: AsyncClient, signup, admin_headers, db_session
):
    user_id, headers, _ = await signup("owner@acme.com", "Acme Corp")

    response = await client.put(
        f"/admin/subscriptions/{user_id}",
        json={"subscription_status": "active", "subscription_plan": "enterprise"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json() == {
        "user_id": str(user_id),
        "subscription_plan": "enterprise",
        "subscription_status": "active",
        "converted_to_paid": True,
    }

    record = (
        await db_session.exec(select(TrialUsageRecord).where(TrialUsageRecord.user_id == user_id))
    ).one()
    assert record.converted_to_paid is True

    me = await client.get("/me", headers=headers)
    entitlements = me.json()["entitlements"]
    assert entitlements["effective_plan"] == "enterprise"
    assert entitlements["max_team_members"] is None
    assert entitlements["remaining_member_slots"] is None
    assert "api" in entitlements["features"]
    assert entitlements["locked_features"] == []


@pytest.mark.asyncio
async def test_sync_subscription_rejects_unknown_values(
    client: AsyncClient, signup, admin_headers
):
    user_id, _, _ = await signup("owner@acme.com", "Acme Corp")

    bad_status = await client.put(
        f"/admin/subscriptions/{user_id}",
        json={"subscription_status": "paused"},
        headers=admin_headers,
    )
    unknown_user = await client.put(
        f"/admin/subscriptions/{uuid4()}",
        json={"subscription_status": "active"},
        headers=admin_headers,
    )

    assert bad_status.status_code == 400
    assert bad_status.json()["error"]["code"] == "INVALID_STATUS"
    assert unknown_user.status_code == 404
