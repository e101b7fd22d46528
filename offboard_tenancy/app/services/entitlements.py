from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.entitlements import EntitlementSnapshot
from offboard_tenancy.domain.entities import Organization


async def load_entitlements(
    uow: UnitOfWork, organization: Organization
) -> EntitlementSnapshot:
    """
    Recompute an organization's entitlements from the owner's billing
    fields and the live active member count.
    """
    owner = await uow.users.get_by_id(organization.owner_id)
    active_count = await uow.memberships.count_active(organization.id)

    if owner is None:
        return EntitlementSnapshot.build(None, None, active_count)

    return EntitlementSnapshot.build(
        owner.subscription_plan, owner.subscription_status, active_count
    )
