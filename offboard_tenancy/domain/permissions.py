"""
Role -> capability table.

Every role is listed explicitly so the matrix stays exhaustive.
"""

from enum import Enum
from typing import Dict, FrozenSet

from .entities.enums import MemberRole


class Capability(str, Enum):
    invite_users = "invite_users"
    cancel_invitations = "cancel_invitations"
    remove_members = "remove_members"
    create_offboarding = "create_offboarding"
    manage_settings = "manage_settings"
    view_all_tasks = "view_all_tasks"


ROLE_CAPABILITIES: Dict[MemberRole, FrozenSet[Capability]] = {
    MemberRole.admin: frozenset(Capability),
    MemberRole.hr_manager: frozenset(
        {
            Capability.invite_users,
            Capability.create_offboarding,
            Capability.view_all_tasks,
        }
    ),
    MemberRole.it_manager: frozenset({Capability.view_all_tasks}),
    MemberRole.manager: frozenset({Capability.view_all_tasks}),
    MemberRole.user: frozenset(),
}


def has_capability(role: MemberRole, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES[role]


def capabilities_for(role: MemberRole) -> FrozenSet[Capability]:
    return ROLE_CAPABILITIES[role]


def parse_role(value: str) -> MemberRole:
    """Parse a role string; raises ValueError for unknown roles."""
    return MemberRole(value.strip().lower())
