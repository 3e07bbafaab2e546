"""Role-aware team balancing."""

from matchmaking.balance.balancer import TeamBalancer, balance_teams
from matchmaking.balance.common import (
    DEFAULT_ROLES,
    QueuedPlayer,
    RoleAssignment,
    RoleSlot,
    TeamAssignment,
)
from matchmaking.balance.roles import ROLE_PRIORITY_RULES, ROLE_SLOTS, SLOT_ROLES, role_priority

__all__ = [
    "DEFAULT_ROLES",
    "QueuedPlayer",
    "ROLE_PRIORITY_RULES",
    "ROLE_SLOTS",
    "RoleAssignment",
    "RoleSlot",
    "SLOT_ROLES",
    "TeamAssignment",
    "TeamBalancer",
    "balance_teams",
    "role_priority",
]
