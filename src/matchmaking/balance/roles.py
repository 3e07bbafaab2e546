"""Static slot order and role-priority tables for team balancing."""

from __future__ import annotations

from matchmaking.balance.common import DEFAULT_ROLES, QueuedPlayer, RoleSlot
from matchmaking.common import Role, Side

SLOT_ROLES = (Role.SNIPER, Role.T1, Role.T2, Role.T3, Role.T4)

# Filled in this order; sides alternate within each role.
ROLE_SLOTS: tuple[RoleSlot, ...] = tuple(
    RoleSlot(side=side, role=role) for role in SLOT_ROLES for side in (Side.ALPHA, Side.BRAVO)
)

# Index in each tuple is the priority: (which preference, role it must equal).
ROLE_PRIORITY_RULES: dict[Role, tuple[tuple[str, Role], ...]] = {
    Role.SNIPER: (
        ("primary_role", Role.SNIPER),
        ("secondary_role", Role.SNIPER),
    ),
    **{
        role: (
            ("primary_role", role),
            ("primary_role", Role.SMG),
            ("secondary_role", role),
            ("secondary_role", Role.SMG),
        )
        for role in SLOT_ROLES
        if role is not Role.SNIPER
    },
}


def role_priority(player: QueuedPlayer, role: Role) -> int | None:
    """Return how well ``player`` fits ``role`` (0 is best), or None if ineligible."""
    try:
        rules = ROLE_PRIORITY_RULES[role]
    except KeyError as exc:
        raise ValueError(f"role={role.value} is not a fillable slot role") from exc

    for priority, (preference, wanted) in enumerate(rules):
        if getattr(player, preference) == wanted:
            return priority
    return None


__all__ = [
    "DEFAULT_ROLES",
    "ROLE_PRIORITY_RULES",
    "ROLE_SLOTS",
    "SLOT_ROLES",
    "role_priority",
]
