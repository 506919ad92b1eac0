"""Roster and rule persistence."""

from .roster import (
    load_team_members,
    save_team_members,
    load_routing_rules,
    save_routing_rules,
)

__all__ = [
    "load_team_members",
    "save_team_members",
    "load_routing_rules",
    "save_routing_rules",
]
