"""Sales team roster and capacity tracking."""

from .members import (
    TeamMember,
    MemberCapacity,
    MemberPerformance,
    WorkingHours,
    WorkingWindow,
    Availability,
)
from .directory import TeamDirectory
from .defaults import default_team_members

__all__ = [
    'TeamMember',
    'MemberCapacity',
    'MemberPerformance',
    'WorkingHours',
    'WorkingWindow',
    'Availability',
    'TeamDirectory',
    'default_team_members',
]
