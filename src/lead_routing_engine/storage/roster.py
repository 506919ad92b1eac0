"""JSON persistence for the team roster and routing rules."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Union

from ..routing.criteria import RoutingCriteria, RoutingRule
from ..team.members import (
    Availability,
    MemberCapacity,
    MemberPerformance,
    TeamMember,
    WorkingHours,
    WorkingWindow,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def member_from_dict(m: Dict) -> TeamMember:
    """Build a member from its JSON form."""
    capacity = m.get('capacity', {})
    performance = m.get('performance', {})
    hours = m.get('working_hours', {})

    schedule = {}
    for day, window in hours.get('schedule', {}).items():
        schedule[day.lower()] = WorkingWindow(window['start'], window['end']) if window else None

    return TeamMember(
        id=m['id'],
        name=m['name'],
        email=m.get('email', ''),
        role=m.get('role', ''),
        expertise=m.get('expertise', []),
        industries=m.get('industries', []),
        languages=m.get('languages', []),
        capacity=MemberCapacity(
            current=capacity.get('current', 0),
            maximum=capacity.get('maximum', 10),
            availability=Availability(capacity.get('availability', 'available')),
        ),
        performance=MemberPerformance(
            conversion_rate=performance.get('conversion_rate', 0.0),
            average_response_time=performance.get('average_response_time', 60),
            customer_satisfaction=performance.get('customer_satisfaction', 5.0),
            active_leads=performance.get('active_leads', capacity.get('current', 0)),
        ),
        working_hours=WorkingHours(
            timezone=hours.get('timezone', 'Asia/Riyadh'),
            schedule=schedule,
        ),
        is_active=m.get('is_active', True),
    )


def member_to_dict(m: TeamMember) -> Dict:
    return {
        'id': m.id,
        'name': m.name,
        'email': m.email,
        'role': m.role,
        'expertise': m.expertise,
        'industries': m.industries,
        'languages': m.languages,
        'capacity': {
            'current': m.capacity.current,
            'maximum': m.capacity.maximum,
            'availability': m.capacity.availability.value,
        },
        'performance': {
            'conversion_rate': m.performance.conversion_rate,
            'average_response_time': m.performance.average_response_time,
            'customer_satisfaction': m.performance.customer_satisfaction,
            'active_leads': m.performance.active_leads,
        },
        'working_hours': {
            'timezone': m.working_hours.timezone,
            'schedule': {
                day: {'start': w.start, 'end': w.end} if w else None
                for day, w in m.working_hours.schedule.items()
            },
        },
        'is_active': m.is_active,
    }


def rule_from_dict(r: Dict) -> RoutingRule:
    return RoutingRule(
        id=r['id'],
        name=r['name'],
        priority=r.get('priority', 100),
        conditions=RoutingCriteria.from_dict(r.get('conditions')),
        assign_to=r.get('assign_to'),
        team_name=r.get('team_name'),
        is_active=r.get('is_active', True),
    )


def rule_to_dict(r: RoutingRule) -> Dict:
    return {
        'id': r.id,
        'name': r.name,
        'priority': r.priority,
        'conditions': r.conditions.to_dict(),
        'assign_to': r.assign_to,
        'team_name': r.team_name,
        'is_active': r.is_active,
    }


def load_team_members(path: PathLike) -> List[TeamMember]:
    """Load a roster file. Returns an empty list if it can't be read."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Roster file not found: {path}")
        return []
    try:
        with open(path, 'r') as f:
            data = json.load(f)
        return [member_from_dict(m) for m in data]
    except Exception as e:
        logger.error(f"Error loading roster from {path}: {e}")
        return []


def save_team_members(members: List[TeamMember], path: PathLike):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump([member_to_dict(m) for m in members], f, indent=2)


def load_routing_rules(path: PathLike) -> List[RoutingRule]:
    """Load a rules file. Returns an empty list if it can't be read."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Rules file not found: {path}")
        return []
    try:
        with open(path, 'r') as f:
            data = json.load(f)
        return [rule_from_dict(r) for r in data]
    except Exception as e:
        logger.error(f"Error loading routing rules from {path}: {e}")
        return []


def save_routing_rules(rules: List[RoutingRule], path: PathLike):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump([rule_to_dict(r) for r in rules], f, indent=2)
