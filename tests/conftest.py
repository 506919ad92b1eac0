"""Shared fixtures for the routing engine tests."""

import pytest
from datetime import datetime, timezone

from lead_routing_engine.core.scorer import LeadScoreBreakdown
from lead_routing_engine.team.members import (
    Availability,
    MemberCapacity,
    MemberPerformance,
    TeamMember,
    WorkingHours,
    WorkingWindow,
)
from lead_routing_engine.team.defaults import riyadh_work_week

# Tuesday 10:00 in Riyadh (UTC+3)
IN_HOURS = datetime(2026, 10, 13, 7, 0, tzinfo=timezone.utc)
# Friday 10:00 in Riyadh, a day off
OFF_HOURS = datetime(2026, 10, 16, 7, 0, tzinfo=timezone.utc)


def make_member(member_id: str, **overrides) -> TeamMember:
    """Plain, available member with neutral stats."""
    values = dict(
        id=member_id,
        name=member_id.replace("-", " ").title(),
        email=f"{member_id}@example.com",
        role="Sales Representative",
        expertise=[],
        industries=[],
        languages=["arabic"],
        capacity=MemberCapacity(current=2, maximum=10, availability=Availability.AVAILABLE),
        performance=MemberPerformance(
            conversion_rate=0.3, average_response_time=60, customer_satisfaction=4.5, active_leads=2),
        working_hours=riyadh_work_week(),
    )
    values.update(overrides)
    return TeamMember(**values)


def score(total: int) -> LeadScoreBreakdown:
    return LeadScoreBreakdown(total=total)


@pytest.fixture
def in_hours_clock():
    return lambda: IN_HOURS


@pytest.fixture
def off_hours_clock():
    return lambda: OFF_HOURS


@pytest.fixture
def new_york_member():
    return make_member(
        "ny-rep",
        working_hours=WorkingHours(
            timezone="America/New_York",
            schedule={"monday": WorkingWindow("09:00", "17:00")},
        ),
    )
