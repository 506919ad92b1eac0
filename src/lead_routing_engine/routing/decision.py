"""Routing decision, priority tiers and engagement recommendations."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum

from ..core.scorer import round_half_up
from ..team.members import TeamMember
from .criteria import RoutingCriteria


class LeadPriority(Enum):
    """Urgency tier of a lead, independent of who handles it."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    LeadPriority.LOW: 0,
    LeadPriority.MEDIUM: 1,
    LeadPriority.HIGH: 2,
    LeadPriority.CRITICAL: 3,
}

PRIORITY_RESPONSE_FACTORS = {
    LeadPriority.CRITICAL: 0.5,
    LeadPriority.HIGH: 0.7,
    LeadPriority.MEDIUM: 1.0,
    LeadPriority.LOW: 1.5,
}


@dataclass
class RoutingDecision:
    """Outcome of routing one lead."""
    priority: LeadPriority
    estimated_response_time: int  # minutes
    recommended_approach: str
    confidence: float  # 0-1
    assigned_to: Optional[str] = None
    team_name: Optional[str] = None
    reasoning: List[str] = field(default_factory=list)
    alternative_assignees: List[str] = field(default_factory=list)

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the keys used by the web API."""
        return {
            "assignedTo": self.assigned_to,
            "teamName": self.team_name,
            "priority": self.priority.value,
            "estimatedResponseTime": self.estimated_response_time,
            "recommendedApproach": self.recommended_approach,
            "confidence": self.confidence,
            "reasoning": list(self.reasoning),
            "alternativeAssignees": list(self.alternative_assignees),
        }


def determine_priority(criteria: RoutingCriteria, total_score: int) -> LeadPriority:
    """Classify a lead; the first matching tier wins."""
    if criteria.urgency == "immediate":
        return LeadPriority.CRITICAL
    if criteria.budget_range == "over_1m":
        return LeadPriority.CRITICAL
    if total_score >= 80:
        return LeadPriority.CRITICAL

    if criteria.urgency == "1-2_weeks":
        return LeadPriority.HIGH
    if criteria.budget_range == "500k_1m":
        return LeadPriority.HIGH
    if total_score >= 60:
        return LeadPriority.HIGH

    if total_score >= 40:
        return LeadPriority.MEDIUM

    return LeadPriority.LOW


def calculate_response_time(
    member: TeamMember,
    priority: LeadPriority,
    in_working_hours: bool,
    off_hours_penalty: float = 480
) -> int:
    """Expected minutes until first contact by ``member``."""
    minutes = member.performance.average_response_time * PRIORITY_RESPONSE_FACTORS[priority]

    # Busier members answer slower
    minutes *= 1 + member.utilization

    if not in_working_hours:
        minutes += off_hours_penalty

    return round_half_up(minutes)


def generate_recommended_approach(criteria: RoutingCriteria, total_score: int) -> str:
    """Compose the engagement plan for the assignee."""
    approaches: List[str] = []

    if criteria.urgency == "immediate":
        approaches.append("Immediate phone call within 30 minutes")
    elif criteria.urgency == "1-2_weeks":
        approaches.append("Priority email response within 2 hours, follow-up call same day")
    else:
        approaches.append("Professional email response within 4 hours")

    if criteria.budget_range in ("over_1m", "500k_1m"):
        approaches.append("Prepare comprehensive proposal with technical specifications")
        approaches.append("Schedule in-person or video meeting")
    elif criteria.budget_range == "100k_500k":
        approaches.append("Provide detailed quotation with options")
    else:
        approaches.append("Send standard product information and pricing")

    if criteria.industry == "oil_gas":
        approaches.append("Emphasize safety certifications and compliance standards")
    elif criteria.industry == "construction":
        approaches.append("Focus on project timeline and bulk pricing options")
    elif criteria.industry == "manufacturing":
        approaches.append("Highlight quality standards and technical support")

    if total_score >= 80:
        approaches.append("High-priority lead: Assign senior team member")
    elif total_score >= 60:
        approaches.append("Qualified lead: Provide detailed information")
    else:
        approaches.append("Nurture lead: Send educational content")

    return ". ".join(approaches)
