"""Lead routing engine - rules first, weighted matching second."""

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..config import settings
from ..core.scorer import LeadScoreBreakdown
from ..team.defaults import default_team_members
from ..team.directory import TeamDirectory
from ..team.members import TeamMember
from .criteria import RoutingCriteria, RoutingRule
from .decision import (
    RoutingDecision,
    calculate_response_time,
    determine_priority,
    generate_recommended_approach,
)
from .matcher import BestMatchSelector
from .rules import RuleMatcher, default_routing_rules

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.5
RULE_CONFIDENCE_BOOST = 0.3
MATCH_CONFIDENCE_BOOST = 0.2
FALLBACK_CONFIDENCE = 0.3


class LeadRoutingEngine:
    """Assign incoming leads to sales team members.

    A routing pass works on a snapshot of the team directory: matching rules
    are tried in priority order, then the weighted best-match selector, then
    the first available member with free capacity. The engine never raises
    for a lead it cannot place; it returns an unassigned decision whose
    reasoning explains why.
    """

    def __init__(
        self,
        team_members: Optional[Iterable[TeamMember]] = None,
        routing_rules: Optional[Iterable[RoutingRule]] = None,
        now_provider: Optional[Callable[[], datetime]] = None,
        default_language: Optional[str] = None,
        default_timezone: Optional[str] = None,
        default_response_time: Optional[int] = None,
        off_hours_penalty: Optional[int] = None
    ):
        members = list(team_members or [])
        rules = list(routing_rules or [])

        # Load default configuration if none provided
        if not members:
            members = default_team_members()
        if not rules:
            rules = default_routing_rules()

        self.directory = TeamDirectory(members, now_provider=now_provider)
        self.rule_matcher = RuleMatcher(rules)
        self.selector = BestMatchSelector(self.directory)

        self.default_language = default_language or settings.default_language
        self.default_timezone = default_timezone or settings.default_timezone
        self.default_response_time = (
            default_response_time if default_response_time is not None
            else settings.default_response_minutes
        )
        self.off_hours_penalty = (
            off_hours_penalty if off_hours_penalty is not None
            else settings.off_hours_penalty_minutes
        )

    def build_criteria(
        self,
        lead: Mapping[str, Any],
        score_breakdown: LeadScoreBreakdown,
        criteria: Optional[RoutingCriteria] = None
    ) -> RoutingCriteria:
        """Normalize lead fields into routing criteria."""
        base = RoutingCriteria(
            industry=lead.get("industry_sector"),
            product_category=lead.get("product_category"),
            budget_range=lead.get("budget_range"),
            urgency=lead.get("urgency"),
            company_size=lead.get("company_size"),
            lead_score=score_breakdown.total,
            language=lead.get("preferred_language") or self.default_language,
            timezone=lead.get("timezone") or self.default_timezone,
        )
        return base.merged_with(criteria)

    def route_lead(
        self,
        lead: Mapping[str, Any],
        score_breakdown: LeadScoreBreakdown,
        criteria: Optional[RoutingCriteria] = None
    ) -> RoutingDecision:
        """Route a lead to a team member."""
        routing_criteria = self.build_criteria(lead, score_breakdown, criteria)
        now = self.directory.now_provider()

        members = self.directory.snapshot()
        available = self.directory.get_available_members(members)
        matching_rules = self.rule_matcher.find_matching_rules(routing_criteria)

        reasoning: List[str] = []
        confidence = BASE_CONFIDENCE

        assigned = self._assign_by_rules(matching_rules, members, reasoning)
        if assigned:
            confidence += RULE_CONFIDENCE_BOOST

        if not assigned and available:
            assigned = self.selector.find_best_match(routing_criteria, available, reasoning, now)
            confidence += MATCH_CONFIDENCE_BOOST

        if not assigned:
            fallback = next((m for m in available if m.can_receive_leads), None)
            if fallback:
                assigned = fallback
                reasoning.append("Assigned to next available team member")
                confidence = FALLBACK_CONFIDENCE

        if not assigned:
            reasoning.append("No available team members with free capacity; manual dispatch required")
            confidence = 0.0

        priority = determine_priority(routing_criteria, score_breakdown.total)

        if assigned:
            response_time = calculate_response_time(
                assigned,
                priority,
                self.directory.is_in_working_hours(assigned, now),
                self.off_hours_penalty,
            )
        else:
            response_time = self.default_response_time

        alternatives = [m.id for m in available if not assigned or m.id != assigned.id][:2]

        decision = RoutingDecision(
            assigned_to=assigned.id if assigned else None,
            team_name=assigned.role if assigned else None,
            priority=priority,
            estimated_response_time=response_time,
            recommended_approach=generate_recommended_approach(routing_criteria, score_breakdown.total),
            confidence=round(min(1.0, confidence), 2),
            reasoning=reasoning,
            alternative_assignees=alternatives,
        )

        if decision.is_assigned:
            logger.info(
                f"Lead {lead.get('email', '')} routed to {decision.assigned_to} "
                f"(priority={priority.value}, confidence={decision.confidence})"
            )
        else:
            logger.warning(f"Lead {lead.get('email', '')} could not be assigned: no team member available")

        return decision

    def _assign_by_rules(
        self,
        matching_rules: List[RoutingRule],
        members: List[TeamMember],
        reasoning: List[str]
    ) -> Optional[TeamMember]:
        """First matching rule whose target can take the lead."""
        by_id = {m.id: m for m in members}

        for rule in matching_rules:
            if not rule.assign_to:
                continue

            member = by_id.get(rule.assign_to)
            if not member or not member.is_active:
                logger.debug(f"Rule {rule.id} targets inactive or unknown member {rule.assign_to}")
                continue

            if member.has_capacity:
                reasoning.append(f"Matched rule: {rule.name}")
                return member
            else:
                reasoning.append(f"Rule matched but {member.name} is at capacity")
                logger.warning(f"Rule {rule.id} skipped: {member.id} is at capacity")

        return None

    # Directory and rule maintenance

    def update_team_member_capacity(self, member_id: str, **capacity) -> bool:
        """Merge a partial capacity update (current, maximum, availability)."""
        return self.directory.update_capacity(member_id, **capacity)

    def update_team_member_performance(self, member_id: str, **performance) -> bool:
        """Merge a partial performance update."""
        return self.directory.update_performance(member_id, **performance)

    def add_rule(self, rule: RoutingRule):
        self.rule_matcher.add_rule(rule)

    def remove_rule(self, rule_id: str) -> bool:
        return self.rule_matcher.remove_rule(rule_id)

    def get_team_member_workload(self) -> List[Dict]:
        return self.directory.get_workload()

    def get_routing_statistics(self) -> Dict:
        """Get rule and roster statistics."""
        members = self.directory.snapshot()
        rules = self.rule_matcher.rules
        available = self.directory.get_available_members(members)
        total_utilization = sum(m.utilization for m in members)

        return {
            "totalRules": len(rules),
            "activeRules": len([r for r in rules if r.is_active]),
            "teamMembers": len(members),
            "availableMembers": len(available),
            "averageUtilization": total_utilization / len(members) if members else 0,
        }


_engine: Optional[LeadRoutingEngine] = None
_engine_lock = threading.Lock()


def get_routing_engine() -> LeadRoutingEngine:
    """Process-wide engine, built from the configured roster and rule files."""
    global _engine
    with _engine_lock:
        if _engine is None:
            from ..storage import load_routing_rules, load_team_members

            members = load_team_members(settings.roster_path) if settings.roster_path else []
            rules = load_routing_rules(settings.rules_path) if settings.rules_path else []
            _engine = LeadRoutingEngine(members, rules)
        return _engine


def reset_routing_engine():
    """Drop the process-wide engine so the next call rebuilds it."""
    global _engine
    with _engine_lock:
        _engine = None
