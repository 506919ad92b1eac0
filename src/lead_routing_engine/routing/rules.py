"""Declarative routing rules."""

import logging
from typing import Iterable, List, Optional

from .criteria import RoutingCriteria, RoutingRule, conditions_match

logger = logging.getLogger(__name__)


def default_routing_rules() -> List[RoutingRule]:
    """Fresh copy of the built-in rule set."""
    return [
        RoutingRule(
            id="high-value-leads",
            name="High Value Leads to Senior Sales",
            priority=1,
            conditions=RoutingCriteria(budget_range="over_1m", lead_score=80),
            assign_to="senior-sales-1",
        ),
        RoutingRule(
            id="technical-inquiries",
            name="Technical Inquiries to Specialist",
            priority=2,
            conditions=RoutingCriteria(product_category="safety_equipment"),
            assign_to="technical-specialist-1",
        ),
        RoutingRule(
            id="oil-gas-industry",
            name="Oil & Gas to Project Manager",
            priority=3,
            conditions=RoutingCriteria(industry="oil_gas", budget_range="500k_1m"),
            assign_to="project-manager-1",
        ),
        RoutingRule(
            id="construction-projects",
            name="Construction Projects",
            priority=4,
            conditions=RoutingCriteria(industry="construction"),
            assign_to="sales-rep-1",
        ),
        RoutingRule(
            id="urgent-leads",
            name="Urgent Leads to Available Team",
            priority=5,
            conditions=RoutingCriteria(urgency="immediate"),
        ),
    ]


class RuleMatcher:
    """Evaluate routing rules against lead criteria.

    The rule list is replaced wholesale on every change, so a routing pass
    that already holds the list never sees it change underneath it.
    """

    def __init__(self, rules: Optional[Iterable[RoutingRule]] = None):
        self._rules = tuple(rules or ())

    @property
    def rules(self) -> List[RoutingRule]:
        return list(self._rules)

    def add_rule(self, rule: RoutingRule):
        """Add a rule, replacing any rule with the same ID."""
        self._rules = tuple(r for r in self._rules if r.id != rule.id) + (rule,)
        logger.info(f"Routing rule added: {rule.name} (priority {rule.priority})")

    def remove_rule(self, rule_id: str) -> bool:
        remaining = tuple(r for r in self._rules if r.id != rule_id)
        removed = len(remaining) != len(self._rules)
        self._rules = remaining
        return removed

    def find_matching_rules(self, criteria: RoutingCriteria) -> List[RoutingRule]:
        """Active rules whose conditions all match, lowest priority number first."""
        matches = [
            rule for rule in self._rules
            if rule.is_active and conditions_match(rule.conditions, criteria)
        ]
        return sorted(matches, key=lambda r: r.priority)
