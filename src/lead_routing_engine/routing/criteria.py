"""Routing criteria and rule matching."""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional


@dataclass
class RoutingCriteria:
    """Normalized routing query. Also used as the conditions of a rule.

    Every field is optional. A field left unset on a rule's conditions is a
    wildcard; a field set on the rule must be matched by the lead.
    """
    industry: Optional[str] = None
    product_category: Optional[str] = None
    budget_range: Optional[str] = None
    urgency: Optional[str] = None
    company_size: Optional[str] = None
    lead_score: Optional[float] = None
    language: Optional[str] = None
    timezone: Optional[str] = None

    def merged_with(self, overrides: Optional["RoutingCriteria"]) -> "RoutingCriteria":
        """Copy with every field set on ``overrides`` taking precedence."""
        if overrides is None:
            return replace(self)
        changes = {
            f.name: getattr(overrides, f.name)
            for f in fields(overrides)
            if getattr(overrides, f.name) is not None
        }
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RoutingCriteria":
        """Build from snake_case or camelCase keys."""
        data = data or {}
        return cls(
            industry=data.get("industry"),
            product_category=data.get("product_category", data.get("productCategory")),
            budget_range=data.get("budget_range", data.get("budgetRange")),
            urgency=data.get("urgency"),
            company_size=data.get("company_size", data.get("companySize")),
            lead_score=data.get("lead_score", data.get("leadScore")),
            language=data.get("language"),
            timezone=data.get("timezone"),
        )


@dataclass
class RoutingRule:
    """A declarative dispatch rule."""
    id: str
    name: str
    priority: int  # Lower = checked first
    conditions: RoutingCriteria = field(default_factory=RoutingCriteria)
    assign_to: Optional[str] = None
    team_name: Optional[str] = None
    is_active: bool = True


def _equals(expected: Optional[str], actual: Optional[str]) -> bool:
    if expected is None:
        return True
    return expected == actual


def _at_least(threshold: Optional[float], actual: Optional[float]) -> bool:
    # An unscored lead is not held back by a score threshold
    if threshold is None or actual is None:
        return True
    return actual >= threshold


def conditions_match(conditions: RoutingCriteria, criteria: RoutingCriteria) -> bool:
    """True if every condition declared by a rule is satisfied.

    Category fields match by equality, so a lead missing a field the rule
    names does not match. ``lead_score`` is a minimum threshold.
    """
    return (
        _equals(conditions.industry, criteria.industry)
        and _equals(conditions.product_category, criteria.product_category)
        and _equals(conditions.budget_range, criteria.budget_range)
        and _equals(conditions.urgency, criteria.urgency)
        and _equals(conditions.company_size, criteria.company_size)
        and _at_least(conditions.lead_score, criteria.lead_score)
        and _equals(conditions.language, criteria.language)
        and _equals(conditions.timezone, criteria.timezone)
    )
