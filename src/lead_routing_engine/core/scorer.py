"""Lead scoring engine - qualifies inquiries from profile and engagement data."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlparse

from .config import ScoringConfig


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


@dataclass
class ScoreDetail:
    """A single contributing factor in a score breakdown."""

    score: float
    weight: float
    reason: str


@dataclass
class BehaviorSummary:
    """Pre-computed engagement signal for a lead."""

    time_on_page: float = 0  # seconds
    scroll_depth: float = 0  # percent
    pages_visited: int = 0
    category_interest: list = field(default_factory=list)
    declared_score: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "BehaviorSummary":
        """Build from a camelCase or snake_case mapping."""
        if not data:
            return cls()
        return cls(
            time_on_page=data.get("time_on_page", data.get("timeOnPage", 0)) or 0,
            scroll_depth=data.get("scroll_depth", data.get("scrollDepth", 0)) or 0,
            pages_visited=data.get("pages_visited", data.get("pagesVisited", 0)) or 0,
            category_interest=list(data.get("category_interest", data.get("categoryInterest", [])) or []),
            declared_score=data.get("declared_score", data.get("leadScore")),
        )


@dataclass
class LeadScoreBreakdown:
    """Result of scoring a lead. Only ``total`` is consumed by routing."""

    total: int
    profile: float = 0
    behavior: float = 0
    engagement: float = 0
    urgency: float = 0
    company: float = 0
    project: float = 0
    details: Dict[str, ScoreDetail] = field(default_factory=dict)

    def __post_init__(self):
        self.total = max(0, min(100, int(self.total)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "profile": self.profile,
            "behavior": self.behavior,
            "engagement": self.engagement,
            "urgency": self.urgency,
            "company": self.company,
            "project": self.project,
            "details": {
                key: {"score": d.score, "weight": d.weight, "reason": d.reason}
                for key, d in self.details.items()
            },
        }


@dataclass
class ConversionPrediction:
    """Estimated likelihood, timing and size of a deal."""

    probability: float  # 0-1
    confidence: float  # 0-1, from data completeness
    positive_factors: List[str] = field(default_factory=list)
    negative_factors: List[str] = field(default_factory=list)
    time_to_conversion: int = 30  # days
    estimated_value: int = 50000  # USD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "probability": self.probability,
            "confidence": self.confidence,
            "factors": {
                "positive": list(self.positive_factors),
                "negative": list(self.negative_factors),
            },
            "timeToConversion": self.time_to_conversion,
            "estimatedValue": self.estimated_value,
        }


class LeadScorer:
    """Scores leads on a 0-100 scale from six weighted categories.

    Categories are profile, behavior, engagement, urgency, company and
    project. Each is capped at 100 before weighting. When the behavior
    summary carries a score already computed by the capture form, that
    score is enhanced with server-side engagement bonuses instead.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def calculate(
        self,
        lead: Mapping[str, Any],
        behavior: Optional[BehaviorSummary] = None
    ) -> LeadScoreBreakdown:
        """Score a lead record."""
        behavior = behavior or BehaviorSummary()
        weights = self.config.weights
        details: Dict[str, ScoreDetail] = {}

        profile = self._profile_score(lead, details)
        behavior_score = self._behavior_score(lead, behavior, details)
        engagement = self._engagement_score(lead, behavior, details)
        urgency = self._urgency_score(lead, details)
        company = self._company_score(lead, details)
        project = self._project_score(lead, details)

        if behavior.declared_score is not None:
            total = self._enhance_declared_score(lead, behavior, details)
        else:
            total = round_half_up(
                profile * weights["profile"] +
                behavior_score * weights["behavior"] +
                engagement * weights["engagement"] +
                urgency * weights["urgency"] +
                company * weights["company"] +
                project * weights["project"]
            )

        return LeadScoreBreakdown(
            total=total,
            profile=profile,
            behavior=behavior_score,
            engagement=engagement,
            urgency=urgency,
            company=company,
            project=project,
            details=details,
        )

    def temperature(self, total: int) -> str:
        """Get hot/warm/cold label for a total score."""
        if total >= self.config.hot_threshold:
            return "hot"
        if total >= self.config.warm_threshold:
            return "warm"
        return "cold"

    def lead_priority(self, total: int) -> str:
        """Get low/medium/high/critical label for a total score."""
        if total >= self.config.hot_threshold:
            return "critical"
        if total >= self.config.warm_threshold:
            return "high"
        if total >= self.config.cold_threshold:
            return "medium"
        return "low"

    def predict_conversion(
        self,
        lead: Mapping[str, Any],
        breakdown: LeadScoreBreakdown
    ) -> ConversionPrediction:
        """Predict whether, when and for how much a lead converts.

        The base probability is the total score, pushed up by every positive
        factor's multiplier and down by every negative one's.
        """
        positive, negative = self._conversion_factors(lead, breakdown)
        multipliers = self.config.conversion_factors

        probability = breakdown.total / 100
        for factor in positive:
            probability *= multipliers.get(factor, 1.0)
        for factor in negative:
            probability /= multipliers.get(factor, 1.0)
        probability = max(0.0, min(1.0, probability))

        return ConversionPrediction(
            probability=round_half_up(probability * 100) / 100,
            confidence=round_half_up(_data_confidence(lead) * 100) / 100,
            positive_factors=positive,
            negative_factors=negative,
            time_to_conversion=_days_to_conversion(lead, probability),
            estimated_value=_deal_value(lead),
        )

    def _conversion_factors(self, lead: Mapping[str, Any], breakdown: LeadScoreBreakdown):
        positive: List[str] = []
        negative: List[str] = []

        if lead.get("company_size") in ("large", "medium"):
            positive.append(f"company_size_{lead['company_size']}")

        for field_name, prefix in (
            ("industry_sector", "industry"),
            ("budget_range", "budget"),
            ("decision_authority", "authority"),
            ("urgency", "urgency"),
            ("project_timeline", "timeline"),
        ):
            if lead.get(field_name):
                positive.append(f"{prefix}_{lead[field_name]}")

        if breakdown.engagement > 70:
            positive.append("high_engagement")
        elif breakdown.engagement > 40:
            positive.append("medium_engagement")
        else:
            negative.append("low_engagement")

        if (lead.get("page_views_count") or 0) > 3:
            positive.append("multiple_pages")
        if (lead.get("total_engagement_time") or 0) > 300:
            positive.append("long_session")
        if breakdown.engagement > 60:
            positive.append("form_completion")
        if (lead.get("documents_downloaded") or 0) > 0:
            positive.append("document_download")

        return positive, negative

    def _profile_score(self, lead: Mapping[str, Any], details: Dict[str, ScoreDetail]) -> float:
        weight = self.config.weights["profile"]
        score = 0

        email = lead.get("email")
        if email:
            domain = email.split("@")[1].lower() if "@" in email else ""
            if domain and domain not in self.config.personal_email_domains:
                score += 20
                details["business_email"] = ScoreDetail(
                    20, weight, "Business email domain indicates professional inquiry")
            else:
                score += 5
                details["personal_email"] = ScoreDetail(5, weight, "Personal email domain")

        if lead.get("company"):
            score += 15
            details["company_provided"] = ScoreDetail(15, weight, "Company name provided")

        if lead.get("phone"):
            score += 10
            details["phone_provided"] = ScoreDetail(10, weight, "Phone number provided for direct contact")

        authority = lead.get("decision_authority")
        if authority:
            authority_score = {
                "decision_maker": 25,
                "influencer": 20,
                "end_user": 15,
                "gatekeeper": 10,
            }.get(authority, 0)
            score += authority_score
            details["decision_authority"] = ScoreDetail(
                authority_score, weight, f"Decision authority: {authority}")

        return min(100, score)

    def _behavior_score(
        self,
        lead: Mapping[str, Any],
        behavior: BehaviorSummary,
        details: Dict[str, ScoreDetail]
    ) -> float:
        weight = self.config.weights["behavior"]
        score = 0

        device = lead.get("device_type")
        if device:
            device_score = 15 if device == "desktop" else 10 if device == "tablet" else 5
            score += device_score
            details["device_type"] = ScoreDetail(device_score, weight, f"Accessed from {device}")

        page_views = lead.get("page_views_count") or behavior.pages_visited
        if page_views and page_views > 1:
            page_score = min(25, page_views * 5)
            score += page_score
            details["page_views"] = ScoreDetail(page_score, weight, f"Viewed {page_views} pages")

        documents = lead.get("documents_downloaded") or 0
        if documents > 0:
            doc_score = min(20, documents * 10)
            score += doc_score
            details["documents_downloaded"] = ScoreDetail(
                doc_score, weight, f"Downloaded {documents} documents")

        referrer = lead.get("referrer")
        if referrer:
            host = _referrer_host(referrer)
            referrer_score = _referrer_score(host)
            score += referrer_score
            details["referrer"] = ScoreDetail(
                referrer_score, weight, f"Came from: {host or 'unknown'}")

        if behavior.scroll_depth > 90:
            score += 15
            details["scroll_depth"] = ScoreDetail(15, weight, "Read nearly the whole page")
        elif behavior.scroll_depth > 75:
            score += 10
            details["scroll_depth"] = ScoreDetail(10, weight, "Scrolled through most of the page")

        return min(100, score)

    def _engagement_score(
        self,
        lead: Mapping[str, Any],
        behavior: BehaviorSummary,
        details: Dict[str, ScoreDetail]
    ) -> float:
        weight = self.config.weights["engagement"]
        score = 0

        seconds = lead.get("total_engagement_time") or behavior.time_on_page
        if seconds:
            minutes = seconds / 60
            time_score = min(40, minutes * 2)
            score += time_score
            details["engagement_time"] = ScoreDetail(
                time_score, weight, f"Spent {round_half_up(minutes)} minutes on site")

        # Reaching the engine means the inquiry form was submitted
        score += 30
        details["form_completion"] = ScoreDetail(30, weight, "Completed detailed inquiry form")

        message = lead.get("message")
        if message:
            length = len(message)
            message_score = 20 if length > 200 else 15 if length > 100 else 10 if length > 50 else 5
            score += message_score
            details["message_detail"] = ScoreDetail(
                message_score, weight,
                f"Provided {'detailed' if length > 200 else 'basic'} requirements")

        return min(100, score)

    def _urgency_score(self, lead: Mapping[str, Any], details: Dict[str, ScoreDetail]) -> float:
        weight = self.config.weights["urgency"]
        score = 0

        urgency = lead.get("urgency")
        if urgency:
            urgency_score = 50 if urgency == "immediate" else 30 if urgency == "1-2_weeks" else 15
            score += urgency_score
            details["urgency_level"] = ScoreDetail(urgency_score, weight, f"Urgency: {urgency}")

        timeline = lead.get("project_timeline")
        if timeline:
            timeline_score = {
                "immediate": 25,
                "within_month": 20,
                "within_quarter": 15,
                "within_year": 10,
                "planning_phase": 5,
            }.get(timeline, 0)
            score += timeline_score
            details["project_timeline"] = ScoreDetail(timeline_score, weight, f"Timeline: {timeline}")

        return min(100, score)

    def _company_score(self, lead: Mapping[str, Any], details: Dict[str, ScoreDetail]) -> float:
        weight = self.config.weights["company"]
        score = 0

        size = lead.get("company_size")
        if size:
            size_score = 40 if size == "large" else 25 if size == "medium" else 15
            score += size_score
            details["company_size"] = ScoreDetail(size_score, weight, f"Company size: {size}")

        industry = lead.get("industry_sector")
        if industry:
            industry_score = self.config.industry_scores.get(industry, 5)
            score += industry_score
            details["industry_sector"] = ScoreDetail(industry_score, weight, f"Industry: {industry}")

        return min(100, score)

    def _project_score(self, lead: Mapping[str, Any], details: Dict[str, ScoreDetail]) -> float:
        weight = self.config.weights["project"]
        score = 0

        budget = lead.get("budget_range")
        if budget:
            budget_score = self.config.budget_scores.get(budget, 0)
            score += budget_score
            details["budget_range"] = ScoreDetail(budget_score, weight, f"Budget: {budget}")

        if lead.get("quantity_estimate"):
            score += 20
            details["quantity_estimate"] = ScoreDetail(20, weight, "Provided quantity estimate")

        if lead.get("product_category"):
            score += 15
            details["product_category"] = ScoreDetail(15, weight, "Specified product category")

        return min(100, score)

    def _enhance_declared_score(
        self,
        lead: Mapping[str, Any],
        behavior: BehaviorSummary,
        details: Dict[str, ScoreDetail]
    ) -> int:
        score = behavior.declared_score or 0
        details["declared_score"] = ScoreDetail(score, 1.0, "Score computed at capture time")

        if lead.get("industry_sector") in self.config.high_value_industries:
            score += 10
            details["high_value_industry"] = ScoreDetail(10, 1.0, "High-value industry")
        if behavior.time_on_page > 300:
            score += 15
            details["long_session"] = ScoreDetail(15, 1.0, "Spent over 5 minutes on page")
        if behavior.scroll_depth > 90:
            score += 10
            details["deep_scroll"] = ScoreDetail(10, 1.0, "Scrolled past 90% of page")
        message = lead.get("message") or ""
        if len(message) > 100:
            score += 5
            details["detailed_message"] = ScoreDetail(5, 1.0, "Detailed message")

        return min(score, 100)


def _referrer_host(referrer: str) -> str:
    parsed = urlparse(referrer)
    if not parsed.scheme or not parsed.netloc:
        return ""
    return (parsed.hostname or "").lower()


def _referrer_score(host: str) -> int:
    if not host:
        return 5
    if "google" in host:
        return 15
    if "linkedin" in host:
        return 20
    if "industry" in host or "trade" in host:
        return 25
    if "facebook" in host or "twitter" in host:
        return 10
    return 12


COMPLETENESS_FIELDS = (
    "name", "email", "phone", "company", "company_size", "industry_sector",
    "decision_authority", "budget_range", "project_timeline", "message",
)

DEAL_VALUE_BY_BUDGET = {
    "over_1m": 1500000,
    "500k_1m": 750000,
    "100k_500k": 300000,
    "50k_100k": 75000,
    "10k_50k": 30000,
    "under_10k": 7500,
}

DEAL_VALUE_INDUSTRY_MULTIPLIERS = {
    "oil_gas": 2.0,
    "construction": 1.5,
    "manufacturing": 1.3,
}


def _data_confidence(lead: Mapping[str, Any]) -> float:
    filled = len([f for f in COMPLETENESS_FIELDS if lead.get(f)])
    confidence = 0.5 + filled / len(COMPLETENESS_FIELDS) * 0.3

    if lead.get("total_engagement_time"):
        confidence += 0.1
    if (lead.get("page_views_count") or 0) > 1:
        confidence += 0.1

    return min(1.0, confidence)


def _days_to_conversion(lead: Mapping[str, Any], probability: float) -> int:
    days = {"immediate": 3, "1-2_weeks": 10, "planning": 90}.get(lead.get("urgency"), 30)

    timeline = lead.get("project_timeline")
    if timeline == "immediate":
        days = min(days, 7)
    elif timeline == "within_month":
        days = min(days, 30)
    elif timeline == "within_quarter":
        days = min(days, 90)
    elif timeline == "planning_phase":
        days = max(days, 180)

    # Likelier deals close sooner
    return max(1, round_half_up(days / (probability + 0.1)))


def _deal_value(lead: Mapping[str, Any]) -> int:
    value = DEAL_VALUE_BY_BUDGET.get(lead.get("budget_range"), 50000)

    size = lead.get("company_size")
    if size == "large":
        value *= 1.5
    elif size == "medium":
        value *= 1.2

    value *= DEAL_VALUE_INDUSTRY_MULTIPLIERS.get(lead.get("industry_sector"), 1.0)
    return round_half_up(value)


def quick_score(lead: Mapping[str, Any]) -> int:
    """Quick helper to score a lead and return just the total."""
    return LeadScorer().calculate(lead).total
