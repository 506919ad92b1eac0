"""Weighted best-match selection of a team member for a lead."""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from ..team.directory import TeamDirectory
from ..team.members import TeamMember
from .criteria import RoutingCriteria

logger = logging.getLogger(__name__)


class BestMatchSelector:
    """Greedy single-pass matcher.

    Every candidate with free capacity gets an additive score from
    expertise, workload, track record and working hours. The first
    candidate to reach the highest score wins, so ties go to the
    directory's availability order.
    """

    def __init__(self, directory: TeamDirectory):
        self.directory = directory

    def score_member(
        self,
        member: TeamMember,
        criteria: RoutingCriteria,
        now: Optional[datetime] = None
    ) -> Tuple[float, List[str]]:
        """Score one member against the criteria, with the reasons."""
        score = 0.0
        reasons: List[str] = []

        if criteria.industry and criteria.industry in member.industries:
            score += 30
            reasons.append(f"Industry expertise: {criteria.industry}")

        category = criteria.product_category
        if category and any(exp in category or category in exp for exp in member.expertise):
            score += 25
            reasons.append("Product expertise match")

        if criteria.language and criteria.language in member.languages:
            score += 10
            reasons.append(f"Language: {criteria.language}")

        utilization = member.utilization
        if utilization < 0.5:
            score += 20
            reasons.append("Low workload")
        elif utilization < 0.8:
            score += 10
            reasons.append("Moderate workload")

        performance = member.performance
        score += performance.conversion_rate * 10
        score += (5 - performance.customer_satisfaction) * -5
        score += max(0, (120 - performance.average_response_time) / 10)

        if self.directory.is_in_working_hours(member, now):
            score += 15
            reasons.append("Currently in working hours")

        return score, reasons

    def find_best_match(
        self,
        criteria: RoutingCriteria,
        members: List[TeamMember],
        reasoning: List[str],
        now: Optional[datetime] = None
    ) -> Optional[TeamMember]:
        """Pick the highest scoring member, appending to ``reasoning``.

        Members at or over capacity are never candidates. Returns None when
        no candidate scores above zero.
        """
        best_member: Optional[TeamMember] = None
        best_score = 0.0

        for member in members:
            if not member.has_capacity:
                logger.debug(f"Skipping {member.id}: at capacity")
                continue

            score, reasons = self.score_member(member, criteria, now)
            logger.debug(f"Match score for {member.id}: {score:.2f}")

            if score > best_score:
                best_score = score
                best_member = member
                reasoning.append(f"Best match: {member.name} ({', '.join(reasons)})")

        return best_member
