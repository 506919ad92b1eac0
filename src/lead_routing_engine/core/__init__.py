"""Core scoring engine for lead qualification."""

from .scorer import LeadScorer, LeadScoreBreakdown, BehaviorSummary, ScoreDetail, ConversionPrediction
from .config import ScoringConfig, ScoringConfigManager

__all__ = [
    "LeadScorer",
    "LeadScoreBreakdown",
    "BehaviorSummary",
    "ScoreDetail",
    "ConversionPrediction",
    "ScoringConfig",
    "ScoringConfigManager",
]
