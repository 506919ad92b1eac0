"""Configurable scoring weights and thresholds."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union
from datetime import datetime

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".lead-routing-engine" / "scoring_config.json"


DEFAULT_WEIGHTS: Dict[str, float] = {
    "profile": 0.25,
    "behavior": 0.20,
    "engagement": 0.15,
    "urgency": 0.15,
    "company": 0.15,
    "project": 0.10,
}


@dataclass
class ScoringConfig:
    """Configurable scoring weights and thresholds."""

    version: str = "1.0.0"

    # Category weights (should add up to 1.0)
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    # Temperature thresholds on the 0-100 total
    hot_threshold: int = 80
    warm_threshold: int = 50
    cold_threshold: int = 20

    industry_scores: Dict[str, int] = field(default_factory=lambda: {
        "oil_gas": 30,
        "construction": 25,
        "manufacturing": 20,
        "mining": 18,
        "utilities": 15,
        "government": 12,
        "transportation": 10,
        "other": 5,
    })

    budget_scores: Dict[str, int] = field(default_factory=lambda: {
        "over_1m": 50,
        "500k_1m": 40,
        "100k_500k": 30,
        "50k_100k": 20,
        "10k_50k": 15,
        "under_10k": 10,
    })

    # Industries that earn a bonus on top of a client-declared score
    high_value_industries: List[str] = field(default_factory=lambda: [
        "oil_gas", "mining", "manufacturing", "construction",
    ])

    personal_email_domains: List[str] = field(default_factory=lambda: [
        "gmail.com", "yahoo.com", "hotmail.com", "outlook.com", "icloud.com",
        "aol.com", "live.com", "msn.com", "ymail.com", "mail.com",
    ])

    # Conversion multipliers; a factor not listed counts as 1.0
    conversion_factors: Dict[str, float] = field(default_factory=lambda: {
        "company_size_large": 1.5,
        "company_size_medium": 1.2,
        "company_size_small": 1.0,
        "industry_oil_gas": 1.8,
        "industry_construction": 1.6,
        "industry_manufacturing": 1.4,
        "industry_mining": 1.3,
        "industry_utilities": 1.2,
        "industry_government": 1.1,
        "industry_other": 1.0,
        "budget_over_1m": 2.0,
        "budget_500k_1m": 1.8,
        "budget_100k_500k": 1.5,
        "budget_50k_100k": 1.2,
        "budget_10k_50k": 1.0,
        "budget_under_10k": 0.8,
        "authority_decision_maker": 1.8,
        "authority_influencer": 1.4,
        "authority_end_user": 1.1,
        "authority_gatekeeper": 0.9,
        "urgency_immediate": 2.0,
        "urgency_1-2_weeks": 1.5,
        "urgency_planning": 1.0,
        "timeline_immediate": 2.0,
        "timeline_within_month": 1.6,
        "timeline_within_quarter": 1.3,
        "timeline_within_year": 1.1,
        "timeline_planning_phase": 0.9,
        "high_engagement": 1.5,
        "medium_engagement": 1.2,
        "low_engagement": 1.0,
        "multiple_pages": 1.3,
        "long_session": 1.4,
        "return_visitor": 1.6,
        "form_completion": 1.8,
        "document_download": 1.5,
    })

    updated_at: datetime = field(default_factory=datetime.now)


class ScoringConfigManager:
    """Manage and persist scoring configuration."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config manager."""
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.config = self._load_config()

    def _load_config(self) -> ScoringConfig:
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                defaults = ScoringConfig()
                return ScoringConfig(
                    version=data.get("version", defaults.version),
                    weights={**defaults.weights, **data.get("weights", {})},
                    hot_threshold=data.get("hot_threshold", 80),
                    warm_threshold=data.get("warm_threshold", 50),
                    cold_threshold=data.get("cold_threshold", 20),
                    industry_scores={**defaults.industry_scores, **data.get("industry_scores", {})},
                    budget_scores={**defaults.budget_scores, **data.get("budget_scores", {})},
                    high_value_industries=data.get("high_value_industries", defaults.high_value_industries),
                    personal_email_domains=data.get("personal_email_domains", defaults.personal_email_domains),
                    conversion_factors={**defaults.conversion_factors, **data.get("conversion_factors", {})},
                )
            except Exception as e:
                logger.error(f"Error loading scoring config: {e}")

        return ScoringConfig()

    def save_config(self):
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "version": self.config.version,
            "weights": self.config.weights,
            "hot_threshold": self.config.hot_threshold,
            "warm_threshold": self.config.warm_threshold,
            "cold_threshold": self.config.cold_threshold,
            "industry_scores": self.config.industry_scores,
            "budget_scores": self.config.budget_scores,
            "high_value_industries": self.config.high_value_industries,
            "personal_email_domains": self.config.personal_email_domains,
            "conversion_factors": self.config.conversion_factors,
            "updated_at": self.config.updated_at.isoformat(),
        }
        with open(self.config_path, 'w') as f:
            json.dump(data, f, indent=2)

    def update_thresholds(self, hot: int, warm: int, cold: int):
        """Update temperature and score-priority thresholds."""
        self.config.hot_threshold = hot
        self.config.warm_threshold = warm
        self.config.cold_threshold = cold
        self.config.updated_at = datetime.now()
        self.save_config()

    def set_weight(self, category: str, weight: float):
        """Set the weight of a score category."""
        if category not in DEFAULT_WEIGHTS:
            raise ValueError(f"Unknown score category: {category}")
        self.config.weights[category] = weight
        self.config.updated_at = datetime.now()
        self.save_config()

    def set_industry_score(self, industry: str, score: int):
        """Set the company-category score of an industry."""
        self.config.industry_scores[industry] = score
        self.config.updated_at = datetime.now()
        self.save_config()

    def set_conversion_factor(self, factor: str, multiplier: float):
        """Set a conversion multiplier, e.g. ``industry_mining``."""
        if multiplier <= 0:
            raise ValueError(f"Conversion multiplier must be positive: {multiplier}")
        self.config.conversion_factors[factor] = multiplier
        self.config.updated_at = datetime.now()
        self.save_config()
