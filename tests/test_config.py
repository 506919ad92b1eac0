"""Tests for scoring configuration and environment settings."""

import json
import pytest
import tempfile
from pathlib import Path

from lead_routing_engine.config import reload_settings, settings
from lead_routing_engine.core.config import ScoringConfigManager
from lead_routing_engine.core.scorer import LeadScorer


@pytest.fixture
def config_manager():
    """Create config manager with temp storage."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield ScoringConfigManager(Path(tmpdir) / "scoring_config.json")


class TestScoringConfigManager:
    """Tests for ScoringConfigManager."""

    def test_defaults_without_file(self, config_manager):
        assert config_manager.config.hot_threshold == 80
        assert sum(config_manager.config.weights.values()) == pytest.approx(1.0)

    def test_update_thresholds_persists(self, config_manager):
        config_manager.update_thresholds(hot=90, warm=60, cold=30)
        scorer = LeadScorer(ScoringConfigManager(config_manager.config_path).config)
        assert scorer.temperature(85) == "warm"
        assert scorer.temperature(59) == "cold"
        assert scorer.lead_priority(29) == "low"

    def test_set_weight(self, config_manager):
        config_manager.set_weight("project", 0.3)
        reloaded = ScoringConfigManager(config_manager.config_path)
        assert reloaded.config.weights["project"] == 0.3
        assert reloaded.config.weights["profile"] == 0.25

    def test_set_unknown_weight(self, config_manager):
        with pytest.raises(ValueError):
            config_manager.set_weight("astrology", 0.5)

    def test_set_industry_score(self, config_manager):
        config_manager.set_industry_score("aerospace", 22)
        reloaded = ScoringConfigManager(config_manager.config_path)
        assert reloaded.config.industry_scores["aerospace"] == 22
        assert reloaded.config.industry_scores["oil_gas"] == 30

    def test_partial_file_merges_defaults(self, config_manager):
        config_manager.config_path.write_text(json.dumps({"weights": {"urgency": 0.4}}))
        config = ScoringConfigManager(config_manager.config_path).config
        assert config.weights["urgency"] == 0.4
        assert config.weights["company"] == 0.15
        assert config.warm_threshold == 50

    def test_corrupt_file_falls_back(self, config_manager):
        config_manager.config_path.write_text("not json")
        config = ScoringConfigManager(config_manager.config_path).config
        assert config.hot_threshold == 80

    def test_conversion_factor_persists(self, config_manager):
        config_manager.set_conversion_factor("industry_mining", 2.5)
        config = ScoringConfigManager(config_manager.config_path).config
        assert config.conversion_factors["industry_mining"] == 2.5
        assert config.conversion_factors["industry_oil_gas"] == 1.8

    def test_conversion_factor_must_be_positive(self, config_manager):
        with pytest.raises(ValueError):
            config_manager.set_conversion_factor("industry_mining", 0)

    def test_saved_weights_reach_the_scorer(self, config_manager):
        for category in ("profile", "behavior", "urgency", "company", "project"):
            config_manager.set_weight(category, 0.0)
        config_manager.set_weight("engagement", 1.0)

        scorer = LeadScorer(ScoringConfigManager(config_manager.config_path).config)
        assert scorer.config.weights["engagement"] == 1.0
        # only the 30 form-completion points count
        assert scorer.calculate({"email": "buyer@aramco.com"}).total == 30

    def test_accepts_string_path(self, config_manager):
        manager = ScoringConfigManager(str(config_manager.config_path))
        assert manager.config_path == config_manager.config_path


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        for name in ("LEAD_ENGINE_DEFAULT_LANGUAGE", "LEAD_ENGINE_DEFAULT_TIMEZONE",
                     "LEAD_ENGINE_OFF_HOURS_PENALTY", "LEAD_ENGINE_ROSTER_PATH",
                     "LEAD_ENGINE_SCORING_CONFIG_PATH"):
            monkeypatch.delenv(name, raising=False)
        reload_settings()
        assert settings.default_language == "arabic"
        assert settings.default_timezone == "Asia/Riyadh"
        assert settings.off_hours_penalty_minutes == 480
        assert settings.roster_path is None
        assert settings.scoring_config_path is None

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LEAD_ENGINE_OFF_HOURS_PENALTY", "60")
        monkeypatch.setenv("LEAD_ENGINE_LOG_LEVEL", "debug")
        try:
            reload_settings()
            assert settings.off_hours_penalty_minutes == 60
            assert settings.log_level == "DEBUG"
        finally:
            monkeypatch.undo()
            reload_settings()
