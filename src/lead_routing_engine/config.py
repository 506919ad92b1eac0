"""Environment-based configuration for the routing engine."""

import logging
import os

logger = logging.getLogger(__name__)


class Settings:
    """Engine configuration loaded from environment variables."""

    def __init__(self):
        self.default_language = os.getenv("LEAD_ENGINE_DEFAULT_LANGUAGE", "arabic")
        self.default_timezone = os.getenv("LEAD_ENGINE_DEFAULT_TIMEZONE", "Asia/Riyadh")
        self.default_response_minutes = int(os.getenv("LEAD_ENGINE_DEFAULT_RESPONSE_MINUTES", "240"))
        self.off_hours_penalty_minutes = int(os.getenv("LEAD_ENGINE_OFF_HOURS_PENALTY", "480"))

        # Optional JSON roster / rules; built-in defaults are used when unset
        self.roster_path = os.getenv("LEAD_ENGINE_ROSTER_PATH") or None
        self.rules_path = os.getenv("LEAD_ENGINE_RULES_PATH") or None
        # Scoring weights/thresholds; ~/.lead-routing-engine/scoring_config.json when unset
        self.scoring_config_path = os.getenv("LEAD_ENGINE_SCORING_CONFIG_PATH") or None

        self.log_level = os.getenv("LEAD_ENGINE_LOG_LEVEL", "INFO").upper()


_settings = None


def _get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Re-read the environment."""
    global _settings
    _settings = Settings()
    return _settings


class _SettingsProxy:
    """Lazy proxy so settings aren't loaded until first access."""

    def __getattr__(self, name):
        return getattr(_get_settings(), name)


settings = _SettingsProxy()
