from dotenv import load_dotenv
from dataclasses import dataclass
from pathlib import Path
import json
import os

from seoscore.constants import (
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    MAX_RECOMMENDATIONS,
    MIN_RECOMMENDATIONS,
    SLOW_LOAD_TIME_MS,
)

load_dotenv()  # Loads variables from .env file

ANALYSIS_MODES = ("url_only", "static", "rendered")
DEFAULT_MODE = "static"


def _env_int(name: str, default: int) -> int:
    """Integer environment variable; the default is kept if unset or not a number."""
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_mode(name: str = "SEOSCORE_MODE") -> str:
    """Analysis mode from the environment; unknown values fall back to static."""
    mode = os.getenv(name, DEFAULT_MODE).strip().lower()
    return mode if mode in ANALYSIS_MODES else DEFAULT_MODE


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    USER_AGENT = os.getenv("USER_AGENT", DEFAULT_USER_AGENT)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    SEOSCORE_TIMEOUT = _env_int("SEOSCORE_TIMEOUT", DEFAULT_FETCH_TIMEOUT_SECONDS)
    SEOSCORE_MODE = _env_mode()  # 'url_only', 'static' or 'rendered'


settings = Settings()


@dataclass
class AnalyzerConfig:
    """Configuration for SEOAnalyzer."""
    user_agent: str = DEFAULT_USER_AGENT
    timeout: int = DEFAULT_FETCH_TIMEOUT_SECONDS
    default_mode: str = DEFAULT_MODE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AnalyzerConfig":
        """Load configuration from environment variables.

        Returns:
            AnalyzerConfig: Configuration instance with values from environment
        """
        return cls(
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            timeout=_env_int("SEOSCORE_TIMEOUT", DEFAULT_FETCH_TIMEOUT_SECONDS),
            default_mode=_env_mode(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@dataclass
class ScoringThresholds:
    """Length bands and limits used when scoring and recommending."""

    # Title length bands
    title_min_static: int = 10
    title_min_rendered: int = 30
    title_max: int = 60

    # Meta description length bands
    description_min_static: int = 50
    description_min_rendered: int = 120
    description_max: int = 160

    # Content
    thin_content_words_static: int = 300
    thin_content_words_rendered: int = 600

    # Performance
    slow_load_time_ms: int = SLOW_LOAD_TIME_MS

    # Recommendation list sizing
    max_recommendations: int = MAX_RECOMMENDATIONS
    min_recommendations: int = MIN_RECOMMENDATIONS

    @classmethod
    def from_env(cls) -> "ScoringThresholds":
        """Load thresholds from environment variables.

        Environment variables should be prefixed with SEOSCORE_THRESHOLD_
        e.g., SEOSCORE_THRESHOLD_TITLE_MAX=70

        Returns:
            ScoringThresholds with values from environment
        """
        thresholds = cls()
        prefix = "SEOSCORE_THRESHOLD_"

        for field_name in thresholds.__dataclass_fields__:
            env_value = os.getenv(f"{prefix}{field_name.upper()}")
            if env_value is None:
                continue
            try:
                setattr(thresholds, field_name, int(env_value))
            except ValueError:
                pass  # Keep default if conversion fails

        return thresholds

    @classmethod
    def from_file(cls, path: str) -> "ScoringThresholds":
        """Load thresholds from a JSON configuration file.

        Args:
            path: Path to JSON configuration file

        Returns:
            ScoringThresholds with values from file
        """
        thresholds = cls()
        file_path = Path(path)

        if not file_path.exists():
            return thresholds

        with open(file_path, 'r') as f:
            config = json.load(f)

        threshold_config = config.get('thresholds', config)

        for field_name in thresholds.__dataclass_fields__:
            if field_name in threshold_config:
                setattr(thresholds, field_name, threshold_config[field_name])

        return thresholds

    def to_dict(self) -> dict:
        """Convert thresholds to dictionary."""
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }


# Global default thresholds instance
default_thresholds = ScoringThresholds()
