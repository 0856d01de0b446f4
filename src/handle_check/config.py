"""
Configuration for handle-check.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = Path("handle_check.yaml")


@dataclass
class TwitterConfig:
    """User lookup API configuration."""

    api_base: str = "https://api.twitter.com"
    bearer_token: str | None = None
    bearer_token_env: str | None = "TWITTER_BEARER_TOKEN"
    timeout_seconds: float = 10.0

    def get_bearer_token(self) -> str | None:
        """Get bearer token from config or environment."""
        if self.bearer_token:
            return self.bearer_token
        if self.bearer_token_env:
            return os.environ.get(self.bearer_token_env)
        return None


@dataclass
class CheckerConfig:
    """Complete handle-check configuration."""

    debounce_seconds: float = 0.5
    check_availability: bool = True  # Off for format-only validation

    twitter: TwitterConfig = field(default_factory=TwitterConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CheckerConfig":
        """Create config from a dictionary (e.g., from YAML)."""
        config = cls()

        if "debounce_seconds" in data:
            config.debounce_seconds = float(data["debounce_seconds"])
        if "check_availability" in data:
            config.check_availability = data["check_availability"]

        if "twitter" in data:
            tw = data["twitter"]
            config.twitter = TwitterConfig(
                api_base=tw.get("api_base", config.twitter.api_base),
                bearer_token=tw.get("bearer_token"),
                bearer_token_env=tw.get("bearer_token_env", config.twitter.bearer_token_env),
                timeout_seconds=tw.get("timeout_seconds", 10.0),
            )

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> "CheckerConfig":
        """Load config from a YAML file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Settings live under a top-level handle_check key
        return cls.from_dict(data.get("handle_check", {}))

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "debounce_seconds": self.debounce_seconds,
            "check_availability": self.check_availability,
            "twitter": {
                "api_base": self.twitter.api_base,
                "bearer_token_env": self.twitter.bearer_token_env,
                "timeout_seconds": self.twitter.timeout_seconds,
            },
        }
