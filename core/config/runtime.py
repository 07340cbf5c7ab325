"""
Runtime Configuration

Central configuration for query construction, signing and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "LEDGERQ_"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class QueryConfig:
    """Defaults applied when building queries."""
    default_counter: int = 1
    strict_selection: bool = False


@dataclass
class SigningConfig:
    """Signing scheme and key location."""
    scheme: str = "ed25519"
    key_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the query client.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    query: QueryConfig = field(default_factory=QueryConfig)
    signing: SigningConfig = field(default_factory=SigningConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - LEDGERQ_DEFAULT_COUNTER: Counter used when none is given
        - LEDGERQ_STRICT_SELECTION: Reject a second payload selection (true/false)
        - LEDGERQ_KEY_FILE: Path to the signing key file
        - LEDGERQ_LOG_LEVEL: Log level name
        - LEDGERQ_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}DEFAULT_COUNTER"):
            overrides.setdefault("query", {})["default_counter"] = int(
                os.getenv(f"{ENV_PREFIX}DEFAULT_COUNTER", "1")
            )
        if os.getenv(f"{ENV_PREFIX}STRICT_SELECTION"):
            overrides.setdefault("query", {})["strict_selection"] = _env_bool(
                f"{ENV_PREFIX}STRICT_SELECTION"
            )

        if os.getenv(f"{ENV_PREFIX}KEY_FILE"):
            overrides.setdefault("signing", {})["key_file"] = os.getenv(f"{ENV_PREFIX}KEY_FILE")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        query_data = data.get("query", {})
        signing_data = data.get("signing", {})

        query = QueryConfig(**query_data) if query_data else QueryConfig()
        signing = SigningConfig(**signing_data) if signing_data else SigningConfig()

        return cls(
            query=query,
            signing=signing,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("query", {}).items():
            setattr(new_config.query, key, value)
        for key, value in overrides.get("signing", {}).items():
            setattr(new_config.signing, key, value)
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "query": {
                "default_counter": self.query.default_counter,
                "strict_selection": self.query.strict_selection,
            },
            "signing": {
                "scheme": self.signing.scheme,
                "key_file": self.signing.key_file,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
