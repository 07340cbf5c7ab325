"""
CLI Configuration

Locates and loads the RuntimeConfig used by CLI commands.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config import RuntimeConfig


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "ledgerq.yaml",
        Path.cwd() / "ledgerq.json",
        Path.home() / ".config" / "ledgerq" / "config.yaml",
    ]


def load_config_from_file(path: Path) -> RuntimeConfig:
    """Load configuration from a YAML or JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix == ".json":
        with open(path, "r") as f:
            return RuntimeConfig.from_dict(json.load(f))
    return RuntimeConfig.from_yaml(path)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """# ledgerq configuration
query:
  default_counter: 1
  strict_selection: false
signing:
  scheme: ed25519
  key_file: null
log_level: INFO
log_file: null
"""
