"""
CLI Configuration

Configuration management for the MCM CLI.
Supports a .env file, environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv


# Environment variable prefix
ENV_PREFIX = "MCM_"

OUTPUT_FORMATS = ("human", "json")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    # Batch compilation; None lets the thread pool pick
    max_workers: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _parse_max_workers(value: Any) -> int | None:
    if value is None or value == "":
        return None
    workers = int(value)
    if workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {workers}")
    return workers


def _parse_output_format(value: str) -> str:
    value = value.lower()
    if value not in OUTPUT_FORMATS:
        raise ValueError(f"Output format must be one of {OUTPUT_FORMATS}, got {value!r}")
    return value


def _read_config_data(path: Path) -> dict[str, Any]:
    if path.suffix in (".yaml", ".yml"):
        import yaml
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
    else:
        with open(path, "r") as f:
            data = json.load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON or YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = _read_config_data(path)
    config = CLIConfig()

    # Logging
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    # Output
    if "default_output_format" in data:
        config.default_output_format = _parse_output_format(data["default_output_format"])

    # Batch compilation
    if "max_workers" in data:
        config.max_workers = _parse_max_workers(data["max_workers"])

    return config


def apply_env_overrides(config: CLIConfig) -> CLIConfig:
    """Override config fields from MCM_* environment variables that are set."""
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = _parse_output_format(
            os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human")
        )
    if os.getenv(f"{ENV_PREFIX}MAX_WORKERS"):
        config.max_workers = _parse_max_workers(os.getenv(f"{ENV_PREFIX}MAX_WORKERS"))
    return config


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "mcm.json",
        Path.cwd() / ".mcm.json",
        Path.home() / ".config" / "mcm" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    A .env file in the working directory is read first; environment
    variables then override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    load_dotenv(find_dotenv(usecwd=True))

    # Start with defaults
    config = CLIConfig()

    if config_path is not None:
        if config_path.exists():
            config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return apply_env_overrides(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "log_level": "INFO",
  "log_file": null,
  "default_output_format": "human",
  "max_workers": null
}
"""


__all__ = [
    "ENV_PREFIX",
    "OUTPUT_FORMATS",
    "CLIConfig",
    "load_config_from_file",
    "apply_env_overrides",
    "default_config_paths",
    "load_config",
    "get_default_config_template",
]
