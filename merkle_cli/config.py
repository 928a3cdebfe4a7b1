"""
CLI Configuration

Configuration management for the merkle CLI.
Supports environment variables (and .env files) and JSON configuration files.
"""

from __future__ import annotations

import codecs
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from core.schemas.errors import CommitmentException, ErrorCodes


# Environment variable prefix
ENV_PREFIX = "MERKLE_"

OUTPUT_FORMATS = ("human", "json")

# Items committed to by the demo command
DEFAULT_DEMO_ITEMS = [
    "data item 1",
    "data item 2",
    "data item 3",
    "data item 4",
]


class ConfigException(CommitmentException):
    """Raised when a configuration file or value is invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_INVALID,
            details=details,
            retryable=False,
        )


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    # Text items are encoded with this codec before hashing
    item_encoding: str = "utf-8"

    # Demo
    demo_items: list[str] = field(default_factory=lambda: list(DEFAULT_DEMO_ITEMS))
    demo_index: int = 2

    def validate(self) -> None:
        """
        Check value types and ranges. File values arrive as raw JSON.

        Raises:
            ConfigException: If a value has the wrong type or is out of range
        """
        for name in ("log_level", "default_output_format", "item_encoding"):
            if not isinstance(getattr(self, name), str):
                raise ConfigException(f"{name} must be a string")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigException("log_file must be a string or null")
        try:
            codecs.lookup(self.item_encoding)
        except LookupError as e:
            raise ConfigException(
                f"item_encoding {self.item_encoding!r} is not a known codec"
            ) from e
        if self.default_output_format not in OUTPUT_FORMATS:
            raise ConfigException(
                f"default_output_format must be one of {OUTPUT_FORMATS}, "
                f"got {self.default_output_format!r}"
            )
        if not isinstance(self.demo_items, list) or not all(
            isinstance(item, str) for item in self.demo_items
        ):
            raise ConfigException("demo_items must be a list of strings")
        if not self.demo_items:
            raise ConfigException("demo_items must not be empty")
        if not isinstance(self.demo_index, int) or isinstance(self.demo_index, bool):
            raise ConfigException("demo_index must be an integer")
        if not 0 <= self.demo_index < len(self.demo_items):
            raise ConfigException(
                f"demo_index {self.demo_index} out of range for "
                f"{len(self.demo_items)} demo items"
            )


def load_config_from_env(config: CLIConfig | None = None) -> CLIConfig:
    """Apply MERKLE_* environment variables on top of a configuration."""
    config = config or CLIConfig()

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human").lower()
    if os.getenv(f"{ENV_PREFIX}ITEM_ENCODING"):
        config.item_encoding = os.getenv(f"{ENV_PREFIX}ITEM_ENCODING", "utf-8")
    if os.getenv(f"{ENV_PREFIX}DEMO_INDEX"):
        try:
            config.demo_index = int(os.getenv(f"{ENV_PREFIX}DEMO_INDEX", "2"))
        except ValueError as e:
            raise ConfigException(f"{ENV_PREFIX}DEMO_INDEX must be an integer") from e

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigException(
                f"Config file is not valid UTF-8 JSON: {path}",
                details={"error": str(e)},
            ) from e

    if not isinstance(data, dict):
        raise ConfigException(f"Config file must contain a JSON object: {path}")

    config = CLIConfig()

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    config.default_output_format = data.get("default_output_format", config.default_output_format)
    config.item_encoding = data.get("item_encoding", config.item_encoding)
    config.demo_items = data.get("demo_items", config.demo_items)
    config.demo_index = data.get("demo_index", config.demo_index)

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables (including those from a .env file) override
    file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged, validated configuration
    """
    load_dotenv()

    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "merkle.json",
            Path.cwd() / ".merkle.json",
            Path.home() / ".config" / "merkle" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    config = load_config_from_env(config)
    config.validate()
    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(
        {
            "log_level": "INFO",
            "log_file": None,
            "default_output_format": "human",
            "item_encoding": "utf-8",
            "demo_items": DEFAULT_DEMO_ITEMS,
            "demo_index": 2,
        },
        indent=2,
    ) + "\n"


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_DEMO_ITEMS",
    "CLIConfig",
    "ConfigException",
    "load_config",
    "load_config_from_env",
    "load_config_from_file",
    "get_default_config_template",
]
