"""ChatstampConfig: data model and YAML persistence for chatstamp.yaml."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ChatstampConfig:
    """Display settings for timestamp labels."""

    locale: str = "en_US"
    timezone: str | None = None  # IANA key; None = system local zone
    gap_minutes: int = 15
    now_window_seconds: int = 60
    labels: dict[str, str] = field(default_factory=dict)


def default_config_path(config_dir: Path | None = None) -> Path:
    """Return the default path for chatstamp.yaml.

    Args:
        config_dir: Override config directory. If None, uses ~/.config/chatstamp.
    """
    if config_dir:
        return config_dir / "chatstamp.yaml"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "chatstamp" / "chatstamp.yaml"
    return Path.home() / ".config" / "chatstamp" / "chatstamp.yaml"


def load_config(path: Path | None = None) -> ChatstampConfig:
    """Load a ChatstampConfig from YAML.

    Args:
        path: Path to chatstamp.yaml. Uses default_config_path() if None.

    Returns:
        The parsed config, or defaults if the file is missing or unreadable.
    """
    config_path = path or default_config_path()
    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return ChatstampConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Failed to load config from %s: %s. Using defaults.", config_path, e)
        return ChatstampConfig()

    if not data:
        return ChatstampConfig()
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a mapping at top level", config_path)
        return ChatstampConfig()

    try:
        return _config_from_dict(data)
    except (TypeError, ValueError) as e:
        logger.warning("Invalid config in %s: %s. Using defaults.", config_path, e)
        return ChatstampConfig()


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise TypeError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def _optional_str(section: dict, key: str, default: str | None) -> str | None:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {value!r}")
    return value


def _int(section: dict, key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"'{key}' must be an integer, got {value!r}")
    number = int(value)
    if number < 0:
        raise ValueError(f"'{key}' must not be negative, got {number}")
    return number


def _config_from_dict(data: dict) -> ChatstampConfig:
    """Build a config from the parsed YAML, raising on wrongly typed values."""
    display_sec = _section(data, "display")
    labels_sec = _section(data, "labels")

    return ChatstampConfig(
        locale=_optional_str(display_sec, "locale", "en_US"),
        timezone=_optional_str(display_sec, "timezone", None),
        gap_minutes=_int(display_sec, "gap_minutes", 15),
        now_window_seconds=_int(display_sec, "now_window_seconds", 60),
        labels={str(k): str(v) for k, v in labels_sec.items()},
    )


def save_config(config: ChatstampConfig, path: Path | None = None) -> Path:
    """Save a ChatstampConfig to YAML.

    Args:
        config: The configuration to save.
        path: Where to write. Uses default_config_path() if None.

    Returns:
        The path written to.
    """
    config_path = path or default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict = {"display": config_to_dict(config)["display"]}
    if config.labels:
        data["labels"] = dict(config.labels)

    with open(config_path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    return config_path


def config_to_dict(config: ChatstampConfig) -> dict:
    """Nested dict in the on-disk layout. Omits an unset timezone."""
    display: dict = {"locale": config.locale}
    if config.timezone:
        display["timezone"] = config.timezone
    display["gap_minutes"] = config.gap_minutes
    display["now_window_seconds"] = config.now_window_seconds
    return {"display": display, "labels": dict(config.labels)}
