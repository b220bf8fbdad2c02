"""Configuration file management for wealthwise.

The config file doubles as the key-value preference store; today it holds
the display theme.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

THEMES = ("light", "dark", "system")
DEFAULT_THEME = "system"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "wealthwise" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config({"theme": DEFAULT_THEME}, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, empty if the file doesn't exist yet.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return {}

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_theme(config_path: Path | None = None) -> str:
    """Get the saved display theme.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        One of "light", "dark" or "system". Unknown saved values fall back to "system".
    """
    theme = load_config(config_path).get("theme", DEFAULT_THEME)
    return theme if theme in THEMES else DEFAULT_THEME


def set_theme(theme: str, config_path: Path | None = None) -> None:
    """Save the display theme, keeping the rest of the config.

    Args:
        theme: One of "light", "dark" or "system".
        config_path: Path to config file. If None, uses default location.

    Raises:
        ValueError: If theme is not a known theme.
    """
    if theme not in THEMES:
        raise ValueError(f"Unknown theme '{theme}'. Choose from: {', '.join(THEMES)}")

    config = load_config(config_path)
    config["theme"] = theme
    save_config(config, config_path)
