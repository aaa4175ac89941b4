"""XDG-compliant path management for pubctl.

Configuration lives under ``$XDG_CONFIG_HOME/pubctl`` (``~/.config/pubctl``
by default). The project being published is described by a ``pubctl.toml``
file in the project directory.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pubctl"

# Project configuration file name, looked up in the project directory
PROJECT_CONFIG_NAME = "pubctl.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pubctl/ (or XDG_CONFIG_HOME/pubctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the user settings file path.

    Returns:
        Path to ~/.config/pubctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user color theme file path.

    Returns:
        Path to ~/.config/pubctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Get the project configuration file path.

    Args:
        project_dir: Project root. If None, uses the current directory.

    Returns:
        Path to <project_dir>/pubctl.toml.
    """
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME

