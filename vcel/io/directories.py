"""XDG Base Directory support for vcel."""

import os
from pathlib import Path


def get_config_dir() -> Path:
    """Get the configuration directory for vcel.

    Returns ~/.config/vcel/ by default, or respects $XDG_CONFIG_HOME if set.
    Unlike a data directory this is only read, so it is not created.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "vcel"
    return Path.home() / ".config" / "vcel"


def get_default_config_path() -> Path:
    return get_config_dir() / "vcel.yaml"
