"""
Utilities for handling file paths and configuration locations.
"""

import os
from pathlib import Path


def create_dir(directory_path: Path) -> None:
    """Creates a directory (and its parents) if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "mumu-probe"
