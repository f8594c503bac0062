"""
Shared storage path utilities.

This module defines the canonical filesystem location of the
persisted event store.

Design goals:
- Single source of truth for storage paths
- Follows the platform's per-user configuration directory
- Zero side effects: nothing is created until the store is written
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from timesince.errors import StoreError

# ----------------------------------------------------------------------
# CONSTANTS
# ----------------------------------------------------------------------

APP_DIR_NAME = "timesince"
DATA_FILE_NAME = "data.json"


# ----------------------------------------------------------------------
# DIRECTORY RESOLUTION
# ----------------------------------------------------------------------

def _home(env: Mapping[str, str]) -> Optional[Path]:
    home = env.get("HOME") or env.get("USERPROFILE")
    if home:
        return Path(home)
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return None


def user_config_dir(
    env: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> Path:
    """
    Return the per-user configuration directory.

    Resolution order:
    - $XDG_CONFIG_HOME when set to an absolute path
    - %APPDATA% on Windows
    - ~/Library/Application Support on macOS
    - ~/.config everywhere else

    Raises StoreError when no home directory can be determined.
    """

    env = os.environ if env is None else env
    platform = sys.platform if platform is None else platform

    xdg = env.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)

    if platform.startswith("win"):
        appdata = env.get("APPDATA")
        if appdata:
            return Path(appdata)

    home = _home(env)
    if home is None:
        raise StoreError("Could not find config dir")

    if platform == "darwin":
        return home / "Library" / "Application Support"
    return home / ".config"


# ----------------------------------------------------------------------
# DATA FILE HELPERS
# ----------------------------------------------------------------------

def default_data_file(
    env: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> Path:
    """
    Return <user-config-dir>/timesince/data.json.

    This function DOES NOT create directories; the store does that
    lazily on its first write.
    """

    return user_config_dir(env, platform) / APP_DIR_NAME / DATA_FILE_NAME
