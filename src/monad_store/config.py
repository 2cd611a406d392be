"""
Global configuration for the auxiliary node store.

Resolves the application home directory and the default locations of the
data directory and config file. These apply across all subspecs.
"""

import os
import sys
from pathlib import Path


def app_data_dir(app_name: str) -> Path:
    """
    Return the per-user application data directory for the current OS.

    - Windows: %LOCALAPPDATA%\\<App> (falls back to %APPDATA%)
    - macOS: ~/Library/Application Support/<App>
    - Others: ~/.<app>

    Args:
        app_name: Application name, e.g. "monad".

    Returns:
        Absolute path of the directory. It is not created.
    """
    app_name = app_name.lstrip(".")
    home = Path.home()

    if sys.platform == "win32":
        app_data = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / app_name.capitalize()
        return home / app_name.capitalize()

    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / app_name.capitalize()

    return home / f".{app_name.lower()}"


MONAD_HOME_DIR = Path(os.environ.get("MONAD_HOME") or app_data_dir("monad"))
"""Application home directory. Overridden by the MONAD_HOME environment variable."""

DEFAULT_DATA_DIR = MONAD_HOME_DIR / "data"
"""Root directory holding one sub-directory per network."""

DEFAULT_CONFIG_FILE = MONAD_HOME_DIR / "monad.yaml"
"""YAML config file read when no --configfile is given."""
