"""Home and model directory resolution.

Models are looked up under ``~/.singlepose/models`` by default.
Override with ``SINGLEPOSE_MODELS_DIR`` or ``SINGLEPOSE_HOME``.
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Return the singlepose home directory, creating it if needed.

    Resolution order:
        1. ``SINGLEPOSE_HOME`` environment variable.
        2. ``~/.singlepose`` (default).
    """
    home = os.environ.get("SINGLEPOSE_HOME")
    if home:
        home_dir = Path(home)
    else:
        home_dir = Path.home() / ".singlepose"
    home_dir.mkdir(parents=True, exist_ok=True)
    return home_dir


def get_models_dir() -> Path:
    """Return the models directory, creating it if it doesn't exist.

    Resolution order:
        1. ``SINGLEPOSE_MODELS_DIR`` (absolute, or relative to CWD).
        2. ``{home}/models`` where *home* is from :func:`get_home_dir`.
    """
    env_val = os.environ.get("SINGLEPOSE_MODELS_DIR")
    if env_val:
        models_dir = Path(env_val)
        if not models_dir.is_absolute():
            models_dir = Path.cwd() / models_dir
    else:
        models_dir = get_home_dir() / "models"
    models_dir.mkdir(parents=True, exist_ok=True)
    return models_dir


__all__ = ["get_home_dir", "get_models_dir"]
