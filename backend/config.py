"""
Runtime settings, read from the environment (or a ``.env`` file).

    SHOW_DESIGN_STORE_PATH   file backing the local key-value store
    SHOW_DESIGN_STORAGE_KEY  key under which the drafts collection is kept
    SHOW_DESIGN_LOCK_SIGNED  "true" (default) locks designs once signed
    SHOW_DESIGN_LOG_LEVEL    level name for the app's loggers
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_STORE_PATH = "show_designs.json"
DEFAULT_STORAGE_KEY = "bandShows"

_TRUTHY = {"1", "true", "yes", "on"}

_logging_configured = False


def store_path() -> str:
    return os.environ.get("SHOW_DESIGN_STORE_PATH", DEFAULT_STORE_PATH)


def storage_key() -> str:
    return os.environ.get("SHOW_DESIGN_STORAGE_KEY", DEFAULT_STORAGE_KEY)


def lock_signed() -> bool:
    """Whether a signed design is read-only once saved."""
    return os.environ.get("SHOW_DESIGN_LOCK_SIGNED", "true").strip().lower() in _TRUTHY


def log_level() -> int:
    name = os.environ.get("SHOW_DESIGN_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging() -> None:
    """Attach a stream handler once per process; Streamlit reruns the script on every click."""
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _logging_configured = True
