# scorekeeper/config.py
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the working directory (GEMINI_API_KEY etc.)
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


# -------------------------
# Gemini analysis
# -------------------------
# The SDK reads GEMINI_API_KEY / GOOGLE_API_KEY itself.
GEMINI_MODEL_NAME: str = _get_env("GEMINI_MODEL_NAME", "gemini-2.5-flash")
ANALYSIS_TIMEOUT_SECONDS: int = _get_env_int("SCOREKEEPER_ANALYSIS_TIMEOUT_SECONDS", 20)

# -------------------------
# Scoring / storage
# -------------------------
DATA_DIR: Path = Path(_get_env("SCOREKEEPER_DATA_DIR", str(Path.home() / ".scorekeeper")))
UNDO_CAPACITY: int = _get_env_int("SCOREKEEPER_UNDO_CAPACITY", 50)


def validate_config() -> None:
    if UNDO_CAPACITY <= 0:
        raise RuntimeError("SCOREKEEPER_UNDO_CAPACITY must be positive")
    if ANALYSIS_TIMEOUT_SECONDS <= 0:
        raise RuntimeError("SCOREKEEPER_ANALYSIS_TIMEOUT_SECONDS must be positive")
