"""Settings directory and JSON helpers shared by the persistence modules."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

logger = logging.getLogger(__name__)

HOME_ENV = "SOLITAIRE_KIT_HOME"


def _settings_dir() -> str:
    # SOLITAIRE_KIT_HOME wins; then %APPDATA% on Windows, else ~/.solitaire_kit
    override = os.environ.get(HOME_ENV)
    if override:
        return override
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "SolitaireKit")
    return os.path.join(os.path.expanduser("~"), ".solitaire_kit")


def settings_path(filename: str) -> str:
    return os.path.join(_settings_dir(), filename)


def _safe_write_json(path: str, data: Any) -> bool:
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except (OSError, TypeError, ValueError) as e:
        logger.warning("failed to save %s: %s", path, e)
        return False
    return True


def _safe_read_json(path: str) -> Optional[Any]:
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("failed to load %s: %s", path, e)
        return None
