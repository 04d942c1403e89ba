"""
App settings.

Everything lives in the ``PURRDLE`` dict of the Django settings module; keys
that are not set fall back to DEFAULTS.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict
from zoneinfo import ZoneInfo

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .puzzles.codec import DEFAULT_KEY
from .puzzles.hints import HintSchedule

DEFAULTS: Dict[str, Any] = {
    "DICTIONARY_PATH": str(Path(__file__).resolve().parent / "data" / "words.csv"),
    "MAX_ATTEMPTS": 6,
    "TIMEZONE": "UTC",
    "EPOCH": "2024-01-01",
    "DEFINITION_TIME_THRESHOLDS": [0, 30, 60],
    "DEFINITION_GUESS_THRESHOLDS": [0, 2, 4],
    "LETTER_HINT_START": 90,
    "LETTER_HINT_INTERVAL": 30,
    "LETTER_HINT_ORDER": "left_to_right",
    "CODEC_KEY": DEFAULT_KEY,
    "MAX_SESSIONS": 1000,
}


# PUBLIC_INTERFACE
def game_settings() -> Dict[str, Any]:
    """Return the effective PURRDLE settings (defaults overlaid with overrides)."""
    merged = dict(DEFAULTS)
    merged.update(getattr(settings, "PURRDLE", {}) or {})
    return merged


def hint_schedule() -> HintSchedule:
    cfg = game_settings()
    try:
        return HintSchedule(
            definition_time_thresholds=tuple(cfg["DEFINITION_TIME_THRESHOLDS"]),
            definition_guess_thresholds=tuple(cfg["DEFINITION_GUESS_THRESHOLDS"]),
            letter_hint_start=int(cfg["LETTER_HINT_START"]),
            letter_hint_interval=int(cfg["LETTER_HINT_INTERVAL"]),
            letter_order=cfg["LETTER_HINT_ORDER"],
        )
    except ValueError as e:
        raise ImproperlyConfigured(f"Invalid PURRDLE hint settings: {e}") from e


def epoch() -> date:
    try:
        return date.fromisoformat(str(game_settings()["EPOCH"]))
    except ValueError as e:
        raise ImproperlyConfigured(f"PURRDLE EPOCH must be YYYY-MM-DD: {e}") from e


def reference_timezone() -> ZoneInfo:
    return ZoneInfo(game_settings()["TIMEZONE"])
