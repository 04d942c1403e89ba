"""
Game-logic core.

Exports:
- WordEntry / WordCatalog and the dictionary loader
- daily_index and random_index word selection
- WordIdentifierCodec for shareable word identifiers
- evaluate and LetterState guess feedback
- HintSchedule / HintTimeline progressive hints
- GameSession and its state types
- resolve_word routing and the in-memory SessionRegistry

These modules are framework-agnostic and can be reused by views or services
without importing request objects.
"""

from .catalog import CatalogError, WordCatalog, WordEntry, load_catalog, parse_catalog
from .codec import WordIdentifierCodec
from .engines import LetterState, evaluate, keyboard_states
from .hints import HintDisclosure, HintSchedule, HintTimeline, censor_definition, letter_hint_order
from .registry import SessionNotFound, SessionRegistry
from .routing import MODES, ResolvedWord, resolve_word, route_from_path
from .selection import daily_index, day_number, random_index, today
from .session import GameSession, GameStatus, GuessRecord, InvalidSubmission, SessionClock, share_summary

__all__ = [
    "CatalogError",
    "WordCatalog",
    "WordEntry",
    "load_catalog",
    "parse_catalog",
    "WordIdentifierCodec",
    "LetterState",
    "evaluate",
    "keyboard_states",
    "HintDisclosure",
    "HintSchedule",
    "HintTimeline",
    "censor_definition",
    "letter_hint_order",
    "SessionNotFound",
    "SessionRegistry",
    "MODES",
    "ResolvedWord",
    "resolve_word",
    "route_from_path",
    "daily_index",
    "day_number",
    "random_index",
    "today",
    "GameSession",
    "GameStatus",
    "GuessRecord",
    "InvalidSubmission",
    "SessionClock",
    "share_summary",
]
