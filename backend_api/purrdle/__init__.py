"""
Purrdle app package.

Re-exports the game-logic core so callers can import from purrdle directly,
e.g.:

    from purrdle import GameSession, evaluate
"""

# PUBLIC_INTERFACE
from .puzzles import (
    GameSession,
    GameStatus,
    HintTimeline,
    LetterState,
    WordCatalog,
    WordEntry,
    WordIdentifierCodec,
    daily_index,
    evaluate,
    random_index,
    resolve_word,
)

__all__ = [
    "GameSession",
    "GameStatus",
    "HintTimeline",
    "LetterState",
    "WordCatalog",
    "WordEntry",
    "WordIdentifierCodec",
    "daily_index",
    "evaluate",
    "random_index",
    "resolve_word",
]
