"""
Progressive hint disclosure.

Definition hints unlock from three sources: elapsed time, number of submitted
guesses and manual "reveal next" actions. Letter hints unlock from elapsed
time and manual actions. Sources are merged with max(), never summed, and the
result is capped at the number of slots. Once a game ends every definition
is disclosed.

Each time the letter hint count grows, every listener receives one call per
newly unlocked slot, in slot order, with the board position to mark as hinted.
"""

from __future__ import annotations

import logging
import random
import re
import zlib
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

logger = logging.getLogger(__name__)

RevealListener = Callable[[int], None]

LETTER_ORDERS = ("left_to_right", "scattered")


def _ascending(values: Sequence[int]) -> bool:
    return all(a <= b for a, b in zip(values, values[1:]))


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class HintSchedule:
    """Unlock pacing for one game.

    Fields:
    - definition_time_thresholds: seconds after which definition slot k unlocks;
      its length is the number of definition slots
    - definition_guess_thresholds: submitted guesses after which slot k unlocks
      (may list fewer slots than the time thresholds)
    - letter_hint_start: seconds until the first letter hint
    - letter_hint_interval: seconds between further letter hints
    - letter_order: "left_to_right" or "scattered" (stable per target word)
    """

    definition_time_thresholds: Tuple[int, ...] = (0, 30, 60)
    definition_guess_thresholds: Tuple[int, ...] = (0, 2, 4)
    letter_hint_start: int = 90
    letter_hint_interval: int = 30
    letter_order: str = "left_to_right"

    def __post_init__(self) -> None:
        if not _ascending(self.definition_time_thresholds):
            raise ValueError("definition_time_thresholds must be ascending.")
        if not _ascending(self.definition_guess_thresholds):
            raise ValueError("definition_guess_thresholds must be ascending.")
        if len(self.definition_guess_thresholds) > len(self.definition_time_thresholds):
            raise ValueError("More guess thresholds than definition slots.")
        if self.letter_hint_start < 0 or self.letter_hint_interval <= 0:
            raise ValueError("Letter hint pacing must be non-negative with a positive interval.")
        if self.letter_order not in LETTER_ORDERS:
            raise ValueError(f"Unknown letter order {self.letter_order!r}; expected one of {LETTER_ORDERS}.")

    @property
    def definition_slots(self) -> int:
        return len(self.definition_time_thresholds)

    def letter_threshold(self, slot: int) -> int:
        """Seconds until letter slot (0-based) unlocks by time."""
        return self.letter_hint_start + slot * self.letter_hint_interval


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class HintDisclosure:
    """Read-only view of what has been disclosed so far."""

    unlocked_definition_count: int
    unlocked_letter_positions: FrozenSet[int] = field(default_factory=frozenset)


def count_reached(thresholds: Sequence[float], value: float) -> int:
    """Number of ascending thresholds that value has reached."""
    return sum(1 for t in thresholds if value >= t)


# PUBLIC_INTERFACE
def letter_hint_order(target: str, order: str = "left_to_right") -> List[int]:
    """Return the positions letter hints disclose, in slot order.

    Only alphabetic positions take letter hints; spaces and punctuation are
    shown from the start. "scattered" shuffles with a seed taken from the
    target itself, so the order is the same on every query and every process.
    """
    positions = [i for i, ch in enumerate(target) if ch.isalpha()]
    if order == "left_to_right":
        return positions
    if order == "scattered":
        rng = random.Random(zlib.crc32(target.lower().encode("utf-8")))
        rng.shuffle(positions)
        return positions
    raise ValueError(f"Unknown letter order {order!r}")


# PUBLIC_INTERFACE
def censor_definition(text: str, word: str) -> str:
    """Mask the target word (and words it prefixes) inside a definition."""
    censored = text
    for token in re.findall(r"[A-Za-z]+", word):
        if len(token) < 3:
            continue
        pattern = re.compile(rf"\b{re.escape(token)}\w*", re.IGNORECASE)
        censored = pattern.sub(lambda m: "_" * len(m.group(0)), censored)
    return censored


# PUBLIC_INTERFACE
class HintTimeline:
    """Tracks hint unlocks for a single target word.

    Counts are derived on every query from (elapsed seconds, guess count,
    manual counters, playing flag). The only stored state besides the manual
    counters is a high-water mark for definitions, the positions bound to
    letter slots so far and the cursor of letter slots already announced to
    listeners, so counts can never go down and no slot is announced twice.
    Positions the player has solved are passed to exclude_positions and never
    take a letter hint.
    """

    def __init__(self, target: str, schedule: Optional[HintSchedule] = None):
        self.schedule = schedule or HintSchedule()
        self.letter_positions: Tuple[int, ...] = tuple(letter_hint_order(target, self.schedule.letter_order))
        self._manual_definitions = 0
        self._manual_letters = 0
        self._definition_high = 0
        self._solved: Set[int] = set()
        self._hinted: List[int] = []
        self._notified = 0
        self._listeners: List[RevealListener] = []

    @property
    def definition_slots(self) -> int:
        return self.schedule.definition_slots

    @property
    def letter_slots(self) -> int:
        """Positions that can still take a hint plus those already hinted."""
        return sum(1 for p in self.letter_positions if p in self._hinted or p not in self._solved)

    def exclude_positions(self, positions: Iterable[int]) -> None:
        """Drop positions the player has solved from the letters still to hint."""
        self._solved.update(positions)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: RevealListener) -> None:
        self._listeners.append(listener)

    def clear_listeners(self) -> None:
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Derived counts
    # ------------------------------------------------------------------

    def definition_count(self, elapsed: float, guess_count: int, playing: bool = True) -> int:
        """Unlocked definition slots, 0..definition_slots."""
        slots = self.definition_slots
        if not playing:
            self._definition_high = slots
            return slots
        by_time = count_reached(self.schedule.definition_time_thresholds, elapsed)
        by_guesses = count_reached(self.schedule.definition_guess_thresholds, guess_count)
        merged = min(max(by_time, by_guesses, self._manual_definitions), slots)
        self._definition_high = max(self._definition_high, merged)
        return self._definition_high

    def letter_count(self, elapsed: float, playing: bool = True) -> int:
        """Unlocked letter slots; frozen once the game is over.

        Newly unlocked slots are bound to positions immediately, taking the
        next position in hint order that is neither hinted nor solved.
        """
        if not playing:
            return len(self._hinted)
        slots = self.letter_slots
        by_time = sum(1 for k in range(slots) if elapsed >= self.schedule.letter_threshold(k))
        merged = min(max(by_time, self._manual_letters), slots)
        if merged > len(self._hinted):
            candidates = [p for p in self.letter_positions if p not in self._hinted and p not in self._solved]
            self._hinted.extend(candidates[: merged - len(self._hinted)])
        return len(self._hinted)

    def disclosure(self, elapsed: float, guess_count: int, playing: bool = True) -> HintDisclosure:
        self.letter_count(elapsed, playing)
        return HintDisclosure(
            unlocked_definition_count=self.definition_count(elapsed, guess_count, playing),
            unlocked_letter_positions=frozenset(self._hinted),
        )

    def next_definition_in(self, elapsed: float, guess_count: int, playing: bool = True) -> Optional[float]:
        """Seconds until the next definition unlocks by time, None if none will."""
        if not playing:
            return None
        unlocked = self.definition_count(elapsed, guess_count, playing)
        thresholds = self.schedule.definition_time_thresholds
        if unlocked >= len(thresholds):
            return None
        return max(0.0, thresholds[unlocked] - elapsed)

    def next_letter_in(self, elapsed: float, playing: bool = True) -> Optional[float]:
        """Seconds until the next letter hint unlocks by time, None if none will."""
        if not playing:
            return None
        unlocked = self.letter_count(elapsed, playing)
        if unlocked >= self.letter_slots:
            return None
        return max(0.0, self.schedule.letter_threshold(unlocked) - elapsed)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def advance(self, elapsed: float, playing: bool = True) -> List[int]:
        """Announce letter slots unlocked since the last call.

        Returns the newly disclosed positions in slot order; each one has been
        passed to every listener exactly once.
        """
        unlocked = self.letter_count(elapsed, playing)
        fresh = self._hinted[self._notified:unlocked]
        self._notified = unlocked
        for position in fresh:
            for listener in list(self._listeners):
                listener(position)
        return fresh

    def reveal_next_definition(self, elapsed: float, guess_count: int, playing: bool = True) -> bool:
        """Manually unlock one more definition. Returns False when nothing changed."""
        if not playing:
            return False
        current = self.definition_count(elapsed, guess_count, playing)
        if current >= self.definition_slots:
            return False
        self._manual_definitions = current + 1
        self.definition_count(elapsed, guess_count, playing)
        logger.debug("Definition hint %d revealed manually", current + 1)
        return True

    def reveal_next_letter(self, elapsed: float, playing: bool = True) -> List[int]:
        """Manually unlock one more letter hint and announce it.

        Returns the positions announced by this call (empty when capped or
        the game is over).
        """
        if not playing:
            return []
        current = self.letter_count(elapsed, playing)
        if current >= self.letter_slots:
            return []
        self._manual_letters = current + 1
        return self.advance(elapsed, playing)
