from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .catalog import WordEntry
from .engines import LetterState, evaluate, keyboard_states
from .hints import HintDisclosure, HintSchedule, HintTimeline, censor_definition

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 6

SHARE_SYMBOLS = {
    LetterState.CORRECT: "\U0001F7E9",  # green square
    LetterState.PRESENT: "\U0001F7E8",  # yellow square
    LetterState.ABSENT: "⬜",  # white square
}


class InvalidSubmission(ValueError):
    """A guess was rejected; no attempt was consumed and no state changed."""


# PUBLIC_INTERFACE
class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class GuessRecord:
    """A submitted word and its per-position feedback."""

    word: str
    feedback: Tuple[LetterState, ...]

    @property
    def is_correct(self) -> bool:
        return all(state is LetterState.CORRECT for state in self.feedback)


# PUBLIC_INTERFACE
class SessionClock:
    """Elapsed seconds since start; stops advancing once stopped.

    Parameters:
        time_source: monotonic seconds provider (injectable for tests)
    """

    def __init__(self, time_source: Callable[[], float] = time.monotonic):
        self._time = time_source
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._time()

    def stop(self) -> None:
        if self._started_at is not None and self._stopped_at is None:
            self._stopped_at = self._time()

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else self._time()
        return max(0.0, end - self._started_at)


# PUBLIC_INTERFACE
def share_summary(
    guesses: Sequence[GuessRecord],
    status: GameStatus,
    max_attempts: int,
    label: str = "",
    positions: Optional[Sequence[int]] = None,
    hints: Optional[HintDisclosure] = None,
) -> str:
    """Plain-text result grid for sharing.

    One row of squares per guess (only the given positions, default all),
    followed by a "guessed in X/Y" line; a lost game shows "X" for the count.
    """
    lines = [f"Purrdle {label}".rstrip()]
    for record in guesses:
        cells = positions if positions is not None else range(len(record.feedback))
        lines.append("".join(SHARE_SYMBOLS.get(record.feedback[i], SHARE_SYMBOLS[LetterState.ABSENT]) for i in cells))

    if status is GameStatus.WON:
        lines.append(f"guessed in {len(guesses)}/{max_attempts}")
    elif status is GameStatus.LOST:
        lines.append(f"guessed in X/{max_attempts}")
    else:
        lines.append(f"in progress {len(guesses)}/{max_attempts}")

    if hints is not None:
        letters = len(hints.unlocked_letter_positions)
        lines.append(
            f"hints: {hints.unlocked_definition_count} "
            f"definition{'s' if hints.unlocked_definition_count != 1 else ''}, "
            f"{letters} letter{'s' if letters != 1 else ''}"
        )
    return "\n".join(lines)


# PUBLIC_INTERFACE
class GameSession:
    """One play-through of a target word.

    Accepts letter/delete/submit commands, evaluates guesses, tracks status
    and drives the hint timeline from its own clock. Spaces and punctuation in
    the target are shown from the start and never typed; the input buffer
    covers letter positions only.

    The session is not thread-safe by itself; callers sharing it across
    threads hold ``lock`` around every command and read.

    Parameters:
        entry: target WordEntry
        mode: route the target was resolved from (daily, random, specific)
        identifier: public word identifier, if known
        label: puzzle name used in the share summary (defaults to identifier)
        max_attempts: guesses allowed (>= 1)
        schedule: hint pacing
        clock: session clock, started on construction
    """

    def __init__(
        self,
        entry: WordEntry,
        *,
        mode: str = "daily",
        identifier: Optional[str] = None,
        label: Optional[str] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        schedule: Optional[HintSchedule] = None,
        clock: Optional[SessionClock] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.entry = entry
        self.target = entry.word.lower()
        self.mode = mode
        self.identifier = identifier
        self.label = label or identifier or mode
        self.max_attempts = max_attempts
        self.letter_positions: Tuple[int, ...] = tuple(i for i, ch in enumerate(self.target) if ch.isalpha())
        self.fixed_positions = frozenset(range(len(self.target))) - frozenset(self.letter_positions)

        self.guesses: List[GuessRecord] = []
        self.buffer: List[str] = []
        self.status = GameStatus.PLAYING
        self.hinted_positions: List[int] = []
        self.hints_used: Optional[HintDisclosure] = None
        self.closed = False
        self.lock = threading.RLock()

        self.timeline = HintTimeline(self.target, schedule)
        self.timeline.add_listener(self._mark_hinted)
        self.clock = clock or SessionClock()
        self.clock.start()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def playing(self) -> bool:
        return self.status is GameStatus.PLAYING and not self.closed

    @property
    def elapsed(self) -> float:
        return self.clock.elapsed

    @property
    def attempts_used(self) -> int:
        return len(self.guesses)

    @property
    def word_length(self) -> int:
        return len(self.target)

    def _mark_hinted(self, position: int) -> None:
        if position not in self.hinted_positions:
            self.hinted_positions.append(position)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_letter(self, letter: str) -> bool:
        """Append a letter to the input buffer. Returns False when ignored."""
        if not self.playing:
            return False
        if not isinstance(letter, str) or len(letter) != 1 or not (letter.isascii() and letter.isalpha()):
            return False
        if len(self.buffer) >= len(self.letter_positions):
            return False
        self.buffer.append(letter.lower())
        return True

    def delete_letter(self) -> bool:
        """Remove the last buffered letter. Returns False when ignored."""
        if not self.playing or not self.buffer:
            return False
        self.buffer.pop()
        return True

    def _letters_from(self, guess: str) -> List[str]:
        fixed_chars = {self.target[i] for i in self.fixed_positions}
        letters = [ch for ch in guess.strip().lower() if ch not in fixed_chars and not ch.isspace()]
        if not all(ch.isascii() and ch.isalpha() for ch in letters):
            raise InvalidSubmission("Guess must contain only letters.")
        return letters

    def _assemble(self, letters: Sequence[str]) -> str:
        chars = list(self.target)
        for pos, ch in zip(self.letter_positions, letters):
            chars[pos] = ch
        return "".join(chars)

    def submit_guess(self, guess: Optional[str] = None) -> GuessRecord:
        """Evaluate the buffer (or guess, if given) as the next attempt.

        Raises:
            InvalidSubmission: if the game is over or the guess has the wrong
                               number of letters; nothing is mutated.
        """
        if self.closed:
            raise InvalidSubmission("Session is closed.")
        if self.status is not GameStatus.PLAYING:
            raise InvalidSubmission("Game is already over.")
        letters = list(self.buffer) if guess is None else self._letters_from(guess)
        needed = len(self.letter_positions)
        if len(letters) != needed:
            raise InvalidSubmission(f"Guess must have {needed} letters.")

        self.tick()
        seen = self.timeline.disclosure(self.elapsed, len(self.guesses), True)
        word = self._assemble(letters)
        record = GuessRecord(word=word, feedback=tuple(evaluate(word, self.target)))
        self.guesses.append(record)
        self.buffer.clear()
        self.timeline.exclude_positions(i for i, state in enumerate(record.feedback) if state is LetterState.CORRECT)

        if word == self.target:
            self._finish(GameStatus.WON, seen)
        elif len(self.guesses) >= self.max_attempts:
            self._finish(GameStatus.LOST, seen)
        return record

    def _finish(self, status: GameStatus, hints_seen: HintDisclosure) -> None:
        # hints_seen: what was disclosed when the final guess was made
        self.clock.stop()
        self.hints_used = hints_seen
        self.status = status
        self.timeline.definition_count(self.clock.elapsed, len(self.guesses), playing=False)
        logger.info("Session finished: %s in %d/%d", status.value, len(self.guesses), self.max_attempts)

    def tick(self) -> List[int]:
        """Bring letter hints up to date with the clock. Returns newly hinted positions."""
        if self.closed:
            return []
        return self.timeline.advance(self.elapsed, self.playing)

    def reveal_definition(self) -> bool:
        if not self.playing:
            return False
        return self.timeline.reveal_next_definition(self.elapsed, len(self.guesses), True)

    def reveal_letter(self) -> List[int]:
        if not self.playing:
            return []
        return self.timeline.reveal_next_letter(self.elapsed, True)

    def close(self) -> None:
        """Stop the clock and detach listeners; later ticks and commands are ignored."""
        if self.closed:
            return
        self.closed = True
        self.clock.stop()
        self.timeline.clear_listeners()

    # ------------------------------------------------------------------
    # Views for the presentation layer
    # ------------------------------------------------------------------

    def disclosure(self) -> HintDisclosure:
        return self.timeline.disclosure(self.elapsed, len(self.guesses), self.status is GameStatus.PLAYING)

    def visible_definitions(self) -> List[str]:
        """Unlocked definitions; censored until the game ends."""
        count = self.disclosure().unlocked_definition_count
        shown = list(self.entry.definitions[:count])
        if self.status is GameStatus.PLAYING:
            shown = [censor_definition(text, self.entry.word) for text in shown]
        return shown

    def visible_example(self) -> Optional[str]:
        if self.status is GameStatus.PLAYING:
            return None
        return self.entry.example

    def current_row(self) -> List[Tuple[str, LetterState]]:
        """Cells of the row being typed: buffer letters, fixed characters and hints."""
        hinted = set(self.hinted_positions)
        row: List[Tuple[str, LetterState]] = []
        typed = 0
        for i, ch in enumerate(self.target):
            if i in self.fixed_positions:
                row.append((ch, LetterState.REVEALED))
                continue
            if typed < len(self.buffer):
                row.append((self.buffer[typed], LetterState.EMPTY))
            elif i in hinted:
                row.append((ch, LetterState.HINTED))
            else:
                row.append(("", LetterState.EMPTY))
            typed += 1
        return row

    def solution_row(self) -> Optional[List[Tuple[str, LetterState]]]:
        """Full target once the game is over: found cells correct, the rest revealed."""
        if self.status is GameStatus.PLAYING:
            return None
        found = {
            i for record in self.guesses for i, state in enumerate(record.feedback) if state is LetterState.CORRECT
        }
        return [
            (ch, LetterState.CORRECT if i in found and i not in self.fixed_positions else LetterState.REVEALED)
            for i, ch in enumerate(self.target)
        ]

    def keyboard(self) -> Dict[str, LetterState]:
        return keyboard_states((record.word, record.feedback) for record in self.guesses)

    def share_summary(self, label: Optional[str] = None) -> str:
        return share_summary(
            self.guesses,
            self.status,
            self.max_attempts,
            label=label if label is not None else self.label,
            positions=self.letter_positions,
            hints=self.hints_used,
        )
