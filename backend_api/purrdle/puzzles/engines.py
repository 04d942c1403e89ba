from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Sequence


# PUBLIC_INTERFACE
class LetterState(str, Enum):
    """Display state of a single board cell."""

    EMPTY = "empty"
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    REVEALED = "revealed"
    HINTED = "hinted"


# Keyboard precedence: a letter keeps the best state any guess gave it.
_KEY_RANK = {LetterState.ABSENT: 0, LetterState.PRESENT: 1, LetterState.CORRECT: 2}


# PUBLIC_INTERFACE
def evaluate(guess: Sequence[str], target: Sequence[str]) -> List[LetterState]:
    """Compute per-letter feedback for guess against target (Wordle rules).

    - correct: same letter at the same position
    - present: letter occurs elsewhere in target and is not yet used up
    - absent: letter not in target, or all its occurrences are already matched

    Exact matches consume their letter first, so a letter repeated in the guess
    is never marked more often than it occurs in the target. Comparison is
    case-insensitive.

    Raises:
        ValueError: if guess and target lengths differ.
    """
    g = [ch.lower() for ch in guess]
    t = [ch.lower() for ch in target]
    n = len(t)
    if len(g) != n:
        raise ValueError(f"Guess length ({len(g)}) must match target length ({n}).")

    result: List[LetterState] = [LetterState.ABSENT] * n

    # First pass: mark corrects and reduce available pool
    remaining_counts: Dict[str, int] = {}
    for i in range(n):
        if g[i] == t[i]:
            result[i] = LetterState.CORRECT
        else:
            remaining_counts[t[i]] = remaining_counts.get(t[i], 0) + 1

    # Second pass: present where applicable
    for i in range(n):
        if result[i] is LetterState.CORRECT:
            continue
        ch = g[i]
        if remaining_counts.get(ch, 0) > 0:
            result[i] = LetterState.PRESENT
            remaining_counts[ch] -= 1

    return result


def feedback_to_compact(feedback: Iterable[LetterState]) -> str:
    """Compact representation (g=correct, y=present, b=absent)."""
    mapping = {LetterState.CORRECT: "g", LetterState.PRESENT: "y", LetterState.ABSENT: "b"}
    return "".join(mapping.get(x, "b") for x in feedback)


# PUBLIC_INTERFACE
def keyboard_states(rows: Iterable[tuple[str, Sequence[LetterState]]]) -> Dict[str, LetterState]:
    """Best known state per letter across evaluated (guess, feedback) rows.

    Non-alphabetic characters are ignored.
    """
    states: Dict[str, LetterState] = {}
    for guess, feedback in rows:
        for ch, state in zip(guess.lower(), feedback):
            if not ch.isalpha() or state not in _KEY_RANK:
                continue
            current = states.get(ch)
            if current is None or _KEY_RANK[state] > _KEY_RANK[current]:
                states[ch] = state
    return states
