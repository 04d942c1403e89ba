from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from .catalog import WordCatalog, WordEntry
from .codec import WordIdentifierCodec
from .selection import DEFAULT_EPOCH, daily_index, day_number, random_index, today

logger = logging.getLogger(__name__)

MODES = ("daily", "random", "specific")


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class ResolvedWord:
    """Target chosen for a route.

    Fields:
    - mode: daily, random or specific (specific falls back to daily)
    - index: catalog index
    - entry: the WordEntry at index
    - identifier: public identifier for a shareable link to this word
    - label: short text naming the puzzle in share summaries
    """

    mode: str
    index: int
    entry: WordEntry
    identifier: str
    label: str


# PUBLIC_INTERFACE
def route_from_path(path: Optional[str]) -> Tuple[str, Optional[str]]:
    """Map a client route fragment to (mode, identifier).

    "#/random" -> ("random", None), "#/w/<id>" -> ("specific", "<id>"),
    anything else -> ("daily", None).
    """
    fragment = (path or "").strip()
    if fragment.startswith("#"):
        fragment = fragment[1:]
    fragment = fragment.lstrip("/")
    if fragment == "random":
        return "random", None
    if fragment.startswith("w/"):
        return "specific", fragment[2:]
    return "daily", None


# PUBLIC_INTERFACE
def resolve_word(
    catalog: WordCatalog,
    codec: WordIdentifierCodec,
    mode: Optional[str] = "daily",
    identifier: Optional[str] = None,
    *,
    day: Optional[date] = None,
    epoch: date = DEFAULT_EPOCH,
    rng: Optional[random.Random] = None,
) -> ResolvedWord:
    """Resolve a route to its target word.

    An identifier that does not decode to a catalog entry, or an unknown mode,
    resolves to the daily word instead of failing.
    """
    requested = (mode or "daily").strip().lower()
    index: Optional[int] = None

    if requested == "random":
        index = random_index(len(catalog), rng)
    elif requested == "specific":
        index = codec.decode(identifier)
        if index is None or catalog.get(index) is None:
            logger.info("Word identifier %r did not resolve; using the daily word", identifier)
            index = None
    elif requested != "daily":
        logger.warning("Unknown mode %r; using the daily word", mode)

    if index is None:
        day = day or today()
        index = daily_index(len(catalog), day, epoch)
        return ResolvedWord(
            mode="daily",
            index=index,
            entry=catalog[index],
            identifier=codec.encode(index),
            label=f"#{day_number(day, epoch) + 1}",
        )

    identifier = codec.encode(index)
    return ResolvedWord(mode=requested, index=index, entry=catalog[index], identifier=identifier, label=identifier)
