from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, overload

logger = logging.getLogger(__name__)

DEFINITION_SLOTS = 3


class CatalogError(ValueError):
    """Raised when the word catalog cannot be built (missing file, no entries)."""


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class WordEntry:
    """A single playable word with its hint material.

    Fields:
    - word: the target text, as written in the dictionary (may contain spaces)
    - definitions: exactly three definition slots, unused slots are ""
    - quality: editorial score from the dictionary
    - example: optional usage sentence, disclosed once a game ends
    """

    word: str
    definitions: Tuple[str, ...]
    quality: float
    example: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.word)


# PUBLIC_INTERFACE
class WordCatalog(Sequence[WordEntry]):
    """Immutable, index-addressable list of word entries.

    Order is the dictionary's source order. A catalog always holds at least
    one entry; building an empty one raises CatalogError.
    """

    def __init__(self, entries: Iterable[WordEntry]):
        self._entries: Tuple[WordEntry, ...] = tuple(entries)
        if not self._entries:
            raise CatalogError("Word catalog must contain at least one entry.")

    @overload
    def __getitem__(self, index: int) -> WordEntry: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[WordEntry]: ...

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def get(self, index: int) -> Optional[WordEntry]:
        """Return the entry at index, or None when index is out of range."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def index_of(self, word: str) -> Optional[int]:
        """Return the index of the first entry matching word (case-insensitive)."""
        needle = (word or "").strip().lower()
        for i, entry in enumerate(self._entries):
            if entry.word.lower() == needle:
                return i
        return None


def _parse_quality(value: str) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _row_to_entry(row: List[str]) -> Optional[WordEntry]:
    # Missing trailing columns default to "".
    padded = list(row) + [""] * (6 - len(row))
    word, quality_raw, def1, def2, def3, example = (f.strip() for f in padded[:6])
    if not word:
        return None
    quality = _parse_quality(quality_raw)
    if quality is None:
        return None
    return WordEntry(
        word=word,
        definitions=(def1, def2, def3),
        quality=quality,
        example=example or None,
    )


# PUBLIC_INTERFACE
def parse_catalog(lines: Iterable[str], source: str = "<memory>") -> WordCatalog:
    """Build a catalog from header-prefixed comma-separated lines.

    Columns: word, quality, definition1, definition2, definition3[, example].
    Quoted fields may contain commas; a literal quote inside a quoted field is
    written as two consecutive quotes. Blank lines are skipped and the header
    row is discarded. Rows with an empty word or a non-numeric quality are
    skipped with a warning.

    Raises:
        CatalogError: if no usable rows remain.
    """
    reader = csv.reader(line for line in lines if line.strip())
    entries: List[WordEntry] = []
    header_seen = False
    for row in reader:
        if not header_seen:
            header_seen = True
            continue
        entry = _row_to_entry(row)
        if entry is None:
            logger.warning("Skipping malformed dictionary row %d in %s: %r", reader.line_num, source, row)
            continue
        entries.append(entry)

    if not entries:
        raise CatalogError(f"No usable word entries found in {source}")
    return WordCatalog(entries)


# PUBLIC_INTERFACE
def load_catalog(path: str | Path) -> WordCatalog:
    """Load the dictionary file at path into a WordCatalog.

    Raises:
        CatalogError: if the file is missing or holds no usable rows.
    """
    src = Path(path)
    if not src.exists():
        raise CatalogError(f"Dictionary file not found: {src}")

    with src.open("r", encoding="utf-8", newline="") as f:
        catalog = parse_catalog(f, source=str(src))
    logger.info("Loaded %s words from %s", len(catalog), src)
    return catalog
