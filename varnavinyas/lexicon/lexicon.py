"""
Immutable lexicon index.

Maps a surface word to known-correct, known-incorrect (with a correction)
or unknown. Keys are kept in one sorted list, which is also the order they
are serialized in, with a hash index over it for exact lookups. Each key
carries a packed 32-bit metadata word: origin, gender and an index into
the correction table (0 = the word itself is correct).

A surface form with several etymologies (a homograph) is stored once per
reading. The first reading uses the bare word as key; later readings use
the word plus a short extension, so no reading overwrites another.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from varnavinyas.exceptions import LexiconError
from varnavinyas.lexicon import blob
from varnavinyas.lexicon.blob import CorrectionRecord
from varnavinyas.models import Gender, Origin

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Separator for homograph key extensions; sorts below every letter
HOMOGRAPH_SEPARATOR = "\x1f"

# Candidate window either side of the insertion point for near matches
SUGGEST_WINDOW = 256


def homograph_key(word: str, reading: int) -> str:
    """Key of the n-th reading of a word (reading 0 is the bare word)."""
    return word if reading == 0 else f"{word}{HOMOGRAPH_SEPARATOR}{reading}"


# =============================================================================
# DATA STRUCTURES
# =============================================================================


class LookupStatus(Enum):
    """Three-way lexicon verdict."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LexiconEntry:
    """One reading of a word."""

    word: str
    origin: Origin
    gender: Gender
    correction_index: int = 0

    @property
    def is_correct(self) -> bool:
        return self.correction_index == 0


@dataclass(frozen=True)
class Lookup:
    """
    Result of Lexicon.contains_or_correct().

    ``correction`` is the first listed alternative of the correction
    record; ``record`` keeps the full row with its rule citation.
    """

    status: LookupStatus
    correction: str | None = None
    record: CorrectionRecord | None = None

    @property
    def is_correct(self) -> bool:
        return self.status is LookupStatus.CORRECT

    @property
    def is_incorrect(self) -> bool:
        return self.status is LookupStatus.INCORRECT

    @property
    def is_known(self) -> bool:
        return self.status is not LookupStatus.UNKNOWN


_UNKNOWN = Lookup(LookupStatus.UNKNOWN)
_CORRECT = Lookup(LookupStatus.CORRECT)


# =============================================================================
# LEXICON
# =============================================================================


class Lexicon:
    """
    Read-only word index with correctness and correction lookup.

    Build one with LexiconBuilder or load a blob with Lexicon.from_bytes().
    Instances are never mutated after construction and can be shared
    across threads without locking.

    Example:
        >>> lex = default_lexicon()
        >>> lex.contains_or_correct("अत्याधिक").correction
        'अत्यधिक'
        >>> lex.contains("नेपाल")
        True
        >>> lex.contains_or_correct("कखगघ").status
        <LookupStatus.UNKNOWN: 'unknown'>
    """

    def __init__(self, keys: list[str], metas: list[int], corrections: list[CorrectionRecord]):
        if len(keys) != len(metas):
            raise LexiconError(f"{len(keys)} keys but {len(metas)} metadata values")
        if any(a >= b for a, b in zip(keys, keys[1:])):
            raise LexiconError("lexicon keys must be sorted and unique")

        self._keys = list(keys)
        self._metas = list(metas)
        self._corrections = list(corrections)
        self._index = {key: i for i, key in enumerate(self._keys)}
        # Surface words only, for prefix scans and near-match search
        self._words = [k for k in self._keys if HOMOGRAPH_SEPARATOR not in k]

        for key, meta in zip(self._keys, self._metas):
            if blob.unpack_meta(meta)[2] > len(self._corrections):
                raise LexiconError(f"correction index out of range for key {key!r}")

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def contains_or_correct(self, word: str) -> Lookup:
        """
        Look a word up.

        Returns:
            CORRECT for a known-correct word, INCORRECT with the correction
            for a word in the correction table, UNKNOWN otherwise. An
            unknown word is never reported as correct.
        """
        i = self._index.get(word)
        if i is None:
            return _UNKNOWN
        index = blob.unpack_meta(self._metas[i])[2]
        if index == 0:
            return _CORRECT
        record = self._corrections[index - 1]
        return Lookup(LookupStatus.INCORRECT, record.primary, record)

    def contains(self, word: str) -> bool:
        """True only for words known to be correct."""
        i = self._index.get(word)
        return i is not None and blob.unpack_meta(self._metas[i])[2] == 0

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def entries(self, word: str) -> list[LexiconEntry]:
        """Every reading of a surface word, in reading order."""
        result: list[LexiconEntry] = []
        reading = 0
        while True:
            i = self._index.get(homograph_key(word, reading))
            if i is None:
                break
            origin_code, gender_code, index = blob.unpack_meta(self._metas[i])
            result.append(
                LexiconEntry(word, Origin.from_code(origin_code), Gender.from_code(gender_code), index)
            )
            reading += 1
        return result

    def origin_of(self, word: str) -> Origin | None:
        """Origin of the first reading of a known-correct word."""
        entries = self.entries(word)
        if not entries or not entries[0].is_correct:
            return None
        return entries[0].origin

    def gender_of(self, word: str) -> Gender | None:
        """Gender of a known-correct word; the first reading that records one wins."""
        entries = [e for e in self.entries(word) if e.is_correct]
        if not entries:
            return None
        for entry in entries:
            if entry.gender is not Gender.NONE:
                return entry.gender
        return Gender.NONE

    def keys_with_prefix(self, prefix: str) -> list[str]:
        """Known words (correct or incorrect) starting with prefix, in sorted order."""
        start = bisect.bisect_left(self._words, prefix)
        result = []
        for word in self._words[start:]:
            if not word.startswith(prefix):
                break
            result.append(word)
        return result

    def suggest_nearby(self, word: str, max_distance: int = 2, limit: int = 5) -> list[str]:
        """
        Known-correct words within a small edit distance.

        Only a window of keys around the word's sorted position is scanned,
        so candidates that differ in their first letters are not found.

        Returns:
            Up to ``limit`` words ordered by distance, then alphabetically.
        """
        if not word:
            return []
        idx = bisect.bisect_left(self._words, word)
        window = self._words[max(0, idx - SUGGEST_WINDOW) : idx + SUGGEST_WINDOW]

        scored: list[tuple[int, str]] = []
        for candidate in window:
            if candidate == word or not self.contains(candidate):
                continue
            distance = bounded_levenshtein(word, candidate, max_distance)
            if distance is not None:
                scored.append((distance, candidate))
        scored.sort()
        return [candidate for _, candidate in scored[:limit]]

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        """Number of distinct surface words."""
        return len(self._words)

    def __iter__(self):
        return iter(self._words)

    @property
    def key_count(self) -> int:
        return len(self._keys)

    @property
    def correction_count(self) -> int:
        return len(self._corrections)

    def incorrect_words(self) -> list[tuple[str, CorrectionRecord]]:
        """Every (incorrect word, correction record) pair, sorted by word."""
        pairs = []
        for key, meta in zip(self._keys, self._metas):
            index = blob.unpack_meta(meta)[2]
            if index:
                pairs.append((key, self._corrections[index - 1]))
        return pairs

    def correct_words(self) -> list[str]:
        return [w for w in self._words if self.contains(w)]

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        return blob.encode(self._keys, self._metas, self._corrections)

    @classmethod
    def from_bytes(cls, data: bytes) -> Lexicon:
        """
        Load a lexicon from a blob.

        Raises:
            LexiconError: If the blob is corrupt or incompatible. Nothing is
                partially loaded.
        """
        keys, metas, corrections = blob.decode(data)
        return cls(keys, metas, corrections)

    def save(self, path: Path | str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())
        logger.info("Saved lexicon (%d keys) to %s", len(self._keys), path)

    @classmethod
    def load(cls, path: Path | str) -> Lexicon:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise LexiconError(f"cannot read lexicon blob {path}: {e}") from e
        lexicon = cls.from_bytes(data)
        logger.debug("Loaded lexicon (%d keys) from %s", lexicon.key_count, path)
        return lexicon


def bounded_levenshtein(a: str, b: str, max_distance: int) -> int | None:
    """Edit distance between a and b, or None once it must exceed max_distance."""
    if a == b:
        return 0
    if abs(len(a) - len(b)) > max_distance:
        return None

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a):
        current = [i + 1]
        for j, cb in enumerate(b):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j + 1] + 1, current[j] + 1, previous[j] + cost))
        if min(current) > max_distance:
            return None
        previous = current

    distance = previous[-1]
    return distance if distance <= max_distance else None
