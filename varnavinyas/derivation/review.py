"""Words with two institutionally accepted spellings. They are never flagged."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from varnavinyas.exceptions import VarnavinyasError
from varnavinyas.resources import load_table
from varnavinyas.script import normalize


@dataclass(frozen=True)
class ReviewEntry:
    word: str
    alternatives: tuple[str, ...]
    note: str


@lru_cache(maxsize=1)
def _review_table() -> dict[str, ReviewEntry]:
    entries: dict[str, ReviewEntry] = {}
    for row in load_table("review").get("review") or []:
        try:
            word = normalize(row["word"])
            entry = ReviewEntry(
                word,
                tuple(normalize(a) for a in row.get("alternatives") or ()),
                row.get("note", ""),
            )
        except (KeyError, TypeError) as e:
            raise VarnavinyasError(f"malformed review entry: {row!r}") from e
        entries[word] = entry
    return entries


def review_entry(word: str) -> ReviewEntry | None:
    """The needs-review entry for a word, if it has one."""
    return _review_table().get(word)
