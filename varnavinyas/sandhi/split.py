"""
Splitting a joined word back into candidate morpheme pairs.

Every candidate comes from undoing one rule at one position and is kept
only if apply() on the pair reproduces the word exactly, so each
reported split is a real inverse of the joining rules.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from varnavinyas.exceptions import SandhiError
from varnavinyas.lexicon import Lexicon, default_lexicon
from varnavinyas.sandhi.consonant import ASSIMILATION, FINAL_M
from varnavinyas.sandhi.core import apply
from varnavinyas.sandhi.result import SandhiResult
from varnavinyas.sandhi.visarga import RETAINED_BEFORE
from varnavinyas.sandhi.vowel import A_CLASS_FUSION
from varnavinyas.script import (
    ANUSVARA,
    HALANTA,
    PANCHHAM,
    VISARGA,
    VOICED_CONSONANTS,
    is_matra,
    is_stop,
    matra_to_svar,
    normalize,
)

logger = logging.getLogger(__name__)

# Fused vowel sign -> initial vowels of the second morpheme it can come from
FUSED_FROM: dict[str, list[str]] = {}
for _initial, (_full, _sign, _) in A_CLASS_FUSION.items():
    FUSED_FROM.setdefault(_sign, []).append(_initial)
    FUSED_FROM.setdefault(_full, []).append(_initial)

I_FINALS = ("ि", "ी")
U_FINALS = ("ु", "ू")
A_FINALS = ("", "ा", "अ", "आ")
NASALS = frozenset(PANCHHAM.values())

Pair = tuple[str, str]


def _rights(word: str, pos: int) -> Iterator[str]:
    """Second morphemes whose initial vowel left ``word[pos:]`` behind."""
    if pos < len(word) and is_matra(word[pos]):
        yield matra_to_svar(word[pos]) + word[pos + 1 :]
    yield "अ" + word[pos:]


# =============================================================================
# INVERSE CANDIDATES
# =============================================================================


def _plain_boundaries(word: str) -> Iterator[Pair]:
    # retained visarga, gemination and the उत्स/उत्थ/उत्प joins are plain concatenation
    for i in range(1, len(word)):
        yield word[:i], word[i:]


def _visarga_candidates(word: str) -> Iterator[Pair]:
    for k in range(1, len(word)):
        c = word[k]
        nxt = word[k + 1] if k + 1 < len(word) else ""
        if c == "र":
            if nxt == HALANTA and k + 2 < len(word) and word[k + 2] in VOICED_CONSONANTS:
                yield word[:k] + VISARGA, word[k + 2 :]
            else:
                for right in _rights(word, k + 1):
                    yield word[:k] + VISARGA, right
        elif c == "ो" and nxt in VOICED_CONSONANTS:
            yield word[:k] + VISARGA, word[k + 1 :]
        elif c == VISARGA and nxt in RETAINED_BEFORE:
            yield word[: k + 1], word[k + 1 :]


def _consonant_candidates(word: str) -> Iterator[Pair]:
    for (first, initial), (merged, _) in ASSIMILATION.items():
        if word.startswith(merged):
            yield first, initial + word[len(merged) :]
    for k in range(len(word) - 1):
        if word[k] == ANUSVARA:
            yield word[:k] + FINAL_M, word[k + 1 :]
        elif word[k] in NASALS and word[k + 1] == HALANTA and k + 2 < len(word) and is_stop(word[k + 2]):
            yield word[:k] + FINAL_M, word[k + 2 :]


def _vowel_candidates(word: str) -> Iterator[Pair]:
    for k, c in enumerate(word):
        head, tail = word[:k], word[k + 1 :]

        # दीर्घ i/u
        if c in ("ी", "ई"):
            for left in ("ि", "ी", "इ", "ई"):
                for initial in ("इ", "ई"):
                    yield head + left, initial + tail
        elif c in ("ू", "ऊ"):
            for left in ("ु", "ू", "उ", "ऊ"):
                for initial in ("उ", "ऊ"):
                    yield head + left, initial + tail

        # यण्; an empty head means the first morpheme was a lone vowel
        if c in ("य", "व"):
            signs = I_FINALS if c == "य" else U_FINALS
            letters = ("इ", "ई") if c == "य" else ("उ", "ऊ")
            if head.endswith(HALANTA):
                lefts = [head[:-1] + s for s in signs]
            else:
                lefts = [head + v for v in letters]
            for left in lefts:
                for right in _rights(word, k + 1):
                    yield left, right

        # अयादि
        if c in ("य", "व") and k > 0:
            if c == "य":
                lefts = [head + "े", head[:-1] + "ै", head[:-1] + "ए", head[:-1] + "ऐ"]
            else:
                lefts = [head + "ो", head[:-1] + "ौ", head[:-1] + "ओ", head[:-1] + "औ"]
            for left in lefts:
                if left:
                    for right in _rights(word, k + 1):
                        yield left, right

        # दीर्घ / गुण / वृद्धि after अ or आ
        fused = c
        rest_at = k + 1
        if word[k : k + 2] == "र" + HALANTA:
            fused, rest_at = "र्", k + 2
        elif k == 0 and word.startswith("अर्"):
            fused, rest_at = "अर्", 3
        for initial in FUSED_FROM.get(fused, ()):
            right = initial + word[rest_at:]
            for final in A_FINALS:
                left = head + final if head else final
                if left:
                    yield left, right


# =============================================================================
# RESULT
# =============================================================================


class SandhiSplits:
    """
    Lazily computed, restartable sequence of (left, right, result) splits.

    Nothing is computed until the first iteration; every ``iter()`` starts
    again from the best candidate. Candidates where both halves are known
    words come first, then shorter left halves.

    Example:
        >>> splits = split("अत्यधिक")
        >>> ("अति", "अधिक") in [(l, r) for l, r, _ in splits]
        True
    """

    def __init__(self, word: str, lexicon: Lexicon | None = None):
        self.word = normalize(word)
        self._lexicon = lexicon
        self._results: list[tuple[str, str, SandhiResult]] | None = None

    def _compute(self) -> list[tuple[str, str, SandhiResult]]:
        lexicon = self._lexicon if self._lexicon is not None else default_lexicon()
        seen: set[Pair] = set()
        found: list[tuple[str, str, SandhiResult]] = []
        generators = (
            _plain_boundaries(self.word),
            _visarga_candidates(self.word),
            _consonant_candidates(self.word),
            _vowel_candidates(self.word),
        )
        for candidates in generators:
            for left, right in candidates:
                if not left or not right or (left, right) in seen:
                    continue
                seen.add((left, right))
                try:
                    result = apply(left, right)
                except SandhiError:
                    continue
                if result.output == self.word:
                    found.append((left, right, result))

        found.sort(
            key=lambda s: (not (lexicon.contains(s[0]) and lexicon.contains(s[1])), len(s[0]), s[0], s[1])
        )
        logger.debug("split %s: %d candidate(s) from %d tried", self.word, len(found), len(seen))
        return found

    @property
    def results(self) -> list[tuple[str, str, SandhiResult]]:
        if self._results is None:
            self._results = self._compute()
        return self._results

    def __iter__(self) -> Iterator[tuple[str, str, SandhiResult]]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __bool__(self) -> bool:
        return bool(self.results)

    def pairs(self) -> list[Pair]:
        return [(left, right) for left, right, _ in self.results]

    def best(self) -> tuple[str, str, SandhiResult] | None:
        return self.results[0] if self.results else None


def split(word: str, lexicon: Lexicon | None = None) -> SandhiSplits:
    """
    All ways ``word`` can be read as two morphemes joined by sandhi.

    Args:
        word: A joined surface form.
        lexicon: Used for ranking only. Defaults to the shared lexicon.

    Returns:
        A lazy, finite, restartable sequence; empty when no split exists.
    """
    return SandhiSplits(word, lexicon)
