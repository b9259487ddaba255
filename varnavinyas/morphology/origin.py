"""
Word-origin classification.

The origin class (तत्सम, तद्भव, देशज, आगन्तुक) decides which spelling rules
a word is eligible for. Classification consults, in order:

1. the curated override table (``data/origins.yaml``),
2. the origin recorded in the lexicon,
3. structural heuristics over the spelling itself.

The heuristics are deliberately coarse. Sanskrit-only letters and clusters
point to a direct borrowing, nukta letters to a foreign loanword, and a few
verbal and genitive endings to an adapted borrowing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from varnavinyas.lexicon import Lexicon, default_lexicon
from varnavinyas.models import Origin, OriginSource
from varnavinyas.resources import load_table
from varnavinyas.script import NUKTA, VISARGA, aksharas, is_nukta_form, normalize

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

OVERRIDE_CONFIDENCE = 1.0
LEXICON_CONFIDENCE = 0.9
HEURISTIC_CONFIDENCE = 0.6

# Letters and clusters that occur (almost) only in direct Sanskrit borrowings
TATSAM_MARKERS = ("ऋ", "ृ", "ष", VISARGA, "क्ष", "ज्ञ", "त्र", "त्त")

# Verbal infinitive, participle and genitive endings of adapted words
TADBHAV_ENDINGS = ("नु", "ने", "को")
RETROFLEX_BEFORE_FINAL = frozenset("ठडढ")


@dataclass(frozen=True)
class OriginDecision:
    """
    An origin class with where it came from.

    Attributes:
        origin: The decided class.
        source: Override table, lexicon or heuristic.
        confidence: 1.0 for overrides, 0.9 for lexicon entries, 0.6 for heuristics.
    """

    origin: Origin
    source: OriginSource
    confidence: float

    @property
    def is_heuristic(self) -> bool:
        return self.source is OriginSource.HEURISTIC


@lru_cache(maxsize=1)
def _overrides() -> dict[str, Origin]:
    table = load_table("origins")
    overrides: dict[str, Origin] = {}
    for origin in Origin:
        for word in table.get(origin.value) or []:
            overrides[normalize(str(word))] = origin
    return overrides


def heuristic_origin(word: str) -> Origin:
    """
    Guess an origin from spelling alone.

    Example:
        >>> heuristic_origin("कृषि")
        <Origin.TATSAM: 'tatsam'>
        >>> heuristic_origin("मीठो")
        <Origin.TADBHAV: 'tadbhav'>
    """
    if not word:
        return Origin.DESHAJ
    if any(is_nukta_form(c) for c in word) or NUKTA in word:
        return Origin.AAGANTUK
    if any(marker in word for marker in TATSAM_MARKERS):
        return Origin.TATSAM
    if word.endswith(TADBHAV_ENDINGS):
        return Origin.TADBHAV
    final = aksharas(word)[-1]
    if len(final) >= 2 and final[-1] in ("ो", "ा") and final[-2] in RETROFLEX_BEFORE_FINAL:
        return Origin.TADBHAV
    return Origin.DESHAJ


def classify_with_provenance(word: str, lexicon: Lexicon | None = None) -> OriginDecision:
    """
    Classify a word's origin and report how the decision was made.

    Args:
        word: Word to classify.
        lexicon: Lexicon to consult. Defaults to the shared lexicon.

    Returns:
        OriginDecision; never raises for any string input.
    """
    word = normalize(word).strip()
    override = _overrides().get(word)
    if override is not None:
        return OriginDecision(override, OriginSource.OVERRIDE, OVERRIDE_CONFIDENCE)

    if lexicon is None:
        lexicon = default_lexicon()
    known = lexicon.origin_of(word)
    if known is not None:
        return OriginDecision(known, OriginSource.LEXICON, LEXICON_CONFIDENCE)

    return OriginDecision(heuristic_origin(word), OriginSource.HEURISTIC, HEURISTIC_CONFIDENCE)


def classify(word: str, lexicon: Lexicon | None = None) -> Origin:
    """Origin class of a word."""
    return classify_with_provenance(word, lexicon).origin
