"""
Prefix / root / suffix decomposition.

Suffixes are peeled off the end first (case markers, plural markers,
verbal endings, and derivational endings when the remaining stem is a
known word). Prefixes are then taken off the front of the stem, either
by matching a known surface form (उल्, सं, पुनर् ...) whose canonical
prefix rejoins through sandhi, or by a sandhi split whose left half is a
vowel-final prefix (अति + अधिक).

A decomposition is only returned if rejoining it reproduces the word
exactly; anything else falls back to the whole word as root. This module
never raises for string input.
"""

from __future__ import annotations

import logging

from varnavinyas.lexicon import Lexicon, default_lexicon
from varnavinyas.models import Morpheme, OriginSource
from varnavinyas.morphology.origin import classify_with_provenance
from varnavinyas.sandhi import join, split
from varnavinyas.script import is_svar, is_vyanjan, normalize

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

MAX_PREFIXES = 2
MIN_ROOT = 2
MIN_ROOT_AFTER_SHORT_PREFIX = 4

# (canonical, surface) pairs; assimilated surfaces rejoin through sandhi
PREFIX_FORMS = (
    ("प्र", "प्र"),
    ("उत्", "उल्"),
    ("उत्", "उच्"),
    ("उत्", "उत्"),
    ("सम्", "सम्"),
    ("सम्", "सं"),
    ("अभि", "अभि"),
    ("अनु", "अनु"),
    ("परि", "परि"),
    ("वि", "वि"),
    ("निर्", "निर्"),
    ("निः", "निः"),
    ("निस्", "निस्"),
    ("दुर्", "दुर्"),
    ("पुनः", "पुनः"),
    ("पुनः", "पुनर्"),
    ("अ", "अ"),
)

# Prefixes that fuse with a vowel-initial root and only show up in a split
SPLIT_PREFIXES = frozenset(
    {"अति", "प्रति", "अधि", "उप", "सु", "अनु", "परि", "अभि", "प्र", "पुनः", "निः", "दुः"}
)

CASE_SUFFIXES = (
    "लाई",
    "देखि",
    "सम्म",
    "बाट",
    "भन्दा",
    "सँग",
    "तिर",
    "भित्र",
    "मा",
    "ले",
    "को",
    "का",
    "की",
)
PLURAL_SUFFIXES = ("हरू", "हरु")
VERBAL_SUFFIXES = ("एको", "ेको", "ेका", "ेकी", "नु", "ने")

# Only stripped when the remaining stem is a known word
DERIVATIONAL_SUFFIXES = ("ीकरण", "ीय", "िक", "ित", "ता", "ेली", "ी")

_INFLECTIONAL = tuple(
    sorted(CASE_SUFFIXES + PLURAL_SUFFIXES + VERBAL_SUFFIXES, key=len, reverse=True)
)
_DERIVATIONAL = tuple(sorted(DERIVATIONAL_SUFFIXES, key=len, reverse=True))


# =============================================================================
# SUFFIXES
# =============================================================================


def _strip_suffix(stem: str, lexicon: Lexicon) -> tuple[str, str] | None:
    known = lexicon.contains(stem)
    for suffix in _INFLECTIONAL:
        if not stem.endswith(suffix):
            continue
        rest = stem[: -len(suffix)]
        if len(rest) < MIN_ROOT:
            continue
        if known and not lexicon.contains(rest):
            continue
        return rest, suffix
    for suffix in _DERIVATIONAL:
        if stem.endswith(suffix):
            rest = stem[: -len(suffix)]
            if len(rest) >= MIN_ROOT and lexicon.contains(rest):
                return rest, suffix
    return None


def strip_suffixes(word: str, lexicon: Lexicon | None = None) -> tuple[str, list[str]]:
    """
    Peel known suffixes off the end of a word.

    Returns:
        The stem and the suffixes in the order they appear in the word.

    Example:
        >>> strip_suffixes("मानिसहरूलाई")
        ('मानिस', ['हरू', 'लाई'])
    """
    if lexicon is None:
        lexicon = default_lexicon()
    stem = word
    suffixes: list[str] = []
    while True:
        found = _strip_suffix(stem, lexicon)
        if found is None:
            break
        stem, suffix = found
        suffixes.append(suffix)
    suffixes.reverse()
    return stem, suffixes


# =============================================================================
# PREFIXES
# =============================================================================


def _strip_prefix_form(stem: str, lexicon: Lexicon) -> tuple[str, str] | None:
    for canonical, surface in PREFIX_FORMS:
        if not stem.startswith(surface):
            continue
        rest = stem[len(surface) :]
        minimum = MIN_ROOT_AFTER_SHORT_PREFIX if len(surface) == 1 else MIN_ROOT
        if len(rest) < minimum or not (is_svar(rest[0]) or is_vyanjan(rest[0])):
            continue
        # An unassimilated prefix needs the rest to be a known word
        if (surface == canonical or canonical == "अ") and not lexicon.contains(rest):
            continue
        if join(canonical, rest) != stem:
            continue
        return canonical, rest
    return None


def _strip_prefix_split(stem: str, lexicon: Lexicon) -> tuple[str, str] | None:
    for left, right, _ in split(stem, lexicon):
        if left in SPLIT_PREFIXES and len(right) >= MIN_ROOT and lexicon.contains(right):
            return left, right
    return None


def strip_prefixes(stem: str, lexicon: Lexicon | None = None) -> tuple[list[str], str]:
    """
    Take up to two canonical prefixes off the front of a stem.

    Example:
        >>> strip_prefixes("उल्लिखित")
        (['उत्'], 'लिखित')
    """
    if lexicon is None:
        lexicon = default_lexicon()
    prefixes: list[str] = []
    for _ in range(MAX_PREFIXES):
        found = _strip_prefix_form(stem, lexicon) or _strip_prefix_split(stem, lexicon)
        if found is None:
            break
        prefix, stem = found
        prefixes.append(prefix)
    return prefixes, stem


# =============================================================================
# DECOMPOSITION
# =============================================================================


def reconstruct(morpheme: Morpheme) -> str:
    """Rejoin a decomposition: prefixes through sandhi, suffixes by concatenation."""
    form = morpheme.root
    for prefix in reversed(morpheme.prefixes):
        form = join(prefix, form)
    return form + "".join(morpheme.suffixes)


def decompose(word: str, lexicon: Lexicon | None = None) -> Morpheme:
    """
    Decompose a word into prefixes, root and suffixes.

    Args:
        word: Word to decompose.
        lexicon: Lexicon used to validate stems. Defaults to the shared lexicon.

    Returns:
        A Morpheme whose reconstruction equals the word; the whole word as
        root with no affixes when nothing can be stripped.

    Example:
        >>> decompose("प्रशासनमा")
        Morpheme(root='शासन', prefixes=('प्र',), suffixes=('मा',), origin=<Origin.TATSAM: 'tatsam'>)
    """
    word = normalize(word).strip()
    if lexicon is None:
        lexicon = default_lexicon()
    decision = classify_with_provenance(word, lexicon)
    if not word:
        return Morpheme(root=word, origin=decision.origin)

    stem, suffixes = strip_suffixes(word, lexicon)
    prefixes, root = strip_prefixes(stem, lexicon)

    origin = decision.origin
    if decision.source is OriginSource.HEURISTIC and root != word:
        origin = lexicon.origin_of(root) or origin

    morpheme = Morpheme(root=root, prefixes=tuple(prefixes), suffixes=tuple(suffixes), origin=origin)
    if reconstruct(morpheme) != word:
        logger.debug("decompose %s: %r does not rejoin, keeping whole word", word, morpheme)
        return Morpheme(root=word, origin=decision.origin)
    return morpheme
