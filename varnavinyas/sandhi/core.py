"""Joining two morphemes through the sandhi rule families."""

from __future__ import annotations

import logging

from varnavinyas.exceptions import EmptyInputError, NoRuleAppliesError
from varnavinyas.sandhi.consonant import apply_consonant_sandhi
from varnavinyas.sandhi.result import SandhiResult
from varnavinyas.sandhi.visarga import apply_visarga_sandhi
from varnavinyas.sandhi.vowel import apply_vowel_sandhi
from varnavinyas.script import normalize

logger = logging.getLogger(__name__)

# Tried in order; the first family that accepts the boundary wins
RULE_FAMILIES = (apply_visarga_sandhi, apply_consonant_sandhi, apply_vowel_sandhi)


def apply(first: str, second: str) -> SandhiResult:
    """
    Join two morphemes.

    Visarga rules are tried first, then consonant rules, then vowel
    rules. Plain concatenation is never returned as a sandhi result.

    Args:
        first: Left morpheme, e.g. "अति".
        second: Right morpheme, e.g. "अधिक".

    Returns:
        The joined form with its family and rule citation.

    Raises:
        EmptyInputError: If either morpheme is empty.
        NoRuleAppliesError: If no rule joins the boundary.

    Example:
        >>> apply("अति", "अधिक").output
        'अत्यधिक'
    """
    if not first or not second:
        raise EmptyInputError()
    first = normalize(first)
    second = normalize(second)

    for family in RULE_FAMILIES:
        result = family(first, second)
        if result is not None:
            logger.debug("sandhi %s + %s -> %s (%s)", first, second, result.output, result.rule_citation)
            return result
    raise NoRuleAppliesError(first, second)


def join(first: str, second: str) -> str:
    """Sandhi output, or plain concatenation where no rule applies."""
    try:
        return apply(first, second).output
    except NoRuleAppliesError:
        return first + second
