"""
Serializable boundary API.

Every function here takes plain strings and returns plain dicts and
lists, ready for JSON. Diagnostic spans are UTF-8 byte offsets; callers
working in other string indexings convert them themselves.

Example:
    >>> from varnavinyas import api
    >>> api.sandhi_apply("अति", "अधिक")["output"]
    'अत्यधिक'
    >>> api.sandhi_apply("राम", "घर")
    {'error': "no sandhi rule applies for 'राम' + 'घर'"}
"""

from __future__ import annotations

from typing import Any

from varnavinyas import derivation as _derivation
from varnavinyas import morphology, sandhi
from varnavinyas.checker import CheckPipeline
from varnavinyas.config import CheckOptions
from varnavinyas.exceptions import SandhiError


def check_word(word: str) -> dict[str, Any] | None:
    """The diagnostic for one word, or None when nothing is wrong."""
    diagnostic = CheckPipeline().check_word(word)
    return diagnostic.to_dict() if diagnostic else None


def check_text(text: str, grammar: bool = False) -> list[dict[str, Any]]:
    """
    Diagnostics for free text, sorted by span start.

    Args:
        text: Text to check.
        grammar: Add heuristic grammar suggestions (confidence < 0.8).
    """
    pipeline = CheckPipeline(options=CheckOptions(grammar=grammar))
    return [d.to_dict() for d in pipeline.check_text(text)]


def derive(word: str) -> dict[str, Any]:
    """The derivation trace: input, output, is_correct and steps."""
    return _derivation.derive(word).to_dict()


def analyze_word(word: str) -> dict[str, Any]:
    """Origin, correctness, correction, rule notes and suggestions."""
    return _derivation.analyze_word(word).to_dict()


def decompose_word(word: str) -> dict[str, Any]:
    """Root, prefixes, suffixes and origin."""
    return morphology.decompose(word).to_dict()


def sandhi_apply(first: str, second: str) -> dict[str, Any]:
    """The joined form, or ``{"error": message}`` when no rule applies."""
    try:
        return sandhi.apply(first, second).to_dict()
    except SandhiError as e:
        return {"error": str(e)}


def sandhi_split(word: str) -> list[dict[str, Any]]:
    """Every (left, right) reading of a joined word, best first."""
    return [
        {
            "left": left,
            "right": right,
            "sandhi_type": result.sandhi_type.value,
            "rule_citation": result.rule_citation,
        }
        for left, right, result in sandhi.split(word)
    ]
