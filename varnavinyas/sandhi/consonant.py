"""Consonant sandhi (व्यञ्जन सन्धि): assimilation at a halanta boundary."""

from __future__ import annotations

from varnavinyas.sandhi.result import SandhiResult, SandhiType
from varnavinyas.script import ANUSVARA, HALANTA, PANCHHAM, is_stop, is_vyanjan

# (first, initial of second) -> replacement for first + initial
ASSIMILATION = {
    ("उत्", "ल"): ("उल्ल", "उत् + ल → उल्ल"),
    ("उत्", "च"): ("उच्च", "उत् + च → उच्च"),
    ("उत्", "न"): ("उन्न", "उत् + न → उन्न"),
    ("उत्", "स"): ("उत्स", "उत् + स → उत्स"),
    ("उत्", "थ"): ("उत्थ", "उत् + थ → उत्थ"),
    ("उत्", "प"): ("उत्प", "उत् + प → उत्प"),
    ("सम्", "क"): ("सङ्क", "सम् + क → सङ्क"),
}

FINAL_M = "म" + HALANTA
NASALS = frozenset(PANCHHAM.values())


def _consonant(output: str, citation: str) -> SandhiResult:
    return SandhiResult(output, SandhiType.CONSONANT, "व्यञ्जन सन्धि: " + citation)


def apply_consonant_sandhi(first: str, second: str) -> SandhiResult | None:
    """
    Join a halanta-final morpheme to a consonant-initial one.

    Example:
        >>> apply_consonant_sandhi("उत्", "लेख").output
        'उल्लेख'
        >>> apply_consonant_sandhi("सम्", "सार").output
        'संसार'
    """
    if not first.endswith(HALANTA) or len(first) < 2 or not second:
        return None
    initial = second[0]
    if not is_vyanjan(initial):
        return None
    rest = second[1:]

    known = ASSIMILATION.get((first, initial))
    if known is not None:
        merged, citation = known
        return _consonant(merged + rest, citation)

    if first.endswith(FINAL_M) and initial not in NASALS - {"न", "म"}:
        stem = first[: -len(FINAL_M)]
        if is_stop(initial):
            nasal = PANCHHAM[initial]
            return _consonant(stem + nasal + HALANTA + second, f"म् + {initial} → {nasal}्{initial}")
        return _consonant(stem + ANUSVARA + second, f"म् + {initial} → ं{initial}")

    base = first[-2]
    if base == initial:
        return _consonant(first + second, f"{base}् + {initial} → {base}्{initial} (द्वित्व)")

    return None
