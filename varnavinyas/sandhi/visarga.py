"""Visarga sandhi (विसर्ग सन्धि): a final ः meeting the next morpheme."""

from __future__ import annotations

from varnavinyas.sandhi.result import SandhiResult, SandhiType
from varnavinyas.sandhi.vowel import vowel_tail
from varnavinyas.script import HALANTA, VISARGA, VOICED_CONSONANTS, is_svar, is_vyanjan

# ः stays before voiceless sibilants and voiceless stops
RETAINED_BEFORE = frozenset("सशषकखपफ")

# अ-final stems whose ः still becomes र (पुनः, अन्तः)
R_STEMS = frozenset({"पुन", "अन्त"})

A_FINALS = frozenset("अआा")


def _visarga(output: str, citation: str) -> SandhiResult:
    return SandhiResult(output, SandhiType.VISARGA, citation)


def apply_visarga_sandhi(first: str, second: str) -> SandhiResult | None:
    """
    Join a ः-final morpheme to the next one.

    Example:
        >>> apply_visarga_sandhi("मनः", "रथ").output
        'मनोरथ'
        >>> apply_visarga_sandhi("निः", "आशा").output
        'निराशा'
        >>> apply_visarga_sandhi("दुः", "गम").output
        'दुर्गम'
    """
    if not first.endswith(VISARGA) or not second:
        return None
    prefix = first[:-1]
    if not prefix:
        return None
    initial = second[0]

    if initial in RETAINED_BEFORE:
        return _visarga(first + second, "विसर्ग सन्धि: स/श/ष/क/ख/प/फ अघि विसर्ग रहन्छ")

    if is_svar(initial):
        # अः and आः before a vowel lose the visarga with no join
        a_final = is_vyanjan(prefix[-1]) or prefix[-1] in A_FINALS
        if a_final and prefix not in R_STEMS:
            return None
        return _visarga(prefix + "र" + vowel_tail(second), "विसर्ग सन्धि: ः + स्वर → र्")

    if initial in VOICED_CONSONANTS:
        if is_vyanjan(prefix[-1]) and prefix not in R_STEMS:
            return _visarga(prefix + "ो" + second, "विसर्ग सन्धि: अः + घोष व्यञ्जन → ओ")
        return _visarga(prefix + "र" + HALANTA + second, "विसर्ग सन्धि: ः + घोष व्यञ्जन → र्")

    return None
