"""
Vowel sandhi (स्वर सन्धि).

Fuses the final vowel of the first morpheme with the initial vowel of the
second. A first morpheme ending in a bare consonant carries the inherent
अ, so प्र + आ... behaves like an अ-final morpheme.
"""

from __future__ import annotations

from varnavinyas.sandhi.result import SandhiResult, SandhiType
from varnavinyas.script import is_matra, is_svar, is_vyanjan, svar_to_matra

# Initial vowel of the second morpheme -> (independent form, sign form) after अ/आ
A_CLASS_FUSION = {
    "अ": ("आ", "ा", "दीर्घ सन्धि: अ/आ + अ/आ → आ"),
    "आ": ("आ", "ा", "दीर्घ सन्धि: अ/आ + अ/आ → आ"),
    "इ": ("ए", "े", "गुण सन्धि: अ/आ + इ/ई → ए"),
    "ई": ("ए", "े", "गुण सन्धि: अ/आ + इ/ई → ए"),
    "उ": ("ओ", "ो", "गुण सन्धि: अ/आ + उ/ऊ → ओ"),
    "ऊ": ("ओ", "ो", "गुण सन्धि: अ/आ + उ/ऊ → ओ"),
    "ऋ": ("अर्", "र्", "गुण सन्धि: अ/आ + ऋ → अर्"),
    "ए": ("ऐ", "ै", "वृद्धि सन्धि: अ/आ + ए/ऐ → ऐ"),
    "ऐ": ("ऐ", "ै", "वृद्धि सन्धि: अ/आ + ए/ऐ → ऐ"),
    "ओ": ("औ", "ौ", "वृद्धि सन्धि: अ/आ + ओ/औ → औ"),
    "औ": ("औ", "ौ", "वृद्धि सन्धि: अ/आ + ओ/औ → औ"),
}

# अयादि: final ए/ऐ/ओ/औ before a vowel
AYADI_SIGN = {"े": "य", "ै": "ाय", "ो": "व", "ौ": "ाव"}
AYADI_INDEPENDENT = {"ए": "अय", "ऐ": "आय", "ओ": "अव", "औ": "आव"}
AYADI_CITATIONS = {
    "े": "अयादि सन्धि: ए + स्वर → अय्",
    "ए": "अयादि सन्धि: ए + स्वर → अय्",
    "ै": "अयादि सन्धि: ऐ + स्वर → आय्",
    "ऐ": "अयादि सन्धि: ऐ + स्वर → आय्",
    "ो": "अयादि सन्धि: ओ + स्वर → अव्",
    "ओ": "अयादि सन्धि: ओ + स्वर → अव्",
    "ौ": "अयादि सन्धि: औ + स्वर → आव्",
    "औ": "अयादि सन्धि: औ + स्वर → आव्",
}

I_CLASS = ("इ", "ई", "ि", "ी")
U_CLASS = ("उ", "ऊ", "ु", "ू")


def vowel_tail(second: str) -> str:
    """
    The second morpheme after its initial vowel joins a preceding consonant.

    अ is absorbed as the consonant's inherent vowel; any other vowel
    becomes its sign.
    """
    first = second[0]
    if first == "अ":
        return second[1:]
    return (svar_to_matra(first) or first) + second[1:]


def _vowel(output: str, citation: str) -> SandhiResult:
    return SandhiResult(output, SandhiType.VOWEL, citation)


def apply_vowel_sandhi(first: str, second: str) -> SandhiResult | None:
    """
    Join two morphemes by vowel sandhi.

    Returns:
        The result, or None when the boundary is not vowel + vowel.

    Example:
        >>> apply_vowel_sandhi("अति", "अधिक").output
        'अत्यधिक'
        >>> apply_vowel_sandhi("सूर्य", "उदय").output
        'सूर्योदय'
    """
    if not first or not second:
        return None

    last_char = first[-1]
    inherent = is_vyanjan(last_char)
    last = "अ" if inherent else last_char
    initial = second[0]
    if not is_svar(initial):
        return None
    prefix = first[:-1]
    rest = second[1:]

    # दीर्घ: same-class i/u vowels lengthen (before यण्)
    if last in I_CLASS and initial in ("इ", "ई"):
        long_form = "ई" if not prefix or is_svar(prefix[-1]) else "ी"
        return _vowel(prefix + long_form + rest, "दीर्घ सन्धि: इ/ई + इ/ई → ई")
    if last in U_CLASS and initial in ("उ", "ऊ"):
        long_form = "ऊ" if not prefix or is_svar(prefix[-1]) else "ू"
        return _vowel(prefix + long_form + rest, "दीर्घ सन्धि: उ/ऊ + उ/ऊ → ऊ")

    # यण्: i/u before a dissimilar vowel become य/व
    if last in I_CLASS:
        glide = "्य" if is_matra(last) else "य"
        return _vowel(prefix + glide + vowel_tail(second), "यण् सन्धि: इ/ई + स्वर → य")
    if last in U_CLASS:
        glide = "्व" if is_matra(last) else "व"
        return _vowel(prefix + glide + vowel_tail(second), "यण् सन्धि: उ/ऊ + स्वर → व")

    # दीर्घ / गुण / वृद्धि after अ or आ
    if last in ("अ", "आ", "ा") and initial in A_CLASS_FUSION:
        full, sign, citation = A_CLASS_FUSION[initial]
        if inherent:
            output = first + sign + rest
        elif prefix:
            output = prefix + sign + rest
        else:
            output = full + rest
        return _vowel(output, citation)

    # अयादि
    if last in AYADI_SIGN:
        return _vowel(prefix + AYADI_SIGN[last] + vowel_tail(second), AYADI_CITATIONS[last])
    if last in AYADI_INDEPENDENT:
        return _vowel(
            prefix + AYADI_INDEPENDENT[last] + vowel_tail(second), AYADI_CITATIONS[last]
        )

    return None
