"""
Devanagari character classes.

Small predicates over single characters (independent vowels, vowel signs,
consonants, virama, nasal signs) plus NFC normalization and akshara
segmentation. Everything above this module works on NFC text.
"""

from __future__ import annotations

import unicodedata

# =============================================================================
# CONSTANTS
# =============================================================================

DEVANAGARI_START = "ऀ"
DEVANAGARI_END = "ॿ"

HALANTA = "्"  # ्
NUKTA = "़"  # ़
ANUSVARA = "ं"  # ं (shirbindu)
CHANDRABINDU = "ँ"  # ँ
VISARGA = "ः"  # ः
AVAGRAHA = "ऽ"  # ऽ
DANDA = "।"  # ।
DOUBLE_DANDA = "॥"  # ॥

# Independent vowel -> dependent vowel sign
SVAR_TO_MATRA = {
    "आ": "ा",
    "इ": "ि",
    "ई": "ी",
    "उ": "ु",
    "ऊ": "ू",
    "ऋ": "ृ",
    "ॠ": "ॄ",
    "ऌ": "ॢ",
    "ॡ": "ॣ",
    "ए": "े",
    "ऐ": "ै",
    "ओ": "ो",
    "औ": "ौ",
}
MATRA_TO_SVAR = {matra: svar for svar, matra in SVAR_TO_MATRA.items()}

SVARS = frozenset("अ") | frozenset(SVAR_TO_MATRA)
MATRAS = frozenset(MATRA_TO_SVAR)

# Short/long vowel pairs, both as signs and as independent letters
HRASVA_TO_DIRGHA = {"ि": "ी", "ु": "ू", "इ": "ई", "उ": "ऊ"}
DIRGHA_TO_HRASVA = {long: short for short, long in HRASVA_TO_DIRGHA.items()}

# Sparsha (stop) consonants, grouped by place of articulation
VARGAS = (
    ("क", "ख", "ग", "घ", "ङ"),
    ("च", "छ", "ज", "झ", "ञ"),
    ("ट", "ठ", "ड", "ढ", "ण"),
    ("त", "थ", "द", "ध", "न"),
    ("प", "फ", "ब", "भ", "म"),
)
STOPS = frozenset(c for varga in VARGAS for c in varga)
PANCHHAM = {c: varga[4] for varga in VARGAS for c in varga}

VOICED_CONSONANTS = frozenset("गघङजझञडढणदधनबभमयरलवह")


# =============================================================================
# PREDICATES
# =============================================================================


def is_devanagari(c: str) -> bool:
    """True for any character in the Devanagari block."""
    return DEVANAGARI_START <= c <= DEVANAGARI_END


def has_devanagari(text: str) -> bool:
    return any(is_devanagari(c) for c in text)


def is_svar(c: str) -> bool:
    """True for an independent vowel letter (अ, आ, इ ...)."""
    return c in SVARS


def is_matra(c: str) -> bool:
    """True for a dependent vowel sign (ा, ि, ी ...)."""
    return c in MATRAS


def is_vyanjan(c: str) -> bool:
    """True for a consonant letter, including precomposed nukta forms."""
    return "क" <= c <= "ह" or "क़" <= c <= "य़"


def is_nukta_form(c: str) -> bool:
    return "क़" <= c <= "य़" or c == NUKTA


def is_stop(c: str) -> bool:
    return c in STOPS


def svar_to_matra(c: str) -> str | None:
    return SVAR_TO_MATRA.get(c)


def matra_to_svar(c: str) -> str | None:
    return MATRA_TO_SVAR.get(c)


def normalize(text: str) -> str:
    """Canonical (NFC) form. Precomposed nukta letters come out as consonant + nukta."""
    return unicodedata.normalize("NFC", text)


# =============================================================================
# SEGMENTATION
# =============================================================================


def aksharas(word: str) -> list[str]:
    """
    Split a word into orthographic syllables (aksharas).

    A consonant absorbs following halanta+consonant clusters, one vowel sign,
    nukta and nasal / visarga signs. Independent vowels start a new akshara.

    Example:
        >>> aksharas("क्षेत्र")
        ['क्षे', 'त्र']
        >>> aksharas("आउँछ")
        ['आ', 'उँ', 'छ']
    """
    result: list[str] = []
    current = ""
    i = 0
    while i < len(word):
        c = word[i]
        attaches = (
            is_matra(c) or c in (NUKTA, ANUSVARA, CHANDRABINDU, VISARGA) or c == HALANTA
        )
        joins_cluster = current.endswith(HALANTA) and is_vyanjan(c)
        if current and (attaches or joins_cluster):
            current += c
        else:
            if current:
                result.append(current)
            current = c
        i += 1
    if current:
        result.append(current)
    return result
