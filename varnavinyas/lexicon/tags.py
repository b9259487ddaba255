"""
Dictionary origin tags.

Dictionary headwords carry bracketed source-language abbreviations such as
``[सं.]``, ``[फा.]`` or ``[सं. अग्र]``. A bare Sanskrit tag marks a direct
borrowing; a Sanskrit tag followed by an etymon marks an adapted one.
"""

from __future__ import annotations

import re

from varnavinyas.models import Origin

_TAG_PATTERN = re.compile(r"\[([^\]]*)\]")

# Foreign languages; "अ." (Arabic) must be checked before "अङ" (English)
AAGANTUK_PREFIXES = (
    "अ.",
    "अ ",
    "अङ्",
    "अङ",
    "अड्",
    "फा",
    "तु",
    "था",
    "फ्रा",
    "फ्रे",
    "पोर्त",
    "ग्री",
    "स्पे",
    "जापा",
    "भा. इ",
    "भा.इ",
)

# Prakrit and neighbouring Indic languages
TADBHAV_PREFIXES = ("प्रा", "हि", "भो", "मरा", "मै")

# Languages of Nepal
DESHAJ_PREFIXES = ("नेवा", "लि", "मो", "मगा", "डो", "बा", "ने")


def classify_tag(tag: str) -> Origin | None:
    """Map the inside of one bracket tag to an origin class."""
    normalized = tag.strip().rstrip(".")

    if normalized == "सं":
        return Origin.TATSAM
    for marker in ("सं.", "सं "):
        if normalized.startswith(marker):
            etymon = normalized[len(marker) :].strip()
            return Origin.TADBHAV if etymon else Origin.TATSAM

    if normalized == "अ":
        return Origin.AAGANTUK
    for prefixes, origin in (
        (AAGANTUK_PREFIXES, Origin.AAGANTUK),
        (TADBHAV_PREFIXES, Origin.TADBHAV),
        (DESHAJ_PREFIXES, Origin.DESHAJ),
    ):
        if normalized.startswith(prefixes):
            return origin

    # "X ८ सं. Y": derived from a Sanskrit etymon
    if "८ सं" in tag or "८सं" in tag:
        return Origin.TADBHAV
    return None


def parse_origin_tag(field: str) -> Origin | None:
    """
    Origin of the first bracketed tag in a dictionary field.

    Example:
        >>> parse_origin_tag("[सं.] ना.")
        <Origin.TATSAM: 'tatsam'>
        >>> parse_origin_tag("क्रि.वि. [सं. इह]")
        <Origin.TADBHAV: 'tadbhav'>
        >>> parse_origin_tag("ना.") is None
        True
    """
    match = _TAG_PATTERN.search(field)
    if match is None:
        return None
    return classify_tag(match.group(1))


def split_tagged_entry(entry: str) -> tuple[str, Origin | None]:
    """Split ``"मुद्दा [अ.]"`` into the headword and its tagged origin."""
    word = _TAG_PATTERN.sub("", entry).strip()
    return word, parse_origin_tag(entry)
