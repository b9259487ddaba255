"""
Vowel-length rules (ह्रस्व/दीर्घ).

Sixteen mutually exclusive rules, most specific first: suffix-triggered
exceptions, fixed pronoun and postposition forms, kinship and feminine
forms, the absolutive, then the origin-driven general patterns. The
general patterns only fire when the lexicon confirms the rewrite.
"""

from __future__ import annotations

import re

from varnavinyas.derivation.base import RuleContext, RuleFamily, RuleOutcome, rule_spec
from varnavinyas.models import Origin, orthography
from varnavinyas.script import DIRGHA_TO_HRASVA, HRASVA_TO_DIRGHA, is_vyanjan

L = RuleFamily.LENGTH

# =============================================================================
# FIXED FORMS
# =============================================================================

PRONOUNS = {
    "हामि": "हामी",
    "तिमि": "तिमी",
    "उनि": "उनी",
    "यि": "यी",
    "कोहि": "कोही",
    "केहि": "केही",
    "यहि": "यही",
}

POSTPOSITIONS = {
    "अगाडि": "अगाडी",
    "पछाडि": "पछाडी",
    "माथि": "माथी",
    "तलि": "तली",
}

MASCULINE_KINSHIP = {
    "दाजू": "दाजु",
    "बाबू": "बाबु",
    "भिनाजू": "भिनाजु",
    "साहू": "साहु",
}

FEMININE_KINSHIP = {
    "भाउजु": "भाउजू",
    "फुपु": "फुपू",
    "सासु": "सासू",
    "बुहारि": "बुहारी",
    "जेठानि": "जेठानी",
    "कान्छि": "कान्छी",
}

FEMININE_ENDINGS = ("सानि", "नि", "डि")

# Words the medial-shortening rule must leave alone
FEMININE_DIRGHA_ENDINGS = ("नी", "डी", "ती", "ली")
KINSHIP_BASES = ("दिदी", "बहिनी", "भाउजू", "फुपू", "सासू", "जेठानी", "कान्छी", "बुहारी", "मितिनी")
TATSAM_DIRGHA_SUFFIXES = ("ीकरण", "ीकृत", "ीकार", "ीय", "ीन")

_PLURAL_HRASVA = re.compile("हरु(?![ऀ-ःऺ-ॏ])")
_SHIL_HRASVA = re.compile("शिल(?![ऺ-ॏ])")


def _replace_last(text: str, old: str, new: str) -> str:
    i = text.rfind(old)
    return text[:i] + new + text[i + len(old) :]


# =============================================================================
# SUFFIX-TRIGGERED
# =============================================================================


@rule_spec(
    "hd-suffix-nu",
    L,
    1,
    orthography("3(क)-suffix-नु"),
    (("स्वीकार्नु", "स्विकार्नु"), ("सीक्नु", "सिक्नु")),
)
def suffix_nu(ctx: RuleContext) -> RuleOutcome | None:
    if not ctx.word.endswith("नु"):
        return None
    stem = ctx.word[:-2]
    if "ी" not in stem:
        return None
    return RuleOutcome(_replace_last(stem, "ी", "ि") + "नु", "-नु प्रत्यय लाग्दा धातुको दीर्घ ई ह्रस्व हुन्छ")


@rule_spec("hd-suffix-eli", L, 2, orthography("3(क)-suffix-एली"), (("पूर्वेली", "पुर्वेली"),))
def suffix_eli(ctx: RuleContext) -> RuleOutcome | None:
    if not ctx.word.endswith("ेली"):
        return None
    stem = ctx.word[:-3]
    if "ू" not in stem:
        return None
    return RuleOutcome(_replace_last(stem, "ू", "ु") + "ेली", "-एली प्रत्यय लाग्दा मूल शब्दको दीर्घ ऊ ह्रस्व हुन्छ")


@rule_spec(
    "hd-suffix-preserves",
    L,
    3,
    orthography("3(क)(उ)"),
    (("पुर्वी", "पूर्वी"), ("पुर्वीय", "पूर्वीय")),
)
def suffix_preserves(ctx: RuleContext) -> RuleOutcome | None:
    for suffix in ("ीय", "ी"):
        if not ctx.word.endswith(suffix):
            continue
        stem = ctx.word[: -len(suffix)]
        if "ु" not in stem:
            return None
        restored = _replace_last(stem, "ु", "ू")
        if ctx.knows(restored):
            return RuleOutcome(restored + suffix, "-ई/-ईय प्रत्यय लाग्दा मूल शब्दको दीर्घ ऊ कायम रहन्छ")
        return None
    return None


@rule_spec("hd-shil", L, 4, orthography("3(ई)"), (("विवेकशिल", "विवेकशील"), ("सहनशिल", "सहनशील")))
def shil(ctx: RuleContext) -> RuleOutcome | None:
    output = _SHIL_HRASVA.sub("शील", ctx.word)
    if output == ctx.word:
        return None
    return RuleOutcome(output, "-शील प्रत्ययमा दीर्घ ई हुन्छ")


@rule_spec("hd-ilo", L, 5, orthography("3(क)-इलो"), (("रसीलो", "रसिलो"),))
def ilo(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if len(word) < 5 or not word.endswith("ीलो"):
        return None
    return RuleOutcome(word[:-3] + "िलो", "-इलो प्रत्ययमा ह्रस्व इ हुन्छ")


@rule_spec("hd-plural", L, 6, orthography("3(ई)"), (("मानिसहरु", "मानिसहरू"), ("हरु", "हरू")))
def plural(ctx: RuleContext) -> RuleOutcome | None:
    output = _PLURAL_HRASVA.sub("हरू", ctx.word)
    if output == ctx.word:
        return None
    return RuleOutcome(output, "बहुवचन प्रत्यय -हरू मा दीर्घ ऊ हुन्छ")


@rule_spec("hd-ikaran", L, 7, orthography("3(ई)"), (("सरलिकरण", "सरलीकरण"),))
def ikaran(ctx: RuleContext) -> RuleOutcome | None:
    if "िकरण" not in ctx.word:
        return None
    return RuleOutcome(ctx.word.replace("िकरण", "ीकरण"), "-ईकरण प्रत्ययमा दीर्घ ई हुन्छ")


# =============================================================================
# FIXED WORD CLASSES
# =============================================================================


@rule_spec("hd-pronoun", L, 8, orthography("3(ई)"), (("हामि", "हामी"), ("तिमि", "तिमी")))
def pronoun(ctx: RuleContext) -> RuleOutcome | None:
    fixed = PRONOUNS.get(ctx.word)
    if fixed is None:
        return None
    return RuleOutcome(fixed, "सर्वनाममा अन्त्यमा दीर्घ ई हुन्छ")


@rule_spec("hd-postposition", L, 9, orthography("3(ई)"), (("अगाडि", "अगाडी"), ("पछाडि", "पछाडी")))
def postposition(ctx: RuleContext) -> RuleOutcome | None:
    fixed = POSTPOSITIONS.get(ctx.word)
    if fixed is None:
        return None
    return RuleOutcome(fixed, "सर्वनाम/अव्यय/सम्बन्धवाचक शब्दमा दीर्घ ई")


@rule_spec("hd-kinship", L, 10, orthography("3(क)(इ)-1"), (("दाजू", "दाजु"), ("बाबू", "बाबु")))
def masculine_kinship(ctx: RuleContext) -> RuleOutcome | None:
    fixed = MASCULINE_KINSHIP.get(ctx.word)
    if fixed is None or ctx.origin not in (Origin.TADBHAV, Origin.DESHAJ):
        return None
    return RuleOutcome(fixed, "पुलिङ्गी नातावाचक तद्भव शब्दको अन्त्यमा ह्रस्व उ हुन्छ")


@rule_spec(
    "hd-kinship-feminine",
    L,
    11,
    orthography("3(ई)"),
    (("भाउजु", "भाउजू"), ("सासु", "सासू")),
)
def feminine_kinship(ctx: RuleContext) -> RuleOutcome | None:
    fixed = FEMININE_KINSHIP.get(ctx.word)
    if fixed is None:
        return None
    return RuleOutcome(fixed, "स्त्रीलिङ्गी नातावाचक शब्दको अन्त्यमा दीर्घ स्वर हुन्छ")


@rule_spec(
    "hd-feminine-ending",
    L,
    12,
    orthography("3(ई)"),
    (("खुर्सानि", "खुर्सानी"), ("पानि", "पानी")),
)
def feminine_ending(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if ctx.is_tatsam or len(word) < 4 or not word.endswith(FEMININE_ENDINGS):
        return None
    return RuleOutcome(word[:-1] + "ी", "स्त्रीलिङ्गी तथा -नी/-डी अन्त्य भएका शब्दमा दीर्घ ई हुन्छ")


@rule_spec("hd-absolutive", L, 13, orthography("3(ई)"), (("भनि", "भनी"), ("गरि", "गरी")))
def absolutive(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if not 2 <= len(word) <= 4 or not word.endswith("ि") or not is_vyanjan(word[-2]):
        return None
    root = word[:-1]
    output = root + "ी"
    if not (ctx.knows(output) or ctx.knows(root + "्नु") or ctx.knows(root + "नु")):
        return None
    return RuleOutcome(output, "असमापक क्रियामा अन्त्यमा दीर्घ ई हुन्छ")


# =============================================================================
# ORIGIN-DRIVEN
# =============================================================================


def _single_flips(word: str) -> list[str]:
    flips = []
    for i, c in enumerate(word):
        swapped = HRASVA_TO_DIRGHA.get(c) or DIRGHA_TO_HRASVA.get(c)
        if swapped:
            flips.append(word[:i] + swapped + word[i + 1 :])
    return flips


@rule_spec("hd-tatsam", L, 14, orthography("3(क)"), (("परिक्षा", "परीक्षा"),))
def tatsam_length(ctx: RuleContext) -> RuleOutcome | None:
    if not ctx.is_tatsam:
        return None
    for candidate in _single_flips(ctx.word):
        if ctx.knows(candidate):
            return RuleOutcome(candidate, "तत्सम शब्दमा मूल संस्कृत शब्दकै ह्रस्व/दीर्घ स्वर कायम रहन्छ")
    return None


def _protected_from_shortening(word: str) -> bool:
    return (
        word.endswith(FEMININE_DIRGHA_ENDINGS)
        or word.startswith(KINSHIP_BASES)
        or any(suffix in word for suffix in TATSAM_DIRGHA_SUFFIXES)
    )


@rule_spec("hd-tadbhav", L, 15, orthography("3(क)-12"), (("मीठो", "मिठो"), ("पीरो", "पिरो")))
def tadbhav_length(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if ctx.is_tatsam or _protected_from_shortening(word):
        return None
    medial = [i for i, c in enumerate(word[:-1]) if c in ("ी", "ू", "ई", "ऊ")]
    if not medial:
        return None

    shortened = list(word)
    for i in medial:
        shortened[i] = DIRGHA_TO_HRASVA[word[i]]
    candidates = ["".join(shortened)]
    if len(medial) > 1:
        candidates += [word[:i] + DIRGHA_TO_HRASVA[word[i]] + word[i + 1 :] for i in medial]

    for candidate in candidates:
        if ctx.knows(candidate):
            return RuleOutcome(candidate, "तद्भव/देशज शब्दमा ह्रस्व स्वर प्रयोग हुन्छ")
    return None


@rule_spec("hd-kosha-backed", L, 16, orthography("3(क)(ई)"), (("नेपालि", "नेपाली"),))
def kosha_backed(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if ctx.is_tatsam or ctx.knows(word) or word[-1] not in ("ि", "ु"):
        return None
    candidate = word[:-1] + HRASVA_TO_DIRGHA[word[-1]]
    if not ctx.knows(candidate):
        return None
    code = "3(क)(ई)" if word[-1] == "ि" else "3(क)(ऊ)"
    return RuleOutcome(candidate, "शब्दकोशअनुसार अन्त्यमा दीर्घ स्वर हुन्छ", orthography(code))


SPECS = (
    suffix_nu,
    suffix_eli,
    suffix_preserves,
    shil,
    ilo,
    plural,
    ikaran,
    pronoun,
    postposition,
    masculine_kinship,
    feminine_kinship,
    feminine_ending,
    absolutive,
    tatsam_length,
    tadbhav_length,
    kosha_backed,
)
