"""Derivational-suffix and nasalization rules."""

from __future__ import annotations

from varnavinyas.derivation.base import RuleContext, RuleFamily, RuleOutcome, rule_spec
from varnavinyas.models import DiagnosticCategory, Origin, orthography, table
from varnavinyas.script import (
    ANUSVARA,
    CHANDRABINDU,
    HALANTA,
    PANCHHAM,
    is_matra,
    is_stop,
    is_svar,
    is_vyanjan,
)

# =============================================================================
# DERIVATIONAL
# =============================================================================

# Abstract nouns that already end in a nominalizing cluster
REDUNDANT_TA_BEFORE = ("र्य", "त्य", "थ्य")

VRIDDHI_SVAR = {"अ": "आ", "इ": "ऐ", "ई": "ऐ", "उ": "औ", "ऊ": "औ"}
VRIDDHI_MATRA = {"ि": "ै", "ी": "ै", "ु": "ौ", "ू": "ौ"}


@rule_spec(
    "struct-redundant-suffix",
    RuleFamily.DERIVATIONAL,
    1,
    table("Section 4"),
    (("सौन्दर्यता", "सौन्दर्य"), ("माधुर्यता", "माधुर्य")),
    category=DiagnosticCategory.TABLE,
)
def redundant_ta(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if not word.endswith("ता") or not word[:-2].endswith(REDUNDANT_TA_BEFORE):
        return None
    return RuleOutcome(word[:-2], "भाववाचक शब्दमा फेरि -ता प्रत्यय थप्नु अनावश्यक हुन्छ")


def apply_vriddhi(stem: str) -> str:
    """
    Strengthen the first vowel of a stem (आदिवृद्धि).

    अ becomes आ, इ/ई become ऐ, उ/ऊ become औ. A stem whose first vowel is
    already strong comes back unchanged.

    Example:
        >>> apply_vriddhi("समाज")
        'सामाज'
        >>> apply_vriddhi("इतिहास")
        'ऐतिहास'
    """
    if not stem:
        return stem
    if is_svar(stem[0]):
        return VRIDDHI_SVAR.get(stem[0], stem[0]) + stem[1:]
    if not is_vyanjan(stem[0]):
        return stem

    # Skip the initial consonant cluster
    i = 1
    while i + 1 < len(stem) and stem[i] == HALANTA and is_vyanjan(stem[i + 1]):
        i += 2
    if i < len(stem) and is_matra(stem[i]):
        strong = VRIDDHI_MATRA.get(stem[i])
        return stem if strong is None else stem[:i] + strong + stem[i + 1 :]
    if i < len(stem) and stem[i] == HALANTA:
        return stem
    return stem[:i] + "ा" + stem[i:]


@rule_spec(
    "ortho-aadhi-vriddhi",
    RuleFamily.DERIVATIONAL,
    2,
    orthography("3(क)"),
    (("अर्थिक", "आर्थिक"), ("समाजिक", "सामाजिक"), ("व्यवहारिक", "व्यावहारिक")),
)
def aadhi_vriddhi(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if not word.endswith("िक"):
        return None
    morpheme = ctx.morpheme
    if not morpheme.suffixes or morpheme.suffixes[-1] != "िक":
        return None
    stem = word[:-2]
    output = apply_vriddhi(stem) + "िक"
    if output == word:
        return None
    return RuleOutcome(output, "इक प्रत्यय लाग्दा पहिलो अक्षरको स्वरमा आदिवृद्धि हुन्छ")


# =============================================================================
# NASALIZATION
# =============================================================================


def _panchham_form(word: str) -> str:
    out = []
    for i, c in enumerate(word):
        nxt = word[i + 1] if i + 1 < len(word) else ""
        if c == ANUSVARA and is_stop(nxt):
            out.append(PANCHHAM[nxt] + HALANTA)
        else:
            out.append(c)
    return "".join(out)


@rule_spec(
    "struct-panchham",
    RuleFamily.NASALIZATION,
    1,
    orthography("3(ख)-पञ्चम"),
    (("संकेत", "सङ्केत"), ("संक्षेप", "सङ्क्षेप")),
)
def panchham(ctx: RuleContext) -> RuleOutcome | None:
    output = _panchham_form(ctx.word)
    if output == ctx.word:
        return None
    if not (ctx.is_tatsam or ctx.knows(output)):
        return None
    return RuleOutcome(output, "तत्सम शब्दमा स्पर्श व्यञ्जनअघि पञ्चम वर्ण लेखिन्छ")


@rule_spec(
    "ortho-shirbindu",
    RuleFamily.NASALIZATION,
    2,
    orthography("3(ख)"),
    (("सिँह", "सिंह"), ("सँवाद", "संवाद")),
)
def tatsam_shirbindu(ctx: RuleContext) -> RuleOutcome | None:
    if CHANDRABINDU not in ctx.word:
        return None
    output = ctx.word.replace(CHANDRABINDU, ANUSVARA)
    if not (ctx.is_tatsam or ctx.lexicon.origin_of(output) is Origin.TATSAM):
        return None
    return RuleOutcome(output, "तत्सम शब्दमा शिरबिन्दु प्रयोग हुन्छ")


def _should_replace_shirbindu(ctx: RuleContext, i: int, candidate: str) -> bool:
    if not ctx.decision.is_heuristic:
        return True
    word = ctx.word
    if i == len(word) - 1 and i > 0 and word[i - 1] in ("े", "ौ"):
        return True
    return ctx.knows(candidate)


@rule_spec(
    "ortho-chandrabindu",
    RuleFamily.NASALIZATION,
    3,
    orthography("3(ख)"),
    (("बांस", "बाँस"), ("गरें", "गरेँ")),
)
def chandrabindu(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if ctx.is_tatsam or ANUSVARA not in word:
        return None
    for i, c in enumerate(word):
        if c != ANUSVARA:
            continue
        nxt = word[i + 1] if i + 1 < len(word) else ""
        if is_stop(nxt):
            continue
        candidate = word[:i] + CHANDRABINDU + word[i + 1 :]
        if _should_replace_shirbindu(ctx, i, candidate):
            return RuleOutcome(candidate, "तद्भव/देशज शब्दमा नासिक्य स्वरका लागि चन्द्रबिन्दु प्रयोग हुन्छ")
    return None


DERIVATIONAL_SPECS = (redundant_ta, aadhi_vriddhi)
NASALIZATION_SPECS = (panchham, tatsam_shirbindu, chandrabindu)
