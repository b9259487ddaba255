"""
Letter-choice rules: sibilants, vocalic r, virama, initial ए/य and the
क्ष/छ and ज्ञ/ग्य conjuncts.

Most of these rewrites are only safe when the lexicon knows the result,
since the heuristic origin of a misspelt word is unreliable (a stray ष
makes any word look like a direct borrowing).
"""

from __future__ import annotations

from varnavinyas.derivation.base import RuleContext, RuleFamily, RuleOutcome, rule_spec
from varnavinyas.models import Origin, orthography
from varnavinyas.script import HALANTA

# =============================================================================
# SIBILANT
# =============================================================================


def _origin_of_rewrite(ctx: RuleContext, candidate: str) -> Origin | None:
    """The input's origin when it is trustworthy, else the rewrite's lexicon origin."""
    if not ctx.decision.is_heuristic or ctx.origin is Origin.AAGANTUK:
        return ctx.origin
    return ctx.lexicon.origin_of(candidate)


@rule_spec(
    "ortho-sibilant",
    RuleFamily.SIBILANT,
    1,
    orthography("3(ग)(अ)-8"),
    (("रजिष्टर", "रजिस्टर"), ("फाउण्डेसन", "फाउन्डेसन"), ("घाष", "घास")),
)
def sibilant(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if "ष" in word:
        candidate = word.replace("ष", "स")
        origin = _origin_of_rewrite(ctx, candidate)
        if origin is Origin.AAGANTUK:
            return RuleOutcome(
                candidate, "आगन्तुक शब्दमा ष होइन स लेखिन्छ", orthography("3(ग)(अ)-9")
            )
        if origin in (Origin.TADBHAV, Origin.DESHAJ):
            return RuleOutcome(candidate, "तद्भव/देशज शब्दमा ष होइन स लेखिन्छ")
    if "ण" in word:
        candidate = word.replace("ण", "न")
        if _origin_of_rewrite(ctx, candidate) is Origin.AAGANTUK:
            return RuleOutcome(
                candidate, "आगन्तुक शब्दमा ण होइन न लेखिन्छ", orthography("3(ग)(अ)-9")
            )
    return None


# =============================================================================
# VOCALIC R
# =============================================================================


def _vocalic_r_allowed(ctx: RuleContext, candidate: str) -> bool:
    return ctx.is_tatsam or ctx.knows(candidate)


@rule_spec("ortho-shri", RuleFamily.VOCALIC_R, 1, orthography("3(ग)-ऋ"), (("श्रृङ्गार", "शृङ्गार"),))
def shri(ctx: RuleContext) -> RuleOutcome | None:
    if "श्रृ" not in ctx.word:
        return None
    candidate = ctx.word.replace("श्रृ", "शृ")
    if not _vocalic_r_allowed(ctx, candidate):
        return None
    return RuleOutcome(candidate, "श + ऋ = शृ; यसमा र लेखिँदैन")


@rule_spec("ortho-ri", RuleFamily.VOCALIC_R, 2, orthography("3(ग)-ऋ"), (("रिषि", "ऋषि"), ("रितु", "ऋतु")))
def initial_ri(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if len(word) < 3 or not word.startswith("रि") or word[2] not in ("ष", "त"):
        return None
    candidate = "ऋ" + word[2:]
    if not _vocalic_r_allowed(ctx, candidate):
        return None
    return RuleOutcome(candidate, "तत्सम शब्दमा रि होइन ऋ लेखिन्छ")


@rule_spec("ortho-kri", RuleFamily.VOCALIC_R, 3, orthography("3(ग)-कृ"), (("क्रिति", "कृति"),))
def kri(ctx: RuleContext) -> RuleOutcome | None:
    if "क्रि" not in ctx.word:
        return None
    candidate = ctx.word.replace("क्रि", "कृ")
    if not _vocalic_r_allowed(ctx, candidate):
        return None
    return RuleOutcome(candidate, "तत्सम शब्दमा क्रि होइन कृ लेखिन्छ")


# =============================================================================
# VIRAMA
# =============================================================================

VERB_ENDINGS = ("छस", "छन", "िस", "िन", "इस")
TATSAM_STEM_ENDINGS = ("मान", "वान", "वत")


@rule_spec("ortho-halanta-chha", RuleFamily.VIRAMA, 1, orthography("3(ङ)-अजन्त-5"), (("गर्छ्", "गर्छ"),))
def final_chha(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if not word.endswith("छ" + HALANTA):
        return None
    candidate = word[:-1]
    if not ctx.knows(candidate) or ctx.knows(word):
        return None
    return RuleOutcome(candidate, "अजन्त क्रियापदको अन्त्यमा हलन्त लेखिँदैन")


@rule_spec(
    "ortho-halanta-verb",
    RuleFamily.VIRAMA,
    2,
    orthography("3(ङ)-2"),
    (("गर्छन", "गर्छन्"), ("भनिन", "भनिन्")),
)
def verb_halanta(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if not word.endswith(VERB_ENDINGS):
        return None
    candidate = word + HALANTA
    if not ctx.knows(candidate):
        return None
    return RuleOutcome(candidate, "हलन्त अन्त्य हुने क्रियापदमा हलन्त लेखिन्छ")


@rule_spec(
    "ortho-halanta-tatsam",
    RuleFamily.VIRAMA,
    3,
    orthography("3(ङ)-3"),
    (("बुद्धिमान", "बुद्धिमान्"), ("धनवान", "धनवान्")),
)
def tatsam_halanta(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if not word.endswith(TATSAM_STEM_ENDINGS) or len(word) <= 3:
        return None
    candidate = word + HALANTA
    if ctx.knows(word) and not ctx.knows(candidate):
        return None
    if not (ctx.knows(candidate) or ctx.is_tatsam):
        return None
    return RuleOutcome(candidate, "-मान्/-वान्/-वत् अन्त्य भएका तत्सम शब्दमा हलन्त लेखिन्छ")


# =============================================================================
# SEMIVOWEL
# =============================================================================


@rule_spec("ortho-ya-e", RuleFamily.SEMIVOWEL, 1, orthography("3(इ)"), (("एथार्थ", "यथार्थ"), ("एमुना", "यमुना")))
def ya_e(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    if word.startswith("ए"):
        candidate = "य" + word[1:]
    elif word.startswith("य"):
        candidate = "ए" + word[1:]
    else:
        return None
    if ctx.knows(word) or not ctx.knows(candidate):
        return None
    return RuleOutcome(candidate, "शब्दको आदिमा य र ए को भेद शब्दकोशअनुसार हुन्छ")


# =============================================================================
# CONJUNCTS
# =============================================================================

# Tried in order; the first rewrite the lexicon knows wins
KSHA_SUBSTITUTIONS = (
    ("छ्य", "क्ष्य"),
    ("क्ष्य", "छ्य"),
    ("छे", "क्षे"),
    ("क्षे", "छे"),
    ("क्ष", "च्छ"),
    ("च्छ", "क्ष"),
    ("छ", "क्ष"),
    ("क्ष", "छ"),
)


@rule_spec(
    "ortho-ksha-chhya",
    RuleFamily.CONJUNCT,
    1,
    orthography("3(उ)"),
    (("लछ्य", "लक्ष्य"), ("छेत्र", "क्षेत्र"), ("इक्षा", "इच्छा"), ("छमा", "क्षमा")),
)
def ksha_chha(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    for old, new in KSHA_SUBSTITUTIONS:
        if old not in word:
            continue
        candidate = word.replace(old, new)
        if ctx.knows(candidate):
            return RuleOutcome(candidate, "क्ष र छ/च्छ को भेद शब्दकोशअनुसार हुन्छ")
    return None


@rule_spec("ortho-gya-gyan", RuleFamily.CONJUNCT, 2, orthography("3(ग)(ऊ)"), (("ग्यान", "ज्ञान"), ("अग्यान", "अज्ञान")))
def gya_gyan(ctx: RuleContext) -> RuleOutcome | None:
    word = ctx.word
    for old in ("ग्याँ", "ग्या"):
        if old in word:
            candidate = word.replace(old, "ज्ञा")
            if ctx.knows(candidate):
                return RuleOutcome(candidate, "तत्सम शब्दमा ग्या होइन ज्ञा लेखिन्छ")
            return None
    return None


SIBILANT_SPECS = (sibilant,)
VOCALIC_R_SPECS = (shri, initial_ri, kri)
VIRAMA_SPECS = (final_chha, verb_halanta, tatsam_halanta)
SEMIVOWEL_SPECS = (ya_e,)
CONJUNCT_SPECS = (ksha_chha, gya_gyan)
