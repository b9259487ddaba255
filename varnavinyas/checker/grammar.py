"""
Heuristic grammar suggestions.

These are not part of the codified rule set. They run only when grammar
mode is requested, are reported as variants, and always carry confidence
below 0.8:

- quantifier + plural: धेरै मानिसहरू → धेरै मानिस (0.62)
- ergative -ले with an intransitive predicate: ऊले गयो (0.68)
- genitive -को/-की before a plural noun: उसको साथीहरू → उसका साथीहरू (0.64)

When several heuristics hit the same token only the most confident one
is kept.
"""

from __future__ import annotations

import logging

from varnavinyas.checker.tokenizer import Token
from varnavinyas.models import Diagnostic, DiagnosticCategory, DiagnosticKind, grammar
from varnavinyas.morphology.decompose import PLURAL_SUFFIXES

logger = logging.getLogger(__name__)

QUANTIFIER_WORDS = frozenset({"धेरै", "सबै", "केही", "अनेक", "धेरैजसो"})

INTRANSITIVE_VERB_FORMS = frozenset(
    {"छ", "थियो", "गयो", "जान्छ", "आयो", "आउँछ", "बस्यो", "हिँड्यो", "सुत्यो", "पुग्यो"}
)

QUANTIFIER_PLURAL_CONFIDENCE = 0.62
ERGATIVE_CONFIDENCE = 0.68
GENITIVE_PLURAL_CONFIDENCE = 0.64


def _has_plural(word: str) -> bool:
    return word.endswith(PLURAL_SUFFIXES)


def _strip_plural(word: str) -> str:
    for marker in PLURAL_SUFFIXES:
        if word.endswith(marker):
            return word[: -len(marker)]
    return word


def _variant(token: Token, correction: str, code: str, explanation: str, confidence: float) -> Diagnostic:
    return Diagnostic(
        span_start=token.start,
        span_end=token.end,
        incorrect=token.text,
        correction=correction,
        rule=grammar(code),
        explanation=explanation,
        category=DiagnosticCategory.GRAMMAR,
        kind=DiagnosticKind.VARIANT,
        confidence=confidence,
    )


def _quantifier_plural(tokens: list[Token], idx: int) -> Diagnostic | None:
    token = tokens[idx]
    if idx == 0 or not _has_plural(token.text):
        return None
    previous = tokens[idx - 1]
    if previous.sentence != token.sentence or previous.text not in QUANTIFIER_WORDS:
        return None
    return _variant(
        token,
        _strip_plural(token.text),
        "quantifier-plural-redundancy",
        "परिमाणबोधक शब्दपछि बहुवचन -हरू प्रायः अनावश्यक हुन्छ।",
        QUANTIFIER_PLURAL_CONFIDENCE,
    )


def _ergative_intransitive(tokens: list[Token], idx: int) -> Diagnostic | None:
    token = tokens[idx]
    if token.suffix != "ले":
        return None
    predicate = any(
        later.text in INTRANSITIVE_VERB_FORMS
        for later in tokens[idx + 1 :]
        if later.sentence == token.sentence
    )
    if not predicate:
        return None
    return _variant(
        token,
        token.stem,
        "ergative-le-intransitive",
        "सामान्य अकर्मक क्रियासँग कर्तामा ले प्रायः प्रयोग हुँदैन।",
        ERGATIVE_CONFIDENCE,
    )


def _genitive_plural(tokens: list[Token], idx: int) -> Diagnostic | None:
    token = tokens[idx]
    if token.suffix not in ("को", "की") or idx + 1 >= len(tokens):
        return None
    following = tokens[idx + 1]
    if following.sentence != token.sentence or not _has_plural(following.text):
        return None
    return _variant(
        token,
        token.stem + "का",
        "genitive-mismatch-plural",
        "बहुवचन संज्ञा अघि सामान्यतया सम्बन्ध सूचक का प्रयोग उपयुक्त हुन्छ।",
        GENITIVE_PLURAL_CONFIDENCE,
    )


HEURISTICS = (_quantifier_plural, _ergative_intransitive, _genitive_plural)


def check_grammar(tokens: list[Token], blocked: list[Diagnostic]) -> list[Diagnostic]:
    """
    Run the grammar heuristics over a token sequence.

    Args:
        tokens: Tokens of the checked text, in order.
        blocked: Diagnostics already found; tokens overlapping them are
            skipped.

    Returns:
        At most one variant diagnostic per token.
    """
    found: list[Diagnostic] = []
    for idx, token in enumerate(tokens):
        if any(d.span_start < token.end and token.start < d.span_end for d in blocked):
            continue
        best = None
        for heuristic in HEURISTICS:
            candidate = heuristic(tokens, idx)
            if candidate is not None and (best is None or candidate.confidence > best.confidence):
                best = candidate
        if best is not None:
            logger.debug("Grammar hint %s on %s", best.rule.code, token.text)
            found.append(best)
    return found
