"""
Derivation engine.

derive() settles a single word:

1. Lexicon fast path. A known-correct word is done with no steps; a word
   in the correction table gets one step citing its table entry.
2. Needs-review words are reported correct but ambiguous.
3. Otherwise the origin is classified once and each rule family runs in
   order on the current form. At most one rule fires per family. When
   any rule fires, an origin-classification step opens the trace.

A word no rule touches is accepted as-is: lack of evidence against a
word is not flagged.
"""

from __future__ import annotations

import logging

from varnavinyas.derivation.base import FAMILY_ORDER, RuleContext, RuleSpec
from varnavinyas.derivation.registry import rules_for
from varnavinyas.derivation.review import review_entry
from varnavinyas.exceptions import DerivationError
from varnavinyas.lexicon import Lexicon, default_lexicon
from varnavinyas.models import (
    Derivation,
    DiagnosticCategory,
    DiagnosticKind,
    Step,
    orthography,
)
from varnavinyas.morphology import OriginDecision, classify_with_provenance
from varnavinyas.script import normalize

logger = logging.getLogger(__name__)

ORIGIN_RULE = orthography("3")


def origin_step(word: str, decision: OriginDecision) -> Step:
    """The trace step recording how the word's origin was decided."""
    description = (
        f"शब्दको उत्पत्ति: {decision.origin.label} "
        f"({decision.source.value}, {decision.confidence:.1f})"
    )
    return Step(ORIGIN_RULE, description, word, word)


def _fire(spec: RuleSpec, ctx: RuleContext) -> Step | None:
    outcome = spec(ctx)
    if outcome is None:
        return None
    if outcome.output == ctx.word:
        raise DerivationError(f"rule {spec.id} fired without changing {ctx.word!r}")
    return Step(outcome.rule or spec.citation, outcome.description, ctx.word, outcome.output)


def derive(word: str, lexicon: Lexicon | None = None) -> Derivation:
    """
    Derive the standard form of a word with a step-by-step trace.

    Args:
        word: The word to check. Surrounding whitespace is ignored.
        lexicon: Lexicon to consult. Defaults to the shared lexicon.

    Returns:
        A fresh Derivation. ``is_correct`` is False only when some step
        changed the word.

    Raises:
        DerivationError: If a rule breaks its contract.
        LexiconError: If the shared lexicon cannot be loaded.

    Example:
        >>> d = derive("अत्याधिक")
        >>> d.output, d.category
        ('अत्यधिक', <DiagnosticCategory.TABLE: 'table-lookup'>)
        >>> [s.after for s in derive("मीठो").steps]
        ['मीठो', 'मिठो']
    """
    word = normalize(word).strip()
    if not word:
        return Derivation.correct(word)
    if lexicon is None:
        lexicon = default_lexicon()

    lookup = lexicon.contains_or_correct(word)
    if lookup.is_correct:
        return Derivation.correct(word)
    if lookup.is_incorrect:
        record = lookup.record
        step = Step(record.rule, record.description, word, record.primary)
        return Derivation(
            input=word,
            output=record.primary,
            steps=[step],
            is_correct=False,
            category=DiagnosticCategory.from_rule(record.rule),
            alternatives=list(record.alternatives[1:]),
        )

    review = review_entry(word)
    if review is not None:
        derivation = Derivation.correct(word)
        derivation.kind = DiagnosticKind.AMBIGUOUS
        derivation.alternatives = list(review.alternatives)
        return derivation

    decision = classify_with_provenance(word, lexicon)
    ctx = RuleContext(word, decision, lexicon)
    steps: list[Step] = []
    category: DiagnosticCategory | None = None

    for family in FAMILY_ORDER:
        for spec in rules_for(family):
            step = _fire(spec, ctx)
            if step is None:
                continue
            if steps and step.before != steps[-1].after:
                raise DerivationError(f"rule {spec.id} does not continue from {steps[-1].after!r}")
            logger.debug("%s: %s -> %s", spec.id, step.before, step.after)
            steps.append(step)
            category = category or spec.category
            ctx = ctx.with_word(step.after)
            break

    if not steps:
        return Derivation.correct(word)

    return Derivation(
        input=word,
        output=ctx.word,
        steps=[origin_step(word, decision)] + steps,
        is_correct=False,
        category=category,
    )
