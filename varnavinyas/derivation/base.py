"""
Rule registry types.

A rule is a plain function from a RuleContext to a RuleOutcome (or None
when it does not match). RuleSpec wraps it with the metadata the engine
and the pipeline need: family, priority, citation, category and examples.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import cached_property

from varnavinyas.lexicon import Lexicon
from varnavinyas.models import DiagnosticCategory, DiagnosticKind, Morpheme, Origin, Rule
from varnavinyas.morphology import OriginDecision, decompose


class RuleFamily(Enum):
    """Rule families in the order the engine evaluates them."""

    LENGTH = "vowel-length"
    DERIVATIONAL = "derivational"
    NASALIZATION = "nasalization"
    SIBILANT = "sibilant"
    VOCALIC_R = "vocalic-r"
    VIRAMA = "virama"
    SEMIVOWEL = "semivowel"
    CONJUNCT = "conjunct"


FAMILY_ORDER = tuple(RuleFamily)


@dataclass(frozen=True)
class RuleContext:
    """
    What a rule sees: the current form, the word's origin and the lexicon.

    The origin is decided once for the input word and carried unchanged
    through every family. The morpheme decomposition is computed on
    first access.
    """

    word: str
    decision: OriginDecision
    lexicon: Lexicon

    @property
    def origin(self) -> Origin:
        return self.decision.origin

    @property
    def is_tatsam(self) -> bool:
        return self.decision.origin is Origin.TATSAM

    def knows(self, word: str) -> bool:
        return self.lexicon.contains(word)

    def with_word(self, word: str) -> RuleContext:
        return dataclasses.replace(self, word=word)

    @cached_property
    def morpheme(self) -> Morpheme:
        return decompose(self.word, self.lexicon)


@dataclass(frozen=True)
class RuleOutcome:
    """
    A rule's proposed rewrite.

    Attributes:
        output: The rewritten form; must differ from the input.
        description: Human-readable explanation for the step.
        rule: Overrides the rule's own citation when it has several branches.
    """

    output: str
    description: str
    rule: Rule | None = None


RuleFunction = Callable[[RuleContext], "RuleOutcome | None"]


@dataclass(frozen=True)
class RuleSpec:
    """
    A registered rule.

    Attributes:
        id: Stable identifier, e.g. "hd-tadbhav".
        family: Family the rule belongs to.
        category: Diagnostic category reported when it fires.
        kind: Severity of its diagnostics.
        priority: Order within the family (lower runs first).
        citation: Default rule citation for its steps.
        examples: (incorrect, correct) pairs the rule must produce.
        apply: The rule function.
    """

    id: str
    family: RuleFamily
    category: DiagnosticCategory
    kind: DiagnosticKind
    priority: int
    citation: Rule
    examples: tuple[tuple[str, str], ...]
    apply: RuleFunction = dataclasses.field(repr=False, compare=False)

    def __call__(self, ctx: RuleContext) -> RuleOutcome | None:
        return self.apply(ctx)


def rule_spec(
    id: str,
    family: RuleFamily,
    priority: int,
    citation: Rule,
    examples: tuple[tuple[str, str], ...] = (),
    category: DiagnosticCategory | None = None,
    kind: DiagnosticKind = DiagnosticKind.ERROR,
) -> Callable[[RuleFunction], RuleSpec]:
    """
    Decorator turning a rule function into a RuleSpec.

    The category defaults to the one implied by the citation code.

    Example:
        >>> @rule_spec("hd-plural", RuleFamily.LENGTH, 6, orthography("3(ई)"), (("घरहरु", "घरहरू"),))
        ... def plural(ctx):
        ...     ...
    """

    def decorate(fn: RuleFunction) -> RuleSpec:
        return RuleSpec(
            id=id,
            family=family,
            category=category or DiagnosticCategory.from_rule(citation),
            kind=kind,
            priority=priority,
            citation=citation,
            examples=examples,
            apply=fn,
        )

    return decorate
