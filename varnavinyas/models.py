"""
Data models for varnavinyas.

These models are the values that cross component boundaries: rule
citations, derivation steps and traces, diagnostics and morpheme
decompositions. Rules and steps are immutable; a Derivation is built
fresh for every word and never shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# ENUMS
# =============================================================================


class Origin(Enum):
    """Etymological class of a word. Drives which spelling rules apply."""

    TATSAM = "tatsam"  # direct Sanskrit borrowing, original form kept
    TADBHAV = "tadbhav"  # adapted borrowing, Nepali phonology
    DESHAJ = "deshaj"  # native word
    AAGANTUK = "aagantuk"  # foreign loanword

    @property
    def label(self) -> str:
        """Devanagari display label."""
        return _ORIGIN_LABELS[self]

    @property
    def code(self) -> int:
        """Two-bit code used in packed lexicon metadata."""
        return _ORIGIN_CODES.index(self)

    @classmethod
    def from_code(cls, code: int) -> Origin:
        return _ORIGIN_CODES[code & 0b11]


_ORIGIN_CODES = (Origin.TATSAM, Origin.TADBHAV, Origin.DESHAJ, Origin.AAGANTUK)
_ORIGIN_LABELS = {
    Origin.TATSAM: "तत्सम",
    Origin.TADBHAV: "तद्भव",
    Origin.DESHAJ: "देशज",
    Origin.AAGANTUK: "आगन्तुक",
}


class OriginSource(Enum):
    """Where an origin decision came from."""

    OVERRIDE = "override"
    LEXICON = "lexicon"
    HEURISTIC = "heuristic"


class Gender(Enum):
    """Grammatical gender recorded for a lexicon entry."""

    NONE = "none"
    MASCULINE = "masculine"
    FEMININE = "feminine"
    NEUTER = "neuter"

    @property
    def code(self) -> int:
        return _GENDER_CODES.index(self)

    @classmethod
    def from_code(cls, code: int) -> Gender:
        return _GENDER_CODES[code & 0b11]


_GENDER_CODES = (Gender.NONE, Gender.MASCULINE, Gender.FEMININE, Gender.NEUTER)


class RuleSource(Enum):
    """Authority a rule citation points into."""

    ORTHOGRAPHY = "orthography"  # orthography standard, section 3
    GRAMMAR = "grammar"
    TABLE = "table"  # correct/incorrect word table, section 4
    PUNCTUATION = "punctuation"  # punctuation marks, section 5

    @property
    def source_name(self) -> str:
        return _SOURCE_NAMES[self]


_SOURCE_NAMES = {
    RuleSource.ORTHOGRAPHY: "वर्णविन्यास नियम",
    RuleSource.GRAMMAR: "व्याकरण",
    RuleSource.TABLE: "शुद्ध-अशुद्ध तालिका",
    RuleSource.PUNCTUATION: "चिह्न नियम",
}


class DiagnosticKind(Enum):
    """Severity of a finding."""

    ERROR = "error"  # the word is wrong
    VARIANT = "variant"  # both forms acceptable, one preferred
    AMBIGUOUS = "ambiguous"  # needs review, never flagged


class DiagnosticCategory(Enum):
    """Stable category codes for diagnostics."""

    VOWEL_LENGTH = "vowel-length"
    NASALIZATION = "nasalization"
    SIBILANT = "sibilant-choice"
    VOCALIC_R = "vocalic-r"
    VIRAMA = "virama"
    SEMIVOWEL = "semivowel"
    CONJUNCT = "conjunct-simplification"
    SANDHI = "sandhi"
    TABLE = "table-lookup"
    PUNCTUATION = "punctuation"
    GRAMMAR = "grammar"

    @classmethod
    def from_rule(cls, rule: Rule) -> DiagnosticCategory:
        """Infer a category from a rule citation code."""
        code = rule.code
        if rule.source is RuleSource.TABLE:
            return cls.TABLE
        if rule.source is RuleSource.PUNCTUATION:
            return cls.PUNCTUATION
        if "sandhi" in code or "सन्धि" in code:
            return cls.SANDHI
        if rule.source is RuleSource.GRAMMAR:
            return cls.GRAMMAR
        if code.startswith(("3(क)", "3(ई)")):
            return cls.VOWEL_LENGTH
        if code.startswith("3(ख)"):
            return cls.NASALIZATION
        if "ऋ" in code or "कृ" in code:
            return cls.VOCALIC_R
        if "क्ष" in code or "ज्ञ" in code or code.startswith(("3(उ)", "3(ग)(ऊ)")):
            return cls.CONJUNCT
        if code.startswith("3(ग)"):
            return cls.SIBILANT
        if code.startswith("3(ङ)"):
            return cls.VIRAMA
        if code.startswith(("3(इ)", "3(छ)")):
            return cls.SEMIVOWEL
        return cls.TABLE


# =============================================================================
# RULES AND DERIVATIONS
# =============================================================================


@dataclass(frozen=True)
class Rule:
    """
    A citation naming the authority for a correction.

    Attributes:
        source: Which body of rules the code points into.
        code: Section reference, e.g. "3(क)-12" or "Section 4".

    Example:
        >>> Rule(RuleSource.ORTHOGRAPHY, "3(क)-12").description
        'ह्रस्व/दीर्घ स्वर नियम'
    """

    source: RuleSource
    code: str

    @property
    def source_name(self) -> str:
        return self.source.source_name

    @property
    def description(self) -> str:
        """Human-readable family name derived from the code."""
        if self.source is RuleSource.ORTHOGRAPHY:
            for prefix, text in _SECTION_DESCRIPTIONS:
                if self.code.startswith(prefix):
                    return text
            return "वर्णविन्यास नियम"
        if self.source is RuleSource.GRAMMAR:
            return "व्याकरण नियम"
        if self.source is RuleSource.TABLE:
            return "शुद्ध-अशुद्ध शब्द सूची"
        return "विराम चिह्न नियम"

    def __str__(self) -> str:
        return f"{self.source_name} {self.code}"

    def to_dict(self) -> dict[str, str]:
        return {
            "source": self.source.value,
            "code": self.code,
            "source_name": self.source_name,
            "description": self.description,
        }


_SECTION_DESCRIPTIONS = (
    ("3(क)", "ह्रस्व/दीर्घ स्वर नियम"),
    ("3(ई)", "ह्रस्व/दीर्घ स्वर नियम"),
    ("3(ख)", "चन्द्रबिन्दु/शिरबिन्दु नियम"),
    ("3(ग)", "श/ष/स प्रयोग नियम"),
    ("3(घ)", "पदयोग/पदवियोग नियम"),
    ("3(ङ)", "हलन्त नियम"),
    ("3(इ)", "य/ए भेद नियम"),
    ("3(छ)", "य/ए, क्ष/छ भेद नियम"),
    ("3(उ)", "क्ष/छ भेद नियम"),
)


def orthography(code: str) -> Rule:
    return Rule(RuleSource.ORTHOGRAPHY, code)


def grammar(code: str) -> Rule:
    return Rule(RuleSource.GRAMMAR, code)


def table(code: str = "Section 4") -> Rule:
    return Rule(RuleSource.TABLE, code)


def punctuation(code: str = "Section 5") -> Rule:
    return Rule(RuleSource.PUNCTUATION, code)


@dataclass(frozen=True)
class Step:
    """One applied rule: citation, explanation and the word before and after."""

    rule: Rule
    description: str
    before: str
    after: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule.to_dict(),
            "description": self.description,
            "before": self.before,
            "after": self.after,
        }


@dataclass
class Derivation:
    """
    Trace of deriving the standard form of one word.

    The step list is the proof: each step's ``before`` is the previous
    step's ``after``, the first starts from ``input`` and the last ends at
    ``output``. A correct word has no steps.

    Attributes:
        input: The word as given.
        output: The standard form (equal to input when correct).
        steps: Ordered, append-only rule applications.
        is_correct: True when no rule changed the word.
        category: Category of the first correcting rule, if any.
        kind: ERROR for corrections, AMBIGUOUS for needs-review words.
        alternatives: Other accepted forms for needs-review words.
    """

    input: str
    output: str
    steps: list[Step] = field(default_factory=list)
    is_correct: bool = True
    category: DiagnosticCategory | None = None
    kind: DiagnosticKind = DiagnosticKind.ERROR
    alternatives: list[str] = field(default_factory=list)

    @classmethod
    def correct(cls, word: str) -> Derivation:
        return cls(input=word, output=word)

    @property
    def deciding_step(self) -> Step | None:
        """The last step, which produced the output."""
        return self.steps[-1] if self.steps else None

    @property
    def rule(self) -> Rule | None:
        """Rule of the first step that changed the word."""
        for step in self.steps:
            if step.before != step.after:
                return step.rule
        return None

    @property
    def explanation(self) -> str:
        return "; ".join(s.description for s in self.steps if s.before != s.after)

    def to_dict(self) -> dict[str, Any]:
        return {
            "input": self.input,
            "output": self.output,
            "is_correct": self.is_correct,
            "kind": self.kind.value,
            "category": self.category.value if self.category else None,
            "steps": [step.to_dict() for step in self.steps],
            "alternatives": list(self.alternatives),
        }


# =============================================================================
# DIAGNOSTICS
# =============================================================================


@dataclass(frozen=True)
class Diagnostic:
    """
    A single reported issue in checked text.

    Spans are byte offsets into the UTF-8 encoding of the checked text.
    Converting them to code-unit indices is the caller's job.
    """

    span_start: int
    span_end: int
    incorrect: str
    correction: str
    rule: Rule
    explanation: str
    category: DiagnosticCategory
    kind: DiagnosticKind = DiagnosticKind.ERROR
    confidence: float = 1.0

    @property
    def span(self) -> tuple[int, int]:
        return (self.span_start, self.span_end)

    def overlaps(self, other: Diagnostic) -> bool:
        return self.span_start < other.span_end and other.span_start < self.span_end

    def __str__(self) -> str:
        return f"[{self.category.value}] {self.incorrect} → {self.correction} ({self.explanation})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "span_start": self.span_start,
            "span_end": self.span_end,
            "incorrect": self.incorrect,
            "correction": self.correction,
            "rule": self.rule.to_dict(),
            "explanation": self.explanation,
            "category": self.category.value,
            "kind": self.kind.value,
            "confidence": self.confidence,
        }


# =============================================================================
# MORPHOLOGY
# =============================================================================


@dataclass(frozen=True)
class Morpheme:
    """
    Decomposition of a word into prefixes, root and suffixes.

    Prefixes are canonical forms (उत्, not the assimilated उल्); joining
    them onto the root goes through sandhi. Suffixes are surface forms
    and concatenate directly.
    """

    root: str
    prefixes: tuple[str, ...] = ()
    suffixes: tuple[str, ...] = ()
    origin: Origin = Origin.DESHAJ

    @property
    def is_decomposed(self) -> bool:
        return bool(self.prefixes or self.suffixes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "prefixes": list(self.prefixes),
            "suffixes": list(self.suffixes),
            "origin": self.origin.value,
        }
