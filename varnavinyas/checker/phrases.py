"""
Multi-word phrase checks.

The joining table covers postpositions written apart from their head
word (घर तिर → घरतिर). Those matches are authoritative and always run.
The style table holds preferred usage variants; it only runs in grammar
mode and its findings are variants, not errors.

Phrases only match on word boundaries, and a match is dropped if it
overlaps a span that already has a diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from varnavinyas.checker.tokenizer import byte_offsets, is_boundary_char
from varnavinyas.exceptions import VarnavinyasError
from varnavinyas.models import (
    Diagnostic,
    DiagnosticCategory,
    DiagnosticKind,
    Rule,
    grammar,
    orthography,
)
from varnavinyas.resources import load_table
from varnavinyas.script import normalize

JOINING_CONFIDENCE = 0.95
STYLE_CONFIDENCE = 0.78

JOINING_RULE = orthography("3(घ)")
STYLE_RULE = grammar("section4-phrase-style")


@dataclass(frozen=True)
class PhraseCorrection:
    incorrect: str
    correct: str
    note: str


def _parse(group: str) -> tuple[PhraseCorrection, ...]:
    rows = load_table("phrases").get(group) or []
    phrases = []
    for row in rows:
        try:
            incorrect, correct, note = row
        except (TypeError, ValueError) as e:
            raise VarnavinyasError(f"malformed phrase entry in {group}: {row!r}") from e
        phrases.append(PhraseCorrection(normalize(incorrect), normalize(correct), note))
    return tuple(phrases)


@lru_cache(maxsize=1)
def joining_phrases() -> tuple[PhraseCorrection, ...]:
    return _parse("joining")


@lru_cache(maxsize=1)
def style_phrases() -> tuple[PhraseCorrection, ...]:
    return _parse("style")


def _on_word_boundary(text: str, start: int, end: int) -> bool:
    before_ok = start == 0 or is_boundary_char(text[start - 1])
    after_ok = end >= len(text) or is_boundary_char(text[end])
    return before_ok and after_ok


def _overlaps(existing: list[Diagnostic], start: int, end: int) -> bool:
    return any(d.span_start < end and start < d.span_end for d in existing)


def _scan(
    text: str,
    phrases: tuple[PhraseCorrection, ...],
    existing: list[Diagnostic],
    rule: Rule,
    category: DiagnosticCategory,
    kind: DiagnosticKind,
    confidence: float,
    label: str,
) -> list[Diagnostic]:
    offsets = byte_offsets(text)
    found: list[Diagnostic] = []
    for phrase in phrases:
        start = text.find(phrase.incorrect)
        while start != -1:
            end = start + len(phrase.incorrect)
            span_start, span_end = offsets[start], offsets[end]
            if _on_word_boundary(text, start, end) and not _overlaps(existing + found, span_start, span_end):
                found.append(
                    Diagnostic(
                        span_start=span_start,
                        span_end=span_end,
                        incorrect=phrase.incorrect,
                        correction=phrase.correct,
                        rule=rule,
                        explanation=f"{label}: {phrase.note}",
                        category=category,
                        kind=kind,
                        confidence=confidence,
                    )
                )
            start = text.find(phrase.incorrect, start + 1)
    return found


def check_joining(text: str, existing: list[Diagnostic]) -> list[Diagnostic]:
    """
    Find postpositions that should be joined to the preceding word.

    Example:
        >>> [d.correction for d in check_joining("ऊ घर तिर गयो।", [])]
        ['घरतिर']
    """
    return _scan(
        text,
        joining_phrases(),
        existing,
        JOINING_RULE,
        DiagnosticCategory.TABLE,
        DiagnosticKind.ERROR,
        JOINING_CONFIDENCE,
        "पदयोग/पदवियोग",
    )


def check_style(text: str, existing: list[Diagnostic]) -> list[Diagnostic]:
    """Find phrases with a preferred usage variant."""
    return _scan(
        text,
        style_phrases(),
        existing,
        STYLE_RULE,
        DiagnosticCategory.GRAMMAR,
        DiagnosticKind.VARIANT,
        STYLE_CONFIDENCE,
        "शैली सुझाव",
    )
