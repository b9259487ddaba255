"""
Word analysis: origin, correctness, correction and explanatory notes.

Correct words get a short note on the spelling conventions their origin
class follows; incorrect words get one note per applied rule; unknown
words also get nearby lexicon suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from varnavinyas.derivation.engine import derive
from varnavinyas.lexicon import Lexicon, LookupStatus, default_lexicon
from varnavinyas.models import DiagnosticKind, Origin, OriginSource, Rule, orthography
from varnavinyas.morphology import classify_with_provenance
from varnavinyas.script import normalize

NOTE_TEMPLATES = {
    Origin.TATSAM: (
        orthography("3(क)"),
        "तत्सम शब्द: मूल संस्कृत शब्दकै ह्रस्व/दीर्घ स्वर, श/ष/स र पञ्चम वर्ण कायम रहन्छन्।",
    ),
    Origin.TADBHAV: (
        orthography("3(क)-12"),
        "तद्भव शब्द: प्रायः ह्रस्व स्वर र नासिक्यका लागि चन्द्रबिन्दु प्रयोग हुन्छ।",
    ),
    Origin.DESHAJ: (
        orthography("3(क)-12"),
        "देशज शब्द: नेपाली उच्चारणअनुसार ह्रस्व स्वर प्रयोग हुन्छ।",
    ),
    Origin.AAGANTUK: (
        orthography("3(ग)(अ)-9"),
        "आगन्तुक शब्द: ष/ण होइन स/न लेखिन्छ र उच्चारणअनुसार वर्णविन्यास हुन्छ।",
    ),
}


@dataclass(frozen=True)
class RuleNote:
    """A rule citation with a word-specific explanation."""

    rule: Rule
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {"rule": self.rule.to_dict(), "explanation": self.explanation}


@dataclass
class WordAnalysis:
    """Everything known about one word."""

    word: str
    origin: Origin
    origin_source: OriginSource
    origin_confidence: float
    is_correct: bool
    correction: str | None = None
    kind: DiagnosticKind = DiagnosticKind.ERROR
    rule_notes: list[RuleNote] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "origin": self.origin.value,
            "origin_label": self.origin.label,
            "origin_source": self.origin_source.value,
            "origin_confidence": self.origin_confidence,
            "is_correct": self.is_correct,
            "correction": self.correction,
            "kind": self.kind.value,
            "rule_notes": [note.to_dict() for note in self.rule_notes],
            "suggestions": list(self.suggestions),
        }


def analyze_word(word: str, lexicon: Lexicon | None = None) -> WordAnalysis:
    """
    Analyse one word.

    Example:
        >>> a = analyze_word("मीठो")
        >>> a.origin, a.correction
        (<Origin.TADBHAV: 'tadbhav'>, 'मिठो')
    """
    word = normalize(word).strip()
    if lexicon is None:
        lexicon = default_lexicon()
    decision = classify_with_provenance(word, lexicon)
    derivation = derive(word, lexicon)

    analysis = WordAnalysis(
        word=word,
        origin=decision.origin,
        origin_source=decision.source,
        origin_confidence=decision.confidence,
        is_correct=derivation.is_correct,
        kind=derivation.kind,
    )
    if not word:
        return analysis

    if not derivation.is_correct:
        analysis.correction = derivation.output
        analysis.rule_notes = [
            RuleNote(step.rule, step.description) for step in derivation.steps if step.before != step.after
        ]
        return analysis

    if derivation.kind is DiagnosticKind.AMBIGUOUS:
        analysis.suggestions = list(derivation.alternatives)
        analysis.rule_notes = [
            RuleNote(orthography("3(ख)"), "यो शब्दका दुवै रूप प्रचलित छन्; समीक्षा आवश्यक छ।")
        ]
        return analysis

    rule, note = NOTE_TEMPLATES[decision.origin]
    analysis.rule_notes = [RuleNote(rule, note)]
    if lexicon.contains_or_correct(word).status is LookupStatus.UNKNOWN:
        analysis.suggestions = lexicon.suggest_nearby(word)
    return analysis
