"""
Rule derivation with a replayable trace.

Example:
    >>> from varnavinyas.derivation import derive
    >>> d = derive("राजनैतिक")
    >>> d.output, str(d.rule)
    ('राजनीतिक', 'शुद्ध-अशुद्ध तालिका Section 4')
"""

from varnavinyas.derivation.analysis import RuleNote, WordAnalysis, analyze_word
from varnavinyas.derivation.base import (
    FAMILY_ORDER,
    RuleContext,
    RuleFamily,
    RuleOutcome,
    RuleSpec,
)
from varnavinyas.derivation.engine import derive
from varnavinyas.derivation.registry import RULES, get_rule, iter_rules, rules_for
from varnavinyas.derivation.review import ReviewEntry, review_entry
from varnavinyas.derivation.structural import apply_vriddhi

__all__ = [
    # Engine
    "derive",
    "analyze_word",
    "WordAnalysis",
    "RuleNote",
    # Registry
    "RULES",
    "FAMILY_ORDER",
    "RuleFamily",
    "RuleSpec",
    "RuleContext",
    "RuleOutcome",
    "get_rule",
    "iter_rules",
    "rules_for",
    # Needs review
    "ReviewEntry",
    "review_entry",
    # Helpers
    "apply_vriddhi",
]
