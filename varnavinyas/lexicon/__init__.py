"""
Word lexicon: known-correct words, known-incorrect words and corrections.

Example:
    >>> from varnavinyas.lexicon import default_lexicon
    >>> lookup = default_lexicon().contains_or_correct("राजनैतिक")
    >>> lookup.status, lookup.correction
    (<LookupStatus.INCORRECT: 'incorrect'>, 'राजनीतिक')
"""

from varnavinyas.lexicon.blob import CorrectionRecord
from varnavinyas.lexicon.builder import LexiconBuilder, rule_for_code
from varnavinyas.lexicon.lexicon import (
    Lexicon,
    LexiconEntry,
    Lookup,
    LookupStatus,
    bounded_levenshtein,
)
from varnavinyas.lexicon.loader import (
    build_lexicon,
    default_lexicon,
    override_lexicon,
    set_default_lexicon,
)
from varnavinyas.lexicon.tags import parse_origin_tag

__all__ = [
    # Index
    "Lexicon",
    "LexiconEntry",
    "Lookup",
    "LookupStatus",
    "CorrectionRecord",
    # Building
    "LexiconBuilder",
    "rule_for_code",
    "parse_origin_tag",
    # Shared instance
    "build_lexicon",
    "default_lexicon",
    "override_lexicon",
    "set_default_lexicon",
    # Utilities
    "bounded_levenshtein",
]
