"""
Text checking: tokenizer, punctuation pass, phrase and grammar checks,
and the pipeline that combines them.

Example:
    >>> from varnavinyas.checker import check_text
    >>> for d in check_text("नेपाल सुन्दर छ."):
    ...     print(d.span, d.correction)
    (38, 39) ।
"""

from varnavinyas.checker.grammar import check_grammar
from varnavinyas.checker.phrases import PhraseCorrection, check_joining, check_style
from varnavinyas.checker.pipeline import (
    CheckPipeline,
    PipelineStats,
    check_text,
    check_word,
    create_pipeline,
    diagnostic_from_derivation,
)
from varnavinyas.checker.punctuation import PunctuationMark, check_punctuation, is_abbreviation
from varnavinyas.checker.tokenizer import Token, byte_offsets, detach_suffix, tokenize

__all__ = [
    # Pipeline
    "CheckPipeline",
    "PipelineStats",
    "create_pipeline",
    "check_word",
    "check_text",
    "diagnostic_from_derivation",
    # Passes
    "check_punctuation",
    "check_joining",
    "check_style",
    "check_grammar",
    "PunctuationMark",
    "PhraseCorrection",
    "is_abbreviation",
    # Tokens
    "Token",
    "tokenize",
    "detach_suffix",
    "byte_offsets",
]
