"""
Varnavinyas: Nepali orthography checking with citable explanations.

This library decides whether Devanagari words follow the standard
Nepali orthography and, when they do not, derives the standard form
together with a step-by-step trace citing the rule that was broken.
Free text is checked word by word, with a punctuation pass and optional
heuristic grammar hints on top.

Example:
    >>> import varnavinyas
    >>> d = varnavinyas.derive("मीठो")
    >>> d.output, str(d.rule)
    ('मिठो', 'वर्णविन्यास नियम 3(क)-12')

    >>> for diagnostic in varnavinyas.check_text("नेपाल सुन्दर छ."):
    ...     print(diagnostic)
    [punctuation] . → । (पूर्णविराम: वाक्यको अन्त्यमा (।) प्रयोग हुन्छ, (.) होइन)

    >>> varnavinyas.sandhi.apply("अति", "अधिक").output
    'अत्यधिक'
"""

from varnavinyas import api, sandhi
from varnavinyas.checker import (
    CheckPipeline,
    PipelineStats,
    check_text,
    check_word,
    create_pipeline,
)
from varnavinyas.config import CheckOptions, LexiconConfig
from varnavinyas.derivation import WordAnalysis, analyze_word, derive
from varnavinyas.exceptions import (
    ConfigurationError,
    DerivationError,
    EmptyInputError,
    LexiconError,
    NoRuleAppliesError,
    PipelineError,
    SandhiError,
    VarnavinyasError,
)
from varnavinyas.lexicon import Lexicon, Lookup, LookupStatus, default_lexicon
from varnavinyas.models import (
    # Results
    Derivation,
    Diagnostic,
    # Enums
    DiagnosticCategory,
    DiagnosticKind,
    Gender,
    # Morphology
    Morpheme,
    Origin,
    OriginSource,
    # Citations
    Rule,
    RuleSource,
    Step,
)
from varnavinyas.morphology import classify, classify_with_provenance, decompose
from varnavinyas.sandhi import SandhiResult, SandhiType

__version__ = "0.1.0"
__all__ = [
    # Main API
    "check_word",
    "check_text",
    "derive",
    "analyze_word",
    "classify",
    "classify_with_provenance",
    "decompose",
    # Modules
    "api",
    "sandhi",
    # Pipeline
    "CheckPipeline",
    "PipelineStats",
    "create_pipeline",
    # Configuration
    "CheckOptions",
    "LexiconConfig",
    # Lexicon
    "Lexicon",
    "Lookup",
    "LookupStatus",
    "default_lexicon",
    # Results
    "Derivation",
    "Step",
    "Diagnostic",
    "WordAnalysis",
    "Morpheme",
    "SandhiResult",
    # Citations
    "Rule",
    "RuleSource",
    # Enums
    "Origin",
    "OriginSource",
    "Gender",
    "DiagnosticCategory",
    "DiagnosticKind",
    "SandhiType",
    # Exceptions
    "VarnavinyasError",
    "LexiconError",
    "SandhiError",
    "EmptyInputError",
    "NoRuleAppliesError",
    "DerivationError",
    "ConfigurationError",
    "PipelineError",
]
