"""
Diagnostic pipeline.

Checks free text in five passes:
1. Tokenize into Devanagari words with byte spans
2. Derive each word (full token, then its stem) and turn corrections
   into diagnostics
3. Phrase joining table, plus style variants in grammar mode
4. Grammar heuristics (grammar mode only)
5. Punctuation pass over the raw text

Diagnostics are then sorted by span start. Overlapping spans are kept;
rendering them is the consumer's concern.

Per-token analysis is independent and may fan out over a thread pool.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from varnavinyas.checker.grammar import check_grammar
from varnavinyas.checker.phrases import check_joining, check_style
from varnavinyas.checker.punctuation import check_punctuation
from varnavinyas.checker.tokenizer import Token, tokenize
from varnavinyas.config import CheckOptions
from varnavinyas.derivation import derive
from varnavinyas.exceptions import DerivationError, LexiconError, PipelineError, SandhiError
from varnavinyas.lexicon import Lexicon, default_lexicon
from varnavinyas.models import Derivation, Diagnostic, DiagnosticCategory, DiagnosticKind
from varnavinyas.script import has_devanagari, normalize

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class PipelineStats:
    """Counters for one check_text run."""

    tokens_seen: int = 0
    tokens_analysed: int = 0
    tokens_skipped_known: int = 0
    tokens_degraded: int = 0
    tokens_truncated: int = 0
    diagnostics_by_category: dict[str, int] = field(default_factory=dict)
    processing_time_ms: float = 0.0

    @property
    def is_partial(self) -> bool:
        """True when some tokens were not fully checked."""
        return bool(self.tokens_degraded or self.tokens_truncated)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tokens_seen": self.tokens_seen,
            "tokens_analysed": self.tokens_analysed,
            "tokens_skipped_known": self.tokens_skipped_known,
            "tokens_degraded": self.tokens_degraded,
            "tokens_truncated": self.tokens_truncated,
            "diagnostics_by_category": dict(self.diagnostics_by_category),
            "processing_time_ms": self.processing_time_ms,
            "is_partial": self.is_partial,
        }


@dataclass
class _TokenOutcome:
    diagnostic: Diagnostic | None = None
    skipped_known: bool = False
    degraded: bool = False


def diagnostic_from_derivation(derivation: Derivation, start: int, end: int) -> Diagnostic | None:
    """
    Convert a correcting derivation into a diagnostic over [start, end).

    Returns None for correct and needs-review words.
    """
    if derivation.is_correct:
        return None
    changing = [s for s in derivation.steps if s.before != s.after]
    first = changing[0]
    category = derivation.category or DiagnosticCategory.from_rule(first.rule)
    return Diagnostic(
        span_start=start,
        span_end=end,
        incorrect=derivation.input,
        correction=derivation.output,
        rule=first.rule,
        explanation=first.description,
        category=category,
        kind=derivation.kind,
        confidence=1.0,
    )


# =============================================================================
# CHECK PIPELINE
# =============================================================================


@dataclass
class CheckPipeline:
    """
    Orthography checking pipeline.

    Attributes:
        options: Which passes run and how tokens are scheduled.
        lexicon: Lexicon shared by every derivation. Defaults to the
            process-wide lexicon, loaded on construction.

    Example:
        >>> pipeline = CheckPipeline()
        >>> [d.correction for d in pipeline.check_text("नेपाल सुन्दर छ.")]
        ['।']
    """

    options: CheckOptions = field(default_factory=CheckOptions)
    lexicon: Lexicon | None = None

    def __post_init__(self) -> None:
        """Resolve the lexicon."""
        if self.lexicon is None:
            try:
                self.lexicon = default_lexicon()
            except LexiconError as e:
                raise PipelineError(f"lexicon failed to load: {e}") from e

    # -------------------------------------------------------------------------
    # Words
    # -------------------------------------------------------------------------

    def check_word(self, word: str | None) -> Diagnostic | None:
        """
        Check one word.

        Args:
            word: The word. Empty, blank or non-Devanagari input yields None.

        Returns:
            A diagnostic spanning the whole word, or None when nothing is
            wrong or the word cannot be judged.

        Raises:
            PipelineError: If the lexicon cannot be consulted.
        """
        if not word:
            return None
        word = normalize(word).strip()
        if not word or not has_devanagari(word):
            logger.debug("Skipping non-Devanagari input %r", word)
            return None
        try:
            derivation = derive(word, self.lexicon)
        except LexiconError as e:
            raise PipelineError(f"lexicon failure while checking {word!r}") from e
        except (DerivationError, SandhiError) as e:
            logger.warning("No diagnostic for %r: %s: %s", word, type(e).__name__, e)
            return None
        return diagnostic_from_derivation(derivation, 0, len(word.encode("utf-8")))

    def _check_token(self, token: Token) -> _TokenOutcome:
        full = normalize(token.text)
        try:
            if self.lexicon.contains(full):
                return _TokenOutcome(skipped_known=True)

            derivation = derive(full, self.lexicon)
            diagnostic = diagnostic_from_derivation(derivation, token.start, token.end)
            if diagnostic is not None or not token.has_suffix:
                return _TokenOutcome(diagnostic)

            stem = derive(normalize(token.stem), self.lexicon)
        except LexiconError as e:
            raise PipelineError(f"lexicon failure while checking {token.text!r}") from e
        except (DerivationError, SandhiError) as e:
            logger.warning("No diagnostic for token %r: %s: %s", token.text, type(e).__name__, e)
            return _TokenOutcome(degraded=True)

        diagnostic = diagnostic_from_derivation(stem, token.start, token.end)
        if diagnostic is None:
            return _TokenOutcome()
        return _TokenOutcome(
            Diagnostic(
                span_start=diagnostic.span_start,
                span_end=diagnostic.span_end,
                incorrect=diagnostic.incorrect + token.suffix,
                correction=diagnostic.correction + token.suffix,
                rule=diagnostic.rule,
                explanation=diagnostic.explanation,
                category=diagnostic.category,
                kind=diagnostic.kind,
                confidence=diagnostic.confidence,
            )
        )

    def _check_tokens(self, tokens: list[Token]) -> list[_TokenOutcome]:
        if self.options.workers > 1 and len(tokens) > 1:
            with ThreadPoolExecutor(max_workers=self.options.workers) as executor:
                return list(executor.map(self._check_token, tokens))
        return [self._check_token(token) for token in tokens]

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    def check_text(self, text: str) -> list[Diagnostic]:
        """
        Check free text.

        Args:
            text: The text. Spans in the result are UTF-8 byte offsets
                into it.

        Returns:
            Diagnostics sorted by span start.

        Raises:
            ValueError: If text is None.
            PipelineError: If the lexicon cannot be consulted.
        """
        diagnostics, _ = self.check_text_with_stats(text)
        return diagnostics

    def check_text_with_stats(self, text: str) -> tuple[list[Diagnostic], PipelineStats]:
        """
        Check free text and report what was done.

        Returns:
            Tuple of (diagnostics sorted by span start, statistics).
        """
        if text is None:
            raise ValueError("text must be a string, not None")

        start_time = time.time()
        stats = PipelineStats()
        if not text.strip():
            return [], stats

        options = self.options
        tokens = tokenize(text)
        stats.tokens_seen = len(tokens)
        if options.max_tokens is not None and len(tokens) > options.max_tokens:
            stats.tokens_truncated = len(tokens) - options.max_tokens
            logger.warning(
                "Token budget %d exceeded: %d tokens not analysed",
                options.max_tokens,
                stats.tokens_truncated,
            )
            tokens = tokens[: options.max_tokens]

        # Stage 1: words
        diagnostics: list[Diagnostic] = []
        for outcome in self._check_tokens(tokens):
            if outcome.skipped_known:
                stats.tokens_skipped_known += 1
                continue
            if outcome.degraded:
                stats.tokens_degraded += 1
                continue
            stats.tokens_analysed += 1
            if outcome.diagnostic is not None:
                diagnostics.append(outcome.diagnostic)

        # Stage 2: phrases
        if options.phrases:
            diagnostics.extend(check_joining(text, diagnostics))
            if options.grammar:
                diagnostics.extend(check_style(text, diagnostics))

        # Stage 3: grammar heuristics
        if options.grammar:
            diagnostics.extend(check_grammar(tokens, diagnostics))

        # Stage 4: punctuation
        if options.punctuation:
            diagnostics.extend(check_punctuation(text))

        diagnostics = [
            d
            for d in diagnostics
            if d.confidence >= options.min_confidence and d.kind is not DiagnosticKind.AMBIGUOUS
        ]
        diagnostics.sort(key=lambda d: d.span_start)

        stats.diagnostics_by_category = dict(Counter(d.category.value for d in diagnostics))
        stats.processing_time_ms = (time.time() - start_time) * 1000
        logger.debug(
            "Checked %d tokens (%d known, %d degraded) -> %d diagnostics in %.1fms",
            stats.tokens_seen,
            stats.tokens_skipped_known,
            stats.tokens_degraded,
            len(diagnostics),
            stats.processing_time_ms,
        )
        return diagnostics, stats

    def get_info(self) -> dict[str, Any]:
        """Get pipeline configuration information."""
        return {
            "grammar": self.options.grammar,
            "punctuation": self.options.punctuation,
            "phrases": self.options.phrases,
            "workers": self.options.workers,
            "max_tokens": self.options.max_tokens,
            "min_confidence": self.options.min_confidence,
            "lexicon_words": len(self.lexicon),
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def create_pipeline(
    grammar: bool = False,
    workers: int = 1,
    lexicon: Lexicon | None = None,
    **options: Any,
) -> CheckPipeline:
    """
    Create a checking pipeline.

    Args:
        grammar: Whether to add heuristic grammar suggestions.
        workers: Threads for per-token analysis.
        lexicon: Lexicon to use instead of the shared one.
        **options: Any other CheckOptions field.

    Returns:
        Configured CheckPipeline instance.

    Raises:
        ConfigurationError: If an option is out of range.
    """
    return CheckPipeline(
        options=CheckOptions(grammar=grammar, workers=workers, **options),
        lexicon=lexicon,
    )


def check_word(word: str | None) -> Diagnostic | None:
    """Check one word with the default pipeline."""
    return CheckPipeline().check_word(word)


def check_text(text: str, options: CheckOptions | None = None) -> list[Diagnostic]:
    """
    Check free text.

    Example:
        >>> [d.category.value for d in check_text("नेपाल सुन्दर छ.")]
        ['punctuation']
    """
    return CheckPipeline(options=options or CheckOptions()).check_text(text)
