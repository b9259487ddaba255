"""
Configuration for varnavinyas checking.

The core reads no environment variables or config files; callers build
these dataclasses directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from varnavinyas.exceptions import ConfigurationError


@dataclass
class CheckOptions:
    """
    Options for checking free text.

    Heuristic grammar suggestions are OFF by default. They are never
    authoritative and always carry confidence below 0.8.

    Example:
        >>> options = CheckOptions(grammar=True, workers=4)
        >>> diagnostics = check_text("धेरै मानिसहरू आए।", options)
    """

    # Optional passes
    grammar: bool = False  # lower-confidence agreement / redundancy hints
    punctuation: bool = True
    phrases: bool = True  # postposition joining table

    # Per-token fan-out (1 = sequential)
    workers: int = 1

    # Token budget; tokens past it are counted but not analysed
    max_tokens: int | None = None

    # Drop diagnostics below this confidence
    min_confidence: float = 0.0

    def __post_init__(self):
        """Validate configuration."""
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        if self.max_tokens is not None and self.max_tokens < 1:
            raise ConfigurationError(f"max_tokens must be >= 1, got {self.max_tokens}")
        if self.min_confidence < 0.0 or self.min_confidence > 1.0:
            raise ConfigurationError(
                f"min_confidence must be between 0.0 and 1.0, got {self.min_confidence}"
            )


@dataclass
class LexiconConfig:
    """
    Where the process-wide lexicon comes from.

    By default it is built from the packaged word and correction tables.
    A prebuilt blob can be loaded instead; extra words are merged in as
    known-correct entries when building.
    """

    blob_path: Path | None = None
    extra_words: set[str] = field(default_factory=set)

    def __post_init__(self):
        """Validate configuration."""
        if self.blob_path is not None:
            self.blob_path = Path(self.blob_path)
            if self.extra_words:
                raise ConfigurationError("extra_words cannot be merged into a prebuilt blob")
        if any(not w or w != w.strip() for w in self.extra_words):
            raise ConfigurationError("extra_words must be non-empty words without surrounding space")
