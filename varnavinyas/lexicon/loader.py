"""
Process-wide default lexicon.

The default lexicon is built on first use from the packaged word and
correction tables (or loaded from a prebuilt blob) and shared read-only
from then on. Tests swap it with override_lexicon().
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager

from varnavinyas.config import LexiconConfig
from varnavinyas.exceptions import LexiconError, VarnavinyasError
from varnavinyas.lexicon.builder import LexiconBuilder, add_correction_table, add_word_table
from varnavinyas.lexicon.lexicon import Lexicon
from varnavinyas.models import Origin
from varnavinyas.resources import load_table

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_default: Lexicon | None = None


def build_lexicon(config: LexiconConfig | None = None) -> Lexicon:
    """
    Build a lexicon from package data, or load the configured blob.

    Args:
        config: Where to load from. Defaults to the packaged tables.

    Returns:
        A new Lexicon.

    Raises:
        LexiconError: If the data cannot be read or fails integrity checks.
    """
    config = config or LexiconConfig()
    start = time.time()

    if config.blob_path is not None:
        lexicon = Lexicon.load(config.blob_path)
    else:
        try:
            words = load_table("lexicon")
            corrections = load_table("corrections")
        except VarnavinyasError as e:
            raise LexiconError(f"cannot read lexicon data: {e}") from e

        builder = LexiconBuilder()
        add_word_table(builder, words)
        builder.add_words(sorted(config.extra_words), Origin.TATSAM)
        add_correction_table(builder, corrections)
        lexicon = builder.build()

    logger.debug(
        "Lexicon ready: %d words, %d corrections in %.1f ms",
        len(lexicon),
        lexicon.correction_count,
        (time.time() - start) * 1000,
    )
    return lexicon


def default_lexicon() -> Lexicon:
    """The shared lexicon, built on first call."""
    global _default
    if _default is None:
        with _lock:
            if _default is None:
                _default = build_lexicon()
    return _default


def set_default_lexicon(lexicon: Lexicon | None) -> Lexicon | None:
    """
    Replace the shared lexicon.

    Passing None resets it so the next default_lexicon() call rebuilds
    from package data.

    Returns:
        The previous default (None if it was never built).
    """
    global _default
    with _lock:
        previous, _default = _default, lexicon
    return previous


@contextmanager
def override_lexicon(lexicon: Lexicon) -> Iterator[Lexicon]:
    """
    Use a different default lexicon inside a ``with`` block.

    Overrides nest; each exit restores the lexicon that was active on entry.

    Example:
        >>> with override_lexicon(small_lexicon):
        ...     derive("नमूना")
    """
    previous = set_default_lexicon(lexicon)
    try:
        yield lexicon
    finally:
        set_default_lexicon(previous)
