"""
Pytest configuration and fixtures for varnavinyas tests.
"""

import pytest


@pytest.fixture(scope="session")
def lexicon():
    """Return the shared lexicon built from package data."""
    from varnavinyas.lexicon import default_lexicon

    return default_lexicon()


@pytest.fixture(scope="session")
def small_lexicon():
    """Return a small lexicon built from an in-memory word list."""
    from varnavinyas.lexicon import LexiconBuilder
    from varnavinyas.models import Gender, Origin, table

    builder = LexiconBuilder()
    builder.add_words(["नेपाल", "हिमाल"], Origin.DESHAJ)
    builder.add_words(["परीक्षा", "ज्ञान"], Origin.TATSAM)
    builder.add_word("मिठो", Origin.TADBHAV)
    builder.add_word("आम", Origin.TATSAM)
    builder.add_word("आम", Origin.TADBHAV)
    builder.add_word("दाजु", Origin.TADBHAV, Gender.MASCULINE)
    builder.add_correction("अत्याधिक", "अत्यधिक", table(), "अति + अधिक = अत्यधिक")
    builder.add_correction("रुप", "रूप/रुपैयाँ", table(), "रूप")
    return builder.build()


@pytest.fixture(scope="session")
def pipeline():
    """Return a CheckPipeline with default options."""
    from varnavinyas.checker import CheckPipeline

    return CheckPipeline()


@pytest.fixture(scope="session")
def grammar_pipeline():
    """Return a CheckPipeline with grammar heuristics enabled."""
    from varnavinyas.checker import create_pipeline

    return create_pipeline(grammar=True)
