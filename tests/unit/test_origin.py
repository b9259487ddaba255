"""
Unit tests for origin classification.
"""

import pytest

from varnavinyas.models import Origin, OriginSource
from varnavinyas.morphology import classify, classify_with_provenance, heuristic_origin


class TestProvenance:
    """Test where an origin decision comes from."""

    def test_override_table_wins(self, small_lexicon):
        """Curated overrides are used before the lexicon."""
        decision = classify_with_provenance("प्रशासन", small_lexicon)
        assert decision.origin is Origin.TATSAM
        assert decision.source is OriginSource.OVERRIDE
        assert decision.confidence == 1.0

    def test_override_over_lexicon_entry(self, small_lexicon):
        """A word in both the overrides and the lexicon reports the override."""
        assert small_lexicon.contains("रूप")
        assert classify_with_provenance("रूप", small_lexicon).source is OriginSource.OVERRIDE

    def test_lexicon_origin(self, small_lexicon):
        """Words recorded in the lexicon use its origin."""
        decision = classify_with_provenance("नेपाल", small_lexicon)
        assert decision.origin is Origin.DESHAJ
        assert decision.source is OriginSource.LEXICON
        assert decision.confidence == 0.9

    def test_heuristic_fallback(self, small_lexicon):
        """Unknown words fall back to the spelling heuristics."""
        decision = classify_with_provenance("कृषि", small_lexicon)
        assert decision.origin is Origin.TATSAM
        assert decision.source is OriginSource.HEURISTIC
        assert decision.confidence == 0.6
        assert decision.is_heuristic

    def test_default_lexicon_used(self):
        """Without a lexicon argument the shared lexicon is consulted."""
        assert classify("नेपाल") is Origin.DESHAJ

    @pytest.mark.parametrize("word", ["", "   ", "abc", "१२३", "।"])
    def test_never_raises(self, word, small_lexicon):
        """Any string gets an origin."""
        assert isinstance(classify(word, small_lexicon), Origin)


class TestHeuristics:
    """Test spelling-only origin guesses."""

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("कृषि", Origin.TATSAM),
            ("ऋतु", Origin.TATSAM),
            ("भाषा", Origin.TATSAM),
            ("क्षमा", Origin.TATSAM),
            ("दुःख", Origin.TATSAM),
            ("गर्नु", Origin.TADBHAV),
            ("मीठो", Origin.TADBHAV),
            ("ठूलो", Origin.DESHAJ),
            ("कमल", Origin.DESHAJ),
            ("ज़मीन", Origin.AAGANTUK),
        ],
    )
    def test_heuristic_origin(self, word, expected):
        """Markers, endings and nukta letters decide the class."""
        assert heuristic_origin(word) is expected

    def test_empty_word(self):
        """The empty word defaults to deshaj."""
        assert heuristic_origin("") is Origin.DESHAJ
