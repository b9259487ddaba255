"""
Unit tests for Devanagari script helpers.
"""

import pytest

from varnavinyas.script import (
    aksharas,
    has_devanagari,
    is_matra,
    is_nukta_form,
    is_svar,
    is_vyanjan,
    matra_to_svar,
    normalize,
)


class TestPredicates:
    """Test character classes."""

    def test_letter_classes(self):
        """Vowels, vowel signs and consonants are told apart."""
        assert is_svar("अ") and is_svar("ई")
        assert is_matra("ी") and not is_matra("ई")
        assert is_vyanjan("क") and is_vyanjan("ह")
        assert not is_vyanjan("ा")

    def test_nukta(self):
        """The nukta sign and precomposed nukta letters are detected."""
        assert is_nukta_form("़")
        assert is_nukta_form("ज़")
        assert not is_nukta_form("ज")

    def test_has_devanagari(self):
        """Any Devanagari character counts."""
        assert has_devanagari("abc।")
        assert not has_devanagari("abc 123")

    def test_matra_to_svar(self):
        """Vowel signs map to their independent vowels."""
        assert matra_to_svar("ि") == "इ"
        assert matra_to_svar("क") is None


class TestNormalize:
    """Test canonical composition."""

    def test_nfc(self):
        """Precomposed nukta letters decompose to consonant and nukta."""
        assert normalize("ज़") == "ज़"

    def test_idempotent(self):
        """Normalizing twice changes nothing."""
        assert normalize(normalize("नेपाल")) == "नेपाल"


class TestAksharas:
    """Test syllable segmentation."""

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("क्षेत्र", ["क्षे", "त्र"]),
            ("आउँछ", ["आ", "उँ", "छ"]),
            ("नेपाल", ["ने", "पा", "ल"]),
            ("", []),
        ],
    )
    def test_aksharas(self, word, expected):
        """Clusters and signs attach to their consonant."""
        assert aksharas(word) == expected
