"""
Unit tests for the lexicon: lookup, building, homographs and the binary blob.
"""

import pytest

from varnavinyas.config import LexiconConfig
from varnavinyas.exceptions import ConfigurationError, LexiconError
from varnavinyas.lexicon import (
    Lexicon,
    LexiconBuilder,
    LookupStatus,
    bounded_levenshtein,
    build_lexicon,
    default_lexicon,
    override_lexicon,
    parse_origin_tag,
)
from varnavinyas.lexicon import blob
from varnavinyas.models import Gender, Origin, RuleSource, orthography, table


class TestLookup:
    """Test the three-way contains_or_correct verdict."""

    def test_known_word_is_correct(self, small_lexicon):
        """A listed word is CORRECT."""
        lookup = small_lexicon.contains_or_correct("नेपाल")
        assert lookup.status is LookupStatus.CORRECT
        assert lookup.is_correct
        assert lookup.correction is None

    def test_incorrect_word_has_correction(self, small_lexicon):
        """A word from the correction table is INCORRECT with its correction."""
        lookup = small_lexicon.contains_or_correct("अत्याधिक")
        assert lookup.status is LookupStatus.INCORRECT
        assert lookup.correction == "अत्यधिक"
        assert lookup.record.rule.source is RuleSource.TABLE

    def test_unknown_word_is_never_correct(self, small_lexicon):
        """A missing word is UNKNOWN, not CORRECT."""
        lookup = small_lexicon.contains_or_correct("कखगघ")
        assert lookup.status is LookupStatus.UNKNOWN
        assert not lookup.is_known
        assert not small_lexicon.contains("कखगघ")

    def test_contains_excludes_incorrect_words(self, small_lexicon):
        """contains() is only true for known-correct words."""
        assert "अत्यधिक" in small_lexicon
        assert "अत्याधिक" not in small_lexicon

    def test_multi_answer_correction_uses_first(self, small_lexicon):
        """The first "/" alternative is the suggested correction."""
        lookup = small_lexicon.contains_or_correct("रुप")
        assert lookup.correction == "रूप"
        assert lookup.record.alternatives == ["रूप", "रुपैयाँ"]
        assert small_lexicon.contains("रुपैयाँ")

    def test_correction_targets_become_known(self, lexicon):
        """Every correction target in the packaged table is a known word."""
        for incorrect, record in lexicon.incorrect_words():
            for target in record.alternatives:
                assert lexicon.contains(target), f"{target} (from {incorrect}) not known"


class TestMetadata:
    """Test origin, gender and homograph readings."""

    def test_origin_of(self, small_lexicon):
        """Origin is recorded per word."""
        assert small_lexicon.origin_of("परीक्षा") is Origin.TATSAM
        assert small_lexicon.origin_of("नेपाल") is Origin.DESHAJ
        assert small_lexicon.origin_of("कखगघ") is None

    def test_gender_of(self, small_lexicon):
        """Gender is recorded when given and NONE otherwise."""
        assert small_lexicon.gender_of("दाजु") is Gender.MASCULINE
        assert small_lexicon.gender_of("नेपाल") is Gender.NONE

    def test_homograph_keeps_both_readings(self, small_lexicon):
        """A word added under two origins keeps one entry per origin."""
        entries = small_lexicon.entries("आम")
        assert [e.origin for e in entries] == [Origin.TATSAM, Origin.TADBHAV]
        assert len([w for w in small_lexicon if w == "आम"]) == 1

    def test_packaged_gender_groups(self, lexicon):
        """Gender groups in the word table are applied."""
        assert lexicon.gender_of("आमा") is Gender.FEMININE
        assert lexicon.gender_of("किताब") is Gender.NEUTER

    def test_tagged_entries(self, lexicon):
        """Dictionary origin tags are parsed to origin classes."""
        assert lexicon.origin_of("बजार") is Origin.AAGANTUK
        assert lexicon.origin_of("स्कुल") is Origin.AAGANTUK
        assert lexicon.origin_of("गाउँ") is Origin.TADBHAV


class TestOriginTags:
    """Test dictionary origin tag parsing."""

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("[सं.]", Origin.TATSAM),
            ("[फा.]", Origin.AAGANTUK),
            ("[अ.]", Origin.AAGANTUK),
            ("[अङ्.]", Origin.AAGANTUK),
            ("[सं. ग्राम]", Origin.TADBHAV),
        ],
    )
    def test_parse_origin_tag(self, tag, expected):
        """Known tags map to origin classes."""
        assert parse_origin_tag(tag) is expected


class TestSearch:
    """Test prefix scans and near-match suggestions."""

    def test_keys_with_prefix(self, small_lexicon):
        """Prefix scan returns sorted surface words."""
        assert small_lexicon.keys_with_prefix("नेपा") == ["नेपाल"]
        assert small_lexicon.keys_with_prefix("क्ष") == []

    def test_suggest_nearby(self, lexicon):
        """Near matches are found within the edit distance."""
        assert "नेपाल" in lexicon.suggest_nearby("नेपल")

    def test_suggest_nearby_empty(self, lexicon):
        """An empty word has no suggestions."""
        assert lexicon.suggest_nearby("") == []

    def test_bounded_levenshtein(self):
        """Distance is exact within the bound and None beyond it."""
        assert bounded_levenshtein("घर", "घर", 2) == 0
        assert bounded_levenshtein("घर", "घरे", 2) == 1
        assert bounded_levenshtein("क", "खगघङ", 2) is None


class TestBuilder:
    """Test build-time integrity checks and determinism."""

    def test_word_both_correct_and_incorrect(self):
        """A word cannot be both correct and incorrect."""
        builder = LexiconBuilder()
        builder.add_word("रुप")
        builder.add_correction("रुप", "रूप", table(), "रूप")
        with pytest.raises(LexiconError, match="both correct and incorrect"):
            builder.build()

    def test_conflicting_corrections(self):
        """A word cannot have two different corrections."""
        builder = LexiconBuilder()
        builder.add_correction("रुप", "रूप", table(), "a")
        with pytest.raises(LexiconError, match="conflicting corrections"):
            builder.add_correction("रुप", "रुपैयाँ", table(), "b")

    def test_empty_word_rejected(self):
        """Blank words are rejected."""
        with pytest.raises(LexiconError):
            LexiconBuilder().add_word("  ")

    def test_build_is_deterministic(self):
        """Insertion order does not change the blob bytes."""
        first = LexiconBuilder()
        first.add_words(["क", "ख", "ग"], Origin.DESHAJ)
        first.add_correction("घा", "घ", orthography("3(क)"), "note")
        second = LexiconBuilder()
        second.add_correction("घा", "घ", orthography("3(क)"), "note")
        second.add_words(["ग", "क", "ख"], Origin.DESHAJ)
        assert first.build().to_bytes() == second.build().to_bytes()

    def test_packaged_build_is_deterministic(self):
        """Rebuilding from package data gives byte-identical output."""
        assert build_lexicon().to_bytes() == build_lexicon().to_bytes()

    def test_extra_words(self):
        """Extra words from the config are merged as known-correct."""
        lex = build_lexicon(LexiconConfig(extra_words={"कखगघ"}))
        assert lex.contains("कखगघ")


class TestBlob:
    """Test the binary blob round trip and corruption handling."""

    def test_round_trip(self, small_lexicon):
        """A saved lexicon loads back with the same lookups."""
        loaded = Lexicon.from_bytes(small_lexicon.to_bytes())
        assert loaded.to_bytes() == small_lexicon.to_bytes()
        assert loaded.contains_or_correct("अत्याधिक").correction == "अत्यधिक"
        assert [e.origin for e in loaded.entries("आम")] == [Origin.TATSAM, Origin.TADBHAV]

    def test_save_and_load(self, small_lexicon, tmp_path):
        """save() and load() go through the filesystem."""
        path = tmp_path / "lexicon.vvlx"
        small_lexicon.save(path)
        assert Lexicon.load(path).contains("नेपाल")

    def test_blob_config(self, small_lexicon, tmp_path):
        """A LexiconConfig blob path loads the blob instead of package data."""
        path = tmp_path / "small.vvlx"
        small_lexicon.save(path)
        lex = build_lexicon(LexiconConfig(blob_path=path))
        assert lex.contains("हिमाल")
        assert not lex.contains("पानी")

    def test_bad_magic(self):
        """A blob with the wrong magic is rejected."""
        with pytest.raises(LexiconError, match="magic"):
            Lexicon.from_bytes(b"garbage-garbage-garbage")

    def test_truncated_blob(self, small_lexicon):
        """A truncated blob is rejected."""
        with pytest.raises(LexiconError):
            Lexicon.from_bytes(small_lexicon.to_bytes()[:-7])

    def test_checksum_mismatch(self, small_lexicon):
        """A flipped byte is caught by the checksum."""
        data = bytearray(small_lexicon.to_bytes())
        data[len(data) // 2] ^= 0xFF
        with pytest.raises(LexiconError):
            Lexicon.from_bytes(bytes(data))

    def test_missing_file(self, tmp_path):
        """Loading a missing file raises LexiconError."""
        with pytest.raises(LexiconError):
            Lexicon.load(tmp_path / "missing.vvlx")

    def test_pack_meta(self):
        """Origin, gender and index round-trip through the packed u32."""
        meta = blob.pack_meta(Origin.AAGANTUK.code, Gender.FEMININE.code, 1234)
        assert blob.unpack_meta(meta) == (Origin.AAGANTUK.code, Gender.FEMININE.code, 1234)

    def test_pack_meta_overflow(self):
        """An index past the packed width is rejected."""
        with pytest.raises(LexiconError):
            blob.pack_meta(0, 0, blob.MAX_CORRECTION_INDEX + 1)


class TestDefaultLexicon:
    """Test the shared lexicon and scoped overrides."""

    def test_default_is_cached(self):
        """default_lexicon() returns the same instance."""
        assert default_lexicon() is default_lexicon()

    def test_override_restores(self, small_lexicon):
        """override_lexicon swaps the default and restores it on exit."""
        before = default_lexicon()
        with override_lexicon(small_lexicon) as active:
            assert active is small_lexicon
            assert default_lexicon() is small_lexicon
        assert default_lexicon() is before

    def test_lexicon_config_validation(self, tmp_path):
        """Extra words cannot be merged into a prebuilt blob."""
        with pytest.raises(ConfigurationError):
            LexiconConfig(blob_path=tmp_path / "x.vvlx", extra_words={"क"})
