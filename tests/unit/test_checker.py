"""
Unit tests for the tokenizer, phrase and grammar passes, and the check pipeline.
"""

import logging

import pytest

from varnavinyas.checker import (
    CheckPipeline,
    PipelineStats,
    byte_offsets,
    check_grammar,
    check_joining,
    check_style,
    check_text,
    check_word,
    create_pipeline,
    detach_suffix,
    tokenize,
)
from varnavinyas.config import CheckOptions
from varnavinyas.exceptions import ConfigurationError, DerivationError
from varnavinyas.models import DiagnosticCategory, DiagnosticKind, RuleSource


def _variants(diagnostics):
    return [d for d in diagnostics if d.kind is DiagnosticKind.VARIANT]


# =============================================================================
# TOKENIZER
# =============================================================================


class TestTokenizer:
    """Test word tokens and their byte spans."""

    def test_words_and_offsets(self):
        """Tokens carry UTF-8 byte offsets into the text."""
        tokens = tokenize("नेपाल सुन्दर छ.")
        assert [t.text for t in tokens] == ["नेपाल", "सुन्दर", "छ"]
        assert [t.span for t in tokens] == [(0, 15), (16, 34), (35, 38)]

    def test_punctuation_stripped(self):
        """Surrounding punctuation is not part of a token."""
        tokens = tokenize('"नेपाल", (हिमाल)')
        assert [t.text for t in tokens] == ["नेपाल", "हिमाल"]
        assert tokens[0].span == (1, 16)

    def test_non_devanagari_dropped(self):
        """Latin words and digits are not tokens."""
        assert [t.text for t in tokenize("hello नेपाल 123")] == ["नेपाल"]

    def test_empty_text(self):
        """Empty and blank text have no tokens."""
        assert tokenize("") == []
        assert tokenize("   \n") == []

    def test_suffix_detached(self):
        """A trailing case marker is split into the suffix."""
        token = tokenize("रामले")[0]
        assert token.stem == "राम"
        assert token.suffix == "ले"
        assert token.has_suffix
        assert token.span == (0, 15)

    def test_sentence_index(self):
        """Sentence-closing marks start a new sentence."""
        tokens = tokenize("धेरै। मानिसहरू आए? ठिक छ")
        assert [t.sentence for t in tokens] == [0, 1, 1, 2, 2]

    @pytest.mark.parametrize("mark", [",", "।", "-", "/", ";", "“"])
    def test_split_inside_segment(self, mark):
        """Punctuation between words splits them even without a space."""
        tokens = tokenize(f"हामि{mark}तिमि")
        assert [t.text for t in tokens] == ["हामि", "तिमि"]
        assert tokens[0].span == (0, 12)
        assert tokens[1].span == (12 + len(mark.encode("utf-8")), 24 + len(mark.encode("utf-8")))

    def test_danda_without_space_ends_sentence(self):
        """A danda glued to the next word still starts a new sentence."""
        tokens = tokenize("राम्रो।हामि")
        assert [t.text for t in tokens] == ["राम्रो", "हामि"]
        assert [t.sentence for t in tokens] == [0, 1]
        assert tokens[1].span == (21, 33)

    def test_byte_offsets(self):
        """Offsets count UTF-8 bytes per character."""
        assert byte_offsets("aक") == [0, 1, 4]


class TestDetachSuffix:
    """Test case and plural marker detachment."""

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("मानिसहरूलाई", ("मानिस", "हरूलाई")),
            ("घरमा", ("घर", "मा")),
            ("केटाहरू", ("केटा", "हरू")),
            ("उसको", ("उस", "को")),
            ("घर", ("घर", "")),
            ("मा", ("मा", "")),
        ],
    )
    def test_detach_suffix(self, word, expected):
        """Markers come off only when a two-letter stem remains."""
        assert detach_suffix(word) == expected


# =============================================================================
# PHRASES AND GRAMMAR
# =============================================================================


class TestPhrases:
    """Test the joining and style tables."""

    def test_joining(self):
        """A separated postposition is joined."""
        diagnostics = check_joining("ऊ घर तिर गयो।", [])
        assert len(diagnostics) == 1
        d = diagnostics[0]
        assert d.incorrect == "घर तिर"
        assert d.correction == "घरतिर"
        assert d.kind is DiagnosticKind.ERROR
        assert d.confidence == 0.95
        assert d.rule.code == "3(घ)"
        assert d.category is DiagnosticCategory.TABLE

    def test_joining_needs_word_boundary(self):
        """A phrase inside a longer word does not match."""
        assert check_joining("बघर तिरको", []) == []

    def test_joining_skips_existing_span(self):
        """A phrase overlapping an earlier finding is dropped."""
        existing = check_joining("ऊ घर तिर गयो।", [])
        assert check_joining("ऊ घर तिर गयो।", existing) == []

    def test_style(self):
        """Style phrases are low-confidence variants."""
        diagnostics = check_style("कामको लागि आयो।", [])
        assert len(diagnostics) == 1
        d = diagnostics[0]
        assert d.correction == "कामका लागि"
        assert d.kind is DiagnosticKind.VARIANT
        assert d.confidence < 0.8
        assert d.explanation.startswith("शैली सुझाव")
        assert d.category is DiagnosticCategory.GRAMMAR


class TestGrammar:
    """Test grammar heuristics on token sequences."""

    def test_quantifier_plural(self):
        """A plural after a quantifier is redundant."""
        diagnostics = check_grammar(tokenize("धेरै मानिसहरू आए।"), [])
        assert len(diagnostics) == 1
        d = diagnostics[0]
        assert d.incorrect == "मानिसहरू"
        assert d.correction == "मानिस"
        assert d.confidence == 0.62
        assert d.rule.source is RuleSource.GRAMMAR
        assert d.category is DiagnosticCategory.GRAMMAR

    def test_quantifier_in_other_sentence(self):
        """Heuristics do not reach across sentences."""
        assert check_grammar(tokenize("धेरै। मानिसहरू आए।"), []) == []

    def test_ergative_intransitive(self):
        """Ergative -ले with an intransitive verb is flagged."""
        diagnostics = check_grammar(tokenize("रामले घर गयो।"), [])
        assert [(d.incorrect, d.correction, d.confidence) for d in diagnostics] == [
            ("रामले", "राम", 0.68)
        ]

    def test_genitive_plural(self):
        """A genitive before a plural noun prefers -का."""
        diagnostics = check_grammar(tokenize("उसको साथीहरू"), [])
        assert [d.correction for d in diagnostics] == ["उसका"]

    def test_blocked_token_skipped(self):
        """Tokens under an existing diagnostic get no hint."""
        tokens = tokenize("धेरै मानिसहरू आए।")
        blocked = check_grammar(tokens, [])
        assert check_grammar(tokens, blocked) == []

    def test_all_hints_below_threshold(self):
        """Every hint is a variant below 0.8 confidence."""
        text = "धेरै मानिसहरू आए। रामले घर गयो। उसको साथीहरू"
        for d in check_grammar(tokenize(text), []):
            assert d.kind is DiagnosticKind.VARIANT
            assert d.confidence < 0.8


# =============================================================================
# PIPELINE
# =============================================================================


class TestCheckWord:
    """Test single-word checks."""

    def test_incorrect_word(self, pipeline):
        """A wrong word spans its whole byte length."""
        d = pipeline.check_word("मीठो")
        assert d.correction == "मिठो"
        assert d.span == (0, 12)
        assert d.category is DiagnosticCategory.VOWEL_LENGTH

    def test_table_word(self, pipeline):
        """Table corrections carry the table category."""
        d = pipeline.check_word("अत्याधिक")
        assert d.correction == "अत्यधिक"
        assert d.category is DiagnosticCategory.TABLE

    @pytest.mark.parametrize("word", [None, "", "   ", "hello", "नेपाल", "संग"])
    def test_no_diagnostic(self, pipeline, word):
        """Empty, non-Devanagari, correct and needs-review words yield nothing."""
        assert pipeline.check_word(word) is None

    def test_module_function(self):
        """check_word() uses a default pipeline."""
        assert check_word("अत्याधिक").correction == "अत्यधिक"


class TestCheckText:
    """Test free-text checks."""

    def test_punctuation_only(self, pipeline):
        """Correct words with a wrong full stop give one diagnostic."""
        diagnostics = pipeline.check_text("नेपाल सुन्दर छ.")
        assert len(diagnostics) == 1
        assert diagnostics[0].span == (38, 39)
        assert diagnostics[0].correction == "।"
        assert diagnostics[0].category is DiagnosticCategory.PUNCTUATION

    def test_word_diagnostic_span(self, pipeline):
        """Word diagnostics span the word in the raw text."""
        diagnostics = [d for d in pipeline.check_text("यो अत्याधिक हो।") if d.incorrect == "अत्याधिक"]
        assert len(diagnostics) == 1
        assert diagnostics[0].span == (7, 31)
        assert diagnostics[0].correction == "अत्यधिक"

    def test_suffix_reattached(self, pipeline):
        """A wrong stem is corrected with its case marker kept."""
        diagnostics = pipeline.check_text("मीठोमा")
        assert len(diagnostics) == 1
        assert diagnostics[0].incorrect == "मीठोमा"
        assert diagnostics[0].correction == "मिठोमा"
        assert diagnostics[0].span == (0, 18)

    @pytest.mark.parametrize(
        "text,span",
        [
            ("हामि,तिमि", (0, 12)),
            ("राम्रो।हामि", (21, 33)),
            ("नेपाल-हामि", (16, 28)),
            ("हामि/तिमि", (0, 12)),
            ("(हामि)", (1, 13)),
        ],
    )
    def test_word_glued_to_punctuation(self, pipeline, text, span):
        """A word attached to punctuation is still checked."""
        found = [d for d in pipeline.check_text(text) if d.incorrect == "हामि"]
        assert len(found) == 1, f"हामि not flagged in {text!r}"
        assert found[0].correction == "हामी"
        assert found[0].span == span

    def test_joining_phrase(self, pipeline):
        """Joining corrections run without grammar mode."""
        diagnostics = pipeline.check_text("ऊ घर तिर गयो।")
        assert [d.correction for d in diagnostics] == ["घरतिर"]

    def test_sorted_by_span(self, pipeline):
        """Diagnostics from all passes are sorted by start."""
        diagnostics = pipeline.check_text("अत्याधिक मीठो छ.")
        starts = [d.span_start for d in diagnostics]
        assert starts == sorted(starts)
        assert len(diagnostics) == 3

    def test_none_rejected(self, pipeline):
        """None is a caller error."""
        with pytest.raises(ValueError):
            pipeline.check_text(None)

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_text(self, pipeline, text):
        """Blank text has no diagnostics."""
        assert pipeline.check_text(text) == []

    def test_grammar_off_by_default(self, pipeline):
        """Default checks carry no grammar variants."""
        assert _variants(pipeline.check_text("धेरै मानिसहरू आए।")) == []

    def test_grammar_mode(self, grammar_pipeline):
        """Grammar mode adds variant hints."""
        variants = _variants(grammar_pipeline.check_text("धेरै मानिसहरू आए।"))
        assert [(d.correction, d.confidence) for d in variants] == [("मानिस", 0.62)]

    def test_grammar_mode_style(self, grammar_pipeline):
        """Style phrases are only checked in grammar mode."""
        variants = _variants(grammar_pipeline.check_text("कामको लागि आयो।"))
        assert "कामका लागि" in [d.correction for d in variants]

    def test_min_confidence(self):
        """Diagnostics under the threshold are dropped."""
        pipeline = create_pipeline(grammar=True, min_confidence=0.8)
        assert _variants(pipeline.check_text("धेरै मानिसहरू आए।")) == []

    def test_passes_can_be_disabled(self):
        """Punctuation and phrase passes are optional."""
        pipeline = create_pipeline(punctuation=False, phrases=False)
        assert pipeline.check_text("नेपाल सुन्दर छ.") == []
        assert pipeline.check_text("ऊ घर तिर गयो।") == []

    def test_module_function(self):
        """check_text() accepts options."""
        diagnostics = check_text("नेपाल सुन्दर छ.", CheckOptions(punctuation=False))
        assert diagnostics == []


class TestPipelineStats:
    """Test run statistics."""

    def test_counts(self, pipeline):
        """Known tokens are skipped and the rest analysed."""
        diagnostics, stats = pipeline.check_text_with_stats("नेपाल मीठो")
        assert len(diagnostics) == 1
        assert stats.tokens_seen == 2
        assert stats.tokens_skipped_known == 1
        assert stats.tokens_analysed == 1
        assert stats.diagnostics_by_category == {"vowel-length": 1}
        assert not stats.is_partial

    def test_max_tokens(self):
        """Tokens past the budget are counted but not analysed."""
        pipeline = create_pipeline(max_tokens=1)
        diagnostics, stats = pipeline.check_text_with_stats("नेपाल मीठो")
        assert diagnostics == []
        assert stats.tokens_truncated == 1
        assert stats.is_partial

    def test_max_tokens_logged(self, caplog):
        """Truncation is logged as a warning."""
        pipeline = create_pipeline(max_tokens=1)
        with caplog.at_level(logging.WARNING, logger="varnavinyas.checker.pipeline"):
            pipeline.check_text("नेपाल मीठो")
        assert "Token budget" in caplog.text

    def test_degraded_token(self, pipeline, monkeypatch, caplog):
        """A failing rule degrades the token instead of aborting the run."""

        def broken(word, lexicon=None):
            raise DerivationError("broken rule")

        monkeypatch.setattr("varnavinyas.checker.pipeline.derive", broken)
        with caplog.at_level(logging.WARNING, logger="varnavinyas.checker.pipeline"):
            diagnostics, stats = pipeline.check_text_with_stats("मीठो छ.")
        assert stats.tokens_degraded == 1
        assert stats.is_partial
        assert [d.correction for d in diagnostics] == ["।"]
        assert "broken rule" in caplog.text

    def test_to_dict(self):
        """Stats serialize with the partial flag."""
        data = PipelineStats(tokens_seen=3, tokens_truncated=1).to_dict()
        assert data["tokens_seen"] == 3
        assert data["is_partial"] is True


class TestPipelineConfig:
    """Test pipeline construction."""

    def test_workers_match_sequential(self, pipeline):
        """Thread fan-out gives the same diagnostics as sequential checking."""
        text = "अत्याधिक मीठो मानिसहरु परिक्षा नेपाल छ."
        parallel = create_pipeline(workers=4)
        assert parallel.check_text(text) == pipeline.check_text(text)

    def test_explicit_lexicon(self, small_lexicon):
        """A pipeline can use its own lexicon."""
        pipeline = CheckPipeline(lexicon=small_lexicon)
        assert pipeline.check_word("रुप").correction == "रूप"
        assert pipeline.get_info()["lexicon_words"] == len(small_lexicon)

    def test_get_info(self, grammar_pipeline):
        """get_info() reports the options."""
        info = grammar_pipeline.get_info()
        assert info["grammar"] is True
        assert info["workers"] == 1

    def test_invalid_option(self):
        """Bad options fail at construction."""
        with pytest.raises(ConfigurationError):
            create_pipeline(workers=0)
