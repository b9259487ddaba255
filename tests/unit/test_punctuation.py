"""
Unit tests for the punctuation pass.
"""

import pytest

from varnavinyas.checker import PunctuationMark, check_punctuation, is_abbreviation
from varnavinyas.models import DiagnosticCategory, RuleSource


class TestFullStop:
    """Test the sentence-final full stop."""

    def test_period_at_end(self):
        """A sentence-final period becomes a danda."""
        diagnostics = check_punctuation("नेपाल सुन्दर छ.")
        assert len(diagnostics) == 1
        d = diagnostics[0]
        assert d.span == (38, 39)
        assert d.incorrect == "."
        assert d.correction == "।"
        assert d.category is DiagnosticCategory.PUNCTUATION
        assert d.rule.source is RuleSource.PUNCTUATION
        assert d.confidence == 1.0
        assert d.explanation.startswith(PunctuationMark.FULL_STOP.value)

    def test_period_between_sentences(self):
        """A period followed by another sentence is flagged."""
        diagnostics = check_punctuation("म यहाँ हुँ. तिमी कहाँ छौ?")
        assert [d.correction for d in diagnostics] == ["।"]

    def test_period_before_newline(self):
        """A period at the end of a line is sentence-final."""
        assert len(check_punctuation("नेपाल सुन्दर छ.\nहिमाल अग्लो छ।")) == 1

    def test_danda_is_fine(self):
        """Text ending in a danda passes."""
        assert check_punctuation("नेपाल सुन्दर छ।") == []

    def test_latin_text_ignored(self):
        """Marks with no Devanagari nearby are not checked."""
        assert check_punctuation("Dr. Smith went home.") == []

    def test_known_abbreviation(self):
        """Known abbreviations keep their period."""
        assert check_punctuation("डा. राम") == []

    def test_abbreviation_chain(self):
        """A chain of short abbreviations is not sentence-final."""
        assert check_punctuation("अ. दु. अ. आ.ले सबैलाई सचेत गरायो।") == []

    def test_dotted_abbreviation_inside_word(self):
        """Periods followed directly by letters are not flagged."""
        assert check_punctuation("त्रि.वि.ले परीक्षा लियो।") == []

    def test_long_word_before_period(self):
        """A period after a full word is sentence-final, and dot runs are ellipses."""
        diagnostics = check_punctuation("नेपाल. र भारत...")
        assert [d.correction for d in diagnostics] == ["।", "…"]


class TestAbbreviation:
    """Test abbreviation detection."""

    def test_known(self):
        """Listed abbreviations are recognised."""
        text = "श्री. राम"
        assert is_abbreviation(text, text.index("."))

    def test_short_word_alone(self):
        """A lone short word is not an abbreviation."""
        text = "म यहाँ हुँ. तिमी"
        assert not is_abbreviation(text, text.index("."))


class TestEllipsis:
    """Test dot runs."""

    def test_three_dots(self):
        """Three dots become the ellipsis character."""
        diagnostics = check_punctuation("त्यसपछि... के भयो?")
        assert len(diagnostics) == 1
        assert diagnostics[0].incorrect == "..."
        assert diagnostics[0].correction == "…"


class TestQuotes:
    """Test straight quotes."""

    def test_double_quotes(self):
        """Straight double quotes become curly, opening then closing."""
        diagnostics = check_punctuation('"नेपाल"')
        assert [d.correction for d in diagnostics] == ["“", "”"]
        assert diagnostics[1].span == (16, 17)

    def test_single_quotes(self):
        """Straight single quotes become curly."""
        diagnostics = check_punctuation("उसले 'हो' भन्यो।")
        assert [d.correction for d in diagnostics] == ["‘", "’"]


class TestSpacing:
    """Test spacing around marks."""

    def test_space_before_question_mark(self):
        """A space before ? is flagged with the space in the span."""
        diagnostics = check_punctuation("के छ ?")
        assert len(diagnostics) == 1
        assert diagnostics[0].incorrect == " ?"
        assert diagnostics[0].correction == "?"
        assert diagnostics[0].span == (10, 12)

    def test_slash_spacing(self):
        """Spaces around / are flagged."""
        diagnostics = check_punctuation("राम / श्याम")
        assert len(diagnostics) == 1
        assert diagnostics[0].incorrect == " / "
        assert diagnostics[0].correction == "/"

    def test_slash_without_spaces(self):
        """A tight slash passes."""
        assert check_punctuation("राम/श्याम") == []

    def test_ditto_spacing(self):
        """A space inside the ditto mark is flagged."""
        diagnostics = check_punctuation("चामल, , दाल")
        assert any(d.incorrect == ", ," and d.correction == ",," for d in diagnostics)

    @pytest.mark.parametrize(
        "text,incorrect,span",
        [
            ("नेपाल - भारत सम्बन्ध", " - ", (15, 18)),
            ("नेपाल- भारत", "- ", (15, 17)),
            ("नेपाल -भारत", " -", (15, 17)),
        ],
    )
    def test_hyphen_spacing(self, text, incorrect, span):
        """Spaces around a joining hyphen are flagged with the spaces in the span."""
        diagnostics = check_punctuation(text)
        assert len(diagnostics) == 1
        assert diagnostics[0].incorrect == incorrect
        assert diagnostics[0].correction == "-"
        assert diagnostics[0].span == span
        assert diagnostics[0].explanation.startswith(PunctuationMark.HYPHEN.value)

    @pytest.mark.parametrize("text", ["नेपाल-भारत सम्बन्ध", "- नेपाल\n- भारत", "नेपाल -- भारत"])
    def test_hyphen_passes(self, text):
        """Tight hyphens, list markers and dash runs pass."""
        assert check_punctuation(text) == []


class TestQuotePairs:
    """Test curly quote pairing."""

    def test_unclosed_double(self):
        """An opening curly quote with no close is flagged."""
        diagnostics = check_punctuation("“नेपाल सुन्दर छ।")
        assert len(diagnostics) == 1
        assert diagnostics[0].span == (0, 3)
        assert diagnostics[0].correction == "“”"
        assert diagnostics[0].explanation.startswith(PunctuationMark.DOUBLE_QUOTE.value)

    def test_unopened_single(self):
        """A closing curly quote with no open is flagged."""
        diagnostics = check_punctuation("उसले हो’ भन्यो।")
        assert [d.incorrect for d in diagnostics] == ["’"]
        assert diagnostics[0].correction == "‘’"

    def test_paired(self):
        """Paired curly quotes pass."""
        assert check_punctuation("उसले “हो” भन्यो। उसले ‘हो’ भन्यो।") == []


class TestParentheses:
    """Test bracket balance."""

    def test_unclosed(self):
        """An unclosed parenthesis is flagged."""
        diagnostics = check_punctuation("(नेपाल")
        assert len(diagnostics) == 1
        assert diagnostics[0].span == (0, 1)
        assert diagnostics[0].correction == "()"

    def test_unopened(self):
        """A stray closing parenthesis is flagged."""
        diagnostics = check_punctuation("नेपाल)")
        assert len(diagnostics) == 1
        assert diagnostics[0].incorrect == ")"

    def test_balanced(self):
        """Balanced parentheses pass."""
        assert check_punctuation("नेपाल (हिमाली देश) हो।") == []

    @pytest.mark.parametrize(
        "text,correction,mark",
        [
            ("[नेपाल सुन्दर छ।", "[]", PunctuationMark.SQUARE_BRACKETS),
            ("{नेपाल छ।", "{}", PunctuationMark.BRACES),
            ("नेपाल छ]।", "[]", PunctuationMark.SQUARE_BRACKETS),
        ],
    )
    def test_other_brackets(self, text, correction, mark):
        """Square brackets and braces are balanced too."""
        diagnostics = check_punctuation(text)
        assert len(diagnostics) == 1
        assert diagnostics[0].correction == correction
        assert diagnostics[0].explanation.startswith(mark.value)

    def test_nested_mixed_brackets(self):
        """Properly nested brackets of different kinds pass."""
        assert check_punctuation("नेपाल [हिमाली (पहाडी) देश] हो।") == []

    def test_crossed_brackets(self):
        """A closer that does not match the innermost opener is flagged."""
        diagnostics = check_punctuation("नेपाल (हिमाली] देश")
        assert sorted(d.incorrect for d in diagnostics) == ["(", "]"]


class TestOrdering:
    """Test result ordering."""

    @pytest.mark.parametrize("text", ['"नेपाल" सुन्दर छ.', "के छ ? (हो"])
    def test_sorted_by_span(self, text):
        """Diagnostics come back sorted by span start."""
        starts = [d.span_start for d in check_punctuation(text)]
        assert starts == sorted(starts)
