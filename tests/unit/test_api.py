"""
Unit tests for the serializable boundary API.
"""

import json

from varnavinyas import api


class TestWordApi:
    """Test word-level API functions."""

    def test_check_word(self):
        """A wrong word returns a diagnostic dict."""
        data = api.check_word("अत्याधिक")
        assert data["correction"] == "अत्यधिक"
        assert data["category"] == "table-lookup"
        assert data["span_start"] == 0

    def test_check_word_correct(self):
        """A correct word returns None."""
        assert api.check_word("नेपाल") is None

    def test_derive(self):
        """derive() returns the trace as plain data."""
        data = api.derive("मीठो")
        assert data["output"] == "मिठो"
        assert [step["after"] for step in data["steps"]] == ["मीठो", "मिठो"]

    def test_analyze_word(self):
        """analyze_word() includes the origin and correction."""
        data = api.analyze_word("मीठो")
        assert data["origin"] == "tadbhav"
        assert data["origin_label"] == "तद्भव"
        assert data["correction"] == "मिठो"

    def test_decompose_word(self):
        """decompose_word() lists prefixes and suffixes."""
        data = api.decompose_word("प्रशासनमा")
        assert data["root"] == "शासन"
        assert data["prefixes"] == ["प्र"]
        assert data["suffixes"] == ["मा"]


class TestTextApi:
    """Test text-level API functions."""

    def test_check_text(self):
        """check_text() returns a list of dicts."""
        data = api.check_text("नेपाल सुन्दर छ.")
        assert len(data) == 1
        assert data[0]["span_start"] == 38
        assert data[0]["correction"] == "।"

    def test_check_text_grammar_flag(self):
        """The grammar flag adds variant hints."""
        plain = api.check_text("धेरै मानिसहरू आए।")
        hinted = api.check_text("धेरै मानिसहरू आए।", grammar=True)
        assert not [d for d in plain if d["kind"] == "variant"]
        assert [d["correction"] for d in hinted if d["kind"] == "variant"] == ["मानिस"]


class TestSandhiApi:
    """Test sandhi API functions."""

    def test_sandhi_apply(self):
        """A successful join returns the result dict."""
        data = api.sandhi_apply("अति", "अधिक")
        assert data["output"] == "अत्यधिक"
        assert data["sandhi_type"] == "vowel sandhi"

    def test_sandhi_apply_error(self):
        """A failed join returns an error dict instead of raising."""
        assert api.sandhi_apply("राम", "घर") == {"error": "no sandhi rule applies for 'राम' + 'घर'"}
        assert api.sandhi_apply("", "घर") == {"error": "empty input"}

    def test_sandhi_split(self):
        """sandhi_split() lists readings as dicts."""
        data = api.sandhi_split("अत्यधिक")
        assert data[0]["left"] == "अति"
        assert data[0]["right"] == "अधिक"
        assert data[0]["sandhi_type"] == "vowel sandhi"


class TestSerializable:
    """Test that results are JSON-ready."""

    def test_json_round_trip(self):
        """Every API result survives json.dumps."""
        results = [
            api.check_word("अत्याधिक"),
            api.check_text("नेपाल सुन्दर छ.", grammar=True),
            api.derive("मीठो"),
            api.analyze_word("संग"),
            api.decompose_word("उल्लिखित"),
            api.sandhi_apply("मनः", "रथ"),
            api.sandhi_split("महेश"),
        ]
        for result in results:
            assert json.loads(json.dumps(result, ensure_ascii=False)) == result
