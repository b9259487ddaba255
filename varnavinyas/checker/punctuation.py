"""
Punctuation pass over raw text.

Checks the conventions for the marks used in Devanagari prose:

- Sentence-final ``.`` instead of the full stop ``।`` (abbreviations
  such as ``डा.`` and chains such as ``त्रि.वि.`` are allowed)
- ``...`` instead of the ellipsis character
- Straight quotes instead of curly quotes
- Curly quotes left without their partner
- Spaces around ``/`` in alternatives and around ``-`` in compounds
- Spaces inside the ditto mark ``,,``
- Unbalanced brackets: ``()``, ``{}`` and ``[]``
- A space before ``?``, ``!``, ``;`` or ``,``

Only marks with Devanagari nearby are checked, so Latin text passes
through untouched. Every diagnostic is authoritative (confidence 1.0).
"""

from __future__ import annotations

import logging
from enum import Enum

from varnavinyas.checker.tokenizer import byte_offsets
from varnavinyas.models import Diagnostic, DiagnosticCategory, DiagnosticKind, punctuation
from varnavinyas.script import DANDA, is_devanagari

logger = logging.getLogger(__name__)

PUNCTUATION_RULE = punctuation("Section 5")

# How far to look for Devanagari around a mark
CONTEXT_WINDOW = 10

KNOWN_ABBREVIATIONS = frozenset({"डा", "श्री", "प्रा", "सं", "वि"})
MAX_ABBREVIATION_LENGTH = 4

ELLIPSIS = "…"
SPACING_MARKS = "?!;,"


class PunctuationMark(Enum):
    """Mark types with their Devanagari names."""

    FULL_STOP = "पूर्णविराम"
    COMMA = "अल्पविराम"
    SEMICOLON = "अर्धविराम"
    QUESTION = "प्रश्नवाचक"
    EXCLAMATION = "विस्मयबोधक"
    DOUBLE_QUOTE = "दोहोरो उद्धरण"
    SINGLE_QUOTE = "एकल उद्धरण"
    PARENTHESES = "कोष्ठक"
    BRACES = "मझौला कोष्ठक"
    SQUARE_BRACKETS = "ठूलो कोष्ठक"
    ABBREVIATION = "संक्षेप"
    DITTO = "ऐजन"
    SLASH = "तिर्यक् विराम"
    HYPHEN = "योजक चिह्न"
    ELLIPSIS = "ऐजन बिन्दु"


_SPACING_MARK_TYPES = {
    "?": PunctuationMark.QUESTION,
    "!": PunctuationMark.EXCLAMATION,
    ";": PunctuationMark.SEMICOLON,
    ",": PunctuationMark.COMMA,
}


class _Scan:
    """Shared state for one pass: the text, its byte offsets and the findings."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.offsets = byte_offsets(text)
        self.found: list[Diagnostic] = []

    def devanagari_before(self, i: int) -> bool:
        return any(is_devanagari(c) for c in self.text[max(0, i - CONTEXT_WINDOW) : i])

    def devanagari_after(self, i: int) -> bool:
        return any(is_devanagari(c) for c in self.text[i : i + CONTEXT_WINDOW])

    def near_devanagari(self, start: int, end: int) -> bool:
        return self.devanagari_before(start) or self.devanagari_after(end)

    def report(self, start: int, end: int, expected: str, mark: PunctuationMark, note: str) -> None:
        self.found.append(
            Diagnostic(
                span_start=self.offsets[start],
                span_end=self.offsets[end],
                incorrect=self.text[start:end],
                correction=expected,
                rule=PUNCTUATION_RULE,
                explanation=f"{mark.value}: {note}",
                category=DiagnosticCategory.PUNCTUATION,
                kind=DiagnosticKind.ERROR,
                confidence=1.0,
            )
        )


# =============================================================================
# FULL STOP AND ABBREVIATIONS
# =============================================================================


def _word_before(text: str, i: int) -> tuple[str, int]:
    """The whitespace-delimited word ending at index i, and its start."""
    start = i
    while start > 0 and not text[start - 1].isspace():
        start -= 1
    return text[start:i], start


def _is_short_devanagari(word: str) -> bool:
    return 0 < len(word) <= MAX_ABBREVIATION_LENGTH and all(is_devanagari(c) for c in word)


def _follows_abbreviation_chain(text: str, period: int) -> bool:
    i = period + 1
    while i < len(text) and text[i].isspace():
        i += 1
    j = i
    while j < len(text) and is_devanagari(text[j]):
        j += 1
    if j == i or not _is_short_devanagari(text[i:j]):
        return False
    return j < len(text) and text[j] == "."


def _preceded_by_abbreviation_chain(text: str, word_start: int) -> bool:
    i = word_start
    while i > 0 and text[i - 1].isspace():
        i -= 1
    if i == 0 or text[i - 1] != ".":
        return False
    previous, _ = _word_before(text, i - 1)
    return _is_short_devanagari(previous)


def is_abbreviation(text: str, period: int) -> bool:
    """
    Whether the ``.`` at ``period`` closes an abbreviation.

    Known abbreviations always count. A short Devanagari word counts only
    when it is part of a chain of such words (अ. दु. अ. आ.).
    """
    word, word_start = _word_before(text, period)
    if word in KNOWN_ABBREVIATIONS:
        return True
    return _is_short_devanagari(word) and (
        _follows_abbreviation_chain(text, period) or _preceded_by_abbreviation_chain(text, word_start)
    )


def _in_dot_run(text: str, i: int) -> bool:
    """Whether the dot at i belongs to a run of three or more."""
    start = i
    while start > 0 and text[start - 1] == ".":
        start -= 1
    end = i
    while end < len(text) and text[end] == ".":
        end += 1
    return end - start >= 3


def _check_full_stop(scan: _Scan) -> None:
    text = scan.text
    for i, ch in enumerate(text):
        if ch != "." or not scan.devanagari_before(i) or _in_dot_run(text, i):
            continue
        following = text[i + 1] if i + 1 < len(text) else ""
        if following in ("", "\n", "\r"):
            sentence_final = True
        elif following == " ":
            sentence_final = not is_abbreviation(text, i)
        else:
            sentence_final = False
        if sentence_final:
            scan.report(i, i + 1, DANDA, PunctuationMark.FULL_STOP, "वाक्यको अन्त्यमा (।) प्रयोग हुन्छ, (.) होइन")


def _check_ellipsis(scan: _Scan) -> None:
    text = scan.text
    i = 0
    while i < len(text):
        if text[i] != ".":
            i += 1
            continue
        start = i
        while i < len(text) and text[i] == ".":
            i += 1
        if i - start >= 3 and scan.near_devanagari(start, i):
            scan.report(start, i, ELLIPSIS, PunctuationMark.ELLIPSIS, "धेरै बिन्दुको सट्टा (…) प्रयोग गर्नुहोस्")


# =============================================================================
# QUOTES, SPACING AND PAIRS
# =============================================================================


def _check_quotes(scan: _Scan) -> None:
    text = scan.text
    for i, ch in enumerate(text):
        if ch not in "\"'" or not scan.near_devanagari(i, i + 1):
            continue
        opening = i == 0 or text[i - 1].isspace() or text[i - 1] in "([{-"
        if ch == '"':
            expected = "“" if opening else "”"
            scan.report(i, i + 1, expected, PunctuationMark.DOUBLE_QUOTE, "सिधा (\") को सट्टा “…” प्रयोग गर्नुहोस्")
        else:
            expected = "‘" if opening else "’"
            scan.report(i, i + 1, expected, PunctuationMark.SINGLE_QUOTE, "सिधा (') को सट्टा ‘…’ प्रयोग गर्नुहोस्")


def _check_space_before_mark(scan: _Scan) -> None:
    text = scan.text
    for i, ch in enumerate(text):
        if ch not in SPACING_MARKS or i == 0 or not text[i - 1].isspace():
            continue
        if not scan.devanagari_before(i):
            continue
        scan.report(i - 1, i + 1, ch, _SPACING_MARK_TYPES[ch], "चिह्न अघिल्लो शब्दसँग जोडिएर लेखिन्छ")


def _check_slash_spacing(scan: _Scan) -> None:
    text = scan.text
    for i, ch in enumerate(text):
        if ch != "/":
            continue
        space_before = i > 0 and text[i - 1].isspace()
        space_after = i + 1 < len(text) and text[i + 1].isspace()
        if not (space_before or space_after) or not scan.near_devanagari(i, i + 1):
            continue
        start = i - 1 if space_before else i
        end = i + 2 if space_after else i + 1
        scan.report(start, end, "/", PunctuationMark.SLASH, "विकल्पमा (/) शब्दसँगै लेखिन्छ")


def _check_hyphen_spacing(scan: _Scan) -> None:
    text = scan.text
    for i, ch in enumerate(text):
        if ch != "-" or "-" in text[max(0, i - 1) : i] + text[i + 1 : i + 2]:
            continue
        start = i
        while start > 0 and text[start - 1] in " \t":
            start -= 1
        end = i + 1
        while end < len(text) and text[end] in " \t":
            end += 1
        if start == i and end == i + 1:
            continue
        # A hyphen at a line edge is a list marker or a wrap, not a join
        if start == 0 or text[start - 1] == "\n" or end == len(text) or text[end] == "\n":
            continue
        if scan.near_devanagari(start, end):
            scan.report(start, end, "-", PunctuationMark.HYPHEN, "योजक चिह्न (-) दुवै शब्दसँग जोडिएर लेखिन्छ")


def _check_ditto_spacing(scan: _Scan) -> None:
    text = scan.text
    i = 0
    while i < len(text):
        if text[i] != ",":
            i += 1
            continue
        j = i + 1
        while j < len(text) and text[j].isspace():
            j += 1
        if j > i + 1 and j < len(text) and text[j] == "," and scan.near_devanagari(i, j + 1):
            scan.report(i, j + 1, ",,", PunctuationMark.DITTO, "दुई अल्पविराम सँगै लेखिन्छ (,,)")
            i = j + 1
            continue
        i += 1


QUOTE_PAIRS = {"“": "”", "‘": "’"}
_QUOTE_MARK_TYPES = {"“": PunctuationMark.DOUBLE_QUOTE, "‘": PunctuationMark.SINGLE_QUOTE}

BRACKET_PAIRS = {"(": ")", "{": "}", "[": "]"}
_BRACKET_MARK_TYPES = {
    "(": PunctuationMark.PARENTHESES,
    "{": PunctuationMark.BRACES,
    "[": PunctuationMark.SQUARE_BRACKETS,
}


def _unmatched(text: str, pairs: dict[str, str]) -> list[tuple[int, str]]:
    """Positions of opening or closing marks with no partner, and their opener."""
    closers = {close: open_ for open_, close in pairs.items()}
    stack: list[tuple[int, str]] = []
    unmatched: list[tuple[int, str]] = []
    for i, ch in enumerate(text):
        if ch in pairs:
            stack.append((i, ch))
        elif ch in closers:
            if stack and stack[-1][1] == closers[ch]:
                stack.pop()
            else:
                unmatched.append((i, closers[ch]))
    return unmatched + stack


def _check_quote_pairs(scan: _Scan) -> None:
    for i, opener in _unmatched(scan.text, QUOTE_PAIRS):
        if scan.near_devanagari(i, i + 1):
            expected = opener + QUOTE_PAIRS[opener]
            scan.report(i, i + 1, expected, _QUOTE_MARK_TYPES[opener], "उद्धरण चिह्न जोडीमा प्रयोग हुनुपर्छ")


def _check_brackets(scan: _Scan) -> None:
    for i, opener in _unmatched(scan.text, BRACKET_PAIRS):
        if scan.near_devanagari(i, i + 1):
            expected = opener + BRACKET_PAIRS[opener]
            scan.report(i, i + 1, expected, _BRACKET_MARK_TYPES[opener], "कोष्ठक सन्तुलित रूपमा प्रयोग हुनुपर्छ")


CHECKS = (
    _check_full_stop,
    _check_ellipsis,
    _check_quotes,
    _check_quote_pairs,
    _check_slash_spacing,
    _check_hyphen_spacing,
    _check_ditto_spacing,
    _check_brackets,
    _check_space_before_mark,
)


def check_punctuation(text: str) -> list[Diagnostic]:
    """
    Find punctuation-convention violations in text.

    Args:
        text: Raw text, including its punctuation.

    Returns:
        Diagnostics sorted by span start, spans in UTF-8 bytes.

    Example:
        >>> [d.correction for d in check_punctuation("नेपाल सुन्दर छ.")]
        ['।']
    """
    scan = _Scan(text)
    for check in CHECKS:
        check(scan)
    logger.debug("Punctuation pass: %d findings", len(scan.found))
    return sorted(scan.found, key=lambda d: d.span_start)
