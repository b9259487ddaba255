"""
Word tokenizer with UTF-8 byte offsets.

Text is split on whitespace and on every punctuation mark. Only runs
containing Devanagari become tokens. A trailing case or plural marker
is detached into ``suffix`` so the stem can be checked on its own, but
the token's span always covers the whole word: the marker stays
attached in the text.
"""

from __future__ import annotations

from dataclasses import dataclass

from varnavinyas.morphology.decompose import CASE_SUFFIXES, PLURAL_SUFFIXES
from varnavinyas.script import has_devanagari

# Characters that end a word
PUNCTUATION_CHARS = frozenset(".,!?;:-()[]{}\"'/।॥…“”‘’")

# Sentence-closing marks; the next token starts a new sentence
SENTENCE_END_CHARS = frozenset("।॥?!.")

MIN_STEM = 2


@dataclass(frozen=True)
class Token:
    """
    A word in checked text.

    Attributes:
        text: The word without surrounding punctuation.
        start: Byte offset of the word in the UTF-8 text.
        end: Byte offset just past the word.
        stem: The word with a trailing case/plural marker removed.
        suffix: The detached marker, empty when none was found.
        sentence: Index of the sentence the word belongs to.
    """

    text: str
    start: int
    end: int
    stem: str
    suffix: str = ""
    sentence: int = 0

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    @property
    def has_suffix(self) -> bool:
        return bool(self.suffix)


def byte_offsets(text: str) -> list[int]:
    """
    Byte offset of every character index, plus one for the end of text.

    ``byte_offsets(text)[i]`` is where ``text[i]`` starts in
    ``text.encode("utf-8")``.
    """
    offsets = [0] * (len(text) + 1)
    pos = 0
    for i, ch in enumerate(text):
        offsets[i] = pos
        pos += len(ch.encode("utf-8"))
    offsets[len(text)] = pos
    return offsets


def is_boundary_char(ch: str) -> bool:
    return ch.isspace() or ch in PUNCTUATION_CHARS


def detach_suffix(word: str) -> tuple[str, str]:
    """
    Split a word into stem and trailing case/plural marker.

    A case marker may follow a plural marker (मानिसहरूलाई); both are
    detached together. The stem must keep at least two characters.

    Example:
        >>> detach_suffix("मानिसहरूलाई")
        ('मानिस', 'हरूलाई')
        >>> detach_suffix("घर")
        ('घर', '')
    """
    stem, suffix = word, ""
    for marker in CASE_SUFFIXES:
        if stem.endswith(marker) and len(stem) - len(marker) >= MIN_STEM:
            stem, suffix = stem[: -len(marker)], marker
            break
    for marker in PLURAL_SUFFIXES:
        if stem.endswith(marker) and len(stem) - len(marker) >= MIN_STEM:
            stem, suffix = stem[: -len(marker)], marker + suffix
            break
    return stem, suffix


def tokenize(text: str) -> list[Token]:
    """
    Split text into Devanagari word tokens.

    Words end at whitespace and at every punctuation mark, so words joined
    by a comma, danda, hyphen or slash without a space are still separate
    tokens.

    Args:
        text: Text to tokenize.

    Returns:
        Tokens in text order. Runs with no Devanagari (Latin words,
        digits) are dropped.

    Example:
        >>> [t.text for t in tokenize("नेपाल राम्रो देश हो।")]
        ['नेपाल', 'राम्रो', 'देश', 'हो']
        >>> [t.text for t in tokenize("हामी,तिमी/उनी")]
        ['हामी', 'तिमी', 'उनी']
    """
    offsets = byte_offsets(text)
    tokens: list[Token] = []
    sentence = 0
    seen_word = False
    pending_break = False
    i, n = 0, len(text)

    while i < n:
        if is_boundary_char(text[i]):
            if seen_word and text[i] in SENTENCE_END_CHARS:
                pending_break = True
            i += 1
            continue

        start = i
        while i < n and not is_boundary_char(text[i]):
            i += 1
        if pending_break:
            sentence += 1
            pending_break = False
        seen_word = True

        word = text[start:i]
        if has_devanagari(word):
            stem, suffix = detach_suffix(word)
            tokens.append(Token(word, offsets[start], offsets[i], stem, suffix, sentence))

    return tokens
