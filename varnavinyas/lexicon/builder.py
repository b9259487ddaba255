"""
Deterministic lexicon construction.

The builder collects known-correct words and incorrect -> correct pairs,
checks them for consistency and produces an immutable Lexicon. Input order
never affects the result: the same words and corrections always build the
same keys, metadata and blob bytes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from varnavinyas.exceptions import LexiconError
from varnavinyas.lexicon import blob
from varnavinyas.lexicon.blob import CorrectionRecord
from varnavinyas.lexicon.lexicon import HOMOGRAPH_SEPARATOR, Lexicon, homograph_key
from varnavinyas.lexicon.tags import split_tagged_entry
from varnavinyas.models import Gender, Origin, Rule, orthography, table
from varnavinyas.script import normalize

logger = logging.getLogger(__name__)


def rule_for_code(code: str) -> Rule:
    """Table citations start with "Section"; everything else cites the orthography standard."""
    return table(code) if code.startswith("Section") else orthography(code)


@dataclass
class _PendingCorrection:
    record: CorrectionRecord
    origin: Origin


@dataclass
class LexiconBuilder:
    """
    Accumulates words and corrections, then builds a Lexicon.

    Integrity rules enforced by build():
    - a word cannot be both correct and incorrect
    - a word has at most one correction
    - every correction target (each "/" alternative) becomes a known-correct
      word, taking the origin given with the correction
    - the correction table must fit the packed index width

    Example:
        >>> builder = LexiconBuilder()
        >>> builder.add_word("नेपाल", Origin.DESHAJ)
        >>> builder.add_correction("अत्याधिक", "अत्यधिक", table(), "vowel sandhi")
        >>> lex = builder.build()
        >>> lex.contains("अत्यधिक")
        True
    """

    readings: dict[str, list[tuple[Origin, Gender]]] = field(default_factory=dict)
    corrections: dict[str, _PendingCorrection] = field(default_factory=dict)

    def add_word(self, word: str, origin: Origin = Origin.TATSAM, gender: Gender = Gender.NONE) -> None:
        """
        Add a known-correct word.

        Adding the same word with a new origin records a homograph reading.
        Adding it again with the same origin only fills in a missing gender.
        """
        word = self._clean(word)
        readings = self.readings.setdefault(word, [])
        for i, (known_origin, known_gender) in enumerate(readings):
            if known_origin is origin:
                if known_gender is Gender.NONE and gender is not Gender.NONE:
                    readings[i] = (origin, gender)
                return
        readings.append((origin, gender))

    def add_words(self, words: Iterable[str], origin: Origin = Origin.TATSAM) -> None:
        for word in words:
            self.add_word(word, origin)

    def set_gender(self, word: str, gender: Gender) -> None:
        """Record gender on every reading of an already added word."""
        word = self._clean(word)
        if word not in self.readings:
            raise LexiconError(f"cannot set gender of unknown word {word!r}")
        self.readings[word] = [(origin, gender) for origin, _ in self.readings[word]]

    def add_correction(
        self,
        incorrect: str,
        correct: str,
        rule: Rule,
        description: str,
        origin: Origin = Origin.TATSAM,
    ) -> None:
        """Add an incorrect -> correct pair."""
        incorrect = self._clean(incorrect)
        correct = normalize(correct).strip()
        if not correct:
            raise LexiconError(f"empty correction for {incorrect!r}")
        pending = _PendingCorrection(CorrectionRecord(correct, rule, description), origin)
        existing = self.corrections.get(incorrect)
        if existing is not None and existing.record != pending.record:
            raise LexiconError(
                f"conflicting corrections for {incorrect!r}: "
                f"{existing.record.correct!r} and {correct!r}"
            )
        self.corrections[incorrect] = pending

    def build(self) -> Lexicon:
        """
        Build the immutable lexicon.

        Raises:
            LexiconError: On any integrity violation.
        """
        readings = {word: list(r) for word, r in self.readings.items()}
        for incorrect in sorted(self.corrections):
            pending = self.corrections[incorrect]
            for target in pending.record.alternatives:
                if target not in readings:
                    readings[target] = [(pending.origin, Gender.NONE)]

        conflicts = sorted(set(readings) & set(self.corrections))
        if conflicts:
            raise LexiconError(
                f"{len(conflicts)} word(s) are both correct and incorrect: {', '.join(conflicts[:5])}"
            )

        records: list[CorrectionRecord] = []
        record_index: dict[CorrectionRecord, int] = {}
        entries: dict[str, int] = {}

        for incorrect in sorted(self.corrections):
            record = self.corrections[incorrect].record
            if record not in record_index:
                records.append(record)
                record_index[record] = len(records)
            if record_index[record] > blob.MAX_CORRECTION_INDEX:
                raise LexiconError(
                    f"correction table exceeds {blob.MAX_CORRECTION_INDEX} entries"
                )
            entries[incorrect] = blob.pack_meta(
                self.corrections[incorrect].origin.code, Gender.NONE.code, record_index[record]
            )

        for word, word_readings in readings.items():
            ordered = sorted(word_readings, key=lambda r: r[0].code)
            for reading, (origin, gender) in enumerate(ordered):
                entries[homograph_key(word, reading)] = blob.pack_meta(origin.code, gender.code, 0)

        keys = sorted(entries)
        for key in keys:
            if len(key.encode("utf-8")) > blob.MAX_KEY_BYTES:
                raise LexiconError(f"key too long for the lexicon format: {key}")
        metas = [entries[key] for key in keys]

        logger.debug(
            "Built lexicon: %d words, %d keys, %d correction records",
            len(readings),
            len(keys),
            len(records),
        )
        return Lexicon(keys, metas, records)

    @staticmethod
    def _clean(word: str) -> str:
        word = normalize(word).strip()
        if not word:
            raise LexiconError("empty word")
        if HOMOGRAPH_SEPARATOR in word:
            raise LexiconError(f"word contains a reserved character: {word!r}")
        return word


# =============================================================================
# BUILDING FROM TABLES
# =============================================================================


def add_word_table(builder: LexiconBuilder, data: dict[str, Any]) -> None:
    """
    Load a parsed word table into a builder.

    The table maps origin names (``tatsam``, ``tadbhav``, ``deshaj``,
    ``aagantuk``) to word lists, ``tagged`` to dictionary entries with an
    origin tag (``"मुद्दा [अ.]"``), and ``gender`` to ``masculine`` /
    ``feminine`` / ``neuter`` word lists.
    """
    for origin in Origin:
        builder.add_words(data.get(origin.value) or [], origin)

    for entry in data.get("tagged") or []:
        word, origin = split_tagged_entry(entry)
        if origin is None:
            raise LexiconError(f"unrecognized origin tag in {entry!r}")
        builder.add_word(word, origin)

    for gender_name, words in (data.get("gender") or {}).items():
        try:
            gender = Gender(gender_name)
        except ValueError as e:
            raise LexiconError(f"unknown gender group {gender_name!r}") from e
        for word in words:
            if normalize(word).strip() not in builder.readings:
                builder.add_word(word, Origin.TADBHAV)
            builder.set_gender(word, gender)


def add_correction_table(builder: LexiconBuilder, data: dict[str, Any]) -> None:
    """
    Load a parsed correction table into a builder.

    Each row is ``[incorrect, correct, code, note]`` with an optional fifth
    element naming the origin of the correct form.
    """
    for row in data.get("corrections") or []:
        if not isinstance(row, list) or len(row) not in (4, 5):
            raise LexiconError(f"malformed correction row: {row!r}")
        incorrect, correct, code, note = (str(v) for v in row[:4])
        try:
            origin = Origin(row[4]) if len(row) == 5 else Origin.TATSAM
        except ValueError as e:
            raise LexiconError(f"unknown origin in correction row {row!r}") from e
        builder.add_correction(incorrect, correct, rule_for_code(code), note, origin)
