"""
Binary lexicon format.

The blob is a versioned, self-checking serialization of a built lexicon:

    header      : magic 'VVLX', format version (u16), flags (u16),
                  key count (u32), correction count (u32)
    corrections : per record, rule source (u8) then rule code, correct
                  form and description, each as u16 length + UTF-8 bytes
    keys        : sorted, front-coded against the previous key:
                  shared prefix bytes (u8), suffix length (u8), suffix,
                  packed metadata (u32)
    trailer     : CRC-32 of everything before it (u32)

All integers are little-endian. The same keys, metadata and corrections
always encode to the same bytes.
"""

from __future__ import annotations

import logging
import struct
import zlib
from dataclasses import dataclass

from varnavinyas.exceptions import LexiconError
from varnavinyas.models import Rule, RuleSource

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

MAGIC = b"VVLX"
FORMAT_VERSION = 1

_HEADER = struct.Struct("<4sHHII")
_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")

MAX_KEY_BYTES = 255
MAX_FIELD_BYTES = 0xFFFF

# Packed metadata layout
ORIGIN_BITS = 2
GENDER_BITS = 2
INDEX_SHIFT = ORIGIN_BITS + GENDER_BITS
MAX_CORRECTION_INDEX = (1 << (32 - INDEX_SHIFT)) - 1

_SOURCES = (RuleSource.ORTHOGRAPHY, RuleSource.GRAMMAR, RuleSource.TABLE, RuleSource.PUNCTUATION)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class CorrectionRecord:
    """
    One row of the correction table.

    Attributes:
        correct: Standard form. May list alternatives separated by "/".
        rule: Citation for the correction.
        description: Why the incorrect form is wrong.
    """

    correct: str
    rule: Rule
    description: str

    @property
    def primary(self) -> str:
        """First listed alternative, used as the suggested correction."""
        return self.correct.split("/")[0].strip()

    @property
    def alternatives(self) -> list[str]:
        return [alt.strip() for alt in self.correct.split("/") if alt.strip()]


def pack_meta(origin_code: int, gender_code: int, correction_index: int) -> int:
    """Pack origin, gender and correction index into one u32."""
    if not 0 <= correction_index <= MAX_CORRECTION_INDEX:
        raise LexiconError(
            f"correction index {correction_index} does not fit in {32 - INDEX_SHIFT} bits"
        )
    return (origin_code & 0b11) | ((gender_code & 0b11) << ORIGIN_BITS) | (
        correction_index << INDEX_SHIFT
    )


def unpack_meta(meta: int) -> tuple[int, int, int]:
    """Inverse of pack_meta: (origin code, gender code, correction index)."""
    return meta & 0b11, (meta >> ORIGIN_BITS) & 0b11, meta >> INDEX_SHIFT


# =============================================================================
# ENCODING
# =============================================================================


def _encode_field(text: str) -> bytes:
    raw = text.encode("utf-8")
    if len(raw) > MAX_FIELD_BYTES:
        raise LexiconError(f"correction field too long ({len(raw)} bytes): {text[:20]}...")
    return _U16.pack(len(raw)) + raw


def encode(keys: list[str], metas: list[int], corrections: list[CorrectionRecord]) -> bytes:
    """
    Serialize a lexicon.

    Args:
        keys: Sorted, unique keys.
        metas: Packed metadata, parallel to keys.
        corrections: Correction table; index 1 addresses corrections[0].

    Returns:
        The blob bytes.

    Raises:
        LexiconError: If keys are unsorted or a key or field is too long.
    """
    if len(keys) != len(metas):
        raise LexiconError(f"{len(keys)} keys but {len(metas)} metadata values")

    parts = [_HEADER.pack(MAGIC, FORMAT_VERSION, 0, len(keys), len(corrections))]

    for record in corrections:
        parts.append(_U8.pack(_SOURCES.index(record.rule.source)))
        parts.append(_encode_field(record.rule.code))
        parts.append(_encode_field(record.correct))
        parts.append(_encode_field(record.description))

    previous = b""
    for key, meta in zip(keys, metas):
        raw = key.encode("utf-8")
        if len(raw) > MAX_KEY_BYTES:
            raise LexiconError(f"key too long ({len(raw)} bytes): {key}")
        if previous and raw <= previous:
            raise LexiconError(f"keys not strictly sorted at {key!r}")
        shared = 0
        limit = min(len(raw), len(previous))
        while shared < limit and raw[shared] == previous[shared]:
            shared += 1
        suffix = raw[shared:]
        parts.append(_U8.pack(shared))
        parts.append(_U8.pack(len(suffix)))
        parts.append(suffix)
        parts.append(_U32.pack(meta))
        previous = raw

    body = b"".join(parts)
    return body + _U32.pack(zlib.crc32(body) & 0xFFFFFFFF)


# =============================================================================
# DECODING
# =============================================================================


class _Reader:
    """Cursor over a byte buffer that raises LexiconError on truncation."""

    def __init__(self, data: bytes, end: int):
        self.data = data
        self.pos = 0
        self.end = end

    def take(self, n: int) -> bytes:
        if self.pos + n > self.end:
            raise LexiconError(f"truncated lexicon blob at offset {self.pos}")
        chunk = self.data[self.pos : self.pos + n]
        self.pos += n
        return chunk

    def unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.take(fmt.size))

    def text(self) -> str:
        (length,) = self.unpack(_U16)
        try:
            return self.take(length).decode("utf-8")
        except UnicodeDecodeError as e:
            raise LexiconError(f"invalid UTF-8 in correction table: {e}") from e


def decode(data: bytes) -> tuple[list[str], list[int], list[CorrectionRecord]]:
    """
    Parse a blob produced by encode().

    Returns:
        (keys, metas, corrections)

    Raises:
        LexiconError: On a bad magic number, unsupported version, checksum
            mismatch, truncation, invalid UTF-8, unsorted keys or an
            out-of-range correction index.
    """
    if len(data) < _HEADER.size + _U32.size:
        raise LexiconError(f"lexicon blob too short ({len(data)} bytes)")

    body_end = len(data) - _U32.size
    (expected_crc,) = _U32.unpack(data[body_end:])
    magic = data[:4]
    if magic != MAGIC:
        raise LexiconError(f"bad magic {magic!r}, expected {MAGIC!r}")
    actual_crc = zlib.crc32(data[:body_end]) & 0xFFFFFFFF
    if actual_crc != expected_crc:
        raise LexiconError(f"checksum mismatch: stored {expected_crc:#010x}, computed {actual_crc:#010x}")

    reader = _Reader(data, body_end)
    _, version, _flags, n_keys, n_corrections = reader.unpack(_HEADER)
    if version != FORMAT_VERSION:
        raise LexiconError(f"unsupported lexicon format version {version}, expected {FORMAT_VERSION}")

    corrections: list[CorrectionRecord] = []
    for _ in range(n_corrections):
        (source_index,) = reader.unpack(_U8)
        if source_index >= len(_SOURCES):
            raise LexiconError(f"unknown rule source {source_index}")
        code = reader.text()
        correct = reader.text()
        description = reader.text()
        corrections.append(CorrectionRecord(correct, Rule(_SOURCES[source_index], code), description))

    keys: list[str] = []
    metas: list[int] = []
    previous = b""
    for _ in range(n_keys):
        (shared,) = reader.unpack(_U8)
        (suffix_len,) = reader.unpack(_U8)
        if shared > len(previous):
            raise LexiconError(f"corrupt key prefix length {shared} at entry {len(keys)}")
        raw = previous[:shared] + reader.take(suffix_len)
        if previous and raw <= previous:
            raise LexiconError(f"keys not strictly sorted at entry {len(keys)}")
        try:
            keys.append(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise LexiconError(f"invalid UTF-8 key at entry {len(keys)}: {e}") from e
        (meta,) = reader.unpack(_U32)
        if unpack_meta(meta)[2] > n_corrections:
            raise LexiconError(f"correction index out of range for key {keys[-1]!r}")
        metas.append(meta)
        previous = raw

    if reader.pos != body_end:
        raise LexiconError(f"{body_end - reader.pos} trailing bytes after last key")

    logger.debug("Decoded lexicon blob: %d keys, %d corrections", n_keys, n_corrections)
    return keys, metas, corrections
