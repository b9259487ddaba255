"""Sandhi result values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SandhiType(Enum):
    """Rule family that joined two morphemes."""

    VOWEL = "vowel sandhi"
    VISARGA = "visarga sandhi"
    CONSONANT = "consonant sandhi"

    @property
    def label(self) -> str:
        """Devanagari display label."""
        return _LABELS[self]


_LABELS = {
    SandhiType.VOWEL: "स्वर सन्धि",
    SandhiType.VISARGA: "विसर्ग सन्धि",
    SandhiType.CONSONANT: "व्यञ्जन सन्धि",
}


@dataclass(frozen=True)
class SandhiResult:
    """
    Output of joining two morphemes.

    Attributes:
        output: The joined surface form.
        sandhi_type: Which family applied.
        rule_citation: The specific rule, e.g. "यण् सन्धि: इ/ई + स्वर → य".
    """

    output: str
    sandhi_type: SandhiType
    rule_citation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "output": self.output,
            "sandhi_type": self.sandhi_type.value,
            "sandhi_label": self.sandhi_type.label,
            "rule_citation": self.rule_citation,
        }
