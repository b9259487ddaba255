"""
The ordered rule table.

Families run in FAMILY_ORDER; within a family, rules run by priority and
the first one that fires ends the family.
"""

from __future__ import annotations

from varnavinyas.derivation import length, orthographic, structural
from varnavinyas.derivation.base import FAMILY_ORDER, RuleFamily, RuleSpec

RULES: tuple[RuleSpec, ...] = (
    length.SPECS
    + structural.DERIVATIONAL_SPECS
    + structural.NASALIZATION_SPECS
    + orthographic.SIBILANT_SPECS
    + orthographic.VOCALIC_R_SPECS
    + orthographic.VIRAMA_SPECS
    + orthographic.SEMIVOWEL_SPECS
    + orthographic.CONJUNCT_SPECS
)

_BY_FAMILY: dict[RuleFamily, tuple[RuleSpec, ...]] = {
    family: tuple(sorted((s for s in RULES if s.family is family), key=lambda s: s.priority))
    for family in FAMILY_ORDER
}
_BY_ID = {spec.id: spec for spec in RULES}


def rules_for(family: RuleFamily) -> tuple[RuleSpec, ...]:
    """Rules of one family in priority order."""
    return _BY_FAMILY[family]


def get_rule(rule_id: str) -> RuleSpec:
    """
    Look a rule up by id.

    Raises:
        KeyError: If no rule has that id.
    """
    return _BY_ID[rule_id]


def iter_rules():
    """Every rule in evaluation order."""
    for family in FAMILY_ORDER:
        yield from _BY_FAMILY[family]
