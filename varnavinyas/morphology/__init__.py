"""
Origin classification and morpheme decomposition.

Example:
    >>> from varnavinyas.morphology import classify, decompose
    >>> classify("कृषि")
    <Origin.TATSAM: 'tatsam'>
    >>> decompose("अत्यधिक").prefixes
    ('अति',)
"""

from varnavinyas.morphology.decompose import (
    decompose,
    reconstruct,
    strip_prefixes,
    strip_suffixes,
)
from varnavinyas.morphology.origin import (
    OriginDecision,
    classify,
    classify_with_provenance,
    heuristic_origin,
)

__all__ = [
    # Origin
    "OriginDecision",
    "classify",
    "classify_with_provenance",
    "heuristic_origin",
    # Decomposition
    "decompose",
    "reconstruct",
    "strip_prefixes",
    "strip_suffixes",
]
