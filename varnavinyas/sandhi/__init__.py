"""
Sandhi: joining morphemes at their boundary, and splitting joined words.

Example:
    >>> from varnavinyas import sandhi
    >>> sandhi.apply("सूर्य", "उदय").output
    'सूर्योदय'
    >>> [(l, r) for l, r, _ in sandhi.split("अत्यधिक")][:1]
    [('अति', 'अधिक')]
"""

from varnavinyas.sandhi.core import apply, join
from varnavinyas.sandhi.result import SandhiResult, SandhiType
from varnavinyas.sandhi.split import SandhiSplits, split

__all__ = [
    "apply",
    "join",
    "split",
    "SandhiResult",
    "SandhiSplits",
    "SandhiType",
]
