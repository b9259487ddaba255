"""
Exception classes for varnavinyas.

All varnavinyas exceptions inherit from VarnavinyasError,
making it easy to catch all library errors.

Example:
    >>> try:
    ...     result = varnavinyas.sandhi.apply("राम", "घर")
    ... except varnavinyas.NoRuleAppliesError as e:
    ...     print(f"No sandhi: {e}")
    ... except varnavinyas.VarnavinyasError as e:
    ...     print(f"varnavinyas error: {e}")
"""


class VarnavinyasError(Exception):
    """
    Base exception for all varnavinyas errors.

    Catch this to handle any varnavinyas-specific error.
    """

    pass


class LexiconError(VarnavinyasError):
    """
    Raised when the lexicon cannot be built or loaded.

    Covers corrupt or truncated blobs, a bad magic number, an unsupported
    format version, a checksum mismatch, and build-time integrity
    violations. A lexicon that raises this is never partially loaded.

    Example:
        >>> Lexicon.from_bytes(b"garbage")
        LexiconError: bad magic b'garb', expected b'VVLX'
    """

    pass


class SandhiError(VarnavinyasError):
    """Base class for sandhi apply failures."""

    pass


class EmptyInputError(SandhiError):
    """Raised when either morpheme passed to sandhi apply is empty."""

    def __init__(self) -> None:
        super().__init__("empty input")


class NoRuleAppliesError(SandhiError):
    """
    Raised when no sandhi rule joins the two morphemes.

    Example:
        >>> sandhi.apply("राम", "घर")
        NoRuleAppliesError: no sandhi rule applies for 'राम' + 'घर'
    """

    def __init__(self, first: str, second: str) -> None:
        self.first = first
        self.second = second
        super().__init__(f"no sandhi rule applies for '{first}' + '{second}'")


class DerivationError(VarnavinyasError):
    """
    Raised when a rule function breaks its contract.

    A firing rule must change the word and its step must start from the
    current form. Anything else is a programming error in the rule table.
    """

    pass


class ConfigurationError(VarnavinyasError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> CheckOptions(workers=0)
        ConfigurationError: workers must be >= 1, got 0
    """

    pass


class PipelineError(VarnavinyasError):
    """
    Raised when the checking pipeline cannot run at all.

    The original component error is chained as ``__cause__``.
    """

    pass
