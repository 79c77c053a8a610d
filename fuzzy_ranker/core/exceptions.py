"""Exception hierarchy for the matching core.

Ordinary "no match" outcomes are never exceptions; matchers return ``None``.
"""


class FuzzyRankerError(Exception):
    """Base class for every error raised by the matching core."""


class ConfigError(FuzzyRankerError, ValueError):
    """Raised when a scoring configuration is malformed."""


class QuerySyntaxError(FuzzyRankerError, ValueError):
    """Raised when a query string cannot be parsed into atoms."""


class LengthExceeded(FuzzyRankerError):
    """Raised when a needle or haystack is longer than the configured limit."""

    def __init__(self, kind: str, length: int, limit: int) -> None:
        self.kind = kind
        self.length = length
        self.limit = limit
        super().__init__(
            f"{kind} length {length} exceeds the maximum of {limit} codepoints"
        )


class ScanCancelled(FuzzyRankerError):
    """Raised when a ranking scan is abandoned before completion."""
