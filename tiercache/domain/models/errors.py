"""Error types raised by the cache domain.

Cache absence is never an error; these cover malformed input and an
unusable time source only.
"""


class TierCacheError(Exception):
    """Base class for all tiercache errors."""


class InvalidArgumentError(TierCacheError, ValueError):
    """Raised when an operation receives a malformed argument (e.g., negative TTL)."""


class InvalidKeyError(InvalidArgumentError):
    """Raised for empty or non-string cache keys and key identifiers."""


class ClockUnavailableError(TierCacheError, RuntimeError):
    """Raised at construction time when the time source cannot be trusted."""
