"""Key derivation helpers.

Pure functions that build namespaced cache keys from caller identifiers.
Identifiers are stripped of surrounding whitespace and lower-cased, so
" octo", "octo" and "Octo" all map to the same key.
"""

from tiercache.domain.models.common import CacheKey, Identifier, KeyNamespace
from tiercache.domain.models.errors import InvalidKeyError

DEFAULT_PROFILE_SOURCE = KeyNamespace("github")
INSIGHTS_NAMESPACE = KeyNamespace("ai")
COMPARISON_NAMESPACE = KeyNamespace("compare")


def _normalize(identifier: str, label: str = "identifier") -> Identifier:
    if not isinstance(identifier, str):
        raise InvalidKeyError(f"{label} must be a string, got {type(identifier).__name__}")
    normalized = identifier.strip().lower()
    if not normalized:
        raise InvalidKeyError(f"{label} must not be empty")
    return Identifier(normalized)


def profile_key(identifier: str, source: str = DEFAULT_PROFILE_SOURCE) -> CacheKey:
    """Key for upstream profile data, e.g. 'github:octo:profile'.

    Both source and identifier are stripped and lower-cased.
    """
    namespace = _normalize(source, "source")
    return CacheKey(f"{namespace}:{_normalize(identifier)}:profile")


def insights_key(identifier: str) -> CacheKey:
    """Key for AI-generated insight text, e.g. 'ai:octo:insights'.

    The identifier is stripped and lower-cased, so " octo" and "octo" share a key.
    """
    return CacheKey(f"{INSIGHTS_NAMESPACE}:{_normalize(identifier)}:insights")


def comparison_key(identifier_a: str, identifier_b: str) -> CacheKey:
    """Key for a head-to-head verdict.

    The identifiers are sorted after lower-casing, so A-vs-B and B-vs-A
    share one entry.
    """
    first, second = sorted((_normalize(identifier_a), _normalize(identifier_b)))
    return CacheKey(f"{COMPARISON_NAMESPACE}:{first}:{second}:verdict")
