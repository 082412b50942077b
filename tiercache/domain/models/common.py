"""Defines common Value Objects used across different domain contexts.

These objects represent simple values like cache keys, identifiers and
TTLs, ensuring consistency and type safety.
"""

from typing import NewType

# === Caching Context ===
CacheKey = NewType("CacheKey", str)          # Unique key for a cache entry, e.g. "github:octo:profile"
KeyNamespace = NewType("KeyNamespace", str)  # Leading key segment (e.g., 'github', 'ai', 'compare')
Identifier = NewType("Identifier", str)      # Caller-supplied identifier such as a username

# === Time ===
Timestamp = NewType("Timestamp", float)      # Epoch seconds
TtlSeconds = NewType("TtlSeconds", float)    # Time-to-live in seconds
