"""tiercache: tiered, TTL-based in-process response cache."""

__version__ = "0.1.0"
