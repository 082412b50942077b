"""Cache Store Implementation.

Provides the concrete in-memory CacheStore with lazy TTL expiry, hit/miss
accounting and an optional background expiry sweeper.
Bounded Context: Cache Management
"""
