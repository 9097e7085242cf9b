"""
Store package for Session Service.

Provides a Redis-backed store that keeps exactly one current token per
identity key, expiring server side after the session TTL.
"""

from .redis_store import RedisSessionStore

__all__ = ["RedisSessionStore"]
