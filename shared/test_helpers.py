"""
Test helper functions and factory methods for the session access layer.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple, Any

import jwt
from redis.exceptions import ConnectionError as RedisConnectionError

from shared.config import SessionConfig


TEST_SECRET = "test-secret-for-session-tokens-0123456789"


@dataclass
class TestIdentity:
    """Test identity data."""

    __test__ = False

    id: Any
    type: str


class InMemoryRedis:
    """Async stand-in for the subset of redis.asyncio.Redis used by the store.

    Expiry is evaluated lazily against the monotonic clock returned by
    `clock`, so tests can move time forward with `advance`.
    """

    def __init__(self):
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self._offset = 0.0
        self.available = True
        self.closed = False

    def clock(self) -> float:
        return time.monotonic() + self._offset

    def advance(self, seconds: float):
        self._offset += seconds

    def _check_available(self):
        if not self.available:
            raise RedisConnectionError("Connection refused")

    def _expire(self, key: str):
        entry = self._data.get(key)
        if entry and entry[1] is not None and entry[1] <= self.clock():
            del self._data[key]

    async def ping(self) -> bool:
        self._check_available()
        return True

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> bool:
        self._check_available()
        deadline = self.clock() + ex if ex is not None else None
        self._data[key] = (value, deadline)
        return True

    async def get(self, key: str) -> Optional[str]:
        self._check_available()
        self._expire(key)
        entry = self._data.get(key)
        return entry[0] if entry else None

    async def delete(self, *keys: str) -> int:
        self._check_available()
        removed = 0
        for key in keys:
            self._expire(key)
            if self._data.pop(key, None) is not None:
                removed += 1
        return removed

    async def aclose(self):
        self.closed = True

    def keys(self):
        for key in list(self._data):
            self._expire(key)
        return sorted(self._data)


class TestDataFactory:
    """Factory for creating test data."""

    __test__ = False

    @staticmethod
    def create_test_identities():
        """Create test identities."""
        return [
            TestIdentity(id=1, type="user"),
            TestIdentity(id="42", type="user"),
            TestIdentity(id=7, type="admin"),
        ]

    @staticmethod
    def create_config(**overrides) -> SessionConfig:
        """Create a session config that never reads the environment for secrets."""
        values = {
            "secret": TEST_SECRET,
            "server_host": "www.example.org",
            "lifetime_minutes": 1,
            "redis_url": "redis://localhost:6379/15",
        }
        values.update(overrides)
        return SessionConfig(**values)


class MockTokenGenerator:
    """Generate raw tokens, including ones the manager would never issue."""

    def __init__(self, issuer: str = "www.example.org", secret: str = TEST_SECRET):
        self.issuer = issuer
        self.secret = secret

    def generate(self, claims: Dict[str, Any], secret: Optional[str] = None) -> str:
        return jwt.encode(claims, secret or self.secret, algorithm="HS256")

    def generate_session_token(
        self,
        identity: TestIdentity,
        expires_in: int = 60,
        secret: Optional[str] = None
    ) -> str:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return self.generate(
            {"iss": self.issuer, "exp": expires_at, "id": identity.id, "type": identity.type},
            secret=secret
        )


def tamper_signature(token: str) -> str:
    """Flip the first character of the signature segment."""
    header, payload, signature = token.split(".")
    first = "A" if signature[0] != "A" else "B"
    return f"{header}.{payload}.{first}{signature[1:]}"


test_data_factory = TestDataFactory()
mock_token_generator = MockTokenGenerator()
