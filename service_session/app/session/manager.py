"""
Session manager for Session Service.

Only the most recently issued token per identity is authoritative: a token
must verify, be unexpired, and equal the value stored under its
"{type}-{id}" key. Issuing a new session overwrites that key, which
revokes the previous token.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import jwt
from pydantic import ValidationError as PayloadValidationError

from shared.config import SessionConfig
from shared.errors import ValidationError
from shared.logging import get_logger
from ..store import RedisSessionStore
from ..tokens import TokenSigner
from .models import (
    DecodedToken,
    IdentityId,
    SessionRecord,
    SessionStatus,
    TokenPayload,
    session_key,
)

TOKEN_NOT_VALID = "Token is not valid"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionManager:
    """Issue, check and revoke session tokens."""

    def __init__(
        self,
        config: SessionConfig,
        store: Optional[RedisSessionStore] = None,
        signer: Optional[TokenSigner] = None
    ):
        self.config = config
        self.issuer = config.server_host
        self.lifetime = timedelta(minutes=config.lifetime_minutes)
        if store is None:
            store = RedisSessionStore(config.redis_url, socket_timeout=config.redis_socket_timeout)
        self.store = store
        self.signer = signer or TokenSigner(config.secret)
        self.logger = get_logger("session.manager")

    async def start(self):
        """Open the store connection."""
        await self.store.start()

    async def stop(self):
        """Close the store connection."""
        await self.store.stop()

    async def create_token(
        self,
        id: IdentityId,
        type: str,
        expires_at: Optional[Union[datetime, int, float]] = None
    ) -> str:
        """Sign a token for an identity. Does not touch the store.

        expires_at is a datetime (naive values are UTC) or unix seconds.
        """
        if expires_at is None:
            expires_at = _utcnow() + self.lifetime
        elif isinstance(expires_at, datetime):
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=timezone.utc)
        elif isinstance(expires_at, (int, float)) and not isinstance(expires_at, bool):
            expires_at = datetime.fromtimestamp(expires_at, timezone.utc)
        else:
            raise ValidationError(
                "expires_at must be a datetime or unix seconds",
                details={"expires_at": repr(expires_at)}
            )

        payload = TokenPayload(issuer=self.issuer, expires_at=expires_at, id=id, type=type)
        token = self.signer.sign(payload.to_claims())

        self.logger.debug("Token created", key=payload.key, expires_at=expires_at.isoformat())
        return token

    async def insert(self, session: Union[SessionRecord, dict]) -> None:
        """Make session.token the current token for its identity."""
        if not isinstance(session, SessionRecord):
            session = SessionRecord.model_validate(session)

        await self.store.set(session.key, session.token, session.exp)
        self.logger.info("Session stored", key=session.key, ttl=session.exp)

    async def decode_token(self, token: str) -> DecodedToken:
        """Verify a token and return its payload, or the reason it was rejected."""
        try:
            claims = self.signer.decode(token)
            payload = TokenPayload.model_validate(claims)
        except jwt.InvalidTokenError as e:
            self.logger.debug("Token verification failed", error=str(e))
            return DecodedToken(valid=False, error=str(e))
        except PayloadValidationError as e:
            self.logger.debug("Token payload malformed", errors=e.error_count())
            return DecodedToken(valid=False, error="Token payload is malformed")

        return DecodedToken(valid=True, payload=payload)

    async def retrieve_key(self, key: str) -> Optional[str]:
        """Return the token currently stored under key."""
        return await self.store.get(key)

    async def check(self, token: str) -> SessionStatus:
        """Report whether token is the live session for its identity."""
        decoded = await self.decode_token(token)

        if not decoded.valid:
            return SessionStatus(is_logged=False, token=token, message=TOKEN_NOT_VALID)

        payload = decoded.payload
        if _utcnow() > payload.expires_at:
            await self.store.delete(payload.key)
            self.logger.info("Expired session removed", key=payload.key)
            return SessionStatus(is_logged=False, token=token, message=TOKEN_NOT_VALID)

        stored_token = await self.retrieve_key(payload.key)

        # Missing or superseded record: not logged in, no message
        return SessionStatus(is_logged=stored_token == token, token=token)

    async def delete_token(self, token: str) -> bool:
        """Log out the identity owning token.

        Undecodable tokens are ignored and False is returned.
        """
        decoded = await self.decode_token(token)
        if not decoded.valid:
            self.logger.warning("Ignoring logout for invalid token", error=decoded.error)
            return False

        await self.store.delete(decoded.payload.key)
        self.logger.info("Session deleted", key=decoded.payload.key)
        return True

    async def login(self, id: IdentityId, type: str) -> str:
        """Create a token with the default lifetime and store it as current."""
        token = await self.create_token(id, type)
        await self.insert(SessionRecord(
            user=id,
            token=token,
            type=type,
            exp=int(self.lifetime.total_seconds())
        ))
        return token

    async def logout(self, id: IdentityId, type: str) -> None:
        """Drop the current session for an identity without needing its token."""
        key = session_key(type, id)
        await self.store.delete(key)
        self.logger.info("Session deleted", key=key)
