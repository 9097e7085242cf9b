"""
Session lifecycle models.
"""

from typing import Optional, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from shared.errors import InvalidTokenError

IdentityId = Union[int, str]


def session_key(type: str, id: IdentityId) -> str:
    """Store key for an identity, e.g. "user-1"."""
    return f"{type}-{id}"


class TokenPayload(BaseModel):
    """Claims carried inside a signed token."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    issuer: str = Field(alias="iss")
    expires_at: AwareDatetime = Field(alias="exp")
    id: IdentityId
    type: str

    @property
    def key(self) -> str:
        return session_key(self.type, self.id)

    def to_claims(self) -> dict:
        """Wire claims; PyJWT turns the exp datetime into unix seconds."""
        return self.model_dump(by_alias=True)


class SessionRecord(BaseModel):
    """Current token for an identity, kept for exp seconds."""

    user: IdentityId
    token: str
    type: str
    exp: int = Field(gt=0, description="Time to live in seconds")

    @property
    def key(self) -> str:
        return session_key(self.type, self.user)


class SessionStatus(BaseModel):
    """Result of a session check."""

    model_config = ConfigDict(populate_by_name=True)

    is_logged: bool = Field(alias="isLogged")
    token: str
    message: Optional[str] = None


class DecodedToken(BaseModel):
    """Outcome of decoding a token: a payload or the reason it was rejected."""

    valid: bool
    payload: Optional[TokenPayload] = None
    error: Optional[str] = None

    def unwrap(self) -> TokenPayload:
        """Return the payload or raise InvalidTokenError."""
        if not self.valid or self.payload is None:
            raise InvalidTokenError(details={"token_error": self.error})
        return self.payload
