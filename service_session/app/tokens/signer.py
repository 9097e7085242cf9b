"""
HS256 token signer for Session service.
"""

from typing import Dict, Any

import jwt

from shared.logging import get_logger


class TokenSigner:
    """Sign and verify compact tokens with a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm
        self.logger = get_logger("session.signer")

    def sign(self, payload: Dict[str, Any]) -> str:
        """Sign a claims payload into a header.payload.signature token."""
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """Verify the signature and return the claims.

        Raises jwt.InvalidTokenError for any signature or format problem.
        """
        return jwt.decode(
            token,
            self.secret,
            algorithms=[self.algorithm],
            options={"verify_exp": False, "require": ["exp"]}
        )

    def verify(self, token: str) -> bool:
        """Check the signature only."""
        try:
            self.decode(token)
            return True
        except jwt.InvalidTokenError as e:
            self.logger.debug("Token signature rejected", error=str(e))
            return False
