"""
Token signing package.

Wraps PyJWT to produce and verify compact HS256 tokens from a claims
payload and a shared secret. Expiry is not enforced here; the session
manager checks it and cleans the store.
"""

from .signer import TokenSigner

__all__ = ["TokenSigner"]
