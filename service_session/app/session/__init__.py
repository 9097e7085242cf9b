"""
Session lifecycle package.
"""

from .manager import SessionManager, TOKEN_NOT_VALID
from .models import TokenPayload, SessionRecord, SessionStatus, DecodedToken, session_key

__all__ = [
    "SessionManager",
    "TOKEN_NOT_VALID",
    "TokenPayload",
    "SessionRecord",
    "SessionStatus",
    "DecodedToken",
    "session_key",
]
