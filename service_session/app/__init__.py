"""
Session Service package.

Issues, validates and revokes signed session tokens backed by Redis so a
host application gets stateless-looking but revocable sessions:

- app.tokens: HS256 token signing and verification.
- app.store: Redis-backed store holding the current token per identity.
- app.session: SessionManager orchestrating the token lifecycle.

Design notes:
- Keep the package import side-effects minimal; module import must not
  perform network calls. Redis is only contacted from explicit start()
  hooks or operations.
- Use the shared/ utilities for configuration, logging and errors.
- No HTTP surface; the host application calls SessionManager in-process.
"""
