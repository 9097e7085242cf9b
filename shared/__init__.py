"""
Shared utilities for the session access layer.

This package aggregates common building blocks consumed by the services:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- errors: Canonical error types and responses
- test_helpers: In-memory store double and token factories for tests

Do not import from service packages into shared/.
"""
