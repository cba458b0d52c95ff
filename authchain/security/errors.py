"""
Errors - Exception taxonomy for authchain

Module: security.errors
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial implementation
  - Base AuthChainError
  - Lookup, registration and chain misuse errors
  - JWT verification errors

ARCHITECTURE:
Every error raised by the package derives from AuthChainError. Errors
that callers routinely handle also derive from the matching builtin
(LookupError, ValueError, RuntimeError) so generic handlers keep working.

Errors raised inside an authenticator are NOT wrapped: they reach the
caller of AuthManager.attempt() unchanged.
"""


class AuthChainError(Exception):
    """Base authchain error"""
    pass


class UnknownHandlerError(AuthChainError, LookupError):
    """Raised when a handler name was never registered"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown authentication handler: {name}")


class InvalidHandlerError(AuthChainError, ValueError):
    """Handler name or handler object is not acceptable"""
    pass


class ChainMisuseError(AuthChainError, RuntimeError):
    """A link broke the single-pass chain protocol"""
    pass


class JWTError(AuthChainError):
    """Base JWT error"""
    pass


class JWTInvalidError(JWTError):
    """JWT is invalid (malformed, bad signature)"""
    pass


class JWTExpiredError(JWTError):
    """JWT has expired"""
    pass


class JWTClaimError(JWTError):
    """JWT claim validation failed"""
    pass
