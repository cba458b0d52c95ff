"""
Authentication strategies

Provides:
- PasswordAuthenticator: username/password with bcrypt hashes
- StaticTokenAuthenticator: fixed token table
- JWTAuthenticator: signed JWTs (HS256 by default)
- JWTHandler: JWT generation and verification
"""

from .jwt_handler import JWTHandler, JWTClaims
from .password import PasswordAuthenticator
from .token import StaticTokenAuthenticator, JWTAuthenticator
from ..errors import (
    JWTError,
    JWTInvalidError,
    JWTExpiredError,
    JWTClaimError,
)

__all__ = [
    "JWTHandler",
    "JWTClaims",
    "JWTError",
    "JWTInvalidError",
    "JWTExpiredError",
    "JWTClaimError",
    "PasswordAuthenticator",
    "StaticTokenAuthenticator",
    "JWTAuthenticator",
]
