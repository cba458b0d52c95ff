"""
Constants for authchain

Module: core.constants
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial constants definition
  - Handler naming rules
  - Dispatcher defaults
  - Password hashing defaults
  - JWT defaults
  - Default credential keys

SECURITY NOTES:
- bcrypt cost factor kept at 10+ (10-12 recommended)
- JWT secrets shorter than 32 characters are refused
- Token lifetimes are short by default
"""

from typing import Final

# ============================================================================
# Handler registration
# ============================================================================

# Registration names are identifiers such as "local", "token", "oauth-google"
HANDLER_NAME_PATTERN: Final[str] = r"[A-Za-z0-9][A-Za-z0-9_.:-]*"
MAX_HANDLER_NAME_LENGTH: Final[int] = 64

# ============================================================================
# Dispatcher
# ============================================================================

# Reason carried by the default outcome of an exhausted chain
EXHAUSTED_REASON: Final[str] = "no authenticator accepted the credentials"

# ============================================================================
# Password strategy
# ============================================================================

DEFAULT_BCRYPT_ROUNDS: Final[int] = 10
DEFAULT_USERNAME_KEY: Final[str] = "username"
DEFAULT_PASSWORD_KEY: Final[str] = "password"

# ============================================================================
# Token strategies
# ============================================================================

DEFAULT_TOKEN_KEY: Final[str] = "token"
DEFAULT_JWT_ALGORITHM: Final[str] = "HS256"
DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES: Final[int] = 60
MIN_SECRET_KEY_LENGTH: Final[int] = 32

# Claims every verified JWT must carry
REQUIRED_JWT_CLAIMS: Final[tuple] = ("sub", "username", "jti", "iat", "exp")

# ============================================================================
# Strategy labels
# ============================================================================

STRATEGY_PASSWORD: Final[str] = "password"
STRATEGY_STATIC_TOKEN: Final[str] = "static_token"
STRATEGY_JWT: Final[str] = "jwt"
