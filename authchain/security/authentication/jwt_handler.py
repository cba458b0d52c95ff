"""
JWT Handler - Issue and verify JSON Web Tokens

Module: security.authentication.jwt_handler
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial implementation
  - Access token generation
  - Signature and expiration verification
  - Required claim validation

ARCHITECTURE:
JWTHandler is the verification backend of JWTAuthenticator. Token
issuing is kept so hosts (and tests) can mint tokens with the same key.

SECURITY NOTES:
- Secret key must be 32+ characters
- Expiration enforced by PyJWT on decode
- All times in UTC
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import jwt

from ...core.constants import (
    DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES,
    DEFAULT_JWT_ALGORITHM,
    MIN_SECRET_KEY_LENGTH,
    REQUIRED_JWT_CLAIMS,
)
from ..errors import JWTClaimError, JWTExpiredError, JWTInvalidError


@dataclass
class JWTClaims:
    """Verified JWT claims"""
    sub: str              # Subject
    username: str
    jti: str              # JWT ID
    iat: datetime         # Issued at
    exp: datetime         # Expiration
    roles: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)


class JWTHandler:
    """
    Generates and verifies signed access tokens
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_JWT_ALGORITHM,
        access_token_expire_minutes: int = DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        """
        Initialize JWT handler

        Args:
            secret_key: Secret key for signing (32+ characters)
            algorithm: JWT algorithm (default HS256)
            access_token_expire_minutes: Token TTL in minutes

        Raises:
            ValueError: If secret_key too short
        """
        if len(secret_key) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(
                f"Secret key must be at least {MIN_SECRET_KEY_LENGTH} characters"
            )

        self.logger = logging.getLogger("security.jwt_handler")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)

        self.logger.info(
            f"JWT Handler initialized (algo={algorithm}, "
            f"expires={access_token_expire_minutes}min)"
        )

    def generate_token(
        self,
        subject: str,
        username: str,
        roles: Optional[List[str]] = None,
        expires_in: Optional[timedelta] = None,
    ) -> str:
        """
        Generate a signed access token

        Args:
            subject: Principal identifier (becomes the sub claim)
            username: Username for logging/auditing
            roles: Roles carried in the token
            expires_in: Override of the configured TTL

        Returns:
            Encoded JWT
        """
        if not subject or not username:
            raise ValueError("subject and username required")

        now = datetime.now(timezone.utc)
        exp = now + (expires_in if expires_in is not None else self.access_token_expire)
        claims = {
            "sub": subject,
            "username": username,
            "jti": str(uuid.uuid4()),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "roles": roles or [],
        }

        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

        self.logger.info(f"Token generated for {username} (sub={subject[:8]}...)")
        return token

    def verify(self, token: str) -> JWTClaims:
        """
        Verify JWT signature and extract claims

        Args:
            token: JWT token string

        Returns:
            JWTClaims with extracted data

        Raises:
            JWTInvalidError: If token invalid or bad signature
            JWTExpiredError: If token expired
            JWTClaimError: If required claims missing
        """
        if not token or not isinstance(token, str):
            raise JWTInvalidError("Token must be non-empty string")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
            )
        except jwt.ExpiredSignatureError as e:
            raise JWTExpiredError(f"Token expired: {e}")
        except jwt.InvalidSignatureError as e:
            raise JWTInvalidError(f"Invalid signature: {e}")
        except jwt.DecodeError as e:
            raise JWTInvalidError(f"Decode error: {e}")
        except jwt.InvalidTokenError as e:
            raise JWTInvalidError(f"Invalid token: {e}")

        for claim in REQUIRED_JWT_CLAIMS:
            if claim not in payload:
                raise JWTClaimError(f"Missing claim: {claim}")

        try:
            iat = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (ValueError, TypeError) as e:
            raise JWTClaimError(f"Invalid timestamp: {e}")

        extra = {k: v for k, v in payload.items() if k not in REQUIRED_JWT_CLAIMS}
        extra.pop("roles", None)

        return JWTClaims(
            sub=payload["sub"],
            username=payload["username"],
            jti=payload["jti"],
            iat=iat,
            exp=exp,
            roles=payload.get("roles", []),
            extra=extra,
        )
