"""
Token Authenticators - Bearer token strategies

Module: security.authentication.token
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial implementation
  - StaticTokenAuthenticator: fixed token table (API keys)
  - JWTAuthenticator: signed tokens verified by JWTHandler

Credential keys read (configurable):
  - "token"
"""

import hmac
import logging
from typing import Any, Mapping

from .jwt_handler import JWTHandler
from ..errors import JWTError
from ...core.constants import DEFAULT_TOKEN_KEY, STRATEGY_JWT, STRATEGY_STATIC_TOKEN
from ...dispatch.contracts import Authenticator, Credentials, NextHandler


class StaticTokenAuthenticator(Authenticator):
    """
    Accepts tokens from a fixed table, defers everything else

    Unknown tokens are not rejected: later handlers still get a chance.
    """

    name = STRATEGY_STATIC_TOKEN

    def __init__(self, tokens: Mapping[str, str], token_key: str = DEFAULT_TOKEN_KEY):
        """
        Args:
            tokens: token -> subject
            token_key: Credentials key holding the token
        """
        self.logger = logging.getLogger("security.static_token")
        self.tokens = tokens
        self.token_key = token_key

    async def process(self, credentials: Credentials, next: NextHandler) -> Any:
        token = credentials.get(self.token_key)
        if not isinstance(token, str):
            return await next()

        # compare_digest only takes ASCII str, so compare UTF-8 bytes
        try:
            presented = token.encode("utf-8")
        except UnicodeEncodeError:
            self.logger.debug("Static token not encodable, deferring")
            return await next()

        for known, subject in self.tokens.items():
            if hmac.compare_digest(known.encode("utf-8"), presented):
                self.logger.info(f"Static token accepted for {subject}")
                return self.identity(subject)

        self.logger.debug("Static token not recognised, deferring")
        return await next()


class JWTAuthenticator(Authenticator):
    """
    Authenticates signed JWTs

    A token that fails verification is rejected outright; credentials
    without a token are passed on.
    """

    name = STRATEGY_JWT

    def __init__(self, jwt_handler: JWTHandler, token_key: str = DEFAULT_TOKEN_KEY):
        self.logger = logging.getLogger("security.jwt")
        self.jwt_handler = jwt_handler
        self.token_key = token_key

    async def process(self, credentials: Credentials, next: NextHandler) -> Any:
        token = credentials.get(self.token_key)
        if token is None:
            return await next()

        try:
            claims = self.jwt_handler.verify(token)
        except JWTError as e:
            self.logger.warning(f"JWT rejected: {e}")
            return self.reject(str(e))

        self.logger.info(f"JWT accepted for {claims.username}")
        return self.identity(
            claims.sub,
            roles=list(claims.roles),
            claims={
                "username": claims.username,
                "jti": claims.jti,
                "iat": claims.iat,
                "exp": claims.exp,
                **claims.extra,
            },
        )
