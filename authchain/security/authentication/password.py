"""
Password Authenticator - Username/password strategy

Module: security.authentication.password
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial implementation
  - bcrypt password verification
  - Defers to the next handler when credentials carry no password
  - Hash checks run in the default executor
  - Non-string usernames rejected

ARCHITECTURE:
PasswordAuthenticator checks credentials against a username -> bcrypt hash
mapping supplied by the host. Where the hashes come from is up to the
host; nothing is persisted here.

Credential keys read (configurable):
  - "username"
  - "password"

SECURITY NOTES:
- Passwords and hashes are never logged
- Unknown user and wrong password produce the same rejection reason
"""

import asyncio
import logging
from typing import Any, Mapping, Optional

import bcrypt

from ...core.constants import (
    DEFAULT_BCRYPT_ROUNDS,
    DEFAULT_PASSWORD_KEY,
    DEFAULT_USERNAME_KEY,
    STRATEGY_PASSWORD,
)
from ...dispatch.contracts import Authenticator, Credentials, NextHandler


class PasswordAuthenticator(Authenticator):
    """
    Authenticates username/password credentials with bcrypt hashes
    """

    name = STRATEGY_PASSWORD

    def __init__(
        self,
        users: Mapping[str, str],
        username_key: str = DEFAULT_USERNAME_KEY,
        password_key: str = DEFAULT_PASSWORD_KEY,
        roles: Optional[Mapping[str, list]] = None,
    ):
        """
        Initialize password authenticator

        Args:
            users: username -> bcrypt hash
            username_key: Credentials key holding the username
            password_key: Credentials key holding the plaintext password
            roles: Optional username -> roles, copied onto the Identity
        """
        self.logger = logging.getLogger("security.password")
        self.users = users
        self.username_key = username_key
        self.password_key = password_key
        self.roles = roles or {}

    async def process(self, credentials: Credentials, next: NextHandler) -> Any:
        username = credentials.get(self.username_key)
        password = credentials.get(self.password_key)

        if username is None or password is None:
            return await next()

        if not isinstance(username, str):
            self.logger.warning("Password authentication failed: malformed username")
            return self.reject("invalid username or password")

        password_hash = self.users.get(username)
        # Hash check runs in the default executor
        if password_hash is None or not await asyncio.get_running_loop().run_in_executor(
            None, self.verify_password, password, password_hash
        ):
            self.logger.warning(f"Password authentication failed for {username}")
            return self.reject("invalid username or password")

        self.logger.info(f"Password authentication succeeded for {username}")
        return self.identity(username, roles=list(self.roles.get(username, [])))

    @staticmethod
    def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
        """
        Hash password using bcrypt

        Args:
            password: Plaintext password
            rounds: bcrypt cost factor

        Returns:
            bcrypt hash (bytes decoded to string)
        """
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(password.encode(), salt).decode()

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """
        Verify password against hash

        Returns:
            True if password matches, False otherwise (including
            malformed hashes and non-string passwords)
        """
        if not isinstance(password, str):
            return False
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            return False
