"""
authchain - Named authentication strategies run as a chain

Register authenticators under a name, then run credentials through all
of them in registration order. Each authenticator either settles the
attempt (Identity or Rejection) or hands over to the next one.

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial project setup
  - AuthManager and HandlerRegistry
  - Reference chain Dispatcher
  - Password (bcrypt), static token and JWT strategies

ARCHITECTURE:
- Layer 1 : Manager (AuthManager, HandlerRegistry)
- Layer 2 : Dispatch (Dispatcher, contracts)
- Layer 3 : Strategies (security.authentication)

Usage:
    manager = create_manager()
    manager.register("local", PasswordAuthenticator(users))
    outcome = await manager.attempt({"username": "a", "password": "b"})
"""

__version__ = "0.1.0-alpha"
__license__ = "See LICENSE file"

from .core.auth_manager import AuthManager, create_manager
from .core.handler_registry import HandlerRegistry
from .dispatch.contracts import (
    Authenticator,
    Credentials,
    DispatcherContract,
    Identity,
    Rejection,
)
from .dispatch.dispatcher import Dispatcher
from .security.errors import (
    AuthChainError,
    ChainMisuseError,
    InvalidHandlerError,
    UnknownHandlerError,
)
from .security.authentication import (
    JWTAuthenticator,
    JWTHandler,
    PasswordAuthenticator,
    StaticTokenAuthenticator,
)

__all__ = [
    "AuthManager",
    "create_manager",
    "HandlerRegistry",
    "Authenticator",
    "Credentials",
    "DispatcherContract",
    "Identity",
    "Rejection",
    "Dispatcher",
    "AuthChainError",
    "ChainMisuseError",
    "InvalidHandlerError",
    "UnknownHandlerError",
    "JWTAuthenticator",
    "JWTHandler",
    "PasswordAuthenticator",
    "StaticTokenAuthenticator",
]
