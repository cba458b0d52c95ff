"""
Contracts - Shared types for the authentication chain

Module: dispatch.contracts
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial implementation
  - Credentials mapping type
  - Authenticator abstract base class
  - DispatcherContract protocol
  - Identity and Rejection outcomes

ARCHITECTURE:
An Authenticator exposes process(credentials, next). It may:
  - return an outcome itself (Identity or Rejection), ending the chain
  - await next() and return (or transform) the rest of the chain's outcome

Credentials are an open mapping. Each authenticator documents the keys
it reads; the manager and dispatcher never look inside.

A dispatcher only has to provide register(fn) and dispatch(credentials).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    runtime_checkable,
)

Credentials = Mapping[str, Any]

# Continuation: invoking it runs the remainder of the chain
NextHandler = Callable[[], Awaitable[Any]]

# A chain link: bound Authenticator.process or any compatible callable
ChainLink = Callable[[Credentials, NextHandler], Any]


@dataclass
class Identity:
    """Authenticated principal produced by an authenticator"""

    subject: str
    strategy: str
    roles: List[str] = field(default_factory=list)
    claims: Dict[str, Any] = field(default_factory=dict)
    authenticated_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


@dataclass
class Rejection:
    """
    Negative outcome of an authentication attempt

    Falsy, so callers can write `if await manager.attempt(creds):`.
    """

    reason: str
    strategy: Optional[str] = None

    def __bool__(self) -> bool:
        return False


class Authenticator(ABC):
    """
    Abstract base class for authentication strategies

    Subclasses implement process(). It may be a plain method or a
    coroutine; the dispatcher awaits whatever it returns when needed.

    Authenticators must be re-entrant: concurrent attempts can run the
    same instance at once, so per-attempt state must not be stored on self.

    Attributes:
        name: Strategy label reported on produced outcomes
    """

    name: str = "authenticator"

    @abstractmethod
    def process(self, credentials: Credentials, next: NextHandler) -> Any:
        """
        Evaluate credentials

        Args:
            credentials: Credentials mapping
            next: Continuation for the rest of the chain (call at most once)

        Returns:
            Identity, Rejection, or the awaited result of next()
        """

    def identity(self, subject: str, **kwargs) -> Identity:
        """Build an Identity tagged with this strategy"""
        return Identity(subject=subject, strategy=self.name, **kwargs)

    def reject(self, reason: str) -> Rejection:
        """Build a Rejection tagged with this strategy"""
        return Rejection(reason=reason, strategy=self.name)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


@runtime_checkable
class DispatcherContract(Protocol):
    """What AuthManager needs from a dispatcher"""

    def register(self, fn: ChainLink) -> Any:
        ...

    def dispatch(self, credentials: Credentials) -> Any:
        ...
