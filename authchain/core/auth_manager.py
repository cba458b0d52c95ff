"""
Auth Manager - Registration and authentication entry point

Module: core.auth_manager
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial implementation
  - Fluent handler registration
  - Lookup of handlers by name
  - Authentication attempts delegated to the dispatcher
  - create_manager() construction function

ARCHITECTURE:
AuthManager binds one HandlerRegistry and one dispatcher:
  register(name, handler)  -> dispatcher.register(handler.process)
                              registry.set(name, handler)
  using(name)              -> registry lookup, UnknownHandlerError if absent
  attempt(credentials)     -> dispatcher.dispatch(credentials), unchanged

Registration is atomic: name and handler are validated before either
store is touched, and the dispatcher is written first. A failure in
either step leaves the name unregistered.

Registration belongs to application setup. No locking is provided, so
registering while attempts are in flight is unsupported.

SECURITY NOTES:
- Credentials are never logged or inspected here
- Handler errors propagate to the caller untouched
"""

import logging
import re
from typing import Any, List, MutableMapping, Optional, Union

from .constants import HANDLER_NAME_PATTERN, MAX_HANDLER_NAME_LENGTH
from .handler_registry import HandlerRegistry
from ..dispatch.contracts import Authenticator, Credentials, DispatcherContract
from ..dispatch.dispatcher import Dispatcher
from ..security.errors import InvalidHandlerError, UnknownHandlerError

_NAME_RE = re.compile(HANDLER_NAME_PATTERN)

HandlerContainer = Union[HandlerRegistry, MutableMapping[str, Authenticator]]


class AuthManager:
    """
    Authentication manager

    Registers named authenticators into a dispatcher chain and runs
    authentication attempts through it.

    Example:
        manager = (
            AuthManager(Dispatcher())
            .register("token", StaticTokenAuthenticator({"T1": "alice"}))
            .register("local", PasswordAuthenticator(users))
        )
        identity = await manager.attempt({"username": "a", "password": "b"})
    """

    def __init__(
        self,
        dispatcher: DispatcherContract,
        handlers: Optional[HandlerContainer] = None,
    ):
        """
        Initialize auth manager

        Args:
            dispatcher: Chain executor (register(fn) / dispatch(credentials))
            handlers: Empty HandlerRegistry or mapping to keep handlers in

        Raises:
            TypeError: If dispatcher lacks register() or dispatch()
            InvalidHandlerError: If handlers already holds entries
        """
        if not isinstance(dispatcher, DispatcherContract):
            raise TypeError(
                f"{type(dispatcher).__name__} must provide register() and dispatch()"
            )

        self.logger = logging.getLogger("auth.manager")
        self._dispatcher = dispatcher

        if isinstance(handlers, HandlerRegistry):
            self._registry = handlers
        else:
            self._registry = HandlerRegistry(handlers)

        # Pre-filled entries would have no link in the chain
        if self._registry.count():
            raise InvalidHandlerError(
                f"Handler container must be empty, found: {self._registry.names()}"
            )

        self.logger.info(
            f"AuthManager initialized (dispatcher={type(dispatcher).__name__})"
        )

    def register(self, name: str, handler: Authenticator) -> "AuthManager":
        """
        Register an authenticator

        Appends handler.process to the dispatcher chain and stores the
        handler under name. Registering a name twice overwrites the lookup
        entry; the earlier link stays in the chain.

        Args:
            name: Registration name
            handler: Object exposing process(credentials, next)

        Returns:
            self, for chaining

        Raises:
            InvalidHandlerError: If name or handler is not acceptable
        """
        self._validate(name, handler)

        self._dispatcher.register(handler.process)
        self._registry.set(name, handler)

        self.logger.info(f"Authentication handler registered: {name}")
        return self

    def using(self, name: str) -> Authenticator:
        """
        Get a handler by its name

        Args:
            name: Registration name

        Returns:
            The registered authenticator

        Raises:
            UnknownHandlerError: If name was never registered
        """
        handler = self._registry.get(name)
        if handler is not None:
            return handler

        raise UnknownHandlerError(name)

    def attempt(self, credentials: Credentials) -> Any:
        """
        Attempt to authenticate with the given credentials

        Runs the registered handlers through the dispatcher. With the
        default Dispatcher the result is awaitable and resolves to an
        Identity or a Rejection.

        Args:
            credentials: Credentials mapping, passed through untouched

        Returns:
            Whatever dispatcher.dispatch() returns
        """
        return self._dispatcher.dispatch(credentials)

    def handler_names(self) -> List[str]:
        """Names currently registered"""
        return self._registry.names()

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    @property
    def dispatcher(self) -> DispatcherContract:
        return self._dispatcher

    @staticmethod
    def _validate(name: str, handler: Any) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidHandlerError("Handler name must be a non-empty string")
        if len(name) > MAX_HANDLER_NAME_LENGTH:
            raise InvalidHandlerError(
                f"Handler name too long ({len(name)} > {MAX_HANDLER_NAME_LENGTH})"
            )
        if not _NAME_RE.fullmatch(name):
            raise InvalidHandlerError(f"Invalid handler name: {name!r}")
        if not callable(getattr(handler, "process", None)):
            raise InvalidHandlerError(
                f"Handler '{name}' must expose process(credentials, next)"
            )


def create_manager(
    dispatcher: Optional[DispatcherContract] = None,
    handlers: Optional[HandlerContainer] = None,
) -> AuthManager:
    """
    Create a new authentication manager

    Args:
        dispatcher: Credentials dispatcher (a new Dispatcher if omitted)
        handlers: Handler container

    Returns:
        AuthManager
    """
    if dispatcher is None:
        dispatcher = Dispatcher()
    return AuthManager(dispatcher, handlers)
