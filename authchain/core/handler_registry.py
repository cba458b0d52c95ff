"""
Handler Registry - Name-keyed store of authenticators

Module: core.handler_registry
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial implementation
  - Handler storage and retrieval by name
  - Overwrite semantics for repeated names
  - Pluggable backing mapping

ARCHITECTURE:
HandlerRegistry is a lookup table, not a chain: insertion order does not
matter here. Chain order lives in the dispatcher.

HandlerRegistry is owned by AuthManager.
"""

import logging
from typing import Dict, List, MutableMapping, Optional

from ..dispatch.contracts import Authenticator


class HandlerRegistry:
    """
    Registry of authenticators keyed by registration name

    Backed by any MutableMapping; a plain dict by default.
    """

    def __init__(self, container: Optional[MutableMapping[str, Authenticator]] = None):
        """
        Initialize handler registry

        Args:
            container: Mapping to store handlers in (shared if supplied)
        """
        self.logger = logging.getLogger("auth.registry")
        self._handlers: MutableMapping[str, Authenticator] = (
            container if container is not None else {}
        )

    def set(self, name: str, handler: Authenticator) -> None:
        """
        Store a handler, replacing any handler with the same name

        Args:
            name: Registration name
            handler: Authenticator instance
        """
        if name in self._handlers:
            self.logger.warning(f"Overwriting authentication handler: {name}")

        self._handlers[name] = handler
        self.logger.debug(f"Handler stored: {name} -> {handler!r}")

    def get(self, name: str) -> Optional[Authenticator]:
        """
        Get a handler by name

        Returns:
            Authenticator instance or None if not registered
        """
        return self._handlers.get(name)

    def has(self, name: str) -> bool:
        """Check if a handler is registered under name"""
        return self.get(name) is not None

    def names(self) -> List[str]:
        """Registered names"""
        return list(self._handlers.keys())

    def list_all(self) -> Dict[str, Authenticator]:
        """Copy of all handlers keyed by name"""
        return dict(self._handlers)

    def count(self) -> int:
        return len(self._handlers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        return self.count()
