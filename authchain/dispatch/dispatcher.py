"""
Dispatcher - Ordered chain-of-responsibility executor

Module: dispatch.dispatcher
Date: 2026-10-19
Version: 0.1.0-alpha

CHANGELOG:
[2026-10-19 v0.1.0-alpha] Initial implementation
  - Append-only chain of links
  - Index cursor per dispatch (Continuation)
  - Sync and async links
  - Fail-fast on next() called twice
  - Configurable outcome for an exhausted chain

ARCHITECTURE:
Dispatcher holds the ordered links. Each dispatch() call takes a snapshot
of the links and walks it with its own Continuation, so concurrent
dispatches share no cursor state.

Chain walk for one dispatch:
  Pending -> Evaluating[0] -> Terminated(outcome)     link did not call next()
                           -> Evaluating[1] -> ...
                           -> Exhausted               every link called next()

A link receives next(), a zero-argument callable returning an awaitable.
Sync links may simply `return next()`; the returned awaitable is awaited
by the dispatcher.

Exceptions raised by links propagate unchanged.
"""

import inspect
import logging
from typing import Any, List, Sequence

from .contracts import Authenticator, ChainLink, Credentials, Rejection
from ..core.constants import EXHAUSTED_REASON
from ..security.errors import ChainMisuseError

# Marks "no custom exhausted outcome configured"
_DEFAULT_EXHAUSTED = object()


class Continuation:
    """
    Cursor over one chain snapshot

    `position` is the index of the next link allowed to run. Entering a
    link advances it by one; a second next() from the same link finds the
    cursor already moved and fails.
    """

    def __init__(
        self,
        links: Sequence[ChainLink],
        credentials: Credentials,
        exhausted: Any,
    ):
        self.links = links
        self.credentials = credentials
        self.exhausted = exhausted
        self.position = 0
        self.logger = logging.getLogger("auth.dispatcher")

    def advance(self, index: int) -> None:
        """
        Claim the link at index

        Raises:
            ChainMisuseError: If that link was already entered
        """
        if index != self.position:
            raise ChainMisuseError(
                f"next() called more than once by chain link {index - 1}"
            )
        self.position = index + 1

    async def run(self, index: int) -> Any:
        """Invoke the link at index (already claimed) and settle its outcome"""
        if index >= len(self.links):
            self.logger.debug(f"Chain exhausted after {len(self.links)} link(s)")
            return self.exhausted

        link = self.links[index]
        self.logger.debug(f"Evaluating chain link {index}: {_describe(link)}")

        outcome = link(self.credentials, _Next(self, index + 1))
        if inspect.isawaitable(outcome):
            outcome = await outcome

        if self.position == index + 1:
            self.logger.debug(f"Chain terminated by link {index}")
        return outcome


class _Next:
    """next() handed to the link at index - 1"""

    __slots__ = ("continuation", "index")

    def __init__(self, continuation: Continuation, index: int):
        self.continuation = continuation
        self.index = index

    def __call__(self):
        self.continuation.advance(self.index)
        return self.continuation.run(self.index)


class Dispatcher:
    """
    Executes an ordered chain of authentication links

    Links run in registration order. The chain is append-only: there is
    no removal or reordering.
    """

    def __init__(self, exhausted: Any = _DEFAULT_EXHAUSTED):
        """
        Initialize dispatcher

        Args:
            exhausted: Outcome returned when every link deferred.
                Defaults to a fresh Rejection per dispatch.
        """
        self.logger = logging.getLogger("auth.dispatcher")
        self._links: List[ChainLink] = []
        self._exhausted = exhausted

    def register(self, fn: ChainLink) -> None:
        """
        Append a link to the chain

        Args:
            fn: Callable taking (credentials, next)

        Raises:
            TypeError: If fn is not callable
        """
        if not callable(fn):
            raise TypeError(f"Chain link must be callable, got {type(fn).__name__}")

        self._links.append(fn)
        self.logger.debug(f"Chain link {len(self._links) - 1} added: {_describe(fn)}")

    def use(self, handler: Authenticator) -> None:
        """Append an authenticator's process() to the chain"""
        process = getattr(handler, "process", None)
        if not callable(process):
            raise TypeError(f"{handler!r} does not expose process()")
        self.register(process)

    async def dispatch(self, credentials: Credentials) -> Any:
        """
        Run the chain against credentials

        Args:
            credentials: Credentials mapping, passed to every link as-is

        Returns:
            Outcome of the first link that did not call next(), or the
            exhausted outcome
        """
        continuation = Continuation(
            tuple(self._links), credentials, self._exhausted_outcome()
        )
        continuation.advance(0)
        return await continuation.run(0)

    @property
    def links(self) -> tuple:
        """Snapshot of the current chain"""
        return tuple(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def _exhausted_outcome(self) -> Any:
        if self._exhausted is _DEFAULT_EXHAUSTED:
            return Rejection(reason=EXHAUSTED_REASON)
        return self._exhausted


def _describe(link: ChainLink) -> str:
    owner = getattr(link, "__self__", None)
    if owner is not None:
        return repr(owner)
    return getattr(link, "__qualname__", repr(link))
