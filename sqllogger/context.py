"""Request-scoped values and cancellation passed along with SQL operations."""

from __future__ import annotations

from concurrent.futures import CancelledError
from typing import Any

_MISSING = object()


class Context:
    """An immutable chain of key/value pairs with cancellation.

    A context derived from another sees its parent's values and is
    canceled whenever any of its ancestors is canceled.
    """

    __slots__ = ("_parent", "_key", "_value", "_canceled")

    def __init__(self, parent: Context | None = None, key: Any = _MISSING, value: Any = None):
        self._parent = parent
        self._key = key
        self._value = value
        self._canceled = False

    def with_value(self, key: Any, value: Any) -> Context:
        """Return a child context in which ``key`` maps to ``value``."""
        return Context(self, key, value)

    def value(self, key: Any) -> Any:
        """Return the value bound to ``key`` nearest in the chain, or None."""
        ctx: Context | None = self
        while ctx is not None:
            if ctx._key is not _MISSING and ctx._key == key:
                return ctx._value
            ctx = ctx._parent
        return None

    def cancel(self) -> None:
        """Cancel this context and every context derived from it."""
        self._canceled = True

    def check(self) -> None:
        """Raise ``CancelledError`` if this context or an ancestor was canceled."""
        ctx: Context | None = self
        while ctx is not None:
            if ctx._canceled:
                raise CancelledError("context canceled")
            ctx = ctx._parent

    def __repr__(self) -> str:
        depth = 0
        ctx = self._parent
        while ctx is not None:
            depth += 1
            ctx = ctx._parent
        return f"Context(depth={depth})"


def background() -> Context:
    """Return a fresh, empty root context that is not canceled."""
    return Context()