"""
Cancellation Scopes for Vindicator

This module provides the cancellable execution scope handed to blocking
workers. A scope can be cancelled on its own, and cancelling a scope
cancels every child derived from it.
"""

import threading
from typing import List, Optional


class Scope:
    """
    A cancellable execution scope.

    Provides:
    - One-shot, idempotent cancellation
    - Child scopes that are cancelled together with their parent
    - Blocking waits that wake up as soon as cancellation is requested
    """

    def __init__(self, parent: Optional["Scope"] = None):
        """
        Initialize the scope.

        Args:
            parent: Scope to derive from, or None for a root scope
        """
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._children: List["Scope"] = []
        self._parent = parent

        if parent is not None:
            parent._adopt(self)

    @property
    def cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._event.is_set()

    def child(self) -> "Scope":
        """Derive a child scope."""
        return Scope(self)

    def cancel(self) -> None:
        """Request cancellation of this scope and all of its children."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            children, self._children = self._children, []

        for child in children:
            child.cancel()

        if self._parent is not None:
            self._parent._release(self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the scope is cancelled or the timeout elapses.

        Args:
            timeout: Maximum time to wait in seconds, None to wait forever

        Returns:
            True if the scope was cancelled, False on timeout
        """
        return self._event.wait(timeout)

    def _adopt(self, child: "Scope") -> None:
        with self._lock:
            if not self._event.is_set():
                self._children.append(child)
                return
        # Parent already cancelled
        child.cancel()

    def _release(self, child: "Scope") -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<Scope {state} children={len(self._children)}>"
