"""Per-call request context carrying a deadline and a cancellation signal.

Every client call takes a Context. It bounds how long the round trip may
take and lets another thread abort a call that has not completed yet.

Usage:
    ctx = Context.with_timeout(10)
    repo, resp = client.repo("octocat", "Hello-World").get(ctx)

    # From another thread
    ctx.cancel()
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class Context:
    """Deadline and cancellation state shared by a single call.

    A context is safe to cancel from any thread. Child contexts created
    with ``with_timeout`` on an existing context inherit its cancellation
    and never outlive its deadline.
    """

    def __init__(
        self,
        deadline: float | None = None,
        parent: Context | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            deadline: Absolute ``time.monotonic()`` value after which the
                      context is expired, or None for no deadline
            parent: Optional parent whose cancellation and deadline apply
        """
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline
        self._parent = parent
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._hooks: list[_Once] = []

    @classmethod
    def background(cls) -> Context:
        """Context with no deadline that is only cancelled explicitly."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float, parent: Context | None = None) -> Context:
        """Context that expires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds, parent=parent)

    @property
    def deadline(self) -> float | None:
        """Monotonic deadline, or None."""
        return self._deadline

    def cancel(self) -> None:
        """Cancel the context and run its cancel hooks; in-flight calls abort."""
        with self._lock:
            self._cancelled.set()
            hooks, self._hooks = self._hooks, []
        for hook in hooks:
            hook()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` once when this context or a parent is cancelled.

        The callback runs on the cancelling thread, or immediately if the
        context is already cancelled.

        Returns:
            Function unregistering the callback
        """
        hook = _Once(callback)
        chain: list[Context] = []
        node: Context | None = self
        while node is not None:
            with node._lock:
                node._hooks.append(hook)
            chain.append(node)
            node = node._parent

        if self.cancelled:
            hook()

        def remove() -> None:
            for registered in chain:
                with registered._lock:
                    if hook in registered._hooks:
                        registered._hooks.remove(hook)

        return remove

    @property
    def cancelled(self) -> bool:
        """Whether this context or one of its parents was cancelled."""
        if self._cancelled.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def expired(self) -> bool:
        """Whether the deadline has passed."""
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or None."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def err(self) -> str | None:
        """Reason the context is done, or None while it is still live."""
        if self.cancelled:
            return "context canceled"
        if self.expired:
            return "context deadline exceeded"
        return None


class _Once:
    """Callable that forwards to ``callback`` on its first call only."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._lock = threading.Lock()
        self._called = False

    def __call__(self) -> None:
        with self._lock:
            if self._called:
                return
            self._called = True
        self._callback()
