"""Caller-owned cancellation signal.

Callers create a ``CancellationToken`` and pass it with a request. Adapters
poll it between stream reads (``raise_if_cancelled``) and register an
``on_cancel`` callback that closes the in-flight HTTP response, which is what
unblocks a consumer thread stuck in a socket read.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable

from .cancelled_error import CancelledError
from .state import State


class CancellationToken:
    """Thread-safe, one-shot cancellation flag with callbacks.

    ``cancel`` may be called from any thread. Tokens created with ``parent``
    (or via :meth:`child`) are cancelled together with their parent.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        if parent is not None:
            parent.on_cancel(lambda: self.cancel(parent.reason))

    @property
    def cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def reason(self) -> str | None:
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Flip the flag and run pending callbacks; later calls are no-ops."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled, self._state.reason = True, reason
            pending, self._state.callbacks = self._state.callbacks, []
        for callback in pending:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` on cancel (immediately if already cancelled).

        Returns a function that unregisters the callback.
        """
        with self._lock:
            fire_now = self._state.cancelled
            if not fire_now:
                self._state.callbacks.append(callback)
        if fire_now:
            callback()

        def _unregister() -> None:
            with self._lock:
                if callback in self._state.callbacks:
                    self._state.callbacks.remove(callback)

        return _unregister

    def raise_if_cancelled(self) -> None:
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """New token that is cancelled whenever this one is."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
