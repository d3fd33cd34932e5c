"""Cancellable iterator wrapper around a canonical chunk stream.

A UI thread can hold one controller, iterate it and call ``cancel`` from
elsewhere.
"""
from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional

from ..cancellation import CancellationToken
from ..models import ChatCompletionChunk


class StreamController:
    """High-level cancellable iterator over canonical chunks.

    Responsibilities:
      * Iterate over `ChatCompletionChunk` objects.
      * Expose `cancel(reason)` for cooperative cancellation.
      * Keep the terminal chunk for post-hoc inspection.

    ``open_stream`` receives the controller's token and returns the stream,
    e.g. ``lambda token: api.chat_completion_stream(req, cancellation_token=token)``.
    """

    def __init__(
        self,
        open_stream: Callable[[CancellationToken], Iterable[ChatCompletionChunk]],
        token: CancellationToken | None = None,
    ) -> None:
        self._token = token or CancellationToken()
        self._open_stream = open_stream
        self._started = False
        self._finished = False
        self._terminal_chunk: Optional[ChatCompletionChunk] = None

    def __iter__(self) -> Iterator[ChatCompletionChunk]:
        if self._started:
            raise RuntimeError("stream already consumed; issue a new call to restart")
        self._started = True
        for chunk in self._open_stream(self._token):
            if chunk.is_terminal:
                self._terminal_chunk = chunk
            yield chunk
        self._finished = True

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation of the underlying stream.

        Safe to invoke multiple times or after completion.
        """
        self._token.cancel(reason)

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short property
        """Whether ``cancel`` was requested."""
        return self._token.cancelled

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether iteration ran to the end of the stream."""
        return self._finished

    @property
    def terminal_chunk(self) -> ChatCompletionChunk | None:  # noqa: D401 - short property
        """Return the captured terminal chunk, if the stream produced one."""
        return self._terminal_chunk


__all__ = ["StreamController"]
