"""Cancellation tokens threaded into every endpoint handler.

A token is created per request by the ``request_cancellation`` dependency and
is cancelled when the client disconnects. Handlers receive it as their ``ct``
argument and are expected to honour it, either by checking it between steps
or by running outstanding work through ``CancellationToken.run``.
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, TypeVar

from fastapi import Depends, Request
from typing_extensions import Annotated

from reprendpoint.exceptions import OperationCancelledError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CancellationToken:
    """Signal that the work done on behalf of a request should stop."""

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: List[Callable[[], Any]] = []
        self._event: Optional[asyncio.Event] = None

    @classmethod
    def none(cls) -> "CancellationToken":
        """Return the shared token that is never cancelled."""
        return _NONE_TOKEN

    @property
    def can_be_cancelled(self) -> bool:
        return True

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Cancel the token and run registered callbacks once."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._event is not None:
            self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], Any]) -> Callable[[], None]:
        """Register a callback to run on cancellation.

        The callback runs immediately when the token is already cancelled.

        Args:
            callback: Zero-argument callable

        Returns:
            A function that removes the callback again
        """
        if self._cancelled:
            callback()
            return lambda: None

        self._callbacks.append(callback)

        def unregister() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unregister

    def raise_if_cancellation_requested(self) -> None:
        if self._cancelled:
            raise OperationCancelledError()

    async def wait(self) -> None:
        """Wait until the token is cancelled."""
        if self._cancelled:
            return
        if self._event is None:
            self._event = asyncio.Event()
        await self._event.wait()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first.

        When the token is cancelled while the work is outstanding, the work is
        cancelled and ``OperationCancelledError`` is raised.

        Args:
            awaitable: Coroutine or future to run

        Returns:
            The result of ``awaitable``
        """
        self.raise_if_cancellation_requested()
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except BaseException:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task.done():
            return task.result()

        task.cancel()
        await asyncio.wait({task})
        raise OperationCancelledError()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cancelled={self._cancelled})"


class _NeverCancelledToken(CancellationToken):
    """Token handed to handlers that are called outside of a request."""

    @property
    def can_be_cancelled(self) -> bool:
        return False

    def cancel(self) -> None:
        raise RuntimeError("CancellationToken.none() cannot be cancelled")

    def register(self, callback: Callable[[], Any]) -> Callable[[], None]:
        return lambda: None

    async def wait(self) -> None:
        await asyncio.get_running_loop().create_future()

    async def run(self, awaitable: Awaitable[T]) -> T:
        return await awaitable


_NONE_TOKEN = _NeverCancelledToken()


async def _watch_disconnect(request: Request, token: CancellationToken) -> None:
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            logger.debug(f"Client disconnected from {request.url.path}, cancelling")
            token.cancel()
            return


async def request_cancellation(request: Request) -> AsyncIterator[CancellationToken]:
    """FastAPI dependency yielding a token tied to the client connection.

    Request bodies are read by FastAPI before dependencies are solved, so the
    watcher only ever sees trailing ``http.request`` and ``http.disconnect``
    messages.
    """
    token = CancellationToken()
    watcher = asyncio.ensure_future(_watch_disconnect(request, token))
    try:
        yield token
    finally:
        watcher.cancel()


RequestCancellation = Annotated[CancellationToken, Depends(request_cancellation)]


__all__ = [
    "CancellationToken",
    "RequestCancellation",
    "request_cancellation",
]
