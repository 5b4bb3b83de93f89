"""Interrupt handling and the closing handshake.

The message loop runs as one task and the interrupt is observed as a second
awaitable; whichever finishes first decides how the connection is closed:

- loop returned (peer closed) or interrupt fired: close with 1000, no reason.
- loop raised: close with 1001 and the error text, then re-raise.

Closing is best-effort and happens exactly once, after the loop has stopped.
"""

from __future__ import annotations

import asyncio
import signal
from enum import Enum
from typing import Awaitable, Callable, Iterable

from core.errors import RemditError, TransportError
from core.interfaces.connection import SessionConnection
from core.log import get_logger

logger = get_logger(__name__)

NORMAL_CLOSURE = 1000
GOING_AWAY = 1001


class SessionOutcome(str, Enum):
    """How a session ended without error."""

    PEER_CLOSED = "peer_closed"
    INTERRUPTED = "interrupted"


class InterruptNotification:
    """Single-slot notification: the first `notify` wins, later ones are no-ops."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def notify(self) -> bool:
        if self._event.is_set():
            return False
        self._event.set()
        return True

    def is_set(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


def install_interrupt_watcher(
    notification: InterruptNotification,
    *,
    signals: Iterable[int] = (signal.SIGINT,),
) -> Callable[[], None]:
    """Route process signals to `notification`; returns a function that undoes it.

    Must be called from a running event loop. Where the loop cannot install
    signal handlers (Windows), a plain `signal.signal` handler forwards the
    notification into the loop thread-safely.
    """

    loop = asyncio.get_running_loop()
    restore: list[Callable[[], None]] = []

    for signum in signals:
        try:
            loop.add_signal_handler(signum, notification.notify)
        except NotImplementedError:
            previous = signal.signal(
                signum,
                lambda _signum, _frame: loop.call_soon_threadsafe(notification.notify),
            )
            restore.append(lambda signum=signum, previous=previous: signal.signal(signum, previous))
        else:
            restore.append(lambda signum=signum: loop.remove_signal_handler(signum))

    def uninstall() -> None:
        for undo in restore:
            undo()

    return uninstall


class ShutdownCoordinator:
    """Races a session loop against an interrupt and closes the connection once."""

    def __init__(self, connection: SessionConnection) -> None:
        self._connection = connection
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def run(
        self,
        loop: Awaitable[None],
        interrupt: InterruptNotification,
    ) -> SessionOutcome:
        loop_task = asyncio.ensure_future(loop)
        interrupt_task = asyncio.ensure_future(interrupt.wait())
        try:
            done, _ = await asyncio.wait(
                {loop_task, interrupt_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            loop_task.cancel()
            interrupt_task.cancel()
            raise

        if loop_task in done:
            interrupt_task.cancel()
            error = loop_task.exception()
            if error is not None:
                logger.error("Error handling messages: %s", error)
                await self.close(GOING_AWAY, str(error))
                raise error
            logger.debug("Session ended")
            outcome = SessionOutcome.PEER_CLOSED
        else:
            logger.debug("Received interrupt signal")
            await self._stop(loop_task)
            outcome = SessionOutcome.INTERRUPTED

        await self.close(NORMAL_CLOSURE, "")
        return outcome

    async def close(self, code: int, reason: str) -> None:
        """Send the closing handshake unless it was already sent."""

        if self._closed:
            return
        self._closed = True
        try:
            await self._connection.close(code, reason)
        except TransportError as exc:
            logger.warning("Failed to close connection: %s", exc)

    @staticmethod
    async def _stop(loop_task: asyncio.Future[None]) -> None:
        loop_task.cancel()
        try:
            await loop_task
        except asyncio.CancelledError:
            pass
        except RemditError as exc:
            logger.debug("Session loop ended after interrupt: %s", exc)
