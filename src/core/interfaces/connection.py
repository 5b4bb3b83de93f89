"""Contract of the persistent session connection.

Why Protocol:
- The router and the shutdown coordinator only need three operations, so a
  structural contract keeps them independent of the socket library.
- Tests drive the state machine with an in-memory connection.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SessionConnection(Protocol):
    """Minimal bidirectional text channel keyed by a session id.

    Rules:
    - `receive_text` returns the next text frame, or `None` once the peer
      has closed the connection normally. Non-text frames are consumed
      silently by the implementation.
    - Abnormal termination raises `TransportError`.
    - `close` performs the closing handshake; it is called exactly once.
    """

    async def receive_text(self) -> str | None:
        ...

    async def send_text(self, text: str) -> None:
        ...

    async def close(self, code: int, reason: str) -> None:
        ...
