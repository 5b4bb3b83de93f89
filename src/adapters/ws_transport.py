"""Persistent session connection over WebSocket (`websockets` asyncio client).

Responsibility:
- Open exactly one connection to `/api/session/<id>`; no reconnection.
- Expose it through the `SessionConnection` contract, translating library
  exceptions into `TransportError` / `ProtocolError`.

Ping/pong frames are answered by the library and never reach the caller.
"""

from __future__ import annotations

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException
from websockets.frames import CloseCode

from core.config import AppSettings
from core.domain.endpoints import session_socket_url
from core.domain.models import ServerEntry
from core.errors import ProtocolError, TransportError
from core.interfaces.connection import SessionConnection
from core.log import get_logger

logger = get_logger(__name__)

# RFC 6455: the close payload is 125 bytes, 2 of which hold the code.
MAX_CLOSE_REASON_BYTES = 123

_PROTOCOL_CLOSE_CODES = frozenset(
    {
        CloseCode.PROTOCOL_ERROR,
        CloseCode.INVALID_DATA,
        CloseCode.MESSAGE_TOO_BIG,
    }
)


def truncate_close_reason(reason: str) -> str:
    data = reason.encode("utf-8")
    if len(data) <= MAX_CLOSE_REASON_BYTES:
        return reason
    return data[:MAX_CLOSE_REASON_BYTES].decode("utf-8", errors="ignore")


class WebSocketConnection(SessionConnection):
    """`SessionConnection` backed by a `websockets` client connection."""

    def __init__(self, websocket: ClientConnection) -> None:
        self._ws = websocket

    async def receive_text(self) -> str | None:
        while True:
            try:
                frame = await self._ws.recv()
            except ConnectionClosedOK:
                logger.info("WebSocket connection closed")
                return None
            except ConnectionClosed as exc:
                # Any close frame initiated by the server ends the session cleanly.
                if exc.rcvd is not None and exc.rcvd_then_sent is not False:
                    logger.info("WebSocket connection closed by server: %s", exc.rcvd)
                    return None
                sent_code = exc.sent.code if exc.sent is not None else None
                if sent_code in _PROTOCOL_CLOSE_CODES:
                    raise ProtocolError(f"Invalid frame from server: {exc}") from exc
                raise TransportError(f"Connection lost: {exc}") from exc

            if isinstance(frame, bytes):
                logger.debug("Ignoring binary frame (%d bytes)", len(frame))
                continue
            return frame

    async def send_text(self, text: str) -> None:
        try:
            await self._ws.send(text)
        except (ConnectionClosed, OSError) as exc:
            raise TransportError(f"Cannot send message: {exc}") from exc

    async def close(self, code: int, reason: str) -> None:
        try:
            await self._ws.close(code=code, reason=truncate_close_reason(reason))
        except (WebSocketException, OSError) as exc:
            raise TransportError(f"Cannot close connection: {exc}") from exc


async def open_connection(
    server: ServerEntry,
    session_id: str,
    *,
    settings: AppSettings | None = None,
) -> WebSocketConnection:
    """Connect to the session endpoint; a single attempt."""

    settings = settings or AppSettings()
    url = session_socket_url(server.address, session_id)

    logger.debug("Connecting to %s", url)
    try:
        websocket = await connect(
            url,
            user_agent_header=settings.user_agent,
            open_timeout=settings.ws_open_timeout_seconds,
            max_size=settings.ws_max_message_bytes,
        )
    except (WebSocketException, OSError, TimeoutError) as exc:
        raise TransportError(f"Cannot connect to {url}: {exc}") from exc

    return WebSocketConnection(websocket)
