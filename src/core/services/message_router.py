"""Inbound message handling for an open session.

The router reads frames strictly one at a time, so saves are applied and
acknowledged in arrival order:

- `save` with content: overwrite the file, answer one `save_result`.
- `save` without content, or an unknown `type`: log and skip.
- peer close: return normally.
- undecodable frame: raise `ProtocolError`.

A failed write is reported to the peer and the loop goes on; a failed
acknowledgment is only logged.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from adapters.file_store import write_document
from core.domain.models import InboundMessage, SaveResult
from core.errors import LocalIOError, ProtocolError, TransportError
from core.interfaces.connection import SessionConnection
from core.log import get_logger

logger = get_logger(__name__)


def parse_inbound(text: str) -> InboundMessage:
    try:
        return InboundMessage.model_validate_json(text)
    except ValidationError as exc:
        first = exc.errors(include_url=False)[0]
        raise ProtocolError(f"Malformed message: {first['msg']}") from exc


class MessageRouter:
    """Applies inbound session messages to `file_path`."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    @property
    def file_path(self) -> Path:
        return self._file_path

    async def run(self, connection: SessionConnection) -> None:
        """Process messages until the peer closes the connection."""

        while True:
            text = await connection.receive_text()
            if text is None:
                return
            await self.dispatch(connection, text)

    async def dispatch(self, connection: SessionConnection, text: str) -> None:
        message = parse_inbound(text)

        if not message.is_save:
            logger.info("Unknown message type: %s", message.kind)
            return
        if message.content is None:
            logger.info("Ignoring save message without content")
            return

        result = self.save(message.content)
        try:
            await connection.send_text(result.to_wire())
        except TransportError as exc:
            logger.warning("Failed to send result message: %s", exc)

    def save(self, content: str) -> SaveResult:
        try:
            written = write_document(self._file_path, content)
        except LocalIOError as exc:
            logger.error("Failed to write file: %s", exc)
            return SaveResult.failed()

        logger.info("File saved with %d bytes", written)
        return SaveResult.saved()
