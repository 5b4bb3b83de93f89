"""Session creation over HTTP.

Responsibility:
- Upload the file as a single multipart part named `document`.
- Validate status, content type and body of the answer.
- Return a `Session`, or raise the matching error. No retries.
"""

from __future__ import annotations

import json
from pathlib import Path

import httpx
from pydantic import ValidationError

from adapters.file_store import read_document
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.endpoints import session_api_url
from core.domain.models import ServerEntry, Session
from core.errors import AuthError, ProtocolError, ResponseFormatError, TransportError
from core.log import get_logger

logger = get_logger(__name__)

DOCUMENT_FIELD = "document"
DOCUMENT_CONTENT_TYPE = "application/octet-stream"
API_KEY_HEADER = "X-API-Key"


def build_upload(file_path: Path) -> dict[str, tuple[str, bytes, str]]:
    """Multipart `files=` mapping for httpx; the whole file is read here."""

    return {DOCUMENT_FIELD: (file_path.name, read_document(file_path), DOCUMENT_CONTENT_TYPE)}


def parse_session_response(response: httpx.Response) -> Session:
    if response.status_code == 401:
        raise AuthError("Unauthorized: check your API key")
    if not response.is_success:
        raise ProtocolError(f"Unexpected HTTP status {response.status_code} from {response.url}")

    content_type = response.headers.get("content-type", "")
    if "application/json" not in content_type:
        raise ProtocolError(f"Unexpected content-type: {content_type}")

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProtocolError(f"Invalid JSON in session response: {exc}") from exc

    try:
        return Session.model_validate(payload)
    except ValidationError as exc:
        raise ResponseFormatError(f"Session response lacks sessionid/editurl: {exc}") from exc


async def negotiate_session(
    server: ServerEntry,
    file_path: Path,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Session:
    """Create an editing session for `file_path` on `server`.

    A caller-provided `client` is used as is and left open.
    """

    url = session_api_url(server.address)
    headers: dict[str, str] = {}
    if server.api_key:
        headers[API_KEY_HEADER] = server.api_key
    files = build_upload(file_path)

    logger.debug("Creating session at %s", url)
    try:
        if client is not None:
            response = await client.post(url, files=files, headers=headers)
        else:
            async with build_async_client(settings) as own_client:
                response = await own_client.post(url, files=files, headers=headers)
    except httpx.HTTPError as exc:
        raise TransportError(f"Request failed: {exc}") from exc

    session = parse_session_response(response)
    logger.debug("Session %s created", session.session_id)
    return session
