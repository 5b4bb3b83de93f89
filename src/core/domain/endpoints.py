"""URL helpers for the session API.

A configured address may be a bare host (`edit.example.com:8443`) or carry a
scheme. Bare hosts are treated as HTTPS, and the socket endpoint mirrors the
security level of the HTTP one.
"""

from __future__ import annotations

from urllib.parse import quote

_HTTPS = "https://"
_HTTP = "http://"


def http_base_url(address: str) -> str:
    base = address.strip().rstrip("/")
    if base.startswith(_HTTP) or base.startswith(_HTTPS):
        return base
    return f"{_HTTPS}{base}"


def socket_base_url(address: str) -> str:
    base = http_base_url(address)
    if base.startswith(_HTTPS):
        return "wss://" + base[len(_HTTPS):]
    return "ws://" + base[len(_HTTP):]


def session_api_url(address: str) -> str:
    """`POST` target that creates a session."""

    return f"{http_base_url(address)}/api/session"


def session_socket_url(address: str, session_id: str) -> str:
    """Persistent connection endpoint for `session_id`."""

    return f"{socket_base_url(address)}/api/session/{quote(session_id, safe='')}"
