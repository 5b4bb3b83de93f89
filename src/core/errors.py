"""Error taxonomy for the remdit client.

Every failure the core can report derives from `RemditError`, so the CLI can
print a single message and choose the exit code without knowing which layer
failed. Adapters translate library exceptions (httpx, websockets, pydantic,
OSError) into these types at the boundary.
"""

from __future__ import annotations


class RemditError(Exception):
    """Base class for all client errors."""


class ConfigurationError(RemditError):
    """No usable server could be derived from the configuration."""


class AuthError(RemditError):
    """The server rejected the API key (HTTP 401)."""


class ProtocolError(RemditError):
    """A response or inbound frame did not follow the wire contract."""


class ResponseFormatError(RemditError):
    """The session response is JSON but lacks a required field."""


class TransportError(RemditError):
    """Network-level failure: DNS, TLS, refused or dropped connection."""


class LocalIOError(RemditError):
    """Reading or writing the local file failed."""
