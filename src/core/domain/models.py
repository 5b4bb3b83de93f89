"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Wire shapes (session response, socket frames) and the TOML server list are
  validated at the edge with the same models that the services consume.
- Serialization of outbound frames reproduces field names exactly through
  aliases, and leaves optional fields out instead of sending `null`.

Note:
- These models describe *what* travels between client and server, not *how*
  it travels.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

SAVE_MESSAGE = "save"
SAVE_RESULT_MESSAGE = "save_result"

SAVE_SUCCEEDED_REASON = "File saved successfully"
SAVE_FAILED_REASON = "Failed to save file"


class ServerEntry(BaseModel):
    """One candidate editing server, as listed in `config.toml`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    address: str = Field(
        default="",
        alias="addr",
        description="Host, host:port or full http(s) URL of the server.",
    )
    api_key: str | None = Field(
        default=None,
        alias="key",
        description="Value sent as `X-API-Key` when creating a session.",
    )

    def is_valid(self) -> bool:
        """Usable when the address is non-empty; a whitespace-only address counts as empty."""

        return bool(self.address.strip())


class ServerConfig(BaseModel):
    """Contents of a server list file."""

    model_config = ConfigDict(extra="ignore")

    servers: list[ServerEntry] = Field(
        default_factory=list,
        description="Candidate servers, in file order.",
    )


class Session(BaseModel):
    """Session handle returned by `POST /api/session`.

    The server spells the keys `sessionid` and `editurl`; both are required
    and must be non-empty.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    session_id: str = Field(
        ...,
        alias="sessionid",
        min_length=1,
        description="Server-side identifier keying the persistent connection.",
    )
    edit_url: str = Field(
        ...,
        alias="editurl",
        min_length=1,
        description="Browser URL where the document is edited.",
    )


class InboundMessage(BaseModel):
    """Text frame received from the session endpoint.

    Only `save` carries meaning today; other `type` values are accepted so
    that newer servers can add message kinds.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    kind: str = Field(..., alias="type")
    content: str | None = Field(
        default=None,
        description="Full replacement content for `save` messages.",
    )

    @property
    def is_save(self) -> bool:
        return self.kind == SAVE_MESSAGE


class SaveResult(BaseModel):
    """Acknowledgment sent back for every accepted `save`."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["save_result"] = Field(default=SAVE_RESULT_MESSAGE, alias="type")
    success: bool
    reason: str | None = None

    @classmethod
    def saved(cls) -> "SaveResult":
        return cls(success=True, reason=SAVE_SUCCEEDED_REASON)

    @classmethod
    def failed(cls) -> "SaveResult":
        return cls(success=False, reason=SAVE_FAILED_REASON)

    def to_wire(self) -> str:
        """Compact JSON with `type` as key and no `reason` when it is None."""

        return self.model_dump_json(by_alias=True, exclude_none=True)
