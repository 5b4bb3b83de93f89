"""Configuration of the client.

Two sources:
- `AppSettings` (pydantic-settings): timeouts, limits and the optional
  fallback server, read from `REMDIT_*` environment variables or `.env`.
- The server list (`config.toml`), discovered in a fixed order and validated
  with `ServerConfig`.
"""

from __future__ import annotations

import os
import sys
import tomllib
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import ServerConfig, ServerEntry
from core.errors import ConfigurationError
from core.log import get_logger
from core.version import VERSION

logger = get_logger(__name__)

SYSTEM_CONFIG_FILE = Path("/etc/remdit/config.toml")
CONFIG_FILE_NAME = "config.toml"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "remdit"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "remdit"

    return Path.home() / ".remdit"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central settings of the application."""

    model_config = SettingsConfigDict(
        env_prefix="REMDIT_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user-wide file.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout of the session upload request (seconds).",
    )
    user_agent: str = Field(
        default=f"remdit/{VERSION}",
        min_length=1,
        description="User-Agent sent with the upload request.",
    )
    ws_open_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout of the opening handshake of the session socket.",
    )
    ws_max_message_bytes: int = Field(
        default=64 * 1024 * 1024,
        ge=1024,
        description="Largest inbound frame accepted; a save carries the whole file.",
    )
    config_path: Path | None = Field(
        default=None,
        description="Explicit server list file; searched before the default locations.",
    )
    default_server: str | None = Field(
        default=None,
        description="Server used when the server list has no valid entry.",
    )
    default_api_key: str | None = Field(
        default=None,
        description="API key paired with `default_server`.",
    )


def config_candidates(settings: AppSettings | None = None) -> list[Path]:
    """Server list locations, in lookup order."""

    settings = settings or AppSettings()
    candidates: list[Path] = []
    if settings.config_path is not None:
        candidates.append(settings.config_path.expanduser())
    candidates.extend(
        [
            SYSTEM_CONFIG_FILE,
            get_user_config_dir() / CONFIG_FILE_NAME,
            Path.cwd() / CONFIG_FILE_NAME,
        ]
    )
    return candidates


def parse_server_config(text: str, *, source: str = "<string>") -> ServerConfig:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {source}: {exc}") from exc
    try:
        return ServerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid server list in {source}: {exc}") from exc


def load_server_config(settings: AppSettings | None = None) -> ServerConfig:
    """Load the first server list file found.

    Missing files are not an error: an empty `ServerConfig` is returned and
    the caller decides whether a fallback server applies.
    """

    for path in config_candidates(settings):
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read {path}: {exc}") from exc
        config = parse_server_config(text, source=str(path))
        logger.info("Loaded config from: %s", path)
        return config

    logger.info("No config file found, using default config")
    return ServerConfig()


def candidate_servers(config: ServerConfig, settings: AppSettings | None = None) -> list[ServerEntry]:
    """Servers eligible for selection.

    Falls back to `default_server` only when the list holds no valid entry.
    """

    settings = settings or AppSettings()
    if any(server.is_valid() for server in config.servers):
        return list(config.servers)

    if settings.default_server and settings.default_server.strip():
        logger.debug("Using default server %s", settings.default_server)
        return [ServerEntry(address=settings.default_server, api_key=settings.default_api_key)]

    return list(config.servers)
