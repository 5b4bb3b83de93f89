"""Edit session orchestration.

This module runs the whole lifecycle of one remote edit: pick a server,
upload the file, open the session connection, announce the edit URL, relay
saves until the session ends, and close the connection. Printing stays in
the CLI; the pipeline reports through `SessionHooks`.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Sequence

from adapters.session_negotiator import negotiate_session
from adapters.ws_transport import open_connection
from core.config import AppSettings
from core.domain.models import ServerEntry, Session
from core.interfaces.connection import SessionConnection
from core.log import get_logger
from core.services.message_router import MessageRouter
from core.services.server_selector import select_server
from core.services.shutdown import (
    InterruptNotification,
    SessionOutcome,
    ShutdownCoordinator,
    install_interrupt_watcher,
)

logger = get_logger(__name__)

Negotiator = Callable[[ServerEntry, Path], Awaitable[Session]]
Connector = Callable[[ServerEntry, str], Awaitable[SessionConnection]]


@dataclass
class EditRequest:
    """Parameters of one edit run."""

    file_path: Path
    servers: Sequence[ServerEntry]
    rng: random.Random | None = None


@dataclass
class SessionHooks:
    """Optional callbacks for UI layers."""

    edit_url: Callable[[str, str], None] | None = None


@dataclass
class EditResult:
    """Output of a completed run."""

    server: ServerEntry
    session: Session
    outcome: SessionOutcome


async def run_edit_session(
    request: EditRequest,
    *,
    settings: AppSettings | None = None,
    hooks: SessionHooks | None = None,
    interrupt: InterruptNotification | None = None,
    negotiator: Negotiator | None = None,
    connector: Connector | None = None,
) -> EditResult:
    """Run one session to completion.

    Errors before the connection exists propagate untouched. Once connected,
    the `ShutdownCoordinator` owns the connection and always closes it.
    When no `interrupt` is given, SIGINT is watched for the duration of the
    message loop.
    """

    settings = settings or AppSettings()
    hooks = hooks or SessionHooks()

    async def _negotiate(server: ServerEntry, path: Path) -> Session:
        return await negotiate_session(server, path, settings=settings)

    async def _connect(server: ServerEntry, session_id: str) -> SessionConnection:
        return await open_connection(server, session_id, settings=settings)

    negotiator = negotiator or _negotiate
    connector = connector or _connect

    server = select_server(request.servers, rng=request.rng)
    logger.debug("Selected server: %s", server.address)

    session = await negotiator(server, request.file_path)
    connection = await connector(server, session.session_id)
    logger.debug("Connected to server: %s", server.address)
    if hooks.edit_url:
        hooks.edit_url(request.file_path.name, session.edit_url)

    router = MessageRouter(request.file_path)
    coordinator = ShutdownCoordinator(connection)

    uninstall: Callable[[], None] | None = None
    if interrupt is None:
        interrupt = InterruptNotification()
        uninstall = install_interrupt_watcher(interrupt)
    try:
        outcome = await coordinator.run(router.run(connection), interrupt)
    finally:
        if uninstall is not None:
            uninstall()

    return EditResult(server=server, session=session, outcome=outcome)
