"""Choice of the server that hosts the editing session."""

from __future__ import annotations

import random
from typing import Sequence

from core.domain.models import ServerEntry
from core.errors import ConfigurationError


def select_server(
    servers: Sequence[ServerEntry],
    *,
    rng: random.Random | None = None,
) -> ServerEntry:
    """Pick one valid server uniformly at random.

    `rng` defaults to a generator backed by OS entropy; tests pass a seeded
    `random.Random` to make draws reproducible.
    """

    if not servers:
        raise ConfigurationError("No servers configured")

    valid = [server for server in servers if server.is_valid()]
    if not valid:
        raise ConfigurationError("No valid servers found")

    rng = rng or random.SystemRandom()
    return rng.choice(valid)
