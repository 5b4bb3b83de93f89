"""Version information printed by `remdit --version`."""

from __future__ import annotations

import os

VERSION = "0.1.0"

# Filled in by release builds through the environment.
COMMIT = os.environ.get("REMDIT_COMMIT", "unknown")
