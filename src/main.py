"""Run script.

Allows `python -m main FILE` from inside `src/` during development, next to
the `remdit` console script.
"""

from __future__ import annotations

import sys

# Windows terminals default to cp1252; edit URLs and logs may not fit.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
