"""Interfaces/abstractions of the core.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Lets the services depend on abstractions instead of a socket library.
"""

from core.interfaces.connection import SessionConnection

__all__ = ["SessionConnection"]
