"""Domain models and pure helpers.

Here live the strict data structures (Pydantic v2) and URL rules. The domain
knows nothing about HTTP clients, sockets or the CLI.
"""
