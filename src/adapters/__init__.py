"""Adapters to the outside world (HTTP, persistent socket, filesystem)."""
