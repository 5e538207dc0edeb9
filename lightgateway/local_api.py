"""Addresses of the local gateway API."""

from __future__ import annotations

LISTEN_ADDR = "127.0.0.1"


def listen_addr(port: int) -> str:
    """The address the local API server listens on."""
    return f"{LISTEN_ADDR}:{port}"


def connect_uri(port: int) -> str:
    """The URI a local API client connects to."""
    return f"http://{listen_addr(port)}"