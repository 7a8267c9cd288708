"""HTTP API for the swarm (requires the ``api`` extra)."""

from .server import create_app

__all__ = ["create_app"]
