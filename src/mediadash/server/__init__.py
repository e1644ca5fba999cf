"""HTTP server exposing the dashboard integrations as a JSON API."""

from mediadash.server.app import create_app

__all__ = ["create_app"]
