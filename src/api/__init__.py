"""
HTTP and WebSocket surface of the dispatch service.
"""

from .app import create_app

__all__ = ["create_app"]
