"""
HTTP API over the document engine.
"""

from .app import create_app

__all__ = ["create_app"]
