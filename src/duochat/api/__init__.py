"""HTTP boundary: the single chat endpoint plus model listing and health."""

from .app import create_app

__all__ = ["create_app"]
