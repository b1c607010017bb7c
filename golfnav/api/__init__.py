"""FastAPI surface over the proximity classifier and shot engine."""

from .app import app

__all__ = ["app"]
