"""Command line interface for staffgen."""

from .app import app

__all__ = ["app"]
