"""Command line interface (`kimap-sdk`)."""

from .main import app, main, run

__all__ = ["app", "main", "run"]
