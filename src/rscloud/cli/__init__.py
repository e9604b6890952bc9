"""CLI commands."""

from . import config, lb, main, server

__all__ = ["config", "lb", "main", "server"]
