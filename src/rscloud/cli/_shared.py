"""Helpers shared by the command modules."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..api.client import CloudClient
from ..config import ConfigManager
from ..utils import print_error

_state = {"debug": False}


def setup_logging(debug: bool) -> None:
    """Route rscloud log records to stderr through Rich."""
    _state["debug"] = debug
    logger = logging.getLogger("rscloud")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)


def open_client(profile: str | None) -> CloudClient:
    """Build a client for a profile, or the default one.

    Raises:
        ConfigError: If the profile cannot be loaded
    """
    profile_config = ConfigManager().get_profile(profile)
    client = CloudClient.from_profile(profile_config)
    if _state["debug"]:
        client.enable_debug()
    return client


def parse_node(raw: str) -> tuple[str, int]:
    """Parse an ``address:port`` node specification."""
    address, sep, port = raw.rpartition(":")
    if not sep or not address:
        print_error(f"Invalid node '{raw}', expected address:port")
        raise typer.Exit(1)
    try:
        return address, int(port)
    except ValueError:
        print_error(f"Invalid port in node '{raw}'")
        raise typer.Exit(1)
