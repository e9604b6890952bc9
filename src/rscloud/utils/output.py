"""Output formatting utilities using Rich."""

from rich.console import Console
from rich.prompt import Confirm, Prompt

console = Console()

_PENDING = {
    "build", "rebuild", "resize", "verify_resize", "reboot", "hard_reboot",
    "pending_update", "draining",
}


def print_error(msg: str) -> None:
    """Print an error message to the console.

    Args:
        msg: The error message to display.
    """
    console.print(f"[bold red]Error:[/bold red] {msg}")


def print_success(msg: str) -> None:
    """Print a success message to the console.

    Args:
        msg: The success message to display.
    """
    console.print(f"[bold green]\u2713[/bold green] {msg}")


def print_warning(msg: str) -> None:
    """Print a warning message to the console.

    Args:
        msg: The warning message to display.
    """
    console.print(f"[bold yellow]Warning:[/bold yellow] {msg}")


def print_info(msg: str) -> None:
    """Print an info message to the console.

    Args:
        msg: The info message to display.
    """
    console.print(f"[cyan]{msg}[/cyan]")


def print_cancelled(msg: str = "Cancelled") -> None:
    """Print a cancellation message to the console.

    Args:
        msg: The cancellation message to display.
    """
    console.print(f"[yellow]{msg}[/yellow]")


def confirm(message: str, default: bool = False) -> bool:
    """Prompt user for confirmation.

    Args:
        message: The confirmation message to display.
        default: Default choice if user just presses enter.

    Returns:
        True if user confirmed, False otherwise.
    """
    return Confirm.ask(message, default=default)


def prompt(message: str, default: str | None = None) -> str:
    """Prompt user for text input.

    Args:
        message: The prompt message to display.
        default: Default value if user just presses enter.

    Returns:
        The user's input string.
    """
    if default is None:
        return Prompt.ask(message)
    return Prompt.ask(message, default=default)


def get_status_color(status: str) -> str:
    """Get the Rich color name for a status string.

    Args:
        status: The status string (e.g., 'ACTIVE', 'BUILD').

    Returns:
        Rich color name ('green', 'red', 'yellow', or 'white').
    """
    status_lower = status.lower()
    if status_lower in ["active", "online", "enabled"]:
        return "green"
    elif status_lower in ["error", "deleted", "offline", "suspended"]:
        return "red"
    elif status_lower in _PENDING:
        return "yellow"
    else:
        return "white"
