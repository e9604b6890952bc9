"""Main CLI application."""

import typer
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..api.exceptions import CloudError
from ..utils import print_error, print_info
from ..utils.helpers import async_to_sync
from . import config, lb, server
from ._shared import open_client, setup_logging

console = Console()

app = typer.Typer(
    name="rscloud",
    help="CLI for Rackspace Cloud Servers and Load Balancers",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(config.app, name="config")
app.add_typer(server.app, name="server")
app.add_typer(lb.app, name="lb")


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: Whether version flag was set
    """
    if value:
        console.print(f"rscloud version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Log every API request and response"),
) -> None:
    """rscloud - manage cloud servers and load balancers from the command line.

    Get started:
        rscloud config add     # Set up your first profile
        rscloud limits         # Show account API limits
        rscloud server list    # List cloud servers
    """
    setup_logging(debug)


@app.command("limits")
@async_to_sync
async def show_limits(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
    raw: bool = typer.Option(False, "--json", is_flag=True, help="Print the raw JSON document"),
) -> None:
    """Show the current API rate and absolute limits."""
    try:
        async with open_client(profile) as client:
            if raw:
                body = await client.get_limits()
                if body is None:
                    print_error("Limits are not available")
                    raise typer.Exit(1)
                console.print_json(body)
                return

            limits = await client.get_limits_model()
            if limits is None:
                print_error("Limits are not available")
                raise typer.Exit(1)

            table = Table(title="Rate Limits", show_header=True, header_style="bold cyan")
            table.add_column("Verb", style="cyan")
            table.add_column("URI")
            table.add_column("Remaining", justify="right")
            table.add_column("Limit", justify="right")
            for rate in limits.rate:
                table.add_row(rate.verb, rate.uri, str(rate.remaining), f"{rate.value}/{rate.unit}")
            console.print(table)

            if limits.absolute:
                absolute = Table(title="Absolute Limits", show_header=True, header_style="bold cyan")
                absolute.add_column("Name", style="cyan")
                absolute.add_column("Value", justify="right")
                for key, value in limits.absolute.items():
                    absolute.add_row(key, str(value))
                console.print(absolute)
            else:
                print_info("No absolute limits reported")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
