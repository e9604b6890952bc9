"""Configuration management commands for rscloud."""

from getpass import getpass

import typer
from rich.panel import Panel
from rich.table import Table

from ..api.exceptions import CloudError
from ..config import BalancerRegion, ConfigManager, ProfileConfig, Region
from ..utils import (
    confirm,
    console,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    prompt,
)
from ..utils.helpers import async_to_sync
from ..utils.menu import multi_select_menu, select_menu
from ._shared import open_client

app = typer.Typer(help="Manage rscloud configuration", no_args_is_help=True)


# ── Shared helpers ───────────────────────────────────────────────────────


def _pick_profile(config_manager: ConfigManager) -> str | None:
    """Interactive single-select for a profile. Returns profile name or None."""
    try:
        config = config_manager.get()
    except CloudError:
        print_info("No configuration found. Run 'rscloud config add' first.")
        return None

    if not config.profiles:
        print_info("No profiles configured. Run 'rscloud config add' to create one.")
        return None

    names = sorted(config.profiles.keys())
    idx = select_menu(names, "  Select profile:")
    if idx is None:
        print_cancelled()
        return None
    return names[idx]


def _check_profile_exists(config_manager: ConfigManager, name: str) -> None:
    """Raise typer.Exit if profile already exists."""
    if config_manager.exists():
        try:
            config = config_manager.get()
            if name in config.profiles:
                print_error(f"Profile '{name}' already exists. Remove it first to replace it.")
                raise typer.Exit(1)
        except CloudError:
            pass


def _pick_enum(label: str, choices: list[str]) -> str:
    idx = select_menu(choices, f"  {label}:")
    if idx is None:
        print_cancelled()
        raise typer.Exit()
    return choices[idx]


def _render_profile_panel(name: str, profile: ProfileConfig, is_default: bool = False) -> Panel:
    """Build a Rich Panel for a profile."""
    lines = []
    lines.append("[bold]── Account ──[/bold]")
    lines.append(f"[bold]User:[/bold]          {profile.user}")
    lines.append(f"[bold]API key:[/bold]       {'*' * 8}")
    lines.append(f"[bold]Region:[/bold]        {profile.region.value}")
    lines.append(f"[bold]LB region:[/bold]     {profile.balancer_region.value}")

    lines.append("")
    lines.append("[bold]── Connection ──[/bold]")
    lines.append(f"[bold]Gzip:[/bold]          {'Yes' if profile.accept_gzip else 'No'}")
    lines.append(f"[bold]SSL:[/bold]           {'Yes' if profile.verify_ssl else 'No'}")
    lines.append(f"[bold]Timeout:[/bold]       {profile.timeout}s")
    lines.append(f"[bold]Debug:[/bold]         {'Yes' if profile.debug else 'No'}")

    if is_default:
        lines.append("")
        lines.append("[green]Default profile[/green]")

    return Panel("\n".join(lines), title=f"Profile: {name}", border_style="blue")


# ── config add ───────────────────────────────────────────────────────────


@app.command("add")
def add_profile(
    name: str = typer.Argument(None, help="Profile name"),
    user: str = typer.Option(None, "--user", "-u", help="API user name"),
    api_key: str = typer.Option(None, "--api-key", "-k", help="API key"),
    region: Region = typer.Option(None, "--region", "-r", help="Authentication region"),
    balancer_region: BalancerRegion = typer.Option(
        None, "--lb-region", "-l", help="Load balancer datacenter"
    ),
    no_gzip: bool = typer.Option(False, "--no-gzip", is_flag=True, help="Do not ask for gzip responses"),
    timeout: int = typer.Option(30, "--timeout", "-t", help="Request timeout in seconds"),
    yes: bool = typer.Option(False, "--yes", "-y", is_flag=True, help="Save without confirmation"),
) -> None:
    """Add a new profile."""
    config_manager = ConfigManager()

    try:
        if name is None:
            name = prompt("Profile name", default="default")
        _check_profile_exists(config_manager, name)

        if user is None:
            while not (val := prompt("API user name")):
                print_error("User name is required")
            user = val
        if api_key is None:
            while not (val := getpass("API key: ")):
                print_error("API key is required")
            api_key = val
        if region is None:
            region = Region(_pick_enum("Authentication region", [r.value for r in Region]))
        if balancer_region is None:
            balancer_region = BalancerRegion(
                _pick_enum("Load balancer datacenter", [r.value for r in BalancerRegion])
            )

        profile = ProfileConfig(
            user=user,
            api_key=api_key,
            region=region,
            balancer_region=balancer_region,
            accept_gzip=not no_gzip,
            timeout=timeout,
        )

        console.print()
        console.print(_render_profile_panel(name, profile))

        if not yes and not confirm("\nSave this profile?", default=True):
            print_cancelled()
            raise typer.Exit()

        is_first = not config_manager.exists() or not config_manager.get().profiles
        config_manager.add_profile(name, profile)

        if is_first:
            print_success(f"Profile '{name}' added (set as default)")
        else:
            print_success(f"Profile '{name}' added")

    except KeyboardInterrupt:
        console.print()
        print_cancelled()
    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config remove ────────────────────────────────────────────────────────


@app.command("remove")
def remove_profile(
    name: str = typer.Argument(None, help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", is_flag=True, help="Skip confirmation"),
) -> None:
    """Remove one or more profiles."""
    config_manager = ConfigManager()

    try:
        if not name:
            config = config_manager.get()
            if not config.profiles:
                print_info("No profiles configured. Run 'rscloud config add' to create one.")
                return

            names = sorted(config.profiles.keys())
            sel = multi_select_menu(names, "  Profiles to remove (Space to toggle, Enter to confirm):")
            if not sel:
                print_cancelled()
                return
            selected = [names[i] for i in sel]
        else:
            selected = [name]

        label = ", ".join(f"'{n}'" for n in selected)
        if not yes and not confirm(f"Remove profile(s) {label}?", default=False):
            print_cancelled()
            return

        for n in selected:
            config_manager.remove_profile(n)

        if len(selected) == 1:
            print_success(f"Profile '{selected[0]}' removed")
        else:
            print_success(f"{len(selected)} profiles removed: {', '.join(selected)}")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config default ───────────────────────────────────────────────────────


@app.command("default")
def set_default(
    name: str = typer.Argument(None, help="Profile name"),
) -> None:
    """Set the default profile."""
    config_manager = ConfigManager()

    try:
        if not name:
            name = _pick_profile(config_manager)
            if name is None:
                return

        config_manager.set_default_profile(name)
        print_success(f"Default profile set to '{name}'")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config list ──────────────────────────────────────────────────────────


@app.command("list")
def list_profiles() -> None:
    """List all profiles."""
    config_manager = ConfigManager()

    try:
        config = config_manager.get()
        if not config.profiles:
            print_info("No profiles configured. Run 'rscloud config add' to create one.")
            return

        table = Table(title="Configured Profiles", show_header=True, header_style="bold cyan")
        table.add_column("Profile", style="cyan")
        table.add_column("User")
        table.add_column("Region")
        table.add_column("LB Region")
        table.add_column("Default", style="green")

        for profile_name, profile in config.profiles.items():
            is_default = "✓" if profile_name == config.default_profile else ""
            table.add_row(
                profile_name,
                profile.user,
                profile.region.value,
                profile.balancer_region.value,
                is_default,
            )

        console.print(table)

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config show ──────────────────────────────────────────────────────────


@app.command("show")
def show_profile(
    name: str = typer.Argument(None, help="Profile name"),
) -> None:
    """Show profile details."""
    config_manager = ConfigManager()

    try:
        config = config_manager.get()
        if not name:
            name = _pick_profile(config_manager)
            if name is None:
                return

        profile = config_manager.get_profile(name)
        console.print(_render_profile_panel(name, profile, name == config.default_profile))

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


# ── config test ──────────────────────────────────────────────────────────


@app.command("test")
@async_to_sync
async def test_profile(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to test"),
) -> None:
    """Authenticate with a profile and show the discovered endpoints."""
    try:
        async with open_client(profile) as client:
            print_info(f"Authenticating against {client.auth_handler.auth_url}...")
            await client.authenticate()
            print_success("Authentication successful")
            print_info(f"Account:       {client.account_id or '-'}")
            print_info(f"Servers API:   {client.session.server_url or '-'}")
            print_info(f"Storage API:   {client.session.storage_url or '-'}")
            print_info(f"CDN API:       {client.session.cdn_url or '-'}")
            print_info(f"Balancer API:  {client.balancer_url}")

    except CloudError as e:
        print_error(f"Authentication failed: {e}")
        raise typer.Exit(1)
