"""Cloud server management commands."""

import typer
from rich.panel import Panel
from rich.table import Table

from ..api.client import CloudClient
from ..api.exceptions import CloudError
from ..utils import (
    confirm,
    console,
    get_status_color,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    print_warning,
    select_menu,
)
from ..utils.helpers import async_to_sync, ordered_group
from ._shared import open_client

_CMD_ORDER = [
    "create", "rename", "delete",
    "reboot", "rebuild", "resize", "confirm-resize", "revert-resize",
    "list", "show", "flavors", "images",
]

app = typer.Typer(help="Manage cloud servers", no_args_is_help=True, cls=ordered_group(_CMD_ORDER))


async def _select_server(client: CloudClient) -> int | None:
    """Interactive server selection menu. Returns server id or None if cancelled."""
    servers = await client.servers.list()
    if not servers:
        print_info("No servers found")
        return None
    servers = sorted(servers, key=lambda s: s.id)
    items = [f"{s.id} - {s.name} ({s.status or 'unknown'})" for s in servers]
    idx = select_menu(items, "  Select a server:")
    if idx is None:
        return None
    return servers[idx].id


async def _resolve_server(client: CloudClient, server_id: int | None) -> int:
    if server_id is not None:
        return server_id
    selected = await _select_server(client)
    if selected is None:
        print_cancelled()
        raise typer.Exit()
    return selected


@app.command("list")
@async_to_sync
async def list_servers(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
    status: str = typer.Option(None, "--status", "-s", help="Filter by status (ACTIVE, BUILD, ...)"),
) -> None:
    """List all servers."""
    try:
        async with open_client(profile) as client:
            servers = await client.servers.list()

            if status:
                servers = [s for s in servers if (s.status or "").lower() == status.lower()]

            if not servers:
                print_info("No servers found")
                return

            table = Table(title="Cloud Servers", show_header=True, header_style="bold cyan")
            table.add_column("ID", style="cyan", justify="right")
            table.add_column("Name")
            table.add_column("Status")
            table.add_column("Flavor", justify="right")
            table.add_column("Image", justify="right")
            table.add_column("Public IP")

            for server in sorted(servers, key=lambda s: s.id):
                server_status = server.status or "unknown"
                color = get_status_color(server_status)
                table.add_row(
                    str(server.id),
                    server.name,
                    f"[{color}]{server_status}[/{color}]",
                    str(server.flavor_id or "-"),
                    str(server.image_id or "-"),
                    ", ".join(server.public_ips) or "-",
                )

            console.print(table)

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("show")
@async_to_sync
async def show_server(
    server_id: int = typer.Argument(None, help="Server ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Show detailed information about a server."""
    try:
        async with open_client(profile) as client:
            server_id = await _resolve_server(client, server_id)
            server = await client.servers.get(server_id)

            server_status = server.status or "unknown"
            color = get_status_color(server_status)
            lines = []
            lines.append("[bold]── General ──[/bold]")
            lines.append(f"[bold]Status:[/bold]      [{color}]{server_status}[/{color}]")
            if server.progress is not None and server.progress < 100:
                lines.append(f"[bold]Progress:[/bold]    {server.progress}%")
            lines.append(f"[bold]Flavor:[/bold]      {server.flavor_id or '-'}")
            lines.append(f"[bold]Image:[/bold]       {server.image_id or '-'}")
            lines.append(f"[bold]Host:[/bold]        {server.host_id or '-'}")

            lines.append("")
            lines.append("[bold]── Network ──[/bold]")
            lines.append(f"[bold]Public:[/bold]      {', '.join(server.public_ips) or '-'}")
            lines.append(f"[bold]Private:[/bold]     {', '.join(server.private_ips) or '-'}")

            if server.metadata:
                lines.append("")
                lines.append("[bold]── Metadata ──[/bold]")
                for key, value in server.metadata.items():
                    lines.append(f"[bold]{key}:[/bold] {value}")

            console.print(Panel("\n".join(lines), title=f"{server.name} ({server.id})", border_style="blue"))

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("create")
@async_to_sync
async def create_server(
    name: str = typer.Argument(..., help="Server name"),
    image: int = typer.Option(..., "--image", "-i", help="Image ID"),
    flavor: int = typer.Option(..., "--flavor", "-f", help="Flavor ID"),
    meta: list[str] = typer.Option(None, "--meta", "-m", help="Metadata key=value (repeatable)"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Create a new server."""
    metadata: dict[str, str] = {}
    for item in meta or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            print_error(f"Invalid metadata '{item}', expected key=value")
            raise typer.Exit(1)
        metadata[key] = value

    try:
        async with open_client(profile) as client:
            server = await client.servers.create(name, image, flavor, metadata or None)
            print_success(f"Server '{server.name}' ({server.id}) is being built")
            if server.admin_pass:
                print_warning(f"Admin password (shown once): {server.admin_pass}")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("rename")
@async_to_sync
async def rename_server(
    server_id: int = typer.Argument(..., help="Server ID"),
    name: str = typer.Argument(..., help="New name"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Rename a server."""
    try:
        async with open_client(profile) as client:
            await client.servers.update(server_id, name=name)
            print_success(f"Server {server_id} renamed to '{name}'")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("delete")
@async_to_sync
async def delete_server(
    server_id: int = typer.Argument(None, help="Server ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
    yes: bool = typer.Option(False, "--yes", "-y", is_flag=True, help="Skip confirmation"),
) -> None:
    """Delete a server."""
    try:
        async with open_client(profile) as client:
            server_id = await _resolve_server(client, server_id)
            if not yes and not confirm(f"Delete server {server_id}?", default=False):
                print_cancelled()
                return
            await client.servers.delete(server_id)
            print_success(f"Server {server_id} deleted")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("reboot")
@async_to_sync
async def reboot_server(
    server_id: int = typer.Argument(None, help="Server ID"),
    hard: bool = typer.Option(False, "--hard", is_flag=True, help="Hard reboot"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Reboot a server."""
    try:
        async with open_client(profile) as client:
            server_id = await _resolve_server(client, server_id)
            await client.servers.reboot(server_id, hard=hard)
            print_success(f"Server {server_id} {'hard' if hard else 'soft'} reboot requested")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("rebuild")
@async_to_sync
async def rebuild_server(
    server_id: int = typer.Argument(..., help="Server ID"),
    image: int = typer.Option(..., "--image", "-i", help="Image ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
    yes: bool = typer.Option(False, "--yes", "-y", is_flag=True, help="Skip confirmation"),
) -> None:
    """Rebuild a server from an image."""
    try:
        if not yes and not confirm(f"Rebuild server {server_id}? All data will be lost", default=False):
            print_cancelled()
            return
        async with open_client(profile) as client:
            await client.servers.rebuild(server_id, image)
            print_success(f"Server {server_id} is being rebuilt from image {image}")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("resize")
@async_to_sync
async def resize_server(
    server_id: int = typer.Argument(..., help="Server ID"),
    flavor: int = typer.Option(..., "--flavor", "-f", help="Flavor ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Resize a server. Confirm or revert once it reaches VERIFY_RESIZE."""
    try:
        async with open_client(profile) as client:
            await client.servers.resize(server_id, flavor)
            print_success(f"Server {server_id} resize to flavor {flavor} requested")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("confirm-resize")
@async_to_sync
async def confirm_resize(
    server_id: int = typer.Argument(..., help="Server ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Confirm a pending resize."""
    try:
        async with open_client(profile) as client:
            await client.servers.confirm_resize(server_id)
            print_success(f"Resize of server {server_id} confirmed")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("revert-resize")
@async_to_sync
async def revert_resize(
    server_id: int = typer.Argument(..., help="Server ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Revert a pending resize."""
    try:
        async with open_client(profile) as client:
            await client.servers.revert_resize(server_id)
            print_success(f"Resize of server {server_id} reverted")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("flavors")
@async_to_sync
async def list_flavors(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """List available server sizes."""
    try:
        async with open_client(profile) as client:
            flavors = await client.servers.list_flavors()
            if not flavors:
                print_info("No flavors found")
                return

            table = Table(title="Flavors", show_header=True, header_style="bold cyan")
            table.add_column("ID", style="cyan", justify="right")
            table.add_column("Name")
            table.add_column("RAM", justify="right")
            table.add_column("Disk", justify="right")
            for flavor in sorted(flavors, key=lambda f: f.id):
                table.add_row(
                    str(flavor.id),
                    flavor.name,
                    f"{flavor.ram} MB" if flavor.ram is not None else "-",
                    f"{flavor.disk} GB" if flavor.disk is not None else "-",
                )
            console.print(table)

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("images")
@async_to_sync
async def list_images(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """List available images."""
    try:
        async with open_client(profile) as client:
            images = await client.servers.list_images()
            if not images:
                print_info("No images found")
                return

            table = Table(title="Images", show_header=True, header_style="bold cyan")
            table.add_column("ID", style="cyan", justify="right")
            table.add_column("Name")
            table.add_column("Status")
            for image in sorted(images, key=lambda i: i.id):
                table.add_row(str(image.id), image.name, image.status or "-")
            console.print(table)

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)
