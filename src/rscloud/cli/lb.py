"""Load balancer management commands."""

import typer
from rich.panel import Panel
from rich.table import Table

from ..api.client import CloudClient
from ..api.exceptions import CloudError
from ..models.balancer import Node
from ..utils import (
    confirm,
    console,
    get_status_color,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    select_menu,
)
from ..utils.helpers import async_to_sync, ordered_group
from ._shared import open_client, parse_node

_CMD_ORDER = ["create", "update", "delete", "add-node", "remove-node", "list", "show", "nodes"]

app = typer.Typer(help="Manage load balancers", no_args_is_help=True, cls=ordered_group(_CMD_ORDER))


async def _resolve_balancer(client: CloudClient, lb_id: int | None) -> int:
    """Return lb_id, or let the user pick one."""
    if lb_id is not None:
        return lb_id
    balancers = await client.balancers.list()
    if not balancers:
        print_info("No load balancers found")
        raise typer.Exit()
    balancers = sorted(balancers, key=lambda lb: lb.id)
    items = [f"{lb.id} - {lb.name} ({lb.status or 'unknown'})" for lb in balancers]
    idx = select_menu(items, "  Select a load balancer:")
    if idx is None:
        print_cancelled()
        raise typer.Exit()
    return balancers[idx].id


@app.command("list")
@async_to_sync
async def list_balancers(
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """List all load balancers."""
    try:
        async with open_client(profile) as client:
            balancers = await client.balancers.list()
            if not balancers:
                print_info("No load balancers found")
                return

            table = Table(title="Load Balancers", show_header=True, header_style="bold cyan")
            table.add_column("ID", style="cyan", justify="right")
            table.add_column("Name")
            table.add_column("Status")
            table.add_column("Protocol")
            table.add_column("Port", justify="right")
            table.add_column("Algorithm")
            table.add_column("Virtual IPs")

            for lb in sorted(balancers, key=lambda b: b.id):
                lb_status = lb.status or "unknown"
                color = get_status_color(lb_status)
                table.add_row(
                    str(lb.id),
                    lb.name,
                    f"[{color}]{lb_status}[/{color}]",
                    lb.protocol or "-",
                    str(lb.port or "-"),
                    lb.algorithm or "-",
                    ", ".join(v.address for v in lb.virtual_ips if v.address) or "-",
                )

            console.print(table)

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("show")
@async_to_sync
async def show_balancer(
    lb_id: int = typer.Argument(None, help="Load balancer ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Show detailed information about a load balancer."""
    try:
        async with open_client(profile) as client:
            lb_id = await _resolve_balancer(client, lb_id)
            lb = await client.balancers.get(lb_id)

            lb_status = lb.status or "unknown"
            color = get_status_color(lb_status)
            lines = []
            lines.append(f"[bold]Status:[/bold]      [{color}]{lb_status}[/{color}]")
            lines.append(f"[bold]Protocol:[/bold]    {lb.protocol or '-'}:{lb.port or '-'}")
            lines.append(f"[bold]Algorithm:[/bold]   {lb.algorithm or '-'}")
            lines.append("")
            lines.append("[bold]── Virtual IPs ──[/bold]")
            for vip in lb.virtual_ips:
                lines.append(f"{vip.address or '-'} ({vip.type}, {vip.ip_version or '-'})")
            lines.append("")
            lines.append("[bold]── Nodes ──[/bold]")
            for node in lb.nodes:
                lines.append(f"{node.id or '-'}  {node.address}:{node.port}  {node.condition}  {node.status or ''}")

            console.print(Panel("\n".join(lines), title=f"{lb.name} ({lb.id})", border_style="blue"))

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("create")
@async_to_sync
async def create_balancer(
    name: str = typer.Argument(..., help="Load balancer name"),
    port: int = typer.Option(80, "--port", help="Listening port"),
    protocol: str = typer.Option("HTTP", "--protocol", help="Protocol"),
    nodes: list[str] = typer.Option(..., "--node", "-n", help="Back-end node address:port (repeatable)"),
    vip_type: str = typer.Option("PUBLIC", "--vip-type", help="PUBLIC or SERVICENET"),
    algorithm: str = typer.Option(None, "--algorithm", "-a", help="Balancing algorithm"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Create a load balancer."""
    node_list = [Node(address=a, port=p) for a, p in (parse_node(n) for n in nodes)]

    try:
        async with open_client(profile) as client:
            lb = await client.balancers.create(
                name, port, protocol.upper(), node_list, vip_type.upper(), algorithm
            )
            print_success(f"Load balancer '{lb.name}' ({lb.id}) is being built")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("update")
@async_to_sync
async def update_balancer(
    lb_id: int = typer.Argument(..., help="Load balancer ID"),
    name: str = typer.Option(None, "--name", help="New name"),
    algorithm: str = typer.Option(None, "--algorithm", "-a", help="Balancing algorithm"),
    protocol: str = typer.Option(None, "--protocol", help="Protocol"),
    port: int = typer.Option(None, "--port", help="Listening port"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Update load balancer attributes."""
    if not any(v is not None for v in (name, algorithm, protocol, port)):
        print_error("Nothing to update")
        raise typer.Exit(1)

    try:
        async with open_client(profile) as client:
            await client.balancers.update(lb_id, name, algorithm, protocol, port)
            print_success(f"Load balancer {lb_id} updated")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("delete")
@async_to_sync
async def delete_balancer(
    lb_id: int = typer.Argument(None, help="Load balancer ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
    yes: bool = typer.Option(False, "--yes", "-y", is_flag=True, help="Skip confirmation"),
) -> None:
    """Delete a load balancer."""
    try:
        async with open_client(profile) as client:
            lb_id = await _resolve_balancer(client, lb_id)
            if not yes and not confirm(f"Delete load balancer {lb_id}?", default=False):
                print_cancelled()
                return
            await client.balancers.delete(lb_id)
            print_success(f"Load balancer {lb_id} deleted")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("nodes")
@async_to_sync
async def list_nodes(
    lb_id: int = typer.Argument(None, help="Load balancer ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """List back-end nodes of a load balancer."""
    try:
        async with open_client(profile) as client:
            lb_id = await _resolve_balancer(client, lb_id)
            nodes = await client.balancers.list_nodes(lb_id)
            if not nodes:
                print_info("No nodes found")
                return

            table = Table(title=f"Nodes of {lb_id}", show_header=True, header_style="bold cyan")
            table.add_column("ID", style="cyan", justify="right")
            table.add_column("Address")
            table.add_column("Port", justify="right")
            table.add_column("Condition")
            table.add_column("Status")
            for node in nodes:
                node_status = node.status or "unknown"
                color = get_status_color(node_status)
                table.add_row(
                    str(node.id or "-"),
                    node.address,
                    str(node.port),
                    node.condition,
                    f"[{color}]{node_status}[/{color}]",
                )
            console.print(table)

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("add-node")
@async_to_sync
async def add_node(
    lb_id: int = typer.Argument(..., help="Load balancer ID"),
    nodes: list[str] = typer.Argument(..., help="Node address:port, one or more"),
    condition: str = typer.Option("ENABLED", "--condition", "-c", help="ENABLED, DISABLED or DRAINING"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
) -> None:
    """Add back-end nodes to a load balancer."""
    try:
        node_list = [
            Node(address=a, port=p, condition=condition.upper())
            for a, p in (parse_node(n) for n in nodes)
        ]
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    try:
        async with open_client(profile) as client:
            added = await client.balancers.add_nodes(lb_id, node_list)
            print_success(f"Added {len(added)} node(s) to load balancer {lb_id}")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("remove-node")
@async_to_sync
async def remove_node(
    lb_id: int = typer.Argument(..., help="Load balancer ID"),
    node_id: int = typer.Argument(..., help="Node ID"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to use"),
    yes: bool = typer.Option(False, "--yes", "-y", is_flag=True, help="Skip confirmation"),
) -> None:
    """Remove a back-end node from a load balancer."""
    try:
        if not yes and not confirm(f"Remove node {node_id} from load balancer {lb_id}?", default=False):
            print_cancelled()
            return
        async with open_client(profile) as client:
            await client.balancers.remove_node(lb_id, node_id)
            print_success(f"Node {node_id} removed from load balancer {lb_id}")

    except CloudError as e:
        print_error(str(e))
        raise typer.Exit(1)
