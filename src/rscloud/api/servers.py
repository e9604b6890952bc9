"""Cloud Servers (compute) operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..models.request import ResourceCategory
from ..models.server import Flavor, Image, Server
from .status import expect_model, expect_models, expect_success

if TYPE_CHECKING:
    from .client import CloudClient

REBOOT_TYPES = ("SOFT", "HARD")


class ServersAPI:
    """Server lifecycle calls, dispatched through a CloudClient."""

    category = ResourceCategory.SERVER

    def __init__(self, client: CloudClient) -> None:
        self.client = client

    async def list(self, detail: bool = True) -> list[Server]:
        """List servers.

        Args:
            detail: Return full details instead of only ids and names

        Returns:
            List of servers
        """
        path = "/servers/detail" if detail else "/servers"
        response = await self.client.get(path, self.category)
        return expect_models(response, "list servers", "servers", Server)

    async def get(self, server_id: int) -> Server:
        """Get details of a server."""
        response = await self.client.get(f"/servers/{server_id}", self.category)
        return expect_model(response, f"get server {server_id}", "server", Server)

    async def create(
        self,
        name: str,
        image_id: int,
        flavor_id: int,
        metadata: dict[str, str] | None = None,
    ) -> Server:
        """Create a server.

        The returned server carries the generated admin password.

        Args:
            name: Server name
            image_id: Image to build from
            flavor_id: Server size
            metadata: Optional key/value metadata

        Returns:
            The server being built
        """
        server: dict[str, Any] = {"name": name, "imageId": image_id, "flavorId": flavor_id}
        if metadata:
            server["metadata"] = metadata
        response = await self.client.post("/servers", {"server": server}, self.category)
        return expect_model(response, f"create server {name}", "server", Server)

    async def update(
        self, server_id: int, name: str | None = None, admin_pass: str | None = None
    ) -> None:
        """Rename a server and/or change its admin password.

        Raises:
            ValueError: If nothing to change was given
        """
        server: dict[str, str] = {}
        if name:
            server["name"] = name
        if admin_pass:
            server["adminPass"] = admin_pass
        if not server:
            raise ValueError("Nothing to update: give a name or an admin password")
        response = await self.client.put(f"/servers/{server_id}", {"server": server}, self.category)
        expect_success(response, f"update server {server_id}")

    async def delete(self, server_id: int) -> None:
        """Delete a server."""
        response = await self.client.delete(f"/servers/{server_id}", self.category)
        expect_success(response, f"delete server {server_id}")

    async def _action(self, server_id: int, action: dict[str, Any], label: str) -> None:
        response = await self.client.post(f"/servers/{server_id}/action", action, self.category)
        expect_success(response, f"{label} server {server_id}")

    async def reboot(self, server_id: int, hard: bool = False) -> None:
        """Reboot a server, soft by default."""
        reboot_type = REBOOT_TYPES[1] if hard else REBOOT_TYPES[0]
        await self._action(server_id, {"reboot": {"type": reboot_type}}, "reboot")

    async def rebuild(self, server_id: int, image_id: int) -> None:
        """Rebuild a server from an image."""
        await self._action(server_id, {"rebuild": {"imageId": image_id}}, "rebuild")

    async def resize(self, server_id: int, flavor_id: int) -> None:
        """Resize a server to another flavor."""
        await self._action(server_id, {"resize": {"flavorId": flavor_id}}, "resize")

    async def confirm_resize(self, server_id: int) -> None:
        """Confirm a pending resize."""
        await self._action(server_id, {"confirmResize": None}, "confirm resize of")

    async def revert_resize(self, server_id: int) -> None:
        """Revert a pending resize."""
        await self._action(server_id, {"revertResize": None}, "revert resize of")

    async def list_flavors(self) -> list[Flavor]:
        """List available server sizes."""
        response = await self.client.get("/flavors/detail", self.category)
        return expect_models(response, "list flavors", "flavors", Flavor)

    async def list_images(self) -> list[Image]:
        """List available images."""
        response = await self.client.get("/images/detail", self.category)
        return expect_models(response, "list images", "images", Image)
