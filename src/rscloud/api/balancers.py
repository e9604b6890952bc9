"""Cloud Load Balancers operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..models.balancer import LoadBalancer, Node
from ..models.request import ResourceCategory
from .status import expect_model, expect_models, expect_success

if TYPE_CHECKING:
    from .client import CloudClient


class LoadBalancersAPI:
    """Load balancer calls, dispatched through a CloudClient."""

    category = ResourceCategory.BALANCER

    def __init__(self, client: CloudClient) -> None:
        self.client = client

    async def list(self) -> list[LoadBalancer]:
        """List load balancers of the account."""
        response = await self.client.get("/loadbalancers", self.category)
        return expect_models(response, "list load balancers", "loadBalancers", LoadBalancer)

    async def get(self, lb_id: int) -> LoadBalancer:
        """Get details of a load balancer."""
        response = await self.client.get(f"/loadbalancers/{lb_id}", self.category)
        return expect_model(response, f"get load balancer {lb_id}", "loadBalancer", LoadBalancer)

    async def create(
        self,
        name: str,
        port: int,
        protocol: str,
        nodes: list[Node],
        virtual_ip_type: str = "PUBLIC",
        algorithm: str | None = None,
    ) -> LoadBalancer:
        """Create a load balancer.

        Args:
            name: Load balancer name
            port: Listening port
            protocol: Protocol name (HTTP, HTTPS, TCP, ...)
            nodes: Back-end nodes, at least one
            virtual_ip_type: PUBLIC or SERVICENET
            algorithm: Optional balancing algorithm

        Returns:
            The load balancer being built

        Raises:
            ValueError: If no nodes were given
        """
        if not nodes:
            raise ValueError("A load balancer needs at least one node")
        body: dict[str, Any] = {
            "name": name,
            "port": port,
            "protocol": protocol,
            "virtualIps": [{"type": virtual_ip_type}],
            "nodes": [_node_payload(n) for n in nodes],
        }
        if algorithm:
            body["algorithm"] = algorithm
        response = await self.client.post("/loadbalancers", {"loadBalancer": body}, self.category)
        return expect_model(response, f"create load balancer {name}", "loadBalancer", LoadBalancer)

    async def update(
        self,
        lb_id: int,
        name: str | None = None,
        algorithm: str | None = None,
        protocol: str | None = None,
        port: int | None = None,
    ) -> None:
        """Update load balancer attributes.

        Raises:
            ValueError: If nothing to change was given
        """
        changes = {
            k: v
            for k, v in {
                "name": name,
                "algorithm": algorithm,
                "protocol": protocol,
                "port": port,
            }.items()
            if v is not None
        }
        if not changes:
            raise ValueError("Nothing to update")
        response = await self.client.put(
            f"/loadbalancers/{lb_id}", {"loadBalancer": changes}, self.category
        )
        expect_success(response, f"update load balancer {lb_id}")

    async def delete(self, lb_id: int) -> None:
        """Delete a load balancer."""
        response = await self.client.delete(f"/loadbalancers/{lb_id}", self.category)
        expect_success(response, f"delete load balancer {lb_id}")

    async def list_nodes(self, lb_id: int) -> list[Node]:
        """List back-end nodes of a load balancer."""
        response = await self.client.get(f"/loadbalancers/{lb_id}/nodes", self.category)
        return expect_models(response, f"list nodes of load balancer {lb_id}", "nodes", Node)

    async def add_nodes(self, lb_id: int, nodes: list[Node]) -> list[Node]:
        """Add back-end nodes to a load balancer.

        Returns:
            The created nodes
        """
        payload = {"nodes": [_node_payload(n) for n in nodes]}
        response = await self.client.post(f"/loadbalancers/{lb_id}/nodes", payload, self.category)
        return expect_models(response, f"add nodes to load balancer {lb_id}", "nodes", Node)

    async def remove_node(self, lb_id: int, node_id: int) -> None:
        """Remove a back-end node from a load balancer."""
        response = await self.client.delete(
            f"/loadbalancers/{lb_id}/nodes/{node_id}", self.category
        )
        expect_success(response, f"remove node {node_id} from load balancer {lb_id}")


def _node_payload(node: Node) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "address": node.address,
        "port": node.port,
        "condition": node.condition,
    }
    if node.weight is not None:
        payload["weight"] = node.weight
    return payload
