"""Unit tests for the load balancers sub-client."""

import json

import pytest

from rscloud.api.exceptions import ParseError
from rscloud.models.balancer import Node

LB_DOC = {
    "id": 71,
    "name": "web",
    "protocol": "HTTP",
    "port": 80,
    "algorithm": "RANDOM",
    "status": "ACTIVE",
    "virtualIps": [{"id": 403, "address": "206.55.130.1", "type": "PUBLIC", "ipVersion": "IPV4"}],
    "nodes": [{"id": 410, "address": "10.1.1.1", "port": 80, "condition": "ENABLED", "status": "ONLINE"}],
}
LB_PATH = "/v1.0/998877/loadbalancers"


@pytest.mark.asyncio
async def test_list_balancers(fake_api, make_client) -> None:
    fake_api.queue(200, json={"loadBalancers": [LB_DOC]})

    async with make_client() as client:
        balancers = await client.balancers.list()

    assert balancers[0].virtual_ips[0].address == "206.55.130.1"
    request = fake_api.api_requests[0]
    assert request.url.host == "ord.loadbalancers.api.rackspacecloud.com"
    assert request.url.path == LB_PATH


@pytest.mark.asyncio
async def test_get_balancer(fake_api, make_client) -> None:
    fake_api.queue(200, json={"loadBalancer": LB_DOC})

    async with make_client(balancer_region="DFW") as client:
        lb = await client.balancers.get(71)

    assert lb.nodes[0].status == "ONLINE"
    request = fake_api.api_requests[0]
    assert request.url.host == "dfw.loadbalancers.api.rackspacecloud.com"
    assert request.url.path == f"{LB_PATH}/71"


@pytest.mark.asyncio
async def test_get_balancer_unexpected_document(fake_api, make_client) -> None:
    """A missing loadBalancer object surfaces as a ParseError."""
    fake_api.queue(200, json={"loadBalancers": [LB_DOC]})

    async with make_client() as client:
        with pytest.raises(ParseError, match="get load balancer 71"):
            await client.balancers.get(71)


@pytest.mark.asyncio
async def test_list_nodes_unexpected_document(fake_api, make_client) -> None:
    fake_api.queue(200, json={"nodes": [{"address": "10.1.1.1", "port": "http"}]})

    async with make_client() as client:
        with pytest.raises(ParseError, match="list nodes"):
            await client.balancers.list_nodes(71)

@pytest.mark.asyncio
async def test_create_balancer(fake_api, make_client) -> None:
    fake_api.queue(202, json={"loadBalancer": {**LB_DOC, "status": "BUILD"}})
    nodes = [Node(address="10.1.1.1", port=80), Node(address="10.1.1.2", port=80, weight=2)]

    async with make_client() as client:
        lb = await client.balancers.create("web", 80, "HTTP", nodes, algorithm="RANDOM")

    assert lb.status == "BUILD"
    request = fake_api.api_requests[0]
    assert request.method == "POST"
    assert json.loads(request.content) == {
        "loadBalancer": {
            "name": "web",
            "port": 80,
            "protocol": "HTTP",
            "virtualIps": [{"type": "PUBLIC"}],
            "nodes": [
                {"address": "10.1.1.1", "port": 80, "condition": "ENABLED"},
                {"address": "10.1.1.2", "port": 80, "condition": "ENABLED", "weight": 2},
            ],
            "algorithm": "RANDOM",
        }
    }


@pytest.mark.asyncio
async def test_create_balancer_needs_nodes(make_client) -> None:
    async with make_client() as client:
        with pytest.raises(ValueError, match="at least one node"):
            await client.balancers.create("web", 80, "HTTP", [])


@pytest.mark.asyncio
async def test_update_balancer(fake_api, make_client) -> None:
    fake_api.queue(202)

    async with make_client() as client:
        await client.balancers.update(71, name="web2", port=8080)

    request = fake_api.api_requests[0]
    assert request.method == "PUT"
    assert request.url.path == f"{LB_PATH}/71"
    assert json.loads(request.content) == {"loadBalancer": {"name": "web2", "port": 8080}}


@pytest.mark.asyncio
async def test_update_balancer_needs_changes(make_client) -> None:
    async with make_client() as client:
        with pytest.raises(ValueError):
            await client.balancers.update(71)


@pytest.mark.asyncio
async def test_delete_balancer(fake_api, make_client) -> None:
    fake_api.queue(202)

    async with make_client() as client:
        await client.balancers.delete(71)

    request = fake_api.api_requests[0]
    assert request.method == "DELETE"
    assert request.url.path == f"{LB_PATH}/71"


@pytest.mark.asyncio
async def test_node_management(fake_api, make_client) -> None:
    fake_api.queue(200, json={"nodes": LB_DOC["nodes"]})
    fake_api.queue(202, json={"nodes": [{"id": 411, "address": "10.1.1.3", "port": 80, "condition": "DRAINING"}]})
    fake_api.queue(202)

    async with make_client() as client:
        nodes = await client.balancers.list_nodes(71)
        added = await client.balancers.add_nodes(71, [Node(address="10.1.1.3", port=80, condition="DRAINING")])
        await client.balancers.remove_node(71, 410)

    assert nodes[0].id == 410
    assert added[0].id == 411
    list_req, add_req, remove_req = fake_api.api_requests
    assert list_req.url.path == f"{LB_PATH}/71/nodes"
    assert json.loads(add_req.content) == {
        "nodes": [{"address": "10.1.1.3", "port": 80, "condition": "DRAINING"}]
    }
    assert remove_req.method == "DELETE"
    assert remove_req.url.path == f"{LB_PATH}/71/nodes/410"
