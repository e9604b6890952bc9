"""Unit tests for the servers sub-client."""

import json

import pytest

from rscloud.api.exceptions import APIError, NotFound, ParseError

SERVER_DOC = {"id": 1234, "name": "web", "imageId": 2, "flavorId": 1, "status": "ACTIVE"}


@pytest.mark.asyncio
async def test_list_servers_detail(fake_api, make_client) -> None:
    fake_api.queue(200, json={"servers": [SERVER_DOC, {"id": 5, "name": "db"}]})

    async with make_client() as client:
        servers = await client.servers.list()

    assert [s.name for s in servers] == ["web", "db"]
    assert fake_api.api_requests[0].url.path == "/v1.0/998877/servers/detail"


@pytest.mark.asyncio
async def test_list_servers_brief(fake_api, make_client) -> None:
    fake_api.queue(203, json={"servers": []})

    async with make_client() as client:
        assert await client.servers.list(detail=False) == []

    assert fake_api.api_requests[0].url.path == "/v1.0/998877/servers"


@pytest.mark.asyncio
async def test_get_server(fake_api, make_client) -> None:
    fake_api.queue(200, json={"server": SERVER_DOC})

    async with make_client() as client:
        server = await client.servers.get(1234)

    assert server.id == 1234
    assert server.status == "ACTIVE"


@pytest.mark.asyncio
async def test_get_missing_server(fake_api, make_client) -> None:
    fake_api.queue(404)

    async with make_client() as client:
        with pytest.raises(NotFound):
            await client.servers.get(1)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "document",
    [{"unexpected": 1}, {"server": {"id": "abc"}}, {"server": None}, ["server"]],
)
async def test_get_server_unexpected_document(fake_api, make_client, document) -> None:
    """A 2xx body that does not describe a server is a ParseError."""
    fake_api.queue(200, json=document)

    async with make_client() as client:
        with pytest.raises(ParseError, match="get server 1"):
            await client.servers.get(1)


@pytest.mark.asyncio
async def test_get_server_empty_body(fake_api, make_client) -> None:
    fake_api.queue(200)

    async with make_client() as client:
        with pytest.raises(ParseError):
            await client.servers.get(1)


@pytest.mark.asyncio
async def test_list_servers_unexpected_document(fake_api, make_client) -> None:
    fake_api.queue(200, json={"servers": [{"name": "no-id"}]})

    async with make_client() as client:
        with pytest.raises(ParseError, match="list servers"):
            await client.servers.list()


@pytest.mark.asyncio
async def test_list_images_empty_body(fake_api, make_client) -> None:
    fake_api.queue(204)

    async with make_client() as client:
        assert await client.servers.list_images() == []

@pytest.mark.asyncio
async def test_create_server(fake_api, make_client) -> None:
    fake_api.queue(202, json={"server": {**SERVER_DOC, "adminPass": "GFf1j9aP"}})

    async with make_client() as client:
        server = await client.servers.create("web", 2, 1, {"role": "web"})

    request = fake_api.api_requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1.0/998877/servers"
    assert json.loads(request.content) == {
        "server": {"name": "web", "imageId": 2, "flavorId": 1, "metadata": {"role": "web"}}
    }
    assert server.admin_pass == "GFf1j9aP"


@pytest.mark.asyncio
async def test_update_server(fake_api, make_client) -> None:
    fake_api.queue(204)

    async with make_client() as client:
        await client.servers.update(1234, name="db")

    request = fake_api.api_requests[0]
    assert request.method == "PUT"
    assert json.loads(request.content) == {"server": {"name": "db"}}


@pytest.mark.asyncio
async def test_update_server_needs_changes(make_client) -> None:
    async with make_client() as client:
        with pytest.raises(ValueError, match="Nothing to update"):
            await client.servers.update(1234)


@pytest.mark.asyncio
async def test_delete_server(fake_api, make_client) -> None:
    fake_api.queue(202)

    async with make_client() as client:
        await client.servers.delete(1234)

    request = fake_api.api_requests[0]
    assert request.method == "DELETE"
    assert request.url.path == "/v1.0/998877/servers/1234"


@pytest.mark.asyncio
async def test_delete_server_conflict(fake_api, make_client) -> None:
    """Unmapped failure statuses surface as APIError in the sub-client."""
    fake_api.queue(409, json={"buildInProgress": {"code": 409}})

    async with make_client() as client:
        with pytest.raises(APIError) as exc_info:
            await client.servers.delete(1234)

    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("call", "expected"),
    [
        (lambda s: s.reboot(1234), {"reboot": {"type": "SOFT"}}),
        (lambda s: s.reboot(1234, hard=True), {"reboot": {"type": "HARD"}}),
        (lambda s: s.rebuild(1234, 3), {"rebuild": {"imageId": 3}}),
        (lambda s: s.resize(1234, 4), {"resize": {"flavorId": 4}}),
        (lambda s: s.confirm_resize(1234), {"confirmResize": None}),
        (lambda s: s.revert_resize(1234), {"revertResize": None}),
    ],
)
async def test_server_actions(fake_api, make_client, call, expected) -> None:
    fake_api.queue(202)

    async with make_client() as client:
        await call(client.servers)

    request = fake_api.api_requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1.0/998877/servers/1234/action"
    assert json.loads(request.content) == expected


@pytest.mark.asyncio
async def test_list_flavors_and_images(fake_api, make_client) -> None:
    fake_api.queue(200, json={"flavors": [{"id": 1, "name": "256 slice", "ram": 256, "disk": 10}]})
    fake_api.queue(200, json={"images": [{"id": 2, "name": "CentOS 5.2", "status": "ACTIVE"}]})

    async with make_client() as client:
        flavors = await client.servers.list_flavors()
        images = await client.servers.list_images()

    assert flavors[0].ram == 256
    assert images[0].name == "CentOS 5.2"
    assert [r.url.path for r in fake_api.api_requests] == [
        "/v1.0/998877/flavors/detail",
        "/v1.0/998877/images/detail",
    ]
