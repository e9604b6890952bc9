"""Shared fixtures: a scripted fake of the auth endpoint and the cloud APIs."""

import httpx
import pytest

from rscloud.api.client import CloudClient

AUTH_HOST = "auth.api.rackspacecloud.com"


class FakeApi:
    """Answer auth requests with fresh tokens and API requests from a queue."""

    server_url = "https://servers.api.rackspacecloud.com/v1.0/998877"
    storage_url = "https://storage.clouddrive.com/v1/MossoCloudFS_abc"
    cdn_url = "https://cdn.clouddrive.com/v1/MossoCloudFS_abc"

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []
        self.auth_count = 0
        self.auth_status = 204
        self.auth_headers: dict[str, str] = {
            "X-Server-Management-Url": self.server_url,
            "X-Storage-Url": self.storage_url,
            "X-CDN-Management-Url": self.cdn_url,
        }
        self.issue_tokens = True

    def queue(self, status: int, json: object = None, text: str | None = None) -> None:
        """Queue the response for the next API request."""
        if text is not None:
            self.responses.append(httpx.Response(status, text=text))
        elif json is not None:
            self.responses.append(httpx.Response(status, json=json))
        else:
            self.responses.append(httpx.Response(status))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == AUTH_HOST:
            self.auth_count += 1
            headers = dict(self.auth_headers)
            if self.issue_tokens:
                headers["X-Auth-Token"] = f"tok-{self.auth_count}"
            return httpx.Response(self.auth_status, headers=headers)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200, json={})

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host != AUTH_HOST]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def make_client(fake_api: FakeApi):
    """Build a CloudClient wired to the fake API."""

    def _make(**kwargs) -> CloudClient:
        return CloudClient("user", "secret-key", transport=fake_api.transport, **kwargs)

    return _make
