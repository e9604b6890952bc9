"""Unit tests for authentication response parsing."""

import httpx
import pytest

from rscloud.api.auth import AUTH_ENDPOINTS, AuthHandler, auth_endpoint, parse_account_id
from rscloud.api.exceptions import ConfigError
from rscloud.models.config import Credentials, Region


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://example/servers/v1/998877", "998877"),
        ("https://servers.api.rackspacecloud.com/v1.0/12", "12"),
        ("https://example/v1/abc123", None),
        ("https://example/v1/998877/", None),
        ("https://example/v1/", None),
    ],
)
def test_parse_account_id(url: str, expected: str | None) -> None:
    """The account id is the run of digits ending the path."""
    assert parse_account_id(url) == expected


def test_auth_endpoint_lookup() -> None:
    """Every region maps to its auth URL; unknown ones fail fast."""
    assert auth_endpoint(Region.UK) == "https://lon.auth.api.rackspacecloud.com/v1.0"
    assert auth_endpoint("US") == AUTH_ENDPOINTS[Region.US]
    with pytest.raises(ConfigError, match="Unknown authentication region"):
        auth_endpoint("EU")  # type: ignore[arg-type]


def test_parse_response_reads_headers_case_insensitively() -> None:
    """Token and endpoints are read from the response headers."""
    response = httpx.Response(
        204,
        headers={
            "x-auth-token": " abc ",
            "X-SERVER-MANAGEMENT-URL": "https://example/servers/v1/998877",
            "X-Storage-Url": "https://storage/v1/acct",
        },
    )

    result = AuthHandler.parse_response(response)

    assert result is not None
    assert result.token == "abc"
    assert result.server_url == "https://example/servers/v1/998877"
    assert result.account_id == "998877"
    assert result.storage_url == "https://storage/v1/acct"
    assert result.cdn_url is None


def test_parse_response_without_token() -> None:
    """No token header means no auth result."""
    assert AuthHandler.parse_response(httpx.Response(204)) is None


def test_auth_headers() -> None:
    """The exchange carries the user and key headers."""
    handler = AuthHandler(Credentials(user="me", api_key="k", region=Region.UK), "ua/1")

    assert handler.auth_url == AUTH_ENDPOINTS[Region.UK]
    assert handler.get_auth_headers() == {
        "X-Auth-User": "me",
        "X-Auth-Key": "k",
        "User-Agent": "ua/1",
    }
