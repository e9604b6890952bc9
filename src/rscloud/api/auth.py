"""Authentication handling for the cloud API."""

import logging
import re
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel

from ..models.config import Credentials, Region
from .exceptions import AuthenticationError, ConfigError, RequestTimeout, TransportError
from .status import raise_for_status

logger = logging.getLogger("rscloud.auth")

AUTH_ENDPOINTS: dict[Region, str] = {
    Region.US: "https://auth.api.rackspacecloud.com/v1.0",
    Region.UK: "https://lon.auth.api.rackspacecloud.com/v1.0",
}

_ACCOUNT_ID_RE = re.compile(r"/([0-9]+)$")


class AuthResult(BaseModel):
    """Token and service endpoints returned by the auth endpoint."""

    token: str
    server_url: str | None = None
    storage_url: str | None = None
    cdn_url: str | None = None
    account_id: str | None = None


def auth_endpoint(region: Region) -> str:
    """Return the authentication URL for a region.

    Raises:
        ConfigError: If the region has no known endpoint
    """
    try:
        return AUTH_ENDPOINTS[Region(region)]
    except (KeyError, ValueError):
        raise ConfigError(f"Unknown authentication region: {region!r}")


def parse_account_id(server_url: str) -> str | None:
    """Extract the numeric account id that ends the compute endpoint path.

    >>> parse_account_id("https://example/servers/v1/998877")
    '998877'
    """
    match = _ACCOUNT_ID_RE.search(urlparse(server_url).path)
    return match.group(1) if match else None


class AuthHandler:
    """Handle authentication for the cloud API."""

    def __init__(self, credentials: Credentials, user_agent: str) -> None:
        """Initialize auth handler.

        Args:
            credentials: API credentials
            user_agent: User-Agent header value
        """
        self.credentials = credentials
        self.user_agent = user_agent
        self.auth_url = auth_endpoint(credentials.region)

    def get_auth_headers(self) -> dict[str, str]:
        """Get headers for the authentication exchange.

        Returns:
            Headers dict with user and key
        """
        return {
            "X-Auth-User": self.credentials.user or "",
            "X-Auth-Key": self.credentials.api_key or "",
            "User-Agent": self.user_agent,
        }

    async def authenticate(self, client: httpx.AsyncClient) -> AuthResult:
        """Exchange credentials for a token and service endpoints.

        Args:
            client: HTTP client to send the exchange with

        Returns:
            Parsed auth result

        Raises:
            AuthenticationError: If the credentials are rejected or no token is returned
            APIError: On other mapped error statuses
            TransportError: On connection failures
        """
        logger.debug("Authenticating %s against %s", self.credentials.user, self.auth_url)
        try:
            response = await client.get(self.auth_url, headers=self.get_auth_headers())
        except httpx.TimeoutException as e:
            raise RequestTimeout(f"Authentication request timed out: {e}")
        except httpx.RequestError as e:
            raise TransportError(f"Connection failed: {e}")

        if response.status_code in (401, 403):
            raise AuthenticationError("Invalid username or API key")

        raise_for_status(response.status_code, response.text)

        result = self.parse_response(response)
        if result is None:
            raise AuthenticationError(
                f"Authentication returned HTTP {response.status_code} without a token"
            )
        logger.debug("Authenticated; account id %s", result.account_id)
        return result

    @staticmethod
    def parse_response(response: httpx.Response) -> AuthResult | None:
        """Read the token and endpoints from the auth response headers.

        Returns:
            Auth result, or None when the response carries no token
        """
        token = response.headers.get("X-Auth-Token", "").strip()
        if not token:
            return None

        server_url = response.headers.get("X-Server-Management-Url", "").strip() or None
        return AuthResult(
            token=token,
            server_url=server_url,
            storage_url=response.headers.get("X-Storage-Url", "").strip() or None,
            cdn_url=response.headers.get("X-CDN-Management-Url", "").strip() or None,
            account_id=parse_account_id(server_url) if server_url else None,
        )
