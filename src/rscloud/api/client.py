"""Cloud API session dispatcher."""

import asyncio
import json
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from .. import __version__
from ..models.config import BalancerRegion, Credentials, ProfileConfig, Region
from ..models.request import ApiResponse, Method, RequestDescriptor, ResourceCategory
from ..models.server import ApiLimits
from .auth import AuthHandler, AuthResult
from .balancers import LoadBalancersAPI
from .exceptions import (
    APIError,
    AuthExpired,
    ConfigError,
    ParseError,
    RequestTimeout,
    TransportError,
)
from .servers import ServersAPI
from .status import raise_for_status

logger = logging.getLogger("rscloud.client")

USER_AGENT = f"rscloud/{__version__}"

# Entries end with "/" so that base + account id + path forms the full URL.
BALANCER_ENDPOINTS: dict[BalancerRegion, str] = {
    BalancerRegion.ORD: "https://ord.loadbalancers.api.rackspacecloud.com/v1.0/",
    BalancerRegion.DFW: "https://dfw.loadbalancers.api.rackspacecloud.com/v1.0/",
}

MAX_REAUTH_ATTEMPTS = 1


def balancer_endpoint(region: BalancerRegion) -> str:
    """Return the load balancer base URL for a datacenter.

    Raises:
        ConfigError: If the datacenter has no known endpoint
    """
    try:
        return BALANCER_ENDPOINTS[BalancerRegion(region)]
    except (KeyError, ValueError):
        raise ConfigError(f"Unknown load balancer region: {region!r}")


class Session(BaseModel):
    """Token and endpoints discovered by the last authentication."""

    token: str | None = None
    server_url: str | None = None
    storage_url: str | None = None
    cdn_url: str | None = None
    account_id: str | None = None
    debug: bool = False

    def apply(self, result: AuthResult) -> None:
        """Store the token and whichever endpoints the auth response carried."""
        self.token = result.token
        if result.server_url is not None:
            self.server_url = result.server_url
            self.account_id = result.account_id
        if result.storage_url is not None:
            self.storage_url = result.storage_url
        if result.cdn_url is not None:
            self.cdn_url = result.cdn_url


def _masked(headers: dict[str, str]) -> dict[str, str]:
    secret = {"x-auth-token", "x-auth-key"}
    return {k: ("***" if k.lower() in secret else v) for k, v in headers.items()}


class CloudClient:
    """Async client for the cloud servers and load balancer APIs."""

    def __init__(
        self,
        user: str | None,
        api_key: str | None,
        region: Region | str = Region.US,
        balancer_region: BalancerRegion | str = BalancerRegion.ORD,
        accept_gzip: bool = True,
        debug: bool = False,
        verify_ssl: bool = True,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            user: User id used for the API
            api_key: API key generated by the provider
            region: Authentication region (US or UK)
            balancer_region: Load balancer datacenter (ORD or DFW)
            accept_gzip: Ask for gzip encoded responses
            debug: Log every request and response
            verify_ssl: Whether to verify SSL certificates
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used in tests

        Raises:
            InvalidCredentials: If user or key is missing
            ConfigError: If a region is unknown
        """
        try:
            self.credentials = Credentials(
                user=user, api_key=api_key, region=region, balancer_region=balancer_region
            )
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise ConfigError(f"Invalid client configuration: {messages}")

        self.accept_gzip = accept_gzip
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.auth_handler = AuthHandler(self.credentials, USER_AGENT)
        self.balancer_url = balancer_endpoint(self.credentials.balancer_region)
        self.session = Session(debug=debug)
        self.servers = ServersAPI(self)
        self.balancers = LoadBalancersAPI(self)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock: asyncio.Lock | None = None

    @classmethod
    def from_profile(
        cls, profile: ProfileConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> "CloudClient":
        """Build a client from a stored profile."""
        return cls(
            profile.user,
            profile.api_key,
            region=profile.region,
            balancer_region=profile.balancer_region,
            accept_gzip=profile.accept_gzip,
            debug=profile.debug,
            verify_ssl=profile.verify_ssl,
            timeout=profile.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "CloudClient":
        """Async context manager entry.

        Returns:
            Self
        """
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def connect(self) -> None:
        """Open the HTTP connection. Authentication happens on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=self.verify_ssl, timeout=self.timeout, transport=self._transport
            )
            self._lock = asyncio.Lock()

    async def close(self) -> None:
        """Close the client connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._lock = None

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Ensure client is connected.

        Returns:
            HTTP client

        Raises:
            RuntimeError: If not connected
        """
        if not self._client or not self._lock:
            raise RuntimeError("Client not connected. Use async with or call connect().")
        return self._client

    @property
    def token(self) -> str | None:
        """Cached bearer token, if any."""
        return self.session.token

    def set_token(self, token: str | None) -> None:
        """Replace the cached bearer token."""
        self.session.token = token

    @property
    def account_id(self) -> str | None:
        """Account id taken from the compute endpoint."""
        return self.session.account_id

    def enable_debug(self) -> None:
        """Enable request/response debug logging."""
        self.session.debug = True

    def disable_debug(self) -> None:
        """Disable request/response debug logging."""
        self.session.debug = False

    async def authenticate(self) -> str:
        """Authenticate and store the token and discovered endpoints.

        Returns:
            The received token
        """
        return await self._refresh_token(force=True)

    async def _refresh_token(self, stale: str | None = None, force: bool = False) -> str:
        """Return a usable token, authenticating when needed.

        A token equal to ``stale`` was rejected by the server. If another
        caller already replaced it, the new token is reused.
        """
        client = self._ensure_connected()
        if self._lock is None:
            raise RuntimeError("Client not connected. Use async with or call connect().")
        async with self._lock:
            token = self.session.token
            if force or token is None or token == stale:
                result = await self.auth_handler.authenticate(client)
                self.session.apply(result)
                token = result.token
            return token

    def build_url(self, category: ResourceCategory, path: str) -> str:
        """Resolve the full URL of a resource path.

        Raises:
            ConfigError: If the category endpoint is unknown
        """
        if category is ResourceCategory.BALANCER:
            if not self.session.account_id:
                raise ConfigError("Account id unknown; no server management URL was returned")
            return f"{self.balancer_url}{self.session.account_id}{path}"

        base = {
            ResourceCategory.SERVER: self.session.server_url,
            ResourceCategory.STORAGE: self.session.storage_url,
            ResourceCategory.CDN: self.session.cdn_url,
        }[category]
        if not base:
            raise ConfigError(f"No {category.value} endpoint was returned at authentication")
        return f"{base}{path}"

    async def _send(self, descriptor: RequestDescriptor, token: str) -> ApiResponse:
        """Execute one HTTP exchange without interpreting the status."""
        client = self._ensure_connected()
        url = self.build_url(descriptor.category, descriptor.path)
        headers = {
            "X-Auth-Token": token,
            "User-Agent": USER_AGENT,
            "Accept-Encoding": "gzip" if self.accept_gzip else "identity",
        }
        content = None
        if descriptor.method in (Method.POST, Method.PUT):
            headers["Content-Type"] = "application/json"
            if descriptor.payload is not None:
                content = json.dumps(descriptor.payload)

        if self.session.debug:
            logger.debug("%s %s headers=%s", descriptor.method.value, url, _masked(headers))
            if content:
                logger.debug("payload=%s", content)

        try:
            response = await client.request(
                descriptor.method.value, url, headers=headers, content=content
            )
        except httpx.TimeoutException as e:
            raise RequestTimeout(f"Request to {descriptor.path} timed out: {e}")
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}")

        result = ApiResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )
        if self.session.debug:
            logger.debug("HTTP %s body=%s", result.status_code, result.body)
        return result

    async def request(
        self,
        method: Method | str,
        category: ResourceCategory | str = ResourceCategory.SERVER,
        path: str = "",
        payload: Any = None,
    ) -> ApiResponse:
        """Dispatch a request, authenticating first when no token is cached.

        A 401 re-authenticates and replays the request once.

        Args:
            method: GET, POST, PUT or DELETE
            category: Resource category selecting the base endpoint
            path: Resource path appended to the endpoint
            payload: JSON payload for POST and PUT

        Returns:
            Response of the request

        Raises:
            AuthExpired: If the replayed request is rejected again
            APIError: On mapped error statuses
            TransportError: On network errors
            ValueError: If the path is empty or the method is AUTH
        """
        if not path:
            raise ValueError("A resource path is required")
        descriptor = RequestDescriptor(
            method=Method(method), category=ResourceCategory(category), path=path, payload=payload
        )
        if descriptor.method is Method.AUTH:
            raise ValueError("Use authenticate() for the authentication exchange")

        token = await self._refresh_token()
        reauths = 0
        while True:
            response = await self._send(descriptor, token)
            if response.status_code != 401:
                break
            if reauths >= MAX_REAUTH_ATTEMPTS:
                raise AuthExpired()
            reauths += 1
            logger.info("Token rejected for %s, re-authenticating", descriptor.path)
            token = await self._refresh_token(stale=token)

        raise_for_status(response.status_code, response.body)
        return response

    async def get(
        self, path: str, category: ResourceCategory = ResourceCategory.SERVER
    ) -> ApiResponse:
        """Make a GET request."""
        return await self.request(Method.GET, category, path)

    async def post(
        self, path: str, payload: Any = None, category: ResourceCategory = ResourceCategory.SERVER
    ) -> ApiResponse:
        """Make a POST request."""
        return await self.request(Method.POST, category, path, payload)

    async def put(
        self, path: str, payload: Any = None, category: ResourceCategory = ResourceCategory.SERVER
    ) -> ApiResponse:
        """Make a PUT request."""
        return await self.request(Method.PUT, category, path, payload)

    async def delete(
        self, path: str, category: ResourceCategory = ResourceCategory.SERVER
    ) -> ApiResponse:
        """Make a DELETE request."""
        return await self.request(Method.DELETE, category, path)

    async def get_limits(self) -> str | None:
        """Retrieve current API limits.

        Returns:
            Raw JSON body on 200 or 203, None on any other status
        """
        try:
            response = await self.get("/limits")
        except (APIError, ParseError) as e:
            logger.warning("Could not retrieve limits: %s", e)
            return None

        if response.status_code in (200, 203):
            return response.body
        logger.warning("Could not retrieve limits: HTTP %s", response.status_code)
        return None

    async def get_limits_model(self) -> ApiLimits | None:
        """Retrieve current API limits as a model.

        Raises:
            ParseError: If the limits document has an unexpected shape
        """
        body = await self.get_limits()
        if body is None:
            return None
        try:
            return ApiLimits.model_validate(json.loads(body)["limits"])
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise ParseError(f"Unexpected limits document: {e}")
