"""API client and authentication."""

from .auth import AuthHandler, AuthResult, parse_account_id
from .balancers import LoadBalancersAPI
from .client import ApiResponse, CloudClient
from .exceptions import (
    AccessDenied,
    APIError,
    AuthenticationError,
    AuthExpired,
    BadRequest,
    CloudError,
    ConfigError,
    InvalidCredentials,
    NotFound,
    ParseError,
    PayloadTooLarge,
    RequestTimeout,
    ServerError,
    TransportError,
)
from .servers import ServersAPI

__all__ = [
    "AccessDenied",
    "APIError",
    "ApiResponse",
    "AuthenticationError",
    "AuthExpired",
    "AuthHandler",
    "AuthResult",
    "BadRequest",
    "CloudClient",
    "CloudError",
    "ConfigError",
    "InvalidCredentials",
    "LoadBalancersAPI",
    "NotFound",
    "ParseError",
    "PayloadTooLarge",
    "RequestTimeout",
    "ServerError",
    "ServersAPI",
    "TransportError",
    "parse_account_id",
]
