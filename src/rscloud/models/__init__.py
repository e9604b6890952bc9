"""Data models."""

from .balancer import LoadBalancer, Node, VirtualIP
from .config import BalancerRegion, Credentials, ProfileConfig, Region
from .request import (
    ApiResponse,
    BadRequestBody,
    BadRequestDetail,
    Method,
    RequestDescriptor,
    ResourceCategory,
)
from .server import ApiLimits, Flavor, Image, RateLimit, Server

__all__ = [
    "ApiLimits",
    "ApiResponse",
    "BadRequestBody",
    "BadRequestDetail",
    "BalancerRegion",
    "Credentials",
    "Flavor",
    "Image",
    "LoadBalancer",
    "Method",
    "Node",
    "ProfileConfig",
    "RateLimit",
    "Region",
    "RequestDescriptor",
    "ResourceCategory",
    "Server",
    "VirtualIP",
]
