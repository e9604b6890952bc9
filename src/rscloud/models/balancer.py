"""Load balancer models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Node(BaseModel):
    """Back-end node behind a load balancer."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None
    address: str
    port: int
    condition: str = Field(default="ENABLED", pattern="^(ENABLED|DISABLED|DRAINING)$")
    status: str | None = None
    weight: int | None = None


class VirtualIP(BaseModel):
    """Virtual IP of a load balancer."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | None = None
    address: str | None = None
    type: str = "PUBLIC"
    ip_version: str | None = Field(None, alias="ipVersion")


class LoadBalancer(BaseModel):
    """Load balancer details."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int
    name: str
    protocol: str | None = None
    port: int | None = None
    algorithm: str | None = None
    status: str | None = None
    nodes: list[Node] = Field(default_factory=list)
    virtual_ips: list[VirtualIP] = Field(default_factory=list, alias="virtualIps")
    created: dict[str, Any] | None = None
    updated: dict[str, Any] | None = None
