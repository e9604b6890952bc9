"""Cloud server (compute) models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Server(BaseModel):
    """Cloud server details."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int
    name: str
    status: str | None = None
    progress: int | None = None
    image_id: int | None = Field(None, alias="imageId")
    flavor_id: int | None = Field(None, alias="flavorId")
    host_id: str | None = Field(None, alias="hostId")
    admin_pass: str | None = Field(None, alias="adminPass")
    addresses: dict[str, list[str]] = Field(default_factory=dict)
    metadata: dict[str, str] = Field(default_factory=dict)

    @property
    def public_ips(self) -> list[str]:
        """Public IP addresses."""
        return self.addresses.get("public", [])

    @property
    def private_ips(self) -> list[str]:
        """Private IP addresses."""
        return self.addresses.get("private", [])


class Flavor(BaseModel):
    """Server size."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    ram: int | None = None
    disk: int | None = None


class Image(BaseModel):
    """Server image."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int
    name: str
    status: str | None = None
    server_id: int | None = Field(None, alias="serverId")
    progress: int | None = None
    created: str | None = None
    updated: str | None = None


class RateLimit(BaseModel):
    """A single rate limit entry."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    verb: str
    uri: str = Field(..., alias="URI")
    regex: str | None = None
    value: int
    remaining: int
    unit: str
    reset_time: int | None = Field(None, alias="resetTime")


class ApiLimits(BaseModel):
    """Account rate and absolute limits."""

    rate: list[RateLimit] = Field(default_factory=list)
    absolute: dict[str, Any] = Field(default_factory=dict)
