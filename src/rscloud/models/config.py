"""Configuration models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Region(str, Enum):
    """Authentication region."""

    US = "US"
    UK = "UK"


class BalancerRegion(str, Enum):
    """Load balancer datacenter."""

    ORD = "ORD"
    DFW = "DFW"


class Credentials(BaseModel):
    """API credentials and the regions they are used against."""

    model_config = ConfigDict(frozen=True)

    user: str | None = None
    api_key: str | None = Field(default=None, repr=False)
    region: Region = Region.US
    balancer_region: BalancerRegion = BalancerRegion.ORD

    @model_validator(mode="after")
    def validate_present(self) -> "Credentials":
        """Reject credentials with a missing user or key.

        Raises:
            InvalidCredentials: If user id or API key is empty
        """
        from ..api.exceptions import InvalidCredentials

        if not self.user or not self.api_key:
            raise InvalidCredentials()
        return self


class ProfileConfig(BaseModel):
    """Profile configuration for a cloud account."""

    user: str
    api_key: str
    region: Region = Region.US
    balancer_region: BalancerRegion = BalancerRegion.ORD
    accept_gzip: bool = True
    verify_ssl: bool = True
    timeout: int = Field(default=30, ge=1, le=600)
    debug: bool = False

    def credentials(self) -> Credentials:
        """Build the immutable credentials for this profile."""
        return Credentials(
            user=self.user,
            api_key=self.api_key,
            region=self.region,
            balancer_region=self.balancer_region,
        )
