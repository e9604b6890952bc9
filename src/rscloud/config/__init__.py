"""Configuration management."""

from .manager import Config, ConfigManager
from ..models.config import BalancerRegion, ProfileConfig, Region

__all__ = ["BalancerRegion", "Config", "ConfigManager", "ProfileConfig", "Region"]
