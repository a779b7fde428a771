"""flycsrf core — configuration."""

from flycsrf.core.config import Config, config_properties

__all__ = ["Config", "config_properties"]
