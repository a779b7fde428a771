"""flycsrf kernel — shared exception types."""

from flycsrf.kernel.exceptions import (
    ConfigurationException,
    CookieStorageDisabledException,
    FlyCsrfException,
)

__all__ = [
    "ConfigurationException",
    "CookieStorageDisabledException",
    "FlyCsrfException",
]
