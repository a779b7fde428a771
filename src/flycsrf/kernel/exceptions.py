"""Exception hierarchy for flycsrf.

All library exceptions inherit from FlyCsrfException. Only integration
mistakes are raised: a rejected CSRF check is an ordinary outcome and is
reported as a verdict, never as an exception.

Categories:
- ConfigurationException: invalid options, resolved at construction time
- CookieStorageDisabledException: token requested with cookie storage off
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyCsrfException(Exception):
    """Base exception for all flycsrf errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CSRF_CONFIG").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(FlyCsrfException):
    """Options supplied by the integrating application are invalid."""


class CookieStorageDisabledException(ConfigurationException):
    """A CSRF token was requested while cookie-backed secret storage is disabled."""
