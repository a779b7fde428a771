"""Ports required by the CSRF core."""

from flycsrf.security.ports.outbound import CookieStore

__all__ = ["CookieStore"]
