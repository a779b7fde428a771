"""flycsrf web — filter contract and framework adapters."""

from flycsrf.web.filters import OncePerRequestFilter
from flycsrf.web.ports.filter import CallNext, WebFilter

__all__ = ["CallNext", "OncePerRequestFilter", "WebFilter"]
