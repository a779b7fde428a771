"""Web ports."""

from flycsrf.web.ports.filter import CallNext, WebFilter

__all__ = ["CallNext", "WebFilter"]
