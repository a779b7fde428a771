"""flycsrf logging — structlog adapter."""

from flycsrf.logging.structlog_adapter import StructlogAdapter

__all__ = ["StructlogAdapter"]
