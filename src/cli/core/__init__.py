"""Core CLI infrastructure for command handling."""

from src.cli.core.error_handler import CLIErrorHandler, CLIError
from src.cli.core.service_factory import ServiceFactory

__all__ = [
    "ServiceFactory",
    "CLIErrorHandler",
    "CLIError",
]
