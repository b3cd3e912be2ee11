"""Error handling utilities for CLI commands."""

import sys

from src.lib.logging import get_logger
from src.services.figma.errors import (
    CapabilityError,
    FigmaError,
    ServiceError,
    TransportError,
)

logger = get_logger(__name__)

# Exit codes
EXIT_FAILURE = 1
EXIT_API_ERROR = 2
EXIT_NETWORK_ERROR = 3
EXIT_CAPABILITY_ERROR = 4
EXIT_INTERRUPTED = 130


class CLIError(Exception):
    """Base exception for CLI errors.

    Attributes:
        message: Error message
        exit_code: Exit code to use when this error occurs
    """

    def __init__(self, message: str, exit_code: int = EXIT_FAILURE):
        """Initialize CLI error.

        Args:
            message: Error message
            exit_code: Exit code (default: 1)
        """
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class CLIErrorHandler:
    """Centralized error handling for CLI commands.

    Provides consistent error handling and logging across all commands.
    """

    @staticmethod
    def handle_error(error: BaseException, command_name: str = "cli") -> int:
        """Handle an error and return appropriate exit code.

        Args:
            error: Exception that occurred
            command_name: Name of command that raised the error

        Returns:
            Exit code
        """
        if isinstance(error, CLIError):
            logger.error(f"{command_name} failed: {error.message}")
            print(f"❌ Error: {error.message}", file=sys.stderr)
            return error.exit_code

        elif isinstance(error, KeyboardInterrupt):
            logger.info(f"{command_name} interrupted by user")
            print("\n\nInterrupted by user", file=sys.stderr)
            return EXIT_INTERRUPTED

        elif isinstance(error, ServiceError):
            logger.error(f"{command_name} failed: Figma API returned {error.status}")
            print(f"❌ Figma API error {error.status}: {error.message}", file=sys.stderr)
            return EXIT_API_ERROR

        elif isinstance(error, TransportError):
            logger.error(f"{command_name} failed: {error}")
            print(f"❌ {error}", file=sys.stderr)
            return EXIT_NETWORK_ERROR

        elif isinstance(error, CapabilityError):
            logger.error(f"{command_name} cannot run: {error}")
            print(f"❌ {error}", file=sys.stderr)
            return EXIT_CAPABILITY_ERROR

        elif isinstance(error, FigmaError):
            logger.error(f"{command_name} failed: {error}", exc_info=True)
            print(f"❌ {error}", file=sys.stderr)
            return EXIT_FAILURE

        elif isinstance(error, ValueError):
            logger.error(f"{command_name} failed: {error}", exc_info=True)
            print(f"❌ Invalid value: {error}", file=sys.stderr)
            return EXIT_FAILURE

        else:
            logger.error(f"{command_name} failed with unexpected error: {error}", exc_info=True)
            print(f"❌ Unexpected error: {error}", file=sys.stderr)
            return EXIT_FAILURE
