"""Factory for creating service instances.

Centralizes service initialization to reduce code duplication
and improve testability.
"""

from src.lib.config import Config, get_config
from src.lib.logging import get_logger
from src.services.figma.service import FigmaService

logger = get_logger(__name__)


class ServiceFactory:
    """Factory for creating commonly-used service instances."""

    @staticmethod
    def create_figma_service(config: Config | None = None) -> FigmaService:
        """Create Figma service from configuration.

        Args:
            config: Config to use (if None, loads from environment)

        Returns:
            Configured FigmaService instance

        Raises:
            ValueError: If FIGMA_API_KEY is not configured
        """
        config = config or get_config()

        if not config.figma_api_key:
            raise ValueError("FIGMA_API_KEY is not configured. Add it to your .env file.")

        logger.debug(
            f"Creating FigmaService (proxy={config.proxy_url or 'direct'}, dev_mode={config.dev_mode})"
        )
        return FigmaService(config.figma_api_key, config)
