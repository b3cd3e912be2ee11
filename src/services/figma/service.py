"""Figma retrieval and asset export service.

Fetches files/nodes and hands them to the simplifier, and exports node
renders or fill images to a local directory.

Downloads within one call run concurrently and are joined all-or-nothing:
the first failure propagates, but files already written by sibling
downloads stay on disk. Callers must not treat an exception as "nothing
was written".
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from src.lib.config import Config
from src.lib.constants import (
    ALL_IMAGE_FORMATS,
    DIAGNOSTICS_RAW_FILE,
    DIAGNOSTICS_SIMPLIFIED_FILE,
    IMAGE_EXPORT_SCALE,
)
from src.lib.logging import get_logger
from src.models.image_request import ImageExportRequest, ImageFillRequest
from src.services.figma.diagnostics import DiagnosticsSink
from src.services.figma.downloader import ImageDownloader
from src.services.figma.simplifier import SimplifiedDesign, parse_figma_response
from src.services.figma.transport import FigmaTransport

# download(file_name, local_path, image_url) -> local file path
DownloadFn = Callable[[str, str, str], Awaitable[str]]
SimplifyFn = Callable[[dict[str, Any]], SimplifiedDesign]


class FigmaService:
    """Figma file retrieval and image export."""

    def __init__(
        self,
        api_key: str,
        config: Config | None = None,
        logger: Any = None,
        transport: FigmaTransport | None = None,
        download: DownloadFn | None = None,
        simplify: SimplifyFn = parse_figma_response,
        diagnostics: DiagnosticsSink | None = None,
    ):
        """Initialize Figma service.

        Args:
            api_key: Figma personal access token
            config: Application config (defaults to Config())
            logger: Logger to use (defaults to the module structlog logger)
            transport: Transport override (built from api_key/config otherwise)
            download: Download primitive override
            simplify: Document simplification transform
            diagnostics: Diagnostics sink override
        """
        self.config = config or Config()
        self.logger = logger if logger is not None else get_logger(__name__)
        self.transport = transport or FigmaTransport(api_key, self.config, logger=self.logger)
        self.download = download or ImageDownloader(self.transport).download
        self.simplify = simplify
        self.diagnostics = diagnostics or DiagnosticsSink(
            enabled=self.config.dev_mode,
            logs_dir=self.config.diagnostics_dir,
            logger=self.logger,
        )

    async def get_file(self, file_key: str, depth: int | None = None) -> SimplifiedDesign:
        """Fetch and simplify a whole Figma file.

        Args:
            file_key: Figma file key
            depth: How deep into the document to traverse (API default if unset)

        Returns:
            SimplifiedDesign of the file
        """
        try:
            endpoint = f"/files/{file_key}{f'?depth={depth}' if depth else ''}"
            self.logger.info(
                f"Retrieving Figma file: {file_key} (depth: {depth if depth else 'default'})"
            )
            response = await self.transport.request(endpoint)
            self.logger.info("Got response")

            simplified = self.simplify(response)
            self.diagnostics.write(DIAGNOSTICS_RAW_FILE, response)
            self.diagnostics.write(DIAGNOSTICS_SIMPLIFIED_FILE, simplified)
            return simplified

        except Exception as e:
            self.logger.error(f"Failed to get file: {e!r}")
            raise

    async def get_node(
        self, file_key: str, node_id: str, depth: int | None = None
    ) -> SimplifiedDesign:
        """Fetch and simplify the subtree rooted at node_id.

        Args:
            file_key: Figma file key
            node_id: Root node id (e.g. "1:2")
            depth: How deep below the node to traverse (API default if unset)

        Returns:
            SimplifiedDesign of the subtree
        """
        endpoint = f"/files/{file_key}/nodes?ids={node_id}{f'&depth={depth}' if depth else ''}"
        response = await self.transport.request(endpoint)
        self.logger.info("Got response from get_node, now parsing.")

        self.diagnostics.write(DIAGNOSTICS_RAW_FILE, response)
        simplified = self.simplify(response)
        self.diagnostics.write(DIAGNOSTICS_SIMPLIFIED_FILE, simplified)
        return simplified

    async def _export_urls(
        self, file_key: str, node_ids: list[str], file_type: str
    ) -> dict[str, str | None]:
        if not node_ids:
            return {}

        response = await self.transport.request(
            f"/images/{file_key}?ids={','.join(node_ids)}"
            f"&scale={IMAGE_EXPORT_SCALE}&format={file_type}"
        )
        return response.get("images") or {}

    async def get_images(
        self,
        file_key: str,
        nodes: Sequence[ImageExportRequest],
        local_path: str,
    ) -> list[str]:
        """Render nodes and download them to local_path.

        One export call is made per format present in nodes. Nodes Figma
        could not render are skipped without error.

        Args:
            file_key: Figma file key
            nodes: Export requests
            local_path: Destination directory

        Returns:
            Local paths of the downloaded files, in request order

        Raises:
            ValueError: If a request fails validation (before any network call)
        """
        for node in nodes:
            node.validate()

        # Keyed by format so one node exported as both png and svg keeps both URLs
        url_maps = await asyncio.gather(
            *(
                self._export_urls(
                    file_key, [node.node_id for node in nodes if node.file_type == file_type], file_type
                )
                for file_type in ALL_IMAGE_FORMATS
            )
        )
        urls = dict(zip(ALL_IMAGE_FORMATS, url_maps))

        downloads = []
        for node in nodes:
            image_url = urls[node.file_type].get(node.node_id)
            if image_url:
                downloads.append(self.download(node.file_name, local_path, image_url))
            else:
                self.logger.info(f"No render available for node {node.node_id}, skipping")

        return list(await asyncio.gather(*downloads))

    async def get_image_fills(
        self,
        file_key: str,
        nodes: Sequence[ImageFillRequest],
        local_path: str,
    ) -> list[str]:
        """Download fill images referenced by nodes to local_path.

        Args:
            file_key: Figma file key
            nodes: Fill requests
            local_path: Destination directory

        Returns:
            One entry per request: the local path, or "" when the image
            reference is unknown to Figma
        """
        if not nodes:
            return []

        response = await self.transport.request(f"/files/{file_key}/images")
        images = (response.get("meta") or {}).get("images") or {}

        async def fetch(node: ImageFillRequest) -> str:
            image_url = images.get(node.image_ref)
            if not image_url:
                self.logger.info(f"No fill image for ref {node.image_ref}, skipping")
                return ""
            return await self.download(node.file_name, local_path, image_url)

        return list(await asyncio.gather(*(fetch(node) for node in nodes)))
