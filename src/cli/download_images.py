"""CLI command to download rendered images and fill images from Figma.

Usage:
    python -m src.cli download-images ABC123xyz ./assets \\
        --node 1:2:logo.svg --node 1:3:hero.png --node 4:5:photo.png:8f2e...

Each --node is NODE_ID:FILE_NAME for a render (format from the extension),
or NODE_ID:FILE_NAME:IMAGE_REF for a fill image.
"""

import asyncio
from pathlib import Path

from src.cli.core.error_handler import CLIError
from src.cli.core.service_factory import ServiceFactory
from src.lib.logging import get_logger
from src.models.image_request import ImageExportRequest, ImageFillRequest
from src.services.figma.service import FigmaService

logger = get_logger(__name__)


def parse_node_spec(spec: str) -> ImageExportRequest | ImageFillRequest:
    """Parse a --node value.

    Node ids contain colons themselves ("1:2", or "I5:10;2:3" for instance
    children), so the file name is located as the first field after the id
    that has an extension. Fields before it form the node id and a single
    field after it is the image ref.

    Args:
        spec: "NODE_ID:FILE_NAME" or "NODE_ID:FILE_NAME:IMAGE_REF"

    Returns:
        ImageExportRequest or ImageFillRequest

    Raises:
        CLIError: If spec is malformed
    """
    parts = spec.split(":")
    name_index = next(
        (i for i in range(2, len(parts)) if Path(parts[i]).suffix),
        None,
    )
    if name_index is None or len(parts) - name_index > 2:
        raise CLIError(
            f"Invalid node spec '{spec}'. Expected NODE_ID:FILE_NAME[:IMAGE_REF], e.g. 1:2:logo.svg"
        )

    node_id = ":".join(parts[:name_index])
    file_name = parts[name_index]
    image_ref = parts[name_index + 1] if len(parts) > name_index + 1 else None

    try:
        if image_ref is not None:
            request = ImageFillRequest(node_id=node_id, file_name=file_name, image_ref=image_ref)
            request.validate()
            return request
        return ImageExportRequest.from_file_name(node_id, file_name)
    except ValueError as e:
        raise CLIError(f"Invalid node spec '{spec}': {e}") from e


async def download_images(
    file_key: str,
    local_path: str,
    node_specs: list[str],
    service: FigmaService | None = None,
) -> list[str]:
    """Download renders and fill images (CLI entry point).

    Args:
        file_key: Figma file key
        local_path: Destination directory
        node_specs: --node values
        service: Service override (built from config otherwise)

    Returns:
        Local paths of downloaded files
    """
    requests = [parse_node_spec(spec) for spec in node_specs]
    exports = [r for r in requests if isinstance(r, ImageExportRequest)]
    fills = [r for r in requests if isinstance(r, ImageFillRequest)]

    service = service or ServiceFactory.create_figma_service()

    rendered, filled = await asyncio.gather(
        service.get_images(file_key, exports, local_path),
        service.get_image_fills(file_key, fills, local_path),
    )

    saved = [path for path in [*rendered, *filled] if path]
    skipped = len(requests) - len(saved)

    logger.info(f"Downloaded {len(saved)} images to {local_path} ({skipped} skipped)")
    for path in saved:
        print(f"✅ {path}")
    if skipped:
        print(f"⚠️  {skipped} node(s) had no image to download")

    return saved
