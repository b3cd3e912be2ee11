"""Image download primitive.

Streams a rendered/fill image URL to disk. Image URLs point at Figma's asset
storage, so the API token is never sent with them.
"""

import os
import tempfile
from pathlib import Path

try:
    import httpx
except ImportError:
    httpx = None

from src.lib.constants import DOWNLOAD_CHUNK_SIZE
from src.lib.logging import get_logger
from src.services.figma.errors import CapabilityError, ServiceError, TransportError
from src.services.figma.transport import CAPABILITY_ERROR_MESSAGE, FigmaTransport

logger = get_logger(__name__)


async def _stream_to_file(response: "httpx.Response", target: Path) -> int:
    """Stream a response body into target via a sibling .part file.

    target is only replaced once the whole body has been written, so a
    failed download leaves any previous copy intact.

    Returns:
        Number of bytes written
    """
    fd, tmp_name = tempfile.mkstemp(prefix=target.name + ".", suffix=".part", dir=str(target.parent))
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        size = 0
        with tmp_path.open("wb") as fh:
            async for chunk in response.aiter_bytes(DOWNLOAD_CHUNK_SIZE):
                fh.write(chunk)
                size += len(chunk)
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    return size


async def download_figma_image(
    file_name: str,
    local_path: str,
    image_url: str,
    client: "httpx.AsyncClient | None" = None,
) -> str:
    """Download an image to local_path/file_name, overwriting it.

    Args:
        file_name: Target file name
        local_path: Destination directory (created if missing)
        image_url: Remote image URL
        client: Optional client to reuse; a direct client is created otherwise

    Returns:
        Resolved local path of the written file

    Raises:
        CapabilityError: httpx is not installed
        ServiceError: Image host returned a non-success status
        TransportError: No response was received
        OSError: File could not be written
    """
    if httpx is None:
        raise CapabilityError(CAPABILITY_ERROR_MESSAGE)

    directory = Path(local_path)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / file_name

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(follow_redirects=True)

    try:
        async with client.stream("GET", image_url) as response:
            if not response.is_success:
                raise ServiceError(response.status_code, response.reason_phrase or "Unknown error")

            size = await _stream_to_file(response, target)

    except httpx.RequestError as e:
        logger.error(f"Network error downloading {file_name}: {e!r}")
        raise TransportError(f"Network error: {str(e) or type(e).__name__}") from e

    finally:
        if owns_client:
            await client.aclose()

    logger.info(f"Downloaded {size} bytes to {target}")
    return str(target.resolve())


class ImageDownloader:
    """Downloads images over the same proxy route as the API transport."""

    def __init__(self, transport: FigmaTransport):
        self.transport = transport

    async def download(self, file_name: str, local_path: str, image_url: str) -> str:
        async with self.transport.build_client() as client:
            return await download_figma_image(file_name, local_path, image_url, client=client)
