"""CLI command to fetch a simplified Figma design as JSON.

Usage:
    python -m src.cli get-data ABC123xyz
    python -m src.cli get-data ABC123xyz --node-id 1:2 --depth 2 --output design.json
"""

import json
from pathlib import Path

from src.cli.core.service_factory import ServiceFactory
from src.lib.logging import get_logger
from src.services.figma.service import FigmaService
from src.services.figma.simplifier import SimplifiedDesign

logger = get_logger(__name__)


async def fetch_design(
    service: FigmaService,
    file_key: str,
    node_id: str | None = None,
    depth: int | None = None,
) -> SimplifiedDesign:
    """Fetch a whole file, or one node subtree when node_id is given."""
    if node_id:
        return await service.get_node(file_key, node_id, depth)
    return await service.get_file(file_key, depth)


async def get_data(
    file_key: str,
    node_id: str | None = None,
    depth: int | None = None,
    output: str | None = None,
    service: FigmaService | None = None,
) -> None:
    """Fetch a design and print or save it (CLI entry point).

    Args:
        file_key: Figma file key
        node_id: Optional node id to fetch instead of the whole file
        depth: Optional traversal depth
        output: Optional path to write JSON to (stdout otherwise)
        service: Service override (built from config otherwise)
    """
    service = service or ServiceFactory.create_figma_service()
    design = await fetch_design(service, file_key, node_id, depth)

    payload = json.dumps(design.to_dict(), indent=2)

    if output:
        Path(output).write_text(payload, encoding="utf-8")
        logger.info(f"Wrote simplified design to {output}")
        print(f"✅ Saved {len(design.nodes)} top-level nodes to {output}")
    else:
        print(payload)
