"""Figma retrieval and asset export.

Public API:
    FigmaService: File/node retrieval, image export and fill download
    FigmaTransport: Authenticated, proxy-aware request layer
    parse_figma_response: Raw document -> SimplifiedDesign
"""

from .errors import CapabilityError, FigmaError, ServiceError, TransportError, UnknownError
from .service import FigmaService
from .simplifier import SimplifiedDesign, SimplifiedNode, parse_figma_response
from .transport import FigmaTransport

__all__ = [
    "CapabilityError",
    "FigmaError",
    "FigmaService",
    "FigmaTransport",
    "ServiceError",
    "SimplifiedDesign",
    "SimplifiedNode",
    "TransportError",
    "UnknownError",
    "parse_figma_response",
]
