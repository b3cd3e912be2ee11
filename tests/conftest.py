"""Shared pytest fixtures for all tests."""

from unittest.mock import AsyncMock, Mock

import pytest

from src.lib.config import Config
from src.services.figma.diagnostics import DiagnosticsSink
from src.services.figma.service import FigmaService
from src.services.figma.transport import FigmaTransport

TEST_API_KEY = "figd_test-token-123"


@pytest.fixture
def config():
    """Config with a direct connection and diagnostics off."""
    return Config(figma_api_key=TEST_API_KEY, proxy_host="", app_env="production")


@pytest.fixture
def recording_logger():
    """Logger double that records every call."""
    return Mock()


@pytest.fixture
def raw_file_response():
    """Minimal GET /files/{key} response."""
    return {
        "name": "Landing Page",
        "lastModified": "2024-05-01T10:00:00Z",
        "thumbnailUrl": "https://s3.example.com/thumb.png",
        "document": {
            "id": "0:0",
            "name": "Document",
            "type": "DOCUMENT",
            "children": [
                {
                    "id": "0:1",
                    "name": "Page 1",
                    "type": "CANVAS",
                    "children": [
                        {
                            "id": "1:2",
                            "name": "Hero",
                            "type": "FRAME",
                            "absoluteBoundingBox": {"x": 0, "y": 0, "width": 1440, "height": 900},
                            "fills": [
                                {"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1, "a": 1}},
                                {"type": "IMAGE", "imageRef": "img-hero-bg"},
                            ],
                            "cornerRadius": 8,
                            "children": [
                                {
                                    "id": "1:3",
                                    "name": "Title",
                                    "type": "TEXT",
                                    "characters": "Welcome",
                                    "style": {
                                        "fontFamily": "Inter",
                                        "fontWeight": 700,
                                        "fontSize": 48,
                                        "lineHeightPx": 56,
                                        "textAlignHorizontal": "CENTER",
                                    },
                                    "fills": [
                                        {"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0, "a": 1}}
                                    ],
                                },
                                {
                                    "id": "1:4",
                                    "name": "Hidden badge",
                                    "type": "RECTANGLE",
                                    "visible": False,
                                },
                            ],
                        }
                    ],
                }
            ],
        },
    }


@pytest.fixture
def raw_nodes_response(raw_file_response):
    """GET /files/{key}/nodes response wrapping the same page."""
    page = raw_file_response["document"]["children"][0]
    return {
        "name": "Landing Page",
        "lastModified": "2024-05-01T10:00:00Z",
        "thumbnailUrl": "https://s3.example.com/thumb.png",
        "nodes": {"0:1": {"document": page, "components": {}, "styles": {}}},
    }


@pytest.fixture
def mock_transport():
    """FigmaTransport double; tests set request.side_effect/return_value."""
    transport = Mock(spec=FigmaTransport)
    transport.request = AsyncMock(return_value={})
    return transport


@pytest.fixture
def mock_download():
    """Download primitive double returning local_path/file_name."""

    async def fake_download(file_name, local_path, image_url):
        return f"{local_path}/{file_name}"

    return AsyncMock(side_effect=fake_download)


@pytest.fixture
def mock_diagnostics():
    """DiagnosticsSink double."""
    return Mock(spec=DiagnosticsSink)


@pytest.fixture
def figma_service(config, recording_logger, mock_transport, mock_download, mock_diagnostics):
    """FigmaService wired to doubles only."""
    return FigmaService(
        TEST_API_KEY,
        config,
        logger=recording_logger,
        transport=mock_transport,
        download=mock_download,
        diagnostics=mock_diagnostics,
    )
