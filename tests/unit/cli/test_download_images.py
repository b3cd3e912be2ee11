"""Unit tests for download_images.py and get_data.py CLI commands."""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from src.cli.core.error_handler import CLIError
from src.cli.download_images import download_images, parse_node_spec
from src.cli.get_data import get_data
from src.models.image_request import ImageExportRequest, ImageFillRequest
from src.services.figma.service import FigmaService
from src.services.figma.simplifier import SimplifiedDesign, SimplifiedNode


@pytest.fixture
def service():
    """FigmaService double."""
    service = Mock(spec=FigmaService)
    service.get_images = AsyncMock(return_value=[])
    service.get_image_fills = AsyncMock(return_value=[])
    service.get_file = AsyncMock()
    service.get_node = AsyncMock()
    return service


class TestParseNodeSpec:
    """Tests for parse_node_spec()."""

    def test_render_spec(self):
        assert parse_node_spec("1:2:logo.svg") == ImageExportRequest("1:2", "logo.svg", "svg")

    def test_fill_spec(self):
        assert parse_node_spec("1:2:bg.png:8f2e") == ImageFillRequest("1:2", "bg.png", "8f2e")

    def test_instance_node_id_render(self):
        assert parse_node_spec("I5:10;2:3:icon.svg") == ImageExportRequest(
            "I5:10;2:3", "icon.svg", "svg"
        )

    def test_instance_node_id_fill(self):
        assert parse_node_spec("I5:10;2:3:bg.png:8f2e") == ImageFillRequest(
            "I5:10;2:3", "bg.png", "8f2e"
        )

    def test_missing_file_extension(self):
        with pytest.raises(CLIError, match="Expected NODE_ID:FILE_NAME"):
            parse_node_spec("1:2:logo")

    def test_extra_fields_after_image_ref(self):
        with pytest.raises(CLIError, match="Expected NODE_ID:FILE_NAME"):
            parse_node_spec("1:2:bg.png:8f2e:extra")

    def test_malformed_spec(self):
        with pytest.raises(CLIError, match="Expected NODE_ID:FILE_NAME"):
            parse_node_spec("logo.svg")

    def test_unsupported_extension(self):
        with pytest.raises(CLIError, match="Invalid node spec"):
            parse_node_spec("1:2:photo.gif")


class TestDownloadImages:
    """Tests for download_images()."""

    async def test_splits_renders_and_fills(self, service, capsys):
        """Test specs are routed to the matching resolver."""
        service.get_images.return_value = ["/out/logo.svg"]
        service.get_image_fills.return_value = [""]

        saved = await download_images(
            "ABC123", "/out", ["1:2:logo.svg", "3:4:bg.png:ref-x"], service=service
        )

        service.get_images.assert_awaited_once_with(
            "ABC123", [ImageExportRequest("1:2", "logo.svg", "svg")], "/out"
        )
        service.get_image_fills.assert_awaited_once_with(
            "ABC123", [ImageFillRequest("3:4", "bg.png", "ref-x")], "/out"
        )
        assert saved == ["/out/logo.svg"]
        assert "1 node(s) had no image" in capsys.readouterr().out


class TestGetData:
    """Tests for get_data()."""

    @pytest.fixture
    def design(self):
        return SimplifiedDesign(
            name="File",
            last_modified=None,
            thumbnail_url=None,
            nodes=[SimplifiedNode(id="0:1", name="Page", type="CANVAS")],
        )

    async def test_prints_whole_file(self, service, design, capsys):
        service.get_file.return_value = design

        await get_data("ABC123", depth=2, service=service)

        service.get_file.assert_awaited_once_with("ABC123", 2)
        assert json.loads(capsys.readouterr().out)["name"] == "File"

    async def test_node_written_to_output(self, service, design, tmp_path):
        service.get_node.return_value = design
        output = tmp_path / "design.json"

        await get_data("ABC123", node_id="0:1", output=str(output), service=service)

        service.get_node.assert_awaited_once_with("ABC123", "0:1", None)
        assert json.loads(output.read_text(encoding="utf-8"))["nodes"][0]["id"] == "0:1"
