"""Image request models for Figma asset export.

ImageExportRequest renders a node server-side; ImageFillRequest resolves an
image already attached to a node as a fill.
"""

from dataclasses import dataclass
from pathlib import PurePath
from src.lib.constants import ALL_IMAGE_FORMATS, IMAGE_FORMATS_LITERAL


def _validate_file_name(file_name: str) -> None:
    if not file_name:
        raise ValueError("file_name cannot be empty")
    if PurePath(file_name).name != file_name:
        raise ValueError(f"file_name '{file_name}' must not contain a directory")


@dataclass(frozen=True)
class ImageExportRequest:
    """A node to render and save under file_name."""

    node_id: str
    file_name: str
    file_type: IMAGE_FORMATS_LITERAL

    @classmethod
    def from_file_name(cls, node_id: str, file_name: str) -> "ImageExportRequest":
        """Build a request, taking the format from the file extension.

        Args:
            node_id: Figma node id (e.g. "1:2")
            file_name: Local file name ending in .png or .svg

        Returns:
            ImageExportRequest instance

        Raises:
            ValueError: If the extension is not a supported format
        """
        file_type = PurePath(file_name).suffix.lstrip(".").lower()
        request = cls(node_id=node_id, file_name=file_name, file_type=file_type)  # type: ignore[arg-type]
        request.validate()
        return request

    def validate(self) -> None:
        """Validate ImageExportRequest fields.

        Raises:
            ValueError: If validation fails
        """
        if not self.node_id:
            raise ValueError("node_id cannot be empty")

        _validate_file_name(self.file_name)

        if self.file_type not in ALL_IMAGE_FORMATS:
            raise ValueError(
                f"file_type must be one of {ALL_IMAGE_FORMATS}, got '{self.file_type}'"
            )


@dataclass(frozen=True)
class ImageFillRequest:
    """A fill image, keyed by image_ref, to save under file_name."""

    node_id: str
    file_name: str
    image_ref: str

    def validate(self) -> None:
        """Validate ImageFillRequest fields.

        Raises:
            ValueError: If validation fails
        """
        if not self.node_id:
            raise ValueError("node_id cannot be empty")

        _validate_file_name(self.file_name)

        if not self.image_ref:
            raise ValueError("image_ref cannot be empty")
