"""Figma document simplifier.

Converts the raw Figma document tree into SimplifiedDesign: a smaller tree
keeping only what downstream tooling needs to rebuild a layout (geometry,
text, colors, image references).

Accepts both response shapes:
    GET /files/{key}        -> {"name", "document": {"children": [...]}, ...}
    GET /files/{key}/nodes  -> {"name", "nodes": {id: {"document": {...}}}, ...}
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class BoundingBox:
    """Absolute position and size of a node."""

    x: float
    y: float
    width: float
    height: float


@dataclass
class TextStyle:
    """Typography of a TEXT node."""

    font_family: str | None = None
    font_weight: int | None = None
    font_size: float | None = None
    line_height_px: float | None = None
    letter_spacing: float | None = None
    text_align_horizontal: str | None = None
    text_align_vertical: str | None = None


@dataclass
class SimplifiedNode:
    """One visible node of the design tree."""

    id: str
    name: str
    type: str
    bounding_box: BoundingBox | None = None
    text: str | None = None
    text_style: TextStyle | None = None
    fills: list[str] = field(default_factory=list)
    strokes: list[str] = field(default_factory=list)
    stroke_weight: float | None = None
    opacity: float | None = None
    border_radius: str | None = None
    image_refs: list[str] = field(default_factory=list)
    children: list["SimplifiedNode"] = field(default_factory=list)


@dataclass
class SimplifiedDesign:
    """Simplified view of a Figma file or node subset."""

    name: str
    last_modified: str | None
    thumbnail_url: str | None
    nodes: list[SimplifiedNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-ready dict, dropping empty fields."""
        return _prune(asdict(self))


def _prune(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: _prune(item)
            for key, item in value.items()
            if item is not None and item != [] and item != {}
        }
    if isinstance(value, list):
        return [_prune(item) for item in value]
    return value


def format_color(color: dict[str, float], opacity: float = 1.0) -> str:
    """Format a Figma RGBA color (0-1 floats) as hex or rgba().

    Args:
        color: Figma color dict with r, g, b, a
        opacity: Paint opacity multiplied into alpha

    Returns:
        "#RRGGBB" when opaque, "rgba(r, g, b, a)" otherwise
    """
    r, g, b = (round(color.get(channel, 0) * 255) for channel in ("r", "g", "b"))
    alpha = round(color.get("a", 1) * opacity, 2)

    if alpha >= 1:
        return f"#{r:02X}{g:02X}{b:02X}"
    return f"rgba({r}, {g}, {b}, {alpha})"


def _simplify_paints(paints: list[dict[str, Any]]) -> tuple[list[str], list[str]]:
    colors = []
    image_refs = []

    for paint in paints:
        if not paint.get("visible", True):
            continue
        if paint.get("type") == "SOLID" and "color" in paint:
            colors.append(format_color(paint["color"], paint.get("opacity", 1.0)))
        elif paint.get("type") == "IMAGE" and paint.get("imageRef"):
            image_refs.append(paint["imageRef"])

    return colors, image_refs


def _border_radius(node: dict[str, Any]) -> str | None:
    corners = node.get("rectangleCornerRadii")
    if corners and len(set(corners)) > 1:
        return " ".join(f"{radius:g}px" for radius in corners)

    radius = node.get("cornerRadius")
    if radius:
        return f"{radius:g}px"
    return None


def _text_style(style: dict[str, Any]) -> TextStyle:
    return TextStyle(
        font_family=style.get("fontFamily"),
        font_weight=style.get("fontWeight"),
        font_size=style.get("fontSize"),
        line_height_px=style.get("lineHeightPx"),
        letter_spacing=style.get("letterSpacing"),
        text_align_horizontal=style.get("textAlignHorizontal"),
        text_align_vertical=style.get("textAlignVertical"),
    )


def simplify_node(node: dict[str, Any]) -> SimplifiedNode | None:
    """Simplify one raw node and its subtree.

    Args:
        node: Raw Figma node

    Returns:
        SimplifiedNode, or None when the node is hidden
    """
    if not node.get("visible", True):
        return None

    simplified = SimplifiedNode(
        id=node.get("id", ""),
        name=node.get("name", ""),
        type=node.get("type", ""),
    )

    box = node.get("absoluteBoundingBox")
    if box:
        simplified.bounding_box = BoundingBox(
            x=box.get("x", 0),
            y=box.get("y", 0),
            width=box.get("width", 0),
            height=box.get("height", 0),
        )

    if node.get("type") == "TEXT":
        simplified.text = node.get("characters")
        if node.get("style"):
            simplified.text_style = _text_style(node["style"])

    simplified.fills, simplified.image_refs = _simplify_paints(node.get("fills", []))
    simplified.strokes, _ = _simplify_paints(node.get("strokes", []))
    if simplified.strokes:
        simplified.stroke_weight = node.get("strokeWeight")

    opacity = node.get("opacity")
    if opacity is not None and opacity != 1:
        simplified.opacity = opacity

    simplified.border_radius = _border_radius(node)

    for child in node.get("children", []):
        child_node = simplify_node(child)
        if child_node is not None:
            simplified.children.append(child_node)

    return simplified


def parse_figma_response(data: dict[str, Any]) -> SimplifiedDesign:
    """Simplify a whole-file or node-subset response.

    Args:
        data: Raw response body of /files/{key} or /files/{key}/nodes

    Returns:
        SimplifiedDesign
    """
    if "nodes" in data:
        # Unknown ids come back as null entries
        roots = [
            entry["document"]
            for entry in (data.get("nodes") or {}).values()
            if entry and entry.get("document")
        ]
    else:
        roots = (data.get("document") or {}).get("children", [])

    nodes = [simplified for simplified in map(simplify_node, roots) if simplified is not None]

    return SimplifiedDesign(
        name=data.get("name", ""),
        last_modified=data.get("lastModified"),
        thumbnail_url=data.get("thumbnailUrl"),
        nodes=nodes,
    )
