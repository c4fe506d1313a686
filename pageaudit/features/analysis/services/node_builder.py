"""
Node construction from host data.

The host editor sends its selection as loosely shaped camelCase dicts. These
helpers normalise them into frozen ``Node`` objects before any checker sees
them, and provide the demonstration page served by ``GET /analysis/sample``.
"""
import logging
import re
from typing import Any, Dict, Iterable, Iterator, List, Optional

from pageaudit.features.analysis.schemas.node import Node

logger = logging.getLogger(__name__)

STYLE_KEYS = ("fontSize", "color", "backgroundColor", "width", "height")
NUMERIC_STYLE_KEYS = ("fontSize", "width", "height")

_PIXELS_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*px\s*$")


def _pixels(value: Any) -> Any:
    """``"16px"`` becomes ``16.0``; anything else is left for validation."""
    if isinstance(value, str):
        match = _PIXELS_RE.match(value)
        if match:
            return float(match.group(1))
    return value


def _convert_style(raw: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    style = dict(raw.get("style") or {})
    # Canvas nodes carry their size on the node itself
    for key in ("width", "height"):
        if style.get(key) is None and isinstance(raw.get(key), (int, float)):
            style[key] = raw[key]
    converted = {key: style[key] for key in STYLE_KEYS if style.get(key) is not None}
    for key in NUMERIC_STYLE_KEYS:
        if key in converted:
            converted[key] = _pixels(converted[key])
    # Extra hint keys (e.g. focusRing) are kept for the focus indicator check
    converted.update({k: v for k, v in style.items() if k not in STYLE_KEYS and v is not None})
    return converted or None


def convert_canvas_node(raw: Dict[str, Any]) -> Node:
    """
    Convert one raw canvas node into a ``Node``.

    Missing names become ``"Unknown"``. Alt text may arrive as ``alt`` or
    ``altText``; an explicit empty string is preserved.
    """
    alt = raw.get("alt")
    if alt is None:
        alt = raw.get("altText")

    return Node(
        id=raw.get("id"),
        name=raw.get("name") or "Unknown",
        type=raw.get("type") or None,
        text=raw.get("text") or None,
        alt=alt,
        href=raw.get("href"),
        rel=raw.get("rel"),
        role=raw.get("role"),
        aria_label=raw.get("ariaLabel") or raw.get("aria_label"),
        style=_convert_style(raw),
        metadata=raw.get("metadata") or None,
        children=tuple(convert_canvas_node(child) for child in raw.get("children") or ()),
    )


def iter_flattened(nodes: Iterable[Node]) -> Iterator[Node]:
    """Depth-first, parents before their children."""
    for node in nodes:
        yield node
        yield from iter_flattened(node.children)


def flatten_nodes(nodes: Iterable[Node]) -> List[Node]:
    return list(iter_flattened(nodes))


def build_nodes(selection: Iterable[Dict[str, Any]], flatten: bool = False) -> List[Node]:
    """Convert a host selection; with ``flatten`` nested children are analysed too."""
    nodes = [convert_canvas_node(raw) for raw in selection]
    if flatten:
        nodes = flatten_nodes(nodes)
    logger.debug(f"Built {len(nodes)} nodes from canvas selection (flatten={flatten})")
    return nodes


def sample_nodes() -> List[Node]:
    """A tiny demonstration page used when the host has nothing selected."""
    return [
        Node(
            id="title",
            name="title",
            text="Welcome to our website",
            type="text",
            style={"fontSize": 32},
        ),
        Node(
            id="meta-description",
            name="meta-description",
            metadata={
                "name": "description",
                "content": "This is a sample meta description for demonstration purposes.",
            },
        ),
        Node(id="hero-image", name="hero-image", type="image", alt="Hero image"),
        Node(
            id="heading1",
            name="h1",
            text="Main Heading",
            type="text",
            style={"fontSize": 24},
        ),
        Node(
            id="paragraph1",
            name="paragraph",
            text="This is a sample paragraph with some content for the SEO analyzer to evaluate.",
            type="text",
        ),
    ]
