"""
Head markup parser.

Turns raw markup injected into a page head (``<title>``, ``<meta>``,
``<link>``, ``<script>``, ``<style>`` and the ``<html lang>`` attribute) into
nodes the checkers understand. Tag nodes are named after their rendered
opening tag, e.g. ``link rel="stylesheet" href="/a.css"``, so the name-based
heuristics see the same attributes a reader of the markup would.
"""
import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from pageaudit.features.analysis.schemas.node import Node

logger = logging.getLogger(__name__)

TAG_NAMES = ("title", "meta", "link", "script", "style")


def _attr(tag: Tag, key: str) -> Optional[str]:
    value = tag.get(key)
    if isinstance(value, list):
        return " ".join(value)
    return value


def render_opening_tag(tag: Tag) -> str:
    """``link rel="icon" href="/favicon.ico"``; boolean attributes are rendered bare."""
    parts = [tag.name]
    for key in tag.attrs:
        value = _attr(tag, key)
        parts.append(f'{key}="{value}"' if value else key)
    return " ".join(parts)


def _meta_node(tag: Tag, node_id: str) -> Optional[Node]:
    content = _attr(tag, "content")
    name = _attr(tag, "name")
    prop = _attr(tag, "property")
    http_equiv = _attr(tag, "http-equiv")

    if name:
        return Node(
            id=node_id,
            name=f"meta-{name}",
            type="meta",
            metadata={"name": name, "content": content, "html_tag": "meta"},
        )
    if prop:
        return Node(
            id=node_id,
            name=f"meta-{prop}",
            type="meta",
            metadata={"property": prop, "content": content, "html_tag": "meta"},
        )
    if http_equiv:
        return Node(
            id=node_id,
            name=render_opening_tag(tag),
            type="meta",
            metadata={"name": "http-equiv", "content": content, "http_equiv": http_equiv, "html_tag": "meta"},
        )
    # charset and other attribute-only meta tags carry nothing to check
    return None


def _tag_node(tag: Tag, node_id: str) -> Optional[Node]:
    if tag.name == "title":
        return Node(id=node_id, name="title", type="meta", text=tag.get_text(strip=True))

    if tag.name == "meta":
        return _meta_node(tag, node_id)

    if tag.name == "link":
        return Node(
            id=node_id,
            name=render_opening_tag(tag),
            type="resource",
            rel=_attr(tag, "rel"),
            href=_attr(tag, "href"),
        )

    if tag.name == "script":
        return Node(
            id=node_id,
            name=render_opening_tag(tag),
            type="script",
            href=_attr(tag, "src"),
            text=tag.string.strip() if tag.string else None,
        )

    if tag.name == "style":
        return Node(
            id=node_id,
            name=render_opening_tag(tag),
            type="style",
            text=tag.string.strip() if tag.string else None,
        )

    return None


def parse_head_markup(markup: str) -> List[Node]:
    """
    Parse ``markup`` into nodes, in document order.

    The ``<html lang>`` attribute, when present, becomes a leading
    ``html-lang`` node. Unrecognised tags are ignored.
    """
    soup = BeautifulSoup(markup or "", "html.parser")
    nodes: List[Node] = []

    html = soup.find("html")
    if html is not None and _attr(html, "lang"):
        lang = _attr(html, "lang")
        nodes.append(Node(id="html-lang", name="html-lang", metadata={"lang": lang}))

    counters: Dict[str, int] = {}
    for tag in soup.find_all(TAG_NAMES):
        counters[tag.name] = counters.get(tag.name, 0) + 1
        node = _tag_node(tag, f"{tag.name}-{counters[tag.name]}")
        if node is not None:
            nodes.append(node)

    logger.debug(f"Parsed {len(nodes)} nodes from {len(markup or '')} characters of head markup")
    return nodes
