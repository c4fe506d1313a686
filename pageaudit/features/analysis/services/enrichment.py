"""
Visual enrichment of issues.

After a checker runs, issues that point at a node of the analysed list can be
decorated with the node's on-canvas position and a preview image. Both come
from the host editor through a ``HostBridge``; every call is best effort and
bounded by ``ENRICHMENT_TIMEOUT_SECONDS``.
"""
import asyncio
import base64
import logging
import zlib
from html import escape
from typing import Optional, Protocol, Sequence

from pageaudit.features.analysis.schemas.issue import Issue, Rect
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.cancellation import checkpoint
from pageaudit.features.analysis.services.node_builder import iter_flattened
from pageaudit.platform.config import settings

logger = logging.getLogger(__name__)

PLACEHOLDER_COLORS = ("#FF5733", "#33FF57", "#3357FF", "#F3FF33")
PLACEHOLDER_WIDTH = 200
PLACEHOLDER_HEIGHT = 100


class HostBridge(Protocol):
    """Capabilities the host editor exposes for a node id."""

    async def get_bounding_box(self, node_id: str) -> Optional[Rect]:
        ...

    async def get_preview_image(self, node_id: str) -> Optional[str]:
        ...


def placeholder_preview(node_id: str, rect: Optional[Rect] = None) -> str:
    """
    Deterministic SVG data URI standing in for a real element screenshot.

    The fill colour is derived from a checksum of ``node_id`` so the same
    node always renders the same placeholder.
    """
    color = PLACEHOLDER_COLORS[zlib.crc32(node_id.encode("utf-8")) % len(PLACEHOLDER_COLORS)]
    lines = [f"Element ID: {node_id[:8]}..."]
    if rect is not None:
        lines.append(f"Size: {round(rect.width)}×{round(rect.height)}")
        lines.append(f"Position: ({round(rect.x)}, {round(rect.y)})")

    text = "".join(
        f'<text x="10" y="{30 + 20 * i}" font-family="sans-serif" font-size="14" fill="#000000">'
        f"{escape(line)}</text>"
        for i, line in enumerate(lines)
    )
    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{PLACEHOLDER_WIDTH}" height="{PLACEHOLDER_HEIGHT}">'
        f'<rect width="{PLACEHOLDER_WIDTH}" height="{PLACEHOLDER_HEIGHT}" fill="{color}"/>'
        f"{text}</svg>"
    )
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


class IssueEnricher:
    """Sets ``element_position`` and ``preview_image`` on issues tied to known nodes."""

    def __init__(self, bridge: HostBridge, timeout: Optional[float] = None):
        self.bridge = bridge
        self.timeout = settings.ENRICHMENT_TIMEOUT_SECONDS if timeout is None else timeout

    async def enrich(
        self,
        issues: Sequence[Issue],
        nodes: Sequence[Node],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        """
        Enrich ``issues`` in place, one at a time in list order.

        Issues without an element id, or whose id matches no node (children
        included), are left untouched. Host failures and timeouts are logged and skipped.
        """
        node_ids = {node.id for node in iter_flattened(nodes) if node.id}

        for issue in issues:
            if not issue.element_id or issue.element_id not in node_ids:
                continue

            await checkpoint(cancel_event)
            rect = await self._bounding_box(issue.element_id)
            if rect is not None:
                issue.element_position = rect

            await checkpoint(cancel_event)
            issue.preview_image = await self._preview_image(issue.element_id, rect)

    async def _bounding_box(self, node_id: str) -> Optional[Rect]:
        try:
            return await asyncio.wait_for(self.bridge.get_bounding_box(node_id), self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out fetching bounding box for node {node_id}")
        except Exception as e:
            logger.warning(f"Failed to fetch bounding box for node {node_id}: {str(e)}")
        return None

    async def _preview_image(self, node_id: str, rect: Optional[Rect]) -> Optional[str]:
        try:
            preview = await asyncio.wait_for(self.bridge.get_preview_image(node_id), self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out fetching preview image for node {node_id}")
            return None
        except Exception as e:
            logger.warning(f"Failed to fetch preview image for node {node_id}: {str(e)}")
            return None

        return preview or placeholder_preview(node_id, rect)
