from typing import List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

MIN_TAP_TARGET = 48
MIN_MOBILE_FONT_SIZE = 16
ZOOM_BLOCKERS = ("user-scalable=no", "maximum-scale=1")
MEDIA_QUERY_MARKERS = ("@media", "media=", "media query", "responsive")

GOOGLE_RESPONSIVE = (
    "https://developers.google.com/search/mobile-sites/mobile-seo/responsive-design",
    "Google: Responsive design",
)
WEB_DEV_TAP_TARGETS = ("https://web.dev/tap-targets/", "Web.dev: Tap targets are sized appropriately")


def is_tap_target(node: Node) -> bool:
    return not p.is_head_resource(node) and (
        node.type == "button"
        or (node.type == "a" and bool(node.href))
        or p.name_has(node, "button", "link", "clickable")
    )


class MobileChecker(Checker):
    """Viewport, tap targets, font sizing and responsive layout hints."""

    category = Category.mobile

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_viewport(nodes, issues)
        self._check_tap_targets(nodes, issues)
        self._check_font_sizing(nodes, issues)
        self._check_media_queries(nodes, issues)
        self._check_layout(nodes, issues)

        return issues

    def _check_viewport(self, nodes, issues: List[Issue]) -> None:
        viewport = p.find_first(nodes, lambda n: p.is_meta_tag(n, "viewport"))

        if not viewport:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Missing viewport meta tag",
                "Add a viewport meta tag for proper mobile rendering: "
                "<meta name='viewport' content='width=device-width, initial-scale=1'>",
                resource=("https://web.dev/responsive-web-design-basics/#set-the-viewport", "Web.dev: Set the viewport"),
            ))
            return

        content = viewport.meta("content") or ""

        if "width=device-width" not in content:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Viewport meta tag missing width=device-width",
                "Add width=device-width to your viewport meta tag for responsive design",
                resource=GOOGLE_RESPONSIVE,
            ))

        if "initial-scale=1" not in content:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Viewport meta tag missing initial-scale=1",
                "Add initial-scale=1 to your viewport meta tag for proper scaling",
                resource=GOOGLE_RESPONSIVE,
            ))

        if any(blocker in content for blocker in ZOOM_BLOCKERS):
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Viewport prevents zooming",
                "Remove user-scalable=no, maximum-scale=1, or similar restrictions to allow users to zoom",
                resource=("https://web.dev/meta-viewport/", "Web.dev: Accessible viewport"),
            ))

    def _check_tap_targets(self, nodes, issues: List[Issue]) -> None:
        targets = [n for n in nodes if is_tap_target(n)]

        small = [
            n for n in targets
            if 0 < n.width < MIN_TAP_TARGET or 0 < n.height < MIN_TAP_TARGET
        ]
        if small:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f"{len(small)} small tap targets detected",
                "Ensure tap targets are at least 48x48px in size with adequate spacing",
                resource=WEB_DEV_TAP_TARGETS,
            ))

        # Positions are unknown, so any two sized targets may sit too close together
        sized = [n for n in targets if n.width and n.height]
        if len(sized) >= 2:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Potentially crowded tap targets",
                "Ensure at least 8px of space between tap targets for better usability",
                resource=WEB_DEV_TAP_TARGETS,
            ))

    def _check_font_sizing(self, nodes, issues: List[Issue]) -> None:
        text_nodes = [n for n in nodes if p.looks_like_text(n)]

        small = [n for n in text_nodes if 0 < n.font_size < MIN_MOBILE_FONT_SIZE]
        if small:
            count = len(small)
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f"{count} text element{'s' if count > 1 else ''} with small font size",
                "Use a minimum font size of 16px for body text to ensure readability on mobile devices",
                resource=("https://web.dev/font-size/", "Web.dev: Ensure text remains visible during font loading"),
            ))

        px_sized = [
            n for n in text_nodes
            if n.font_size > 0 and "px" in n.lower_name and not p.name_has(n, "em", "rem", "vw")
        ]
        if len(px_sized) > 3:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Consider using relative font sizes",
                "Use relative units like em, rem, or vw instead of px for better scaling across devices",
                resource=("https://web.dev/responsive-web-design-basics/#responsive-text", "Web.dev: Responsive text"),
            ))

    def _check_media_queries(self, nodes, issues: List[Issue]) -> None:
        style_nodes = [n for n in nodes if p.looks_like_stylesheet(n)]

        def has_media_query(node: Node) -> bool:
            text = (node.text or "").lower()
            return any(m in node.lower_name or m in text for m in MEDIA_QUERY_MARKERS)

        if style_nodes and not any(has_media_query(n) for n in style_nodes):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "No media queries detected",
                "Use media queries to adapt your layout for different screen sizes",
                resource=("https://web.dev/responsive-web-design-basics/#media-queries", "Web.dev: Media queries"),
            ))

    def _check_layout(self, nodes, issues: List[Issue]) -> None:
        fixed_width = [
            n for n in nodes
            if n.width > 600
            and not p.name_has(n, "%", "vw")
            and p.name_has(n, "container", "wrapper", "layout", "section")
        ]
        if fixed_width:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Fixed-width layout detected",
                "Use percentage or viewport-relative units for width instead of fixed pixel values",
                resource=("https://web.dev/responsive-web-design-basics/#flexible-images", "Web.dev: Flexible grids"),
            ))

        overflowing = [
            n for n in nodes
            if n.width > 480 and p.name_has(n, "table", "gallery", "slider", "horizontal")
        ]
        if overflowing:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Potential horizontal scrolling issues",
                "Ensure content doesn't overflow the viewport by using responsive techniques for wide content",
                resource=("https://web.dev/content-width/", "Web.dev: Content fits the viewport"),
            ))

        click_only = [n for n in nodes if "click" in n.lower_name and "touch" not in n.lower_name]
        if len(click_only) > 3:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Consider implementing touch events",
                "Ensure interactive elements respond to touch events, not just mouse events",
                resource=("https://web.dev/touch-events/", "Web.dev: Touch events"),
            ))
