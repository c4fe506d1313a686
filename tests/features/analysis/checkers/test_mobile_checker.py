from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers.mobile import MobileChecker, is_tap_target

VIEWPORT = Node(name="meta-viewport", metadata={"name": "viewport", "content": "width=device-width, initial-scale=1"})


def messages(issues):
    return [issue.message for issue in issues]


class TestMobileChecker:
    """Responsive and touch rules"""

    def test_good_viewport_and_nothing_else(self):
        assert MobileChecker().analyze([VIEWPORT]) == []

    def test_missing_viewport(self):
        assert messages(MobileChecker().analyze([])) == ["Missing viewport meta tag"]

    def test_incomplete_viewport_blocks_zoom(self):
        node = Node(name="meta-viewport", metadata={"name": "viewport", "content": "maximum-scale=1, user-scalable=no"})
        assert messages(MobileChecker().analyze([node])) == [
            "Viewport meta tag missing width=device-width",
            "Viewport meta tag missing initial-scale=1",
            "Viewport prevents zooming",
        ]

    def test_tap_target_detection(self):
        assert is_tap_target(Node(type="button"))
        assert is_tap_target(Node(type="a", href="/shop"))
        assert is_tap_target(Node(name="clickable-card"))
        assert not is_tap_target(Node(type="a"))

    def test_small_and_crowded_tap_targets(self):
        nodes = [
            VIEWPORT,
            Node(name="cart-button", style={"width": 32, "height": 32}),
            Node(name="menu-button", style={"width": 64, "height": 48}),
        ]
        assert messages(MobileChecker().analyze(nodes)) == [
            "1 small tap targets detected",
            "Potentially crowded tap targets",
        ]

    def test_small_font(self):
        nodes = [VIEWPORT, Node(name="caption", type="text", style={"fontSize": 12})]
        assert messages(MobileChecker().analyze(nodes)) == ["1 text element with small font size"]

    def test_stylesheet_without_media_queries(self):
        nodes = [VIEWPORT, Node(name="main.css", type="style", text="body { margin: 0 }")]
        assert "No media queries detected" in messages(MobileChecker().analyze(nodes))

    def test_stylesheet_with_media_queries(self):
        nodes = [VIEWPORT, Node(name="main.css", type="style", text="@media (max-width: 600px) { body { margin: 0 } }")]
        assert "No media queries detected" not in messages(MobileChecker().analyze(nodes))

    def test_fixed_width_and_overflow(self):
        nodes = [
            VIEWPORT,
            Node(name="page-container", style={"width": 960}),
            Node(name="product-gallery", style={"width": 720}),
        ]
        found = messages(MobileChecker().analyze(nodes))

        assert "Fixed-width layout detected" in found
        assert "Potential horizontal scrolling issues" in found
