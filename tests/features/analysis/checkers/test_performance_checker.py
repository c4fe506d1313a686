from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers.performance import PerformanceChecker

PAGE_LEVEL = [
    "No inline critical CSS found",
    "No resource preloading detected",
]


def messages(issues):
    return [issue.message for issue in issues]


class TestPerformanceChecker:
    """Resource loading rules"""

    def test_empty_page(self):
        assert messages(PerformanceChecker().analyze([])) == PAGE_LEVEL

    def test_optimised_head(self):
        nodes = [
            Node(name="inline-style minified", type="style", text="body{margin:0}"),
            Node(name='link rel="preload" href="/fonts/serif.woff2"', type="link"),
            Node(name='script src="/app.min.js" defer', type="script", href="/app.min.js"),
        ]
        assert PerformanceChecker().analyze(nodes) == []

    def test_many_synchronous_scripts(self):
        nodes = [Node(name=f"script-{i}.min.js", type="script") for i in range(16)]
        found = messages(PerformanceChecker().analyze(nodes))

        assert "High number of JavaScript resources (16)" in found
        assert "Multiple synchronous JavaScript resources" in found
        assert "Render-blocking scripts detected" in found

    def test_unoptimised_images(self):
        nodes = [Node(name=f"gallery-image-{i}.jpg", type="image") for i in range(4)]
        found = messages(PerformanceChecker().analyze(nodes))

        assert "Consider using WebP image format" in found
        assert "Non-responsive images detected" in found

    def test_unminified_resources(self):
        nodes = [
            Node(name='link rel="stylesheet" href="/site.css"', type="link", rel="stylesheet"),
            Node(name='script src="/site.js"', type="script", href="/site.js"),
        ]
        found = messages(PerformanceChecker().analyze(nodes))

        assert "Potentially unminified CSS resources" in found
        assert "Potentially unminified JavaScript resources" in found

    def test_render_blocking_stylesheets(self):
        nodes = [
            Node(name=f'link rel="stylesheet" href="/s{i}.min.css"', type="link", rel="stylesheet")
            for i in range(4)
        ]
        assert "Multiple render-blocking CSS resources" in messages(PerformanceChecker().analyze(nodes))
