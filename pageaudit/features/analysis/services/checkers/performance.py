from typing import List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

MAX_SCRIPTS = 15
MAX_SYNC_SCRIPTS = 5
MAX_UNOPTIMIZED_IMAGES = 3
MAX_BLOCKING_STYLESHEETS = 3


def _is_async_script(node: Node) -> bool:
    return p.name_has(node, "defer", "async")


class PerformanceChecker(Checker):
    category = Category.performance

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_javascript(nodes, issues)
        self._check_image_optimization(nodes, issues)
        self._check_minification(nodes, issues)
        self._check_critical_rendering_path(nodes, issues)
        self._check_render_blocking(nodes, issues)

        return issues

    def _check_javascript(self, nodes, issues: List[Issue]) -> None:
        scripts = [n for n in nodes if p.looks_like_script(n)]

        if len(scripts) > MAX_SCRIPTS:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f"High number of JavaScript resources ({len(scripts)})",
                "Reduce the number of JavaScript files by bundling them together or removing unnecessary scripts",
                resource=("https://web.dev/optimize-javascript-execution/", "Web.dev: Optimize JavaScript execution"),
            ))

        if len([n for n in scripts if not _is_async_script(n)]) > MAX_SYNC_SCRIPTS:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Multiple synchronous JavaScript resources",
                "Use defer or async attributes for non-critical JavaScript to improve page load time",
                resource=(
                    "https://web.dev/efficiently-load-third-party-javascript/",
                    "Web.dev: Efficiently load third-party JavaScript",
                ),
            ))

    def _check_image_optimization(self, nodes, issues: List[Issue]) -> None:
        images = [n for n in nodes if p.looks_like_image(n, ("image", "img"))]

        if len([n for n in images if ".webp" not in n.lower_name]) > MAX_UNOPTIMIZED_IMAGES:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Consider using WebP image format",
                "Convert images to WebP format for better compression and faster loading",
                resource=("https://web.dev/serve-images-webp/", "Web.dev: Serve images in next-gen formats"),
            ))

        if len([n for n in images if not p.name_has(n, "srcset", "sizes")]) > MAX_UNOPTIMIZED_IMAGES:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Non-responsive images detected",
                "Use srcset and sizes attributes for responsive images to optimize for different devices",
                resource=("https://web.dev/serve-responsive-images/", "Web.dev: Serve responsive images"),
            ))

    def _check_minification(self, nodes, issues: List[Issue]) -> None:
        css = [n for n in nodes if p.looks_like_stylesheet(n)]
        js = [n for n in nodes if n.type == "script" or p.name_has(n, "script", ".js")]

        if any(not p.name_has(n, ".min.css", "minified") for n in css):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Potentially unminified CSS resources",
                "Minify CSS files to reduce file size and improve load times",
                resource=("https://web.dev/minify-css/", "Web.dev: Minify CSS"),
            ))

        if any(not p.name_has(n, ".min.js", "minified") for n in js):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Potentially unminified JavaScript resources",
                "Minify JavaScript files to reduce file size and improve load times",
                resource=("https://web.dev/unminified-javascript/", "Web.dev: Minify JavaScript"),
            ))

    def _check_critical_rendering_path(self, nodes, issues: List[Issue]) -> None:
        if not any("style" in n.lower_name and "link" not in n.lower_name for n in nodes):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No inline critical CSS found",
                "Consider inlining critical CSS to improve above-the-fold content rendering",
                resource=("https://web.dev/extract-critical-css/", "Web.dev: Extract critical CSS"),
            ))

        if not any(p.name_has(n, "preload", "prefetch") for n in nodes):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No resource preloading detected",
                "Use preload for critical resources and prefetch for resources needed for future navigations",
                resource=("https://web.dev/preload-critical-assets/", "Web.dev: Preload critical assets"),
            ))

    def _check_render_blocking(self, nodes, issues: List[Issue]) -> None:
        blocking_css = [
            n for n in nodes
            if (n.type == "style" or p.name_has_all(n, "link", "stylesheet"))
            and "media=" not in n.lower_name
        ]
        if len(blocking_css) > MAX_BLOCKING_STYLESHEETS:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Multiple render-blocking CSS resources",
                "Use media queries to make non-critical CSS non-render-blocking",
                resource=("https://web.dev/defer-non-critical-css/", "Web.dev: Defer non-critical CSS"),
            ))

        if any(n.type == "script" and not _is_async_script(n) for n in nodes):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Render-blocking scripts detected",
                "Move scripts to the end of the body or use async/defer attributes",
                resource=("https://web.dev/render-blocking-resources/", "Web.dev: Eliminate render-blocking resources"),
            ))
