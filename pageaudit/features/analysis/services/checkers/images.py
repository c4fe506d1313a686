from typing import List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

IMAGE_MARKERS = ("image", "img", "picture", "icon", "photo")
LISTED_MISSING_ALT_LIMIT = 5
SHORT_ALT_LENGTH = 5

GOOGLE_IMAGES = "https://developers.google.com/search/docs/advanced/guidelines/google-images"


def _plural(count: int, singular: str, plural: str) -> str:
    return plural if count > 1 else singular


class ImagesChecker(Checker):
    """
    Image SEO: alt text, filenames, lazy loading and explicit dimensions.

    Any falsy alt, including an explicitly empty one, counts as missing here
    unless the node name carries a ``decorative`` or ``background`` marker.
    """

    category = Category.images

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []
        images = [n for n in nodes if p.looks_like_image(n, IMAGE_MARKERS)]

        if not images:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No images found on the page",
                "Consider adding relevant images to enhance content and SEO",
                resource=(GOOGLE_IMAGES, "Google: Google Images best practices"),
            ))
            return issues

        self._check_alt_text(images, issues)
        self._check_filenames(images, issues)
        self._check_lazy_loading(images, issues)
        self._check_dimensions(images, issues)

        return issues

    def _check_alt_text(self, images, issues: List[Issue]) -> None:
        missing = [n for n in images if not n.alt and not p.has_decorative_marker(n)]

        if missing:
            count = len(missing)
            issues.append(self.issue(
                ERROR, CRITICAL,
                f"{count} image{_plural(count, '', 's')} without alt text",
                "Add descriptive alt text to all non-decorative images for accessibility and SEO",
                element="img",
                resource=(
                    f"{GOOGLE_IMAGES}#use-descriptive-alt-text",
                    "Google: Use descriptive alt text",
                ),
            ))
            for node in missing[:LISTED_MISSING_ALT_LIMIT]:
                issues.append(self.issue(
                    INFO, CRITICAL,
                    f"Image '{node.name}' is missing alt text",
                    "Add descriptive alt text that explains the image content",
                    element=node.name,
                    element_id=node.id,
                ))
            if count > LISTED_MISSING_ALT_LIMIT:
                issues.append(self.issue(
                    INFO, IMPORTANT,
                    f"And {count - LISTED_MISSING_ALT_LIMIT} more images without alt text",
                ))

        short_alt = [
            n for n in images
            if n.alt and len(n.alt) < SHORT_ALT_LENGTH and not p.has_decorative_marker(n)
        ]
        if short_alt:
            count = len(short_alt)
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f"{count} image{_plural(count, ' has', 's have')} very short alt text",
                "Use descriptive alt text that clearly explains the image content",
                element="img",
                resource=("https://moz.com/learn/seo/alt-text", "Moz: Image Alt Text"),
            ))

    def _check_filenames(self, images, issues: List[Issue]) -> None:
        generic = [n for n in images if p.has_generic_filename(n)]
        if generic:
            count = len(generic)
            issues.append(self.issue(
                WARNING, NICE_TO_HAVE,
                f"{count} image{_plural(count, ' has', 's have')} generic filenames",
                "Use descriptive filenames for images (e.g., 'red-sports-car.jpg' instead of 'image1.jpg')",
                resource=(f"{GOOGLE_IMAGES}#file-names", "Google: Choose descriptive filenames"),
            ))

    def _check_lazy_loading(self, images, issues: List[Issue]) -> None:
        if len(images) > 3:
            issues.append(self.issue(
                INFO, IMPORTANT,
                "Multiple images detected - consider implementing lazy loading",
                'Add loading="lazy" attribute to images that appear below the fold',
                resource=(
                    "https://web.dev/browser-level-image-lazy-loading/",
                    "Web.dev: Browser-level image lazy-loading for the web",
                ),
            ))

    def _check_dimensions(self, images, issues: List[Issue]) -> None:
        without_dimensions = [n for n in images if not n.width or not n.height]
        if without_dimensions:
            count = len(without_dimensions)
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f"{count} image{_plural(count, ' lacks', 's lack')} explicit dimensions",
                "Set explicit width and height attributes on images to prevent layout shifts",
                resource=(
                    "https://web.dev/optimize-cls/#images-without-dimensions",
                    "Web.dev: Optimize Cumulative Layout Shift - Images without dimensions",
                ),
            ))
