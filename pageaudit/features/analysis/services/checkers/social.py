from typing import List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

REQUIRED_OG_TAGS = ("title", "type", "image", "url")
ESSENTIAL_TWITTER_TAGS = ("twitter:title", "twitter:description", "twitter:image")
SHARING_MARKERS = ("social", "share", "facebook", "twitter", "linkedin", "pinterest")

OGP = ("https://ogp.me/", "Open Graph Protocol")
TWITTER_CARDS = (
    "https://developer.twitter.com/en/docs/twitter-for-websites/cards/guides/getting-started",
    "Twitter Cards: Getting Started",
)


def open_graph_tags(nodes: Sequence[Node]) -> List[str]:
    """``og:`` properties present on the page, without their prefix."""
    tags = []
    for node in nodes:
        prop = node.meta("property")
        if prop and prop.startswith("og:"):
            tags.append(prop[len("og:"):])
    return tags


def is_og_image(node: Node) -> bool:
    return node.meta("property") == "og:image" or p.name_has(node, "og:image", "og-image", "opengraph-image")


def is_twitter_image(node: Node) -> bool:
    return node.meta("name") == "twitter:image" or p.name_has(node, "twitter:image", "twitter-image")


class SocialChecker(Checker):
    category = Category.social

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_open_graph(nodes, issues)
        self._check_twitter_cards(nodes, issues)
        self._check_preview_images(nodes, issues)
        self._check_sharing_options(nodes, issues)

        return issues

    def _check_open_graph(self, nodes, issues: List[Issue]) -> None:
        found = open_graph_tags(nodes)
        missing = [tag for tag in REQUIRED_OG_TAGS if tag not in found]

        if len(missing) == len(REQUIRED_OG_TAGS):
            issues.append(self.issue(
                ERROR, CRITICAL,
                "No Open Graph tags found",
                "Add Open Graph tags for better social media sharing",
                resource=OGP,
            ))
        elif missing:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f"Missing required Open Graph tags: {', '.join('og:' + tag for tag in missing)}",
                "Add all required Open Graph tags for optimal social sharing",
                resource=OGP,
            ))

        if "description" not in found:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Missing og:description tag",
                "Add og:description for better social media previews",
                resource=OGP,
            ))

        if "image" in found and "image:alt" not in found:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Missing og:image:alt tag",
                "Add alt text for your Open Graph image",
                resource=OGP,
            ))

    def _check_twitter_cards(self, nodes, issues: List[Issue]) -> None:
        if not any(n.meta("name") == "twitter:card" for n in nodes):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "No Twitter card meta tag found",
                "Add twitter:card meta tag for Twitter sharing",
                resource=TWITTER_CARDS,
            ))
            return

        missing = [
            tag for tag in ESSENTIAL_TWITTER_TAGS
            if not any(n.meta("name") == tag for n in nodes)
        ]
        if missing:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f"Missing Twitter card tags: {', '.join(missing)}",
                "Add all essential Twitter card tags for optimal Twitter sharing",
                resource=TWITTER_CARDS,
            ))

    def _check_preview_images(self, nodes, issues: List[Issue]) -> None:
        og_image = p.find_first(nodes, is_og_image)
        twitter_image = p.find_first(nodes, is_twitter_image)

        if not og_image and not twitter_image:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "No social preview images found",
                "Add social preview images (og:image and twitter:image) to make your content "
                "stand out when shared on social media",
                resource=(
                    "https://blog.hubspot.com/marketing/open-graph-tags-facebook-twitter-linkedin",
                    "How to Use Open Graph Tags for Better Social Sharing",
                ),
            ))
        elif not og_image:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Missing Open Graph image (og:image)",
                "Add an og:image tag for better previews on Facebook, LinkedIn, and other platforms",
                resource=OGP,
            ))
        elif not twitter_image:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Missing Twitter image (twitter:image)",
                "Add a twitter:image tag for better previews on Twitter",
                resource=(
                    "https://developer.twitter.com/en/docs/twitter-for-websites/cards/overview/summary-card-with-large-image",
                    "Twitter Summary Card with Large Image",
                ),
            ))

        # Actual image dimensions are not available to the engine
        if og_image:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Consider optimizing Open Graph image dimensions",
                "Ideal size for Open Graph images is 1200x630 pixels",
                resource=("https://developers.facebook.com/docs/sharing/webmasters/images/", "Facebook Sharing: Images"),
            ))

    def _check_sharing_options(self, nodes, issues: List[Issue]) -> None:
        if not any(p.name_has(n, *SHARING_MARKERS) for n in nodes):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No social sharing options detected",
                "Consider adding social sharing buttons to increase content distribution",
                resource=("https://developers.facebook.com/docs/plugins/share-button", "Facebook: Share Button Plugin"),
            ))
