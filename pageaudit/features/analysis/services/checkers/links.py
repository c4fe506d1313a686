from typing import Dict, List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

PLACEHOLDER_HREFS = ("#", "javascript:void(0)")
PLACEHOLDER_MARKERS = ("example.com", "placeholder", "dummy", "test", ".temp")
GENERIC_LINK_PHRASES = ("click here", "read more", "learn more", "more info", "details", "link")
SPAM_DOMAIN_MARKERS = ("casino", "pharma", "pills", "betting", "loan", "kredit", "xxx")
MIN_INTERNAL_LINKS = 3

MOZ_INTERNAL = ("https://moz.com/learn/seo/internal-link", "Moz: Internal Links")
WEB_DEV_LINK_TEXT = ("https://web.dev/learn/accessibility/links/", "Web.dev: Links and accessibility")


def _is_link_for_internal_count(node: Node) -> bool:
    if p.is_head_resource(node):
        return False
    return bool(node.href) or "link" in node.lower_name or node.role == "link"


class LinksChecker(Checker):
    """
    Link hygiene without network access.

    Reachability is never tested; hrefs are judged by shape only.
    """

    category = Category.links

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_broken_links(nodes, issues)
        self._check_link_text(nodes, issues)
        self._check_external_links(nodes, issues)
        self._check_internal_linking(nodes, issues)

        return issues

    def _check_broken_links(self, nodes, issues: List[Issue]) -> None:
        links = [n for n in nodes if p.looks_like_link(n)]

        if not links:
            issues.append(self.issue(
                INFO, IMPORTANT,
                "No links detected on the page",
                "Consider adding internal and external links to improve navigation and SEO",
                resource=MOZ_INTERNAL,
            ))
            return

        for node in links:
            href = node.href or ""

            if not href:
                issues.append(self.issue(
                    ERROR, CRITICAL,
                    f'Empty href in link "{node.name}"',
                    "Add a valid URL to all links",
                    element=node.name,
                    element_id=node.id,
                    resource=("https://web.dev/learn/html/links/#href", "Web.dev: Link href attribute"),
                ))
                continue

            if href in PLACEHOLDER_HREFS:
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    f'Placeholder link href="{href}" in "{node.name}"',
                    "Replace placeholder links with valid URLs or use buttons for JavaScript actions",
                    element=node.name,
                    element_id=node.id,
                    resource=("https://web.dev/learn/html/links/#javascript-links", "Web.dev: JavaScript links"),
                ))
                continue

            if any(marker in href for marker in PLACEHOLDER_MARKERS):
                issues.append(self.issue(
                    WARNING, CRITICAL,
                    f"Potentially broken link: {href}",
                    "Replace example/placeholder URLs with actual valid links",
                    element=node.name,
                    element_id=node.id,
                    resource=(
                        "https://developers.google.com/search/docs/crawling-indexing/links-crawlable",
                        "Google: Ensure your links are crawlable",
                    ),
                ))

            if p.parse_absolute_url(href) is None and not p.is_relative_href(href):
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    f"Potentially malformed URL: {href}",
                    "Ensure the URL format is correct",
                    element=node.name,
                    element_id=node.id,
                    resource=("https://web.dev/learn/html/links/#url-structure", "Web.dev: URL structure"),
                ))

        issues.append(self.issue(
            INFO, IMPORTANT,
            "Verify all links work in production",
            "Regularly check for broken links using a tool like Screaming Frog or Google Search Console",
            resource=(
                "https://developers.google.com/search/docs/crawling-indexing/links-crawlable",
                "Google: Make your links crawlable",
            ),
        ))

    def _check_link_text(self, nodes, issues: List[Issue]) -> None:
        for node in nodes:
            if p.is_head_resource(node) or not node.text:
                continue
            if not (node.href or node.role == "link" or "link" in node.lower_name):
                continue

            link_text = node.text.lower()
            if any(phrase in link_text for phrase in GENERIC_LINK_PHRASES) and len(link_text) < 20:
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    f'Generic link text: "{node.text}"',
                    "Use descriptive link text that makes sense out of context",
                    element=node.name,
                    element_id=node.id,
                    resource=WEB_DEV_LINK_TEXT,
                ))

            if len(link_text) > 100:
                issues.append(self.issue(
                    INFO, NICE_TO_HAVE,
                    f"Very long link text ({len(link_text)} characters)",
                    "Keep link text concise and descriptive",
                    element=node.name,
                    element_id=node.id,
                    resource=WEB_DEV_LINK_TEXT,
                ))

    def _check_external_links(self, nodes, issues: List[Issue]) -> None:
        external = [n for n in nodes if not p.is_head_resource(n) and p.is_external_href(n.href)]

        for node in external:
            rel = node.rel or ""
            if p.opens_in_new_tab(node) and not ("noopener" in rel or "noreferrer" in rel):
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    f"External link missing security attributes: {node.href}",
                    'Add rel="noopener noreferrer" to external links that open in new tabs',
                    element=node.name,
                    element_id=node.id,
                    resource=(
                        "https://web.dev/learn/html/links/#opening-links-in-a-new-tab",
                        "Web.dev: Opening links in a new tab",
                    ),
                ))

        for node in external:
            hostname = p.parse_absolute_url(node.href).hostname or ""
            if any(marker in hostname for marker in SPAM_DOMAIN_MARKERS):
                issues.append(self.issue(
                    ERROR, CRITICAL,
                    f"Potential spam domain in link: {node.href}",
                    "Remove links to potential spam domains to avoid SEO penalties",
                    element=node.name,
                    element_id=node.id,
                    resource=(
                        "https://developers.google.com/search/docs/essentials/spam-policies",
                        "Google: Spam policies",
                    ),
                ))

    def _check_internal_linking(self, nodes, issues: List[Issue]) -> None:
        links = [n for n in nodes if _is_link_for_internal_count(n)]
        internal = [n for n in links if p.is_internal_href(n.href)]

        if len(internal) < MIN_INTERNAL_LINKS and links:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Limited internal linking detected",
                "Add more internal links to improve site navigation and SEO",
                resource=MOZ_INTERNAL,
            ))

        text_counts: Dict[str, int] = {}
        for node in internal:
            link_text = (node.text or "").lower()
            if link_text:
                text_counts[link_text] = text_counts.get(link_text, 0) + 1

        duplicates = [text for text, count in text_counts.items() if count > 1]
        if duplicates:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                f"Duplicate link text found: {', '.join(duplicates)}",
                "Use unique, descriptive link text for different destinations",
                resource=("https://web.dev/learn/accessibility/links/#unique-link-text", "Web.dev: Unique link text"),
            ))
