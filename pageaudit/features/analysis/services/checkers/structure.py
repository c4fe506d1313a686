from typing import List, Optional, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

SEMANTIC_ELEMENTS = ("header", "nav", "main", "article", "section", "aside", "footer")
H1_LIST_LIMIT = 5

W3C_HEADINGS = ("https://www.w3.org/WAI/tutorials/page-structure/headings/", "W3C: Headings")
MOZ_ON_PAGE = ("https://moz.com/learn/seo/on-page-factors", "Moz: On-Page Ranking Factors")
WEB_DEV_SEMANTIC = ("https://web.dev/learn/html/semantic-html/", "Learn HTML: Semantic HTML")


def find_main_h1(h1_nodes: Sequence[Node]) -> Optional[Node]:
    """Prefer a candidate named like a title or main heading, else the first one."""
    if not h1_nodes:
        return None
    named = p.find_first(
        h1_nodes,
        lambda n: p.name_has(n, "title", "main") or n.lower_name == "h1",
    )
    return named or h1_nodes[0]


def _label(node: Node) -> str:
    return node.text or node.name


class StructureChecker(Checker):
    """Heading hierarchy, semantic landmarks and long-form content structure."""

    category = Category.structure

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_heading_structure(nodes, issues)
        self._check_semantic_elements(nodes, issues)
        self._check_content_structure(nodes, issues)

        return issues

    def _check_heading_structure(self, nodes, issues: List[Issue]) -> None:
        h1_nodes = [n for n in nodes if p.is_h1_candidate(n)]
        h2_nodes = [n for n in nodes if p.is_h2_candidate(n)]
        h3_nodes = [n for n in nodes if p.is_h3_candidate(n)]

        if not h1_nodes:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "No H1 heading found on the page",
                "Add an H1 heading as the main title of your page - each page should have exactly one H1",
                resource=(
                    "https://developers.google.com/search/docs/appearance/page-titles",
                    "Google: Create good page titles",
                ),
            ))
        elif len(h1_nodes) > 1:
            listing = "".join(f'• "{_label(n)}"\n' for n in h1_nodes[:H1_LIST_LIMIT])
            if len(h1_nodes) > H1_LIST_LIMIT:
                listing += f"• ... and {len(h1_nodes) - H1_LIST_LIMIT} more"

            issues.append(self.issue(
                ERROR, CRITICAL,
                f"Multiple H1 headings found ({len(h1_nodes)})",
                "Use only one H1 heading per page for proper SEO structure. "
                "The following elements are detected as H1s:\n" + listing,
                resource=(
                    "https://www.searchenginejournal.com/on-page-seo/heading-tags/",
                    "How to Use Heading Tags for SEO",
                ),
            ))

            main_h1 = find_main_h1(h1_nodes)
            issues.append(self.issue(
                INFO, IMPORTANT,
                f'Consider keeping "{_label(main_h1)}" as your main H1',
                "Keep this as your main H1 and convert other H1s to H2s or other elements",
                element=main_h1.name,
                element_id=main_h1.id,
            ))

        if not h1_nodes and h2_nodes:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "H2 headings found without an H1 heading",
                "Add an H1 heading before using H2 headings - proper heading hierarchy is important for SEO",
                resource=W3C_HEADINGS,
            ))

        for node in h1_nodes:
            heading_text = node.text or ""
            if len(heading_text) < 20:
                issues.append(self.issue(
                    INFO, IMPORTANT,
                    "H1 heading is quite short",
                    "Consider using a more descriptive H1 heading that includes your main keyword",
                    element="h1",
                    element_id=node.id,
                    resource=MOZ_ON_PAGE,
                ))
            if len(heading_text) > 70:
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    "H1 heading is too long",
                    "Keep H1 headings concise (under 70 characters)",
                    element="h1",
                    element_id=node.id,
                    resource=MOZ_ON_PAGE,
                ))

        if not h2_nodes and h3_nodes:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "H3 headings found without H2 headings",
                "Don't skip heading levels (use H2 before H3) for proper document structure",
                resource=W3C_HEADINGS,
            ))

    def _check_semantic_elements(self, nodes, issues: List[Issue]) -> None:
        found = [el for el in SEMANTIC_ELEMENTS if any(el in n.lower_name for n in nodes)]
        missing = [el for el in SEMANTIC_ELEMENTS if el not in found]

        if missing:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f"Missing semantic HTML elements: {', '.join(missing)}",
                "Use semantic HTML elements to improve accessibility and SEO",
                resource=WEB_DEV_SEMANTIC,
            ))

        if "article" in found and "main" not in found:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Article element used without a main element",
                "Wrap article elements in a main element for better semantic structure",
                resource=WEB_DEV_SEMANTIC,
            ))

    def _check_content_structure(self, nodes, issues: List[Issue]) -> None:
        body_text = [n for n in nodes if n.type == "text" and not p.is_heading_name(n)]
        headings = [n for n in nodes if p.is_heading_name(n)]

        if len(body_text) > 10 and len(headings) < 3:
            issues.append(self.issue(
                INFO, IMPORTANT,
                "Long content with few headings",
                "Break up long content with more headings to improve readability and SEO",
                resource=(
                    "https://www.searchenginejournal.com/content-marketing/long-form-content/",
                    "How to Create Long-Form Content That Ranks, Reads Well & Converts",
                ),
            ))

        if not any(p.name_has(n, "list", "ul", "ol") for n in nodes):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No list elements found",
                "Consider using lists to structure content and improve readability",
                resource=(
                    "https://www.semrush.com/blog/semantic-html5-guide/",
                    "Semantic HTML5: A Guide for Better SEO and UX",
                ),
            ))
