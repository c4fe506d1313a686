from typing import List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 158

MOZ_TITLE = ("https://moz.com/learn/seo/title-tag", "Moz: Title Tag")
MOZ_DESCRIPTION = ("https://moz.com/learn/seo/meta-description", "Moz: Meta Description")
WEB_DEV_VIEWPORT = ("https://web.dev/viewport/", "Responsive Web Design Basics: Set the viewport")
GOOGLE_ROBOTS = (
    "https://developers.google.com/search/docs/crawling-indexing/robots-meta-tag",
    "Google: Robots meta tag and X-Robots-Tag HTTP header specifications",
)


def derive_keywords(nodes: Sequence[Node]) -> List[str]:
    """
    Keywords the title and description are expected to mention.

    An explicit keywords meta tag wins. Otherwise the first three words longer
    than three characters are taken from the title and from the H1.
    """
    keywords_node = p.find_first(nodes, lambda n: p.is_meta_tag(n, "keywords"))
    if keywords_node and keywords_node.meta("content"):
        return [k.strip().lower() for k in keywords_node.meta("content").split(",")]

    keywords: List[str] = []
    for source in (p.find_first(nodes, p.is_title_tag), p.find_first(nodes, p.is_main_heading_tag)):
        if source and source.text:
            words = [word.lower() for word in source.text.split(" ") if len(word) > 3]
            keywords.extend(words[:3])

    return list(dict.fromkeys(keywords))


def contains_keyword(text: str, keywords: Sequence[str]) -> bool:
    if not keywords:
        return True
    lower_text = text.lower()
    return any(keyword in lower_text for keyword in keywords)


class MetadataChecker(Checker):
    """Title, description, viewport, canonical, lang, robots and favicon tags."""

    category = Category.metadata

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []
        keywords = derive_keywords(nodes)

        self._check_title(nodes, keywords, issues)
        self._check_description(nodes, keywords, issues)
        self._check_viewport(nodes, issues)
        self._check_canonical(nodes, issues)
        self._check_language(nodes, issues)
        self._check_robots(nodes, issues)
        self._check_favicon(nodes, issues)

        return issues

    def _check_title(self, nodes, keywords, issues: List[Issue]) -> None:
        title_node = p.find_first(nodes, p.is_title_tag)

        if not title_node:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Missing title tag",
                "Add a descriptive title tag that includes your main keyword",
                resource=(
                    "https://developers.google.com/search/docs/appearance/title-link",
                    "Google: Control your title links in search results",
                ),
            ))
            return

        title_text = title_node.text or ""

        if len(title_text) < TITLE_MIN_LENGTH:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Title tag is too short",
                "Make your title tag between 50-60 characters for optimal display in search results",
                resource=MOZ_TITLE,
            ))
        elif len(title_text) > TITLE_MAX_LENGTH:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Title tag is too long",
                "Keep your title tag under 60 characters to prevent truncation in search results",
                resource=MOZ_TITLE,
            ))

        if not contains_keyword(title_text, keywords):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Title tag doesn't contain primary keyword",
                "Include your primary keyword in the title tag for better SEO",
                resource=("https://moz.com/learn/seo/title-tag", "Moz: Title Tag - SEO Best Practices"),
            ))

    def _check_description(self, nodes, keywords, issues: List[Issue]) -> None:
        description_node = p.find_first(nodes, lambda n: p.is_meta_tag(n, "description"))

        if not description_node:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Missing meta description",
                "Add a meta description that accurately summarizes the page content and includes your target keywords",
                resource=(
                    "https://developers.google.com/search/docs/appearance/snippet",
                    "Google: Create good meta descriptions",
                ),
            ))
            return

        description = description_node.text or description_node.meta("content") or ""

        if len(description) < DESCRIPTION_MIN_LENGTH:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Meta description is too short",
                "Make your meta description between 120-158 characters for optimal display in search results",
                resource=MOZ_DESCRIPTION,
            ))
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Meta description is too long",
                "Keep your meta description under 158 characters to prevent truncation in search results",
                resource=MOZ_DESCRIPTION,
            ))

        if not contains_keyword(description, keywords):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Meta description doesn't contain primary keyword",
                "Include your primary keyword in the meta description for better SEO",
                resource=("https://ahrefs.com/blog/meta-description/", "How to Write the Perfect Meta Description"),
            ))

    def _check_viewport(self, nodes, issues: List[Issue]) -> None:
        viewport_node = p.find_first(nodes, lambda n: p.is_meta_tag(n, "viewport"))

        if not viewport_node:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Missing meta viewport tag",
                "Add a meta viewport tag for proper mobile rendering "
                "(e.g., <meta name='viewport' content='width=device-width, initial-scale=1'>)",
                resource=WEB_DEV_VIEWPORT,
            ))
            return

        content = viewport_node.meta("content") or ""
        if "width=device-width" not in content or "initial-scale=1" not in content:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Incomplete meta viewport tag",
                "Ensure your meta viewport tag includes 'width=device-width, initial-scale=1'",
                resource=WEB_DEV_VIEWPORT,
            ))

    def _check_canonical(self, nodes, issues: List[Issue]) -> None:
        if not any(p.is_canonical_link(n) for n in nodes):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Missing canonical URL",
                "Add a canonical URL to prevent duplicate content issues",
                resource=(
                    "https://developers.google.com/search/docs/crawling-indexing/consolidate-duplicate-urls",
                    "Google: Consolidate duplicate URLs",
                ),
            ))

    def _check_language(self, nodes, issues: List[Issue]) -> None:
        if not any(p.is_html_lang(n) for n in nodes):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Missing language attribute on HTML tag",
                "Add a lang attribute to the HTML tag (e.g., <html lang='en'>)",
                resource=(
                    "https://web.dev/learn/accessibility/aria-html/#language",
                    "Web.dev: Use the lang attribute",
                ),
            ))

    def _check_robots(self, nodes, issues: List[Issue]) -> None:
        robots_node = p.find_first(nodes, lambda n: p.is_meta_tag(n, "robots"))

        if not robots_node:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No meta robots tag found",
                "Consider adding a meta robots tag to control search engine crawling and indexing",
                resource=GOOGLE_ROBOTS,
            ))
            return

        content = robots_node.meta("content") or ""
        if "noindex" in content or "nofollow" in content:
            directive = "noindex" if "noindex" in content else "nofollow"
            issues.append(self.issue(
                WARNING, CRITICAL,
                f"Meta robots tag contains {directive}",
                "Ensure you want to prevent search engines from indexing or following links on this page",
                resource=GOOGLE_ROBOTS,
            ))

    def _check_favicon(self, nodes, issues: List[Issue]) -> None:
        if not any(p.is_favicon_link(n) for n in nodes):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Missing favicon",
                "Add a favicon to improve brand recognition and user experience",
                resource=("https://web.dev/learn/html/document-structure/#favicons", "Web.dev: Favicons"),
            ))
