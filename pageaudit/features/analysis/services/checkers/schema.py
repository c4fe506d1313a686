import re
from typing import List, NamedTuple, Sequence, Tuple

from pageaudit.features.analysis.schemas.issue import Category, Issue, IssuePriority, IssueSeverity
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

SCHEMA_MARKERS = (
    "schema.org",
    "itemscope",
    "itemtype",
    "itemprop",
    "application/ld+json",
    "@context",
    "@type",
)

ADDRESS_RE = re.compile(r"\d+\s+[A-Za-z\s]+,\s+[A-Za-z\s]+,\s+[A-Z]{2}\s+\d{5}")
PHONE_RES = (re.compile(r"\(\d{3}\)\s*\d{3}-\d{4}"), re.compile(r"\d{3}-\d{3}-\d{4}"))
HOURS_RE = re.compile(r"mon|tue|wed|thu|fri|sat|sun.*?\d{1,2}:\d{2}", re.IGNORECASE)

SOCIAL_PROFILE_HOSTS = ("facebook.com", "twitter.com", "linkedin.com", "instagram.com")
STRUCTURED_DATA_DOCS = "https://developers.google.com/search/docs/advanced/structured-data"


class PageType(NamedTuple):
    """A content type recognised by name markers and the schema types that cover it."""
    label: str
    name_markers: Tuple[str, ...]
    schema_types: Tuple[str, ...]
    severity: IssueSeverity
    priority: IssuePriority
    recommendation: str
    doc_slug: str


PAGE_TYPES = (
    PageType(
        "Article", ("article", "blog", "post"), ("Article", "BlogPosting"), WARNING, IMPORTANT,
        "Implement Article or BlogPosting schema for article content to enhance visibility in search results",
        "article",
    ),
    PageType(
        "Product", ("product", "item", "price", "buy"), ("Product",), WARNING, IMPORTANT,
        "Implement Product schema for product pages to enable rich product results in search",
        "product",
    ),
    PageType(
        "Event", ("event", "schedule", "calendar"), ("Event",), INFO, NICE_TO_HAVE,
        "Implement Event schema for event information to display event details in search results",
        "event",
    ),
    PageType(
        "Recipe", ("recipe", "ingredients", "cooking"), ("Recipe",), INFO, NICE_TO_HAVE,
        "Implement Recipe schema for recipe content to display rich recipe information in search results",
        "recipe",
    ),
)


def text_has(node: Node, *needles: str) -> bool:
    """Case-sensitive search in the node text; schema type names are PascalCase."""
    text = node.text or ""
    return any(needle in text for needle in needles)


def has_schema_markup(nodes: Sequence[Node]) -> bool:
    return any(
        any(marker in (n.text or "") or marker in n.name for marker in SCHEMA_MARKERS)
        for n in nodes
    )


def has_local_business_signals(nodes: Sequence[Node]) -> bool:
    for node in nodes:
        text = node.text or ""
        if p.name_has(node, "address") or ADDRESS_RE.search(text):
            return True
        if p.name_has(node, "phone") or any(r.search(text) for r in PHONE_RES):
            return True
        if p.name_has(node, "hours", "opening") or HOURS_RE.search(text):
            return True
    return False


def has_organization_signals(nodes: Sequence[Node]) -> bool:
    return any(
        "logo" in n.lower_name
        or "logo" in (n.alt or "").lower()
        or p.name_has(n, "company name", "organization name", "brand name")
        or "social" in n.lower_name
        or any(host in (n.href or "") for host in SOCIAL_PROFILE_HOSTS)
        for n in nodes
    )


class SchemaChecker(Checker):
    """Structured data coverage for the content the page appears to contain."""

    category = Category.schema

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_markup_presence(nodes, issues)
        self._check_page_types(nodes, issues)
        self._check_local_business(nodes, issues)
        self._check_organization(nodes, issues)
        self._check_breadcrumbs(nodes, issues)

        return issues

    def _check_markup_presence(self, nodes, issues: List[Issue]) -> None:
        if not has_schema_markup(nodes):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "No schema markup detected",
                "Implement structured data using schema.org vocabulary to enhance search results with rich snippets",
                resource=(f"{STRUCTURED_DATA_DOCS}/intro-structured-data", "Google: Introduction to structured data"),
            ))

    def _check_page_types(self, nodes, issues: List[Issue]) -> None:
        for page_type in PAGE_TYPES:
            detected = any(p.name_has(n, *page_type.name_markers) for n in nodes)
            covered = any(
                text_has(n, *page_type.schema_types)
                or f"{page_type.label.lower()} schema" in n.lower_name
                for n in nodes
            )
            if detected and not covered:
                issues.append(self.issue(
                    page_type.severity, page_type.priority,
                    f"{page_type.label} content without {page_type.label} schema",
                    page_type.recommendation,
                    resource=(
                        f"{STRUCTURED_DATA_DOCS}/{page_type.doc_slug}",
                        f"Google: {page_type.label} structured data",
                    ),
                ))

    def _check_local_business(self, nodes, issues: List[Issue]) -> None:
        covered = any(
            text_has(n, "LocalBusiness") or "localbusiness schema" in n.lower_name for n in nodes
        )
        if has_local_business_signals(nodes) and not covered:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Local business information without LocalBusiness schema",
                "Implement LocalBusiness schema to improve local search visibility and enable rich features "
                "like business hours",
                resource=(f"{STRUCTURED_DATA_DOCS}/local-business", "Google: Local business structured data"),
            ))

    def _check_organization(self, nodes, issues: List[Issue]) -> None:
        covered = any(
            text_has(n, "Organization", "Corporation") or "organization schema" in n.lower_name
            for n in nodes
        )
        if has_organization_signals(nodes) and not covered:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Organization information without Organization schema",
                "Implement Organization schema to establish your brand identity for search engines",
                resource=("https://schema.org/Organization", "Schema.org: Organization"),
            ))

    def _check_breadcrumbs(self, nodes, issues: List[Issue]) -> None:
        breadcrumb_ui = any(
            p.name_has(n, "breadcrumb", "navigation") or p.name_has_all(n, "ul", "nav")
            for n in nodes
        )
        covered = any(
            text_has(n, "BreadcrumbList") or "breadcrumb schema" in n.lower_name for n in nodes
        )
        if breadcrumb_ui and not covered:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Breadcrumb navigation without BreadcrumbList schema",
                "Implement BreadcrumbList schema to enhance breadcrumb display in search results",
                resource=(f"{STRUCTURED_DATA_DOCS}/breadcrumb", "Google: Breadcrumb structured data"),
            ))
