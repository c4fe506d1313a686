import re
from typing import List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

MULTILINGUAL_MARKERS = ("language switcher", "language selector", "multilingual", "translate")
GEO_META_KEYS = ("geo.region", "geo.placename", "geo.position")

REGIONAL_TEXT_PATTERNS = (
    re.compile(r"[A-Z]{2}\s+\d{5}"),          # US zip code
    re.compile(r"[A-Z]{2}\s+[A-Z0-9]{3}"),    # UK postcode
    re.compile(r"€|£|¥|₹|₽"),
)

LANGUAGE_INDICATORS = {
    "english": ("the", "and", "of", "to", "in", "is", "you", "that", "it", "for"),
    "spanish": ("el", "la", "los", "las", "y", "que", "en", "de", "es", "para"),
    "french": ("le", "la", "les", "et", "que", "en", "dans", "est", "pour", "avec"),
    "german": ("der", "die", "das", "und", "zu", "in", "ist", "für", "mit", "auf"),
}
_LANGUAGE_PATTERNS = {
    language: [re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE | re.ASCII) for word in words]
    for language, words in LANGUAGE_INDICATORS.items()
}

INTERNATIONAL_URL_MARKERS = (
    "/en/", "/fr/", "/es/", "/de/", "/it/", "/ru/",
    ".com/en", ".com/fr", ".fr/", ".es/", ".de/", ".it/", ".co.uk/", ".com.au/",
)
SUBDIRECTORY_MARKERS = ("/en/", "/fr/", "/es/", "/de/")
CCTLD_MARKERS = (".fr", ".es", ".de", ".co.uk")

GOOGLE_LOCALIZED = "https://developers.google.com/search/docs/advanced/crawling/localized-versions"


def detect_languages(nodes: Sequence[Node]) -> List[str]:
    """Languages whose common function words appear in the page text."""
    detected = []
    for node in nodes:
        if not p.looks_like_text(node):
            continue
        text = (node.text or "").lower()
        if not text:
            continue
        for language, patterns in _LANGUAGE_PATTERNS.items():
            if language not in detected and any(pattern.search(text) for pattern in patterns):
                detected.append(language)
    return detected


class InternationalChecker(Checker):
    """
    Language and regional targeting signals.

    Reports into the metadata category; the engine pairs it with
    ``MetadataChecker`` through a ``CompositeChecker``.
    """

    category = Category.metadata

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_hreflang(nodes, issues)
        self._check_language_declaration(nodes, issues)
        self._check_geo_targeting(nodes, issues)
        self._check_multilingual_content(nodes, issues)
        self._check_international_urls(nodes, issues)

        return issues

    def _check_hreflang(self, nodes, issues: List[Issue]) -> None:
        hreflang_nodes = [n for n in nodes if "hreflang" in n.lower_name]
        multilingual = any(p.name_has(n, *MULTILINGUAL_MARKERS) for n in nodes)

        if multilingual and not hreflang_nodes:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Multilingual site without hreflang tags",
                "Add hreflang tags to help search engines understand the language and regional targeting of your pages",
                resource=(GOOGLE_LOCALIZED, "Google: Tell Google about localized versions of your page"),
            ))

        if not hreflang_nodes:
            return

        if not any(p.name_has(n, "self", "current") for n in hreflang_nodes):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Missing self-referencing hreflang tag",
                "Include a self-referencing hreflang tag for each language version of a page",
                resource=(f"{GOOGLE_LOCALIZED}#html", "Google: Specify the language and region for a page"),
            ))

        issues.append(self.issue(
            INFO, NICE_TO_HAVE,
            "Verify reciprocal hreflang tags across all language versions",
            "Ensure all language versions of a page reference each other with hreflang tags",
            resource=("https://ahrefs.com/blog/hreflang-tags/", "Ahrefs: Hreflang Tags: The Ultimate Guide"),
        ))

    def _check_language_declaration(self, nodes, issues: List[Issue]) -> None:
        html_with_lang = any(
            p.name_has_all(n, "html", "lang=") or "html-lang" in n.lower_name
            for n in nodes
        )

        if not html_with_lang:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Missing language declaration (html lang attribute)",
                "Add the lang attribute to your HTML tag to declare the language of your page",
                resource=("https://web.dev/learn/html/document-structure/#lang", "Web.dev: The lang attribute"),
            ))

        content_language = any(p.is_meta_tag(n, "content-language") for n in nodes)
        if not content_language and not html_with_lang:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "No language metadata found",
                "Specify the language of your page using the html lang attribute or content-language meta tag",
                resource=(f"{GOOGLE_LOCALIZED}#language-html", "Google: Tell Google the language of a page"),
            ))

    def _check_geo_targeting(self, nodes, issues: List[Issue]) -> None:
        geo_meta = any(
            n.meta("name") in GEO_META_KEYS
            or ("meta" in n.lower_name and p.name_has(n, *GEO_META_KEYS))
            for n in nodes
        )
        regional_content = any(
            any(pattern.search(n.text or "") for pattern in REGIONAL_TEXT_PATTERNS)
            or p.name_has(n, "region", "country")
            for n in nodes
        )

        if regional_content and not geo_meta:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Regional content without geo-targeting metadata",
                "Consider adding geo-targeting meta tags for content specific to geographic regions",
                resource=(
                    "https://developers.google.com/search/docs/specialty/international/managing-multi-regional-sites",
                    "Google: Managing Multi-Regional and Multilingual Sites",
                ),
            ))

    def _check_multilingual_content(self, nodes, issues: List[Issue]) -> None:
        if len(detect_languages(nodes)) > 1:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Mixed languages detected on the same page",
                "Avoid mixing multiple languages on the same page. Create separate pages for each language instead.",
                resource=(
                    "https://developers.google.com/search/docs/advanced/crawling/managing-multi-regional-sites",
                    "Google: Managing multi-regional and multilingual sites",
                ),
            ))

    def _check_international_urls(self, nodes, issues: List[Issue]) -> None:
        hrefs = [
            n.href for n in nodes
            if n.href and any(marker in n.href for marker in INTERNATIONAL_URL_MARKERS)
        ]
        if not hrefs:
            return

        uses_subdirectories = any(any(m in href for m in SUBDIRECTORY_MARKERS) for href in hrefs)
        uses_cctlds = any(any(m in href for m in CCTLD_MARKERS) for href in hrefs)

        if uses_subdirectories and uses_cctlds:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Inconsistent international URL structure",
                "Use a consistent URL structure for international versions (either subdirectories, subdomains, or ccTLDs)",
                resource=("https://ahrefs.com/blog/international-seo/", "Ahrefs: International SEO - A Complete Guide"),
            ))
