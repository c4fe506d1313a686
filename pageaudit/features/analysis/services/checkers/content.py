import re
from typing import Dict, List, Sequence, Tuple

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

MIN_CONTENT_LENGTH = 300
MAX_CONTENT_LENGTH = 10000
MAX_KEYWORD_DENSITY = 5
MAX_PARAGRAPH_LENGTH = 300
MAX_SENTENCE_WORDS = 25

_SENTENCE_END_RE = re.compile(r"[.!?]+")

MOZ_ON_PAGE = ("https://moz.com/learn/seo/on-page-factors", "Moz: On-Page Ranking Factors")
GOOGLE_QUALITY = (
    "https://developers.google.com/search/docs/essentials/content-quality-guidelines",
    "Google: Content quality guidelines",
)


def top_keywords(text: str, limit: int = 5) -> Tuple[List[Tuple[str, int]], int]:
    """
    Most frequent words of four or more characters, with the total word count.

    Ties keep first-occurrence order.
    """
    words = p.split_on_whitespace(text.lower())
    counts: Dict[str, int] = {}
    for word in words:
        if len(word) >= 4:
            counts[word] = counts.get(word, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return ranked[:limit], len(words)


class ContentChecker(Checker):
    """Body copy length, keyword usage, readability and thin content."""

    category = Category.content

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_length(nodes, issues)
        self._check_keyword_density(nodes, issues)
        self._check_readability(nodes, issues)
        self._check_thin_content(nodes, issues)

        return issues

    def _check_length(self, nodes, issues: List[Issue]) -> None:
        text_nodes = [
            n for n in nodes
            if n.type == "text" or n.text or p.name_has(n, "text", "paragraph")
        ]
        total = sum(len(n.text or "") for n in text_nodes)

        if total < MIN_CONTENT_LENGTH:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Content length is too short",
                "Add more content to your page. Aim for at least 300 words for better SEO performance",
                resource=MOZ_ON_PAGE,
            ))
        elif total > MAX_CONTENT_LENGTH:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Content is very long",
                "Consider breaking very long content into multiple pages or adding table of contents "
                "for better user experience",
                resource=(
                    "https://www.searchenginejournal.com/content-marketing/long-form-content/",
                    "How to Create Long-Form Content That Ranks, Reads Well & Converts",
                ),
            ))

    def _check_keyword_density(self, nodes, issues: List[Issue]) -> None:
        text = " ".join(n.text for n in nodes if n.text)
        if not text:
            return

        ranked, word_count = top_keywords(text)
        if not ranked:
            return

        keyword, count = ranked[0]
        density = count / word_count * 100
        if density > MAX_KEYWORD_DENSITY:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                f'Keyword "{keyword}" appears too frequently ({density:.1f}%)',
                "Avoid keyword stuffing. Keep keyword density below 3-5% for natural content",
                resource=MOZ_ON_PAGE,
            ))

        heading_texts = [
            (n.text or "").lower() for n in nodes if p.name_has(n, "h1", "h2", "heading")
        ]
        for keyword, _ in ranked[:3]:
            if not any(keyword in heading for heading in heading_texts):
                issues.append(self.issue(
                    INFO, NICE_TO_HAVE,
                    f'Keyword "{keyword}" doesn\'t appear in any headings',
                    "Include important keywords in your headings for better SEO",
                    resource=MOZ_ON_PAGE,
                ))
                break

    def _check_readability(self, nodes, issues: List[Issue]) -> None:
        paragraphs = [
            n for n in nodes
            if p.name_has(n, "paragraph", "text") or (n.text and len(n.text) > 100)
        ]
        if not paragraphs:
            return

        if any(len(n.text or "") > MAX_PARAGRAPH_LENGTH for n in paragraphs):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Some paragraphs are very long",
                "Break long paragraphs into smaller chunks of 3-4 sentences for better readability",
                resource=(
                    "https://web.dev/learn/accessibility/typography/#content-structure",
                    "Web.dev: Content structure",
                ),
            ))

        def has_complex_sentence(node: Node) -> bool:
            return any(
                len(p.split_on_whitespace(sentence.strip())) > MAX_SENTENCE_WORDS
                for sentence in _SENTENCE_END_RE.split(node.text or "")
            )

        if any(has_complex_sentence(n) for n in paragraphs):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "Some sentences may be too complex",
                "Simplify complex sentences for better readability. "
                "Aim for an average sentence length of 15-20 words",
                resource=("https://yoast.com/readability-checks-in-yoast-seo/", "Yoast: Readability checks"),
            ))

    def _check_thin_content(self, nodes, issues: List[Issue]) -> None:
        text_nodes = [n for n in nodes if n.text]
        if not text_nodes:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "No text content found on the page",
                "Add meaningful text content to your page for SEO and user experience",
                resource=GOOGLE_QUALITY,
            ))
            return

        all_text = " ".join(n.text for n in text_nodes)
        words = [word for word in p.split_on_whitespace(all_text) if word]
        unique = {word.lower() for word in words}

        if len(unique) < len(words) * 0.5:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Content has a high level of repetition",
                "Reduce repetitive content and add more unique content to avoid thin content issues",
                resource=GOOGLE_QUALITY,
            ))

        if len(words) < 100 and len(nodes) > 50:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Low content-to-code ratio detected",
                "Add more meaningful content relative to the page structure to improve SEO",
                resource=GOOGLE_QUALITY,
            ))
