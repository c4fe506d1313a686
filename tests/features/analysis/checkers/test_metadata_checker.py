import pytest

from pageaudit.features.analysis.schemas.issue import Category, IssuePriority, IssueSeverity
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import CompositeChecker, default_checkers
from pageaudit.features.analysis.services.checkers.international import InternationalChecker
from pageaudit.features.analysis.services.checkers.metadata import (
    MetadataChecker,
    contains_keyword,
    derive_keywords,
)


def messages(issues):
    return [issue.message for issue in issues]


class TestDeriveKeywords:
    def test_keywords_meta_tag_wins(self):
        nodes = [
            Node(name="meta-keywords", metadata={"name": "keywords", "content": "Ceramics, Lisbon , mugs"}),
            Node(name="title", text="Something entirely different"),
        ]
        assert derive_keywords(nodes) == ["ceramics", "lisbon", "mugs"]

    def test_keywords_from_title_and_h1(self):
        nodes = [
            Node(name="title", text="Handmade ceramics from Lisbon studio"),
            Node(name="h1", text="Ceramics made slowly"),
        ]
        # three words longer than three characters from each, deduplicated
        assert derive_keywords(nodes) == ["handmade", "ceramics", "from", "made", "slowly"]

    def test_no_sources(self):
        assert derive_keywords([]) == []

    def test_contains_keyword(self):
        assert contains_keyword("Anything at all", [])
        assert contains_keyword("Handmade Ceramics", ["ceramics"])
        assert not contains_keyword("Pottery", ["ceramics"])


class TestMetadataChecker:
    """Head metadata rules"""

    def test_well_formed_page_has_no_issues(self, well_formed_page):
        assert MetadataChecker().analyze(well_formed_page) == []

    def test_missing_title_is_critical(self):
        issues = MetadataChecker().analyze([])
        title = next(i for i in issues if i.message == "Missing title tag")

        assert title.severity == IssueSeverity.error
        assert title.priority == IssuePriority.critical
        assert title.category == Category.metadata
        assert title.external_resource_link.startswith("https://developers.google.com/")

    def test_empty_page_reports_every_missing_tag(self):
        found = messages(MetadataChecker().analyze([]))
        assert found == [
            "Missing title tag",
            "Missing meta description",
            "Missing meta viewport tag",
            "Missing canonical URL",
            "Missing language attribute on HTML tag",
            "No meta robots tag found",
            "Missing favicon",
        ]

    def test_field_priorities(self):
        priorities = {i.message: i.priority for i in MetadataChecker().analyze([])}

        assert priorities["Missing meta viewport tag"] == IssuePriority.critical
        assert priorities["Missing canonical URL"] == IssuePriority.important
        assert priorities["Missing language attribute on HTML tag"] == IssuePriority.important
        assert priorities["No meta robots tag found"] == IssuePriority.nice_to_have
        assert priorities["Missing favicon"] == IssuePriority.nice_to_have

    def test_title_too_long(self, well_formed_page):
        nodes = [n for n in well_formed_page if n.name != "title"]
        nodes.append(Node(name="title", text="Handmade ceramics " * 5))

        assert "Title tag is too long" in messages(MetadataChecker().analyze(nodes))

    def test_title_without_keyword(self, well_formed_page):
        nodes = list(well_formed_page)
        nodes.append(Node(name="meta-keywords", metadata={"name": "keywords", "content": "porcelain"}))

        found = messages(MetadataChecker().analyze(nodes))
        assert "Title tag doesn't contain primary keyword" in found
        assert "Meta description doesn't contain primary keyword" in found

    def test_short_description(self, well_formed_page):
        nodes = [n for n in well_formed_page if n.id != "meta-description"]
        nodes.append(Node(name="meta-description", metadata={"name": "description", "content": "Handmade mugs."}))

        assert "Meta description is too short" in messages(MetadataChecker().analyze(nodes))

    def test_incomplete_viewport(self, well_formed_page):
        nodes = [n for n in well_formed_page if n.id != "meta-viewport"]
        nodes.append(Node(name="meta-viewport", metadata={"name": "viewport", "content": "width=device-width"}))

        assert messages(MetadataChecker().analyze(nodes)) == ["Incomplete meta viewport tag"]

    def test_noindex_robots(self, well_formed_page):
        nodes = [n for n in well_formed_page if n.id != "meta-robots"]
        nodes.append(Node(name="meta-robots", metadata={"name": "robots", "content": "noindex, follow"}))

        issues = MetadataChecker().analyze(nodes)
        assert messages(issues) == ["Meta robots tag contains noindex"]
        assert issues[0].priority == IssuePriority.critical


class TestInternationalChecker:
    def test_reports_into_metadata(self):
        assert InternationalChecker().category == Category.metadata

    def test_hreflang_without_self_reference(self):
        nodes = [
            Node(name="html-lang"),
            Node(name="link hreflang=fr", href="https://ceramics.pt/fr/"),
        ]
        found = messages(InternationalChecker().analyze(nodes))

        assert "Missing self-referencing hreflang tag" in found
        assert "Verify reciprocal hreflang tags across all language versions" in found

    def test_missing_language_declaration(self):
        found = messages(InternationalChecker().analyze([]))
        assert found == [
            "Missing language declaration (html lang attribute)",
            "No language metadata found",
        ]

    def test_mixed_languages(self):
        nodes = [
            Node(name="html-lang"),
            Node(name="paragraph-en", type="text", text="The studio is open for visitors"),
            Node(name="paragraph-de", type="text", text="Das Atelier ist offen"),
        ]
        assert "Mixed languages detected on the same page" in messages(InternationalChecker().analyze(nodes))

    def test_regional_content_without_geo_meta(self):
        nodes = [Node(name="html-lang"), Node(name="price", type="text", text="Mugs from €18")]
        assert "Regional content without geo-targeting metadata" in messages(
            InternationalChecker().analyze(nodes)
        )

    def test_inconsistent_url_structure(self):
        nodes = [
            Node(name="html-lang"),
            Node(name="link-fr", href="https://ceramics.pt/fr/"),
            Node(name="link-de", href="https://ceramics.de/"),
        ]
        assert "Inconsistent international URL structure" in messages(InternationalChecker().analyze(nodes))


class TestCompositeChecker:
    def test_concatenates_in_order(self):
        composite = CompositeChecker(Category.metadata, [MetadataChecker(), InternationalChecker()])
        issues = composite.analyze([])

        assert issues[0].message == "Missing title tag"
        assert issues[-1].message == "No language metadata found"
        assert composite.name == "MetadataChecker+InternationalChecker"

    def test_rejects_mismatched_category(self):
        from pageaudit.features.analysis.services.checkers.images import ImagesChecker

        with pytest.raises(ValueError, match="ImagesChecker"):
            CompositeChecker(Category.metadata, [ImagesChecker()])

    def test_registry_has_one_checker_per_category(self):
        categories = [checker.category for checker in default_checkers()]
        assert len(categories) == len(set(categories))
        assert categories[0] == Category.metadata
