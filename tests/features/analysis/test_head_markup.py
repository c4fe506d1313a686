from pageaudit.features.analysis.services.checkers.accessibility import AccessibilityChecker
from pageaudit.features.analysis.services.checkers.links import LinksChecker
from pageaudit.features.analysis.services.checkers.metadata import MetadataChecker
from pageaudit.features.analysis.services.checkers.security import SecurityChecker
from pageaudit.features.analysis.services.head_markup import parse_head_markup

HEAD = """
<html lang="pt">
<head>
  <meta charset="utf-8">
  <title>Handmade ceramics from a Lisbon pottery studio</title>
  <meta name="description" content="Handmade ceramics thrown and glazed in our Lisbon studio. Browse mugs, bowls and vases, each piece one of a kind and shipped across Europe.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="robots" content="index, follow">
  <meta property="og:title" content="Lisbon ceramics">
  <meta http-equiv="Content-Security-Policy" content="default-src 'self'">
  <link rel="canonical" href="https://ceramics.pt/">
  <link rel="icon" href="/favicon.ico">
  <script src="/app.min.js" defer></script>
  <style>@media (max-width: 600px) { body { margin: 0 } }</style>
</head>
</html>
"""


class TestParseHeadMarkup:
    """Head markup to nodes"""

    def test_document_order_and_ids(self):
        nodes = parse_head_markup(HEAD)

        assert [n.id for n in nodes] == [
            "html-lang",
            "title-1",
            "meta-2",
            "meta-3",
            "meta-4",
            "meta-5",
            "meta-6",
            "link-1",
            "link-2",
            "script-1",
            "style-1",
        ]

    def test_charset_meta_is_skipped(self):
        nodes = parse_head_markup('<meta charset="utf-8">')
        assert nodes == []

    def test_title(self):
        title = parse_head_markup("<title> Lisbon ceramics </title>")[0]

        assert title.name == "title"
        assert title.text == "Lisbon ceramics"

    def test_named_and_property_meta(self):
        nodes = parse_head_markup(
            '<meta name="viewport" content="width=device-width">'
            '<meta property="og:image" content="https://ceramics.pt/og.png">'
        )

        assert nodes[0].name == "meta-viewport"
        assert nodes[0].meta("content") == "width=device-width"
        assert nodes[1].name == "meta-og:image"
        assert nodes[1].meta("property") == "og:image"

    def test_http_equiv_meta(self):
        node = parse_head_markup('<meta http-equiv="Content-Security-Policy" content="default-src \'self\'">')[0]

        assert node.name == "meta http-equiv=\"Content-Security-Policy\" content=\"default-src 'self'\""
        assert node.meta("name") == "http-equiv"
        assert node.meta("http_equiv") == "Content-Security-Policy"

    def test_link_and_script(self):
        nodes = parse_head_markup('<link rel="stylesheet" href="/site.css"><script src="/app.js" async></script>')

        assert nodes[0].name == 'link rel="stylesheet" href="/site.css"'
        assert nodes[0].rel == "stylesheet"
        assert nodes[0].href == "/site.css"
        assert nodes[0].type == "resource"
        assert nodes[1].name == 'script src="/app.js" async'
        assert nodes[1].href == "/app.js"

    def test_empty_markup(self):
        assert parse_head_markup("") == []


class TestParsedHeadAnalysis:
    def test_complete_head_passes_metadata_rules(self):
        assert MetadataChecker().analyze(parse_head_markup(HEAD)) == []

    def test_csp_is_recognised(self):
        messages = [i.message for i in SecurityChecker().analyze(parse_head_markup(HEAD))]

        assert "No Content Security Policy detected" not in messages
        assert "No security headers detected" not in messages

    def test_head_links_are_not_anchors(self):
        nodes = parse_head_markup(
            '<link rel="stylesheet" href="/styles.min.css">'
            '<link rel="icon" href="/favicon.ico">'
            '<link rel="canonical" href="https://ceramics.pt/">'
        )

        accessibility = AccessibilityChecker().analyze(nodes)
        assert not any("has no accessible name" in i.message for i in accessibility)

        messages = [i.message for i in LinksChecker().analyze(nodes)]
        assert "Limited internal linking detected" not in messages
        assert "No links detected on the page" in messages
