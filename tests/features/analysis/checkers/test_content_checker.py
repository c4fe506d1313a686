from pageaudit.features.analysis.schemas.issue import IssuePriority
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers.content import ContentChecker, top_keywords

VARIED_COPY = (
    "Every piece leaving our Lisbon workshop is thrown on a kick wheel, trimmed by hand and fired "
    "twice. Glazes are mixed in small batches from local minerals, so colours shift slightly between "
    "kilns. We ship across Europe in recycled packaging and replace anything that arrives broken. "
    "Visit during weekday mornings to watch the potters work."
)


def messages(issues):
    return [issue.message for issue in issues]


class TestTopKeywords:
    def test_ranks_by_frequency(self):
        ranked, word_count = top_keywords("Clay clay glaze kiln clay glaze the")

        assert ranked[0] == ("clay", 3)
        assert ranked[1] == ("glaze", 2)
        assert word_count == 7

    def test_short_words_are_ignored(self):
        ranked, _ = top_keywords("the a an of")
        assert ranked == []


class TestContentChecker:
    """Copy length, keyword usage and readability"""

    def test_no_text(self):
        issues = ContentChecker().analyze([])
        by_message = {i.message: i for i in issues}

        assert by_message["No text content found on the page"].priority == IssuePriority.critical
        assert "Content length is too short" in by_message

    def test_varied_copy(self):
        nodes = [
            Node(name="h1", text="Lisbon workshop ceramics"),
            Node(name="paragraph", type="text", text=VARIED_COPY),
        ]
        found = messages(ContentChecker().analyze(nodes))

        assert "Content length is too short" not in found
        assert "Content has a high level of repetition" not in found
        assert not any("appears too frequently" in m for m in found)

    def test_keyword_stuffing(self):
        nodes = [Node(name="paragraph", type="text", text="ceramics " * 20 + "from our studio")]
        found = messages(ContentChecker().analyze(nodes))

        assert any(m.startswith('Keyword "ceramics" appears too frequently') for m in found)
        assert "Content has a high level of repetition" in found

    def test_keyword_missing_from_headings(self):
        nodes = [
            Node(name="h1", text="Welcome"),
            Node(name="paragraph", type="text", text=VARIED_COPY),
        ]
        found = [m for m in messages(ContentChecker().analyze(nodes)) if "doesn't appear in any headings" in m]
        assert len(found) == 1

    def test_very_long_content(self):
        nodes = [Node(name="paragraph", type="text", text=VARIED_COPY * 40)]
        found = messages(ContentChecker().analyze(nodes))

        assert "Content is very long" in found
        assert "Some paragraphs are very long" in found

    def test_complex_sentence(self):
        sentence = " ".join(f"word{i}" for i in range(30)) + "."
        nodes = [Node(name="paragraph", type="text", text=sentence)]
        assert "Some sentences may be too complex" in messages(ContentChecker().analyze(nodes))

    def test_low_content_to_code_ratio(self):
        nodes = [Node(name=f"box-{i}") for i in range(50)]
        nodes.append(Node(name="paragraph", type="text", text="Short and sweet copy about mugs"))
        assert "Low content-to-code ratio detected" in messages(ContentChecker().analyze(nodes))
