import asyncio
from typing import List, Sequence

import pytest

from pageaudit.features.analysis.schemas.issue import Category, Issue, IssuePriority
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.schemas.result import AnalysisMode, AnalysisOptions
from pageaudit.features.analysis.services.checkers import Checker, default_checkers
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, INFO, NICE_TO_HAVE, CompositeChecker,
)
from pageaudit.features.analysis.services.checkers.metadata import MetadataChecker
from pageaudit.features.analysis.services.engine import AnalysisEngine, analyze_nodes
from pageaudit.features.analysis.services.node_builder import sample_nodes
from pageaudit.platform.exceptions import AnalysisCancelledError, NodesNotConstructedError


class SingleIssueChecker(Checker):
    def __init__(self, category: Category, priority: IssuePriority = CRITICAL):
        self.category = category
        self.priority = priority

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        return [self.issue(ERROR, self.priority, f"{self.category.value} problem")]


class SilentChecker(Checker):
    category = Category.mobile

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        return []


class BrokenChecker(Checker):
    category = Category.performance

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        raise RuntimeError("rule blew up")


class BrokenMetadataRules(Checker):
    category = Category.metadata

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        raise RuntimeError("hreflang rule blew up")


class TestAnalysisEngine:
    """Aggregation over the full checker registry"""

    @pytest.mark.asyncio
    async def test_scores_are_within_bounds(self):
        result = await analyze_nodes(sample_nodes())

        assert 0 <= result.score <= 100
        for category_result in result.categories.values():
            assert 0 <= category_result.score <= 100

    @pytest.mark.asyncio
    async def test_every_category_is_present(self):
        result = await analyze_nodes(sample_nodes())
        assert set(result.categories) == set(Category)

    @pytest.mark.asyncio
    async def test_issue_list_matches_category_lists(self):
        result = await analyze_nodes(sample_nodes())

        total = sum(len(c.issues) for c in result.categories.values())
        assert len(result.issues) == total

    @pytest.mark.asyncio
    async def test_issues_keep_registration_order(self):
        result = await analyze_nodes(sample_nodes())

        order = [checker.category for checker in default_checkers()]
        positions = [order.index(issue.category) for issue in result.issues]
        assert positions == sorted(positions)

    @pytest.mark.asyncio
    async def test_international_findings_report_as_metadata(self):
        nodes = [Node(id="switcher", name="language switcher")]
        result = await analyze_nodes(nodes, AnalysisOptions(filter=[Category.metadata]))

        messages = [issue.message for issue in result.categories[Category.metadata].issues]
        assert "Multilingual site without hreflang tags" in messages
        assert Category.international not in {issue.category for issue in result.issues}

    @pytest.mark.asyncio
    async def test_same_input_gives_same_result(self):
        nodes = sample_nodes()

        first = await analyze_nodes(nodes)
        second = await analyze_nodes(nodes)

        assert first.model_dump() == second.model_dump()

    @pytest.mark.asyncio
    async def test_empty_node_list_is_analysed(self):
        result = await analyze_nodes([])

        content = [issue.message for issue in result.categories[Category.content].issues]
        assert "No text content found on the page" in content

    @pytest.mark.asyncio
    async def test_missing_node_list_raises(self):
        with pytest.raises(NodesNotConstructedError):
            await analyze_nodes(None)

    @pytest.mark.asyncio
    async def test_title_only_page(self):
        nodes = [Node(name="title", text="Short")]
        result = await analyze_nodes(nodes, AnalysisOptions(filter=[Category.metadata]))

        issues = {issue.message: issue for issue in result.issues}
        assert issues["Missing meta description"].priority == IssuePriority.critical
        assert issues["Title tag is too short"].priority == IssuePriority.important
        assert {issue.category for issue in result.issues} == {Category.metadata}
        assert result.score == result.categories[Category.metadata].score


class TestScoringThroughEngine:
    @pytest.mark.asyncio
    async def test_no_issues_scores_100(self):
        engine = AnalysisEngine(checkers=[SilentChecker()])
        result = await engine.analyze_nodes([Node(name="anything")])

        assert result.issues == []
        assert result.score == 100

    @pytest.mark.asyncio
    async def test_one_critical_issue_scores_80(self):
        engine = AnalysisEngine(checkers=[SingleIssueChecker(Category.images), SilentChecker()])
        result = await engine.analyze_nodes([])

        assert result.categories[Category.images].score == 80
        assert result.score == 80

    @pytest.mark.asyncio
    async def test_categories_that_did_not_run_score_zero(self):
        engine = AnalysisEngine(checkers=[SingleIssueChecker(Category.images)])
        result = await engine.analyze_nodes([])

        assert result.categories[Category.schema].score == 0
        assert result.categories[Category.schema].issues == []

    @pytest.mark.asyncio
    async def test_weighted_overall_score(self):
        engine = AnalysisEngine(checkers=[
            SingleIssueChecker(Category.metadata),
            SingleIssueChecker(Category.images, NICE_TO_HAVE),
        ])
        result = await engine.analyze_nodes([])

        # (80 * 1.5 + 95 * 1.0) / 2.5
        assert result.score == 86


class TestFiltering:
    """Filter and mode selection"""

    @pytest.mark.asyncio
    async def test_filter_limits_categories(self):
        result = await analyze_nodes(sample_nodes(), AnalysisOptions(filter=[Category.images]))

        assert result.issues
        assert {issue.category for issue in result.issues} == {Category.images}
        for category, category_result in result.categories.items():
            if category != Category.images:
                assert category_result.issues == []
                assert category_result.score == 0

    @pytest.mark.asyncio
    async def test_empty_filter_runs_nothing(self):
        result = await analyze_nodes(sample_nodes(), AnalysisOptions(filter=[]))

        assert result.issues == []
        assert result.score == 100
        assert all(c.score == 0 for c in result.categories.values())

    @pytest.mark.asyncio
    async def test_mode_selects_preset_group(self):
        result = await analyze_nodes(sample_nodes(), AnalysisOptions(mode=AnalysisMode.accessibility))

        assert result.issues
        assert {issue.category for issue in result.issues} == {Category.accessibility}

    @pytest.mark.asyncio
    async def test_filter_takes_precedence_over_mode(self):
        options = AnalysisOptions(filter=[Category.links], mode=AnalysisMode.accessibility)
        result = await analyze_nodes(sample_nodes(), options)

        assert {issue.category for issue in result.issues} == {Category.links}


class TestFaultIsolation:
    @pytest.mark.asyncio
    async def test_failing_checker_reports_nothing(self):
        engine = AnalysisEngine(checkers=[BrokenChecker(), SingleIssueChecker(Category.images)])
        result = await engine.analyze_nodes([])

        assert [issue.category for issue in result.issues] == [Category.images]
        assert result.categories[Category.performance].issues == []

    @pytest.mark.asyncio
    async def test_failing_checker_in_parallel_mode(self):
        engine = AnalysisEngine(
            checkers=[BrokenChecker(), SingleIssueChecker(Category.images)],
            parallel=True,
        )
        result = await engine.analyze_nodes([])

        assert [issue.category for issue in result.issues] == [Category.images]

    @pytest.mark.asyncio
    async def test_failing_member_of_composite_keeps_siblings(self):
        composite = CompositeChecker(Category.metadata, [MetadataChecker(), BrokenMetadataRules()])
        engine = AnalysisEngine(checkers=[composite])
        result = await engine.analyze_nodes([Node(name="title", text="Short")])

        messages = [issue.message for issue in result.categories[Category.metadata].issues]
        assert "Title tag is too short" in messages
        assert "Missing meta description" in messages
        assert result.categories[Category.metadata].score < 100


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_run_raises(self):
        cancel_event = asyncio.Event()
        cancel_event.set()

        with pytest.raises(AnalysisCancelledError):
            await analyze_nodes(sample_nodes(), cancel_event=cancel_event)

    @pytest.mark.asyncio
    async def test_cancel_between_checkers(self):
        cancel_event = asyncio.Event()

        class CancellingChecker(Checker):
            category = Category.images

            def analyze(self, nodes):
                cancel_event.set()
                return [self.issue(INFO, NICE_TO_HAVE, "first")]

        engine = AnalysisEngine(checkers=[CancellingChecker(), SingleIssueChecker(Category.links)])
        with pytest.raises(AnalysisCancelledError):
            await engine.analyze_nodes([], cancel_event=cancel_event)

    @pytest.mark.asyncio
    async def test_unset_event_does_not_cancel(self):
        result = await analyze_nodes(sample_nodes(), cancel_event=asyncio.Event())
        assert result.issues


class TestParallelMode:
    @pytest.mark.asyncio
    async def test_parallel_matches_sequential(self):
        nodes = sample_nodes()

        sequential = await AnalysisEngine(parallel=False).analyze_nodes(nodes)
        parallel = await AnalysisEngine(parallel=True).analyze_nodes(nodes)

        assert parallel.model_dump() == sequential.model_dump()
