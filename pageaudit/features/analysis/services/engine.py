import asyncio
from typing import Dict, List, Optional, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.schemas.result import AnalysisOptions, AnalysisResult, CategoryResult
from pageaudit.features.analysis.services.cancellation import checkpoint
from pageaudit.features.analysis.services.checkers import Checker, default_checkers
from pageaudit.features.analysis.services.enrichment import IssueEnricher
from pageaudit.features.analysis.services.scoring import overall_score, score_category
from pageaudit.platform.config import settings
from pageaudit.platform.exceptions import NodesNotConstructedError
from pageaudit.platform.logger import get_logger

logger = get_logger(__name__)


class AnalysisEngine:
    """
    Runs the registered checkers over one node list and aggregates scores.

    The registry is fixed at construction. By default checkers run one after
    another on the event loop; with ``parallel=True`` they run in worker
    threads and their results are reassembled in registration order.
    """

    def __init__(
        self,
        checkers: Optional[Sequence[Checker]] = None,
        enricher: Optional[IssueEnricher] = None,
        parallel: Optional[bool] = None,
    ):
        self.checkers: List[Checker] = list(checkers) if checkers is not None else default_checkers()
        self.enricher = enricher
        self.parallel = settings.ANALYSIS_PARALLEL_CHECKERS if parallel is None else parallel

    async def analyze_nodes(
        self,
        nodes: Optional[Sequence[Node]],
        options: Optional[AnalysisOptions] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> AnalysisResult:
        """
        Analyse ``nodes`` and return issues plus per-category and overall scores.

        Raises:
            NodesNotConstructedError: If ``nodes`` is None. An empty list is valid.
            AnalysisCancelledError: If ``cancel_event`` is set before the run completes.
        """
        if nodes is None:
            raise NodesNotConstructedError()

        options = options or AnalysisOptions()
        nodes = list(nodes)
        selected = [c for c in self.checkers if options.includes(c.category)]

        logger.info(
            f"Analysing {len(nodes)} nodes with {len(selected)}/{len(self.checkers)} checkers"
            f"{' in parallel' if self.parallel else ''}"
        )

        categories: Dict[Category, CategoryResult] = {c: CategoryResult() for c in Category}
        ran = set()
        issues: List[Issue] = []

        if self.parallel:
            found_per_checker = await self._run_parallel(selected, nodes, cancel_event)
        else:
            found_per_checker = []
            for checker in selected:
                await checkpoint(cancel_event)
                found_per_checker.append(self._run_checker(checker, nodes))

        for checker, found in zip(selected, found_per_checker):
            if self.enricher is not None and options.enrich:
                await self.enricher.enrich(found, nodes, cancel_event=cancel_event)

            issues.extend(found)
            categories[checker.category].issues.extend(found)
            ran.add(checker.category)

        for category in ran:
            categories[category].score = score_category(categories[category].issues)

        result = AnalysisResult(
            issues=issues,
            score=overall_score(categories),
            categories=categories,
        )
        logger.info(f"Analysis complete: {len(issues)} issues, score {result.score}/100")
        return result

    async def _run_parallel(
        self,
        checkers: Sequence[Checker],
        nodes: List[Node],
        cancel_event: Optional[asyncio.Event],
    ) -> List[List[Issue]]:
        await checkpoint(cancel_event)
        results = await asyncio.gather(
            *(asyncio.to_thread(self._run_checker, checker, nodes) for checker in checkers)
        )
        await checkpoint(cancel_event)
        return list(results)

    @staticmethod
    def _run_checker(checker: Checker, nodes: List[Node]) -> List[Issue]:
        try:
            return list(checker.analyze(nodes))
        except Exception as e:
            logger.exception(f"Checker {checker.name} failed, reporting no issues: {str(e)}")
            return []


async def analyze_nodes(
    nodes: Optional[Sequence[Node]],
    options: Optional[AnalysisOptions] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> AnalysisResult:
    """Analyse with the default checker registry and no enrichment."""
    return await AnalysisEngine().analyze_nodes(nodes, options, cancel_event)
