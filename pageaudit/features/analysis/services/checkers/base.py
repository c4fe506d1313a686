import abc
import logging
from typing import List, Optional, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue, IssuePriority, IssueSeverity
from pageaudit.features.analysis.schemas.node import Node

ERROR = IssueSeverity.error
WARNING = IssueSeverity.warning
INFO = IssueSeverity.info

CRITICAL = IssuePriority.critical
IMPORTANT = IssuePriority.important
NICE_TO_HAVE = IssuePriority.nice_to_have

logger = logging.getLogger(__name__)


class Checker(abc.ABC):
    """
    A pure rule set over the whole node list.

    Subclasses set ``category`` and implement ``analyze``. They must not keep
    state between calls or perform I/O; the engine may run them concurrently.
    """

    category: Category

    @abc.abstractmethod
    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        ...

    @property
    def name(self) -> str:
        return type(self).__name__

    def issue(
        self,
        severity: IssueSeverity,
        priority: IssuePriority,
        message: str,
        recommendation: Optional[str] = None,
        *,
        element: Optional[str] = None,
        element_id: Optional[str] = None,
        resource: Optional[tuple] = None,
    ) -> Issue:
        """Build an issue tagged with this checker's category.

        ``resource`` is a ``(link, title)`` pair pointing at external guidance.
        """
        link, title = resource if resource else (None, None)
        return Issue(
            severity=severity,
            priority=priority,
            message=message,
            category=self.category,
            recommendation=recommendation,
            element=element,
            element_id=element_id,
            external_resource_link=link,
            external_resource_title=title,
        )


class CompositeChecker(Checker):
    """
    Runs several checkers that report into the same category and concatenates their issues.

    Each member is isolated: one that raises contributes no issues and the rest still report.
    """

    def __init__(self, category: Category, checkers: Sequence[Checker]):
        mismatched = [c.name for c in checkers if c.category != category]
        if mismatched:
            raise ValueError(
                f"Checkers {', '.join(mismatched)} do not report into category '{category.value}'"
            )
        self.category = category
        self.checkers = list(checkers)

    @property
    def name(self) -> str:
        return "+".join(c.name for c in self.checkers)

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []
        for checker in self.checkers:
            try:
                issues.extend(checker.analyze(nodes))
            except Exception:
                logger.exception(f"Checker {checker.name} failed inside {self.name}")
        return issues
