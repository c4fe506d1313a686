"""
Score computation.

Category score: start at 100 and deduct per issue by priority, clamped to
[0, 100]. Overall score: weighted mean of the categories that produced at
least one issue.
"""
import math
from typing import Dict, Iterable, Mapping

from pageaudit.features.analysis.schemas.issue import Category, Issue, IssuePriority
from pageaudit.features.analysis.schemas.result import CategoryResult

PRIORITY_DEDUCTIONS: Dict[IssuePriority, int] = {
    IssuePriority.critical: 20,
    IssuePriority.important: 10,
    IssuePriority.nice_to_have: 5,
}

CATEGORY_WEIGHTS: Dict[Category, float] = {
    Category.metadata: 1.5,
    Category.headings: 1.2,
    Category.structure: 1.2,
    Category.links: 1.2,
    Category.content: 1.2,
    Category.security: 0.8,
    Category.favicon: 0.5,
}
DEFAULT_WEIGHT = 1.0


def category_weight(category: Category) -> float:
    return CATEGORY_WEIGHTS.get(category, DEFAULT_WEIGHT)


def round_half_up(value: float) -> int:
    # Built-in round() rounds halves to even
    return int(math.floor(value + 0.5))


def score_category(issues: Iterable[Issue]) -> int:
    score = 100
    for issue in issues:
        score -= PRIORITY_DEDUCTIONS[issue.priority]
    return max(0, min(100, score))


def overall_score(categories: Mapping[Category, CategoryResult]) -> int:
    """
    Weighted mean of category scores, skipping categories with no issues.

    Returns 100 when no category has any issue.
    """
    total_weight = 0.0
    weighted_sum = 0.0
    for category, result in categories.items():
        if not result.issues:
            continue
        weight = category_weight(category)
        weighted_sum += result.score * weight
        total_weight += weight

    if total_weight == 0:
        return 100
    return round_half_up(weighted_sum / total_weight)
