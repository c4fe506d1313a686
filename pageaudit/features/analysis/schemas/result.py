"""
Analysis Schemas

Result contract of the aggregation engine and the request models of the
analysis API endpoints.
"""
import enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node


class AnalysisMode(str, enum.Enum):
    """Preset category groups offered by the plugin UI."""
    seo = "seo"
    accessibility = "accessibility"
    links = "links"


MODE_CATEGORIES: Dict[AnalysisMode, List[Category]] = {
    AnalysisMode.seo: [
        Category.metadata,
        Category.structure,
        Category.images,
        Category.content,
        Category.social,
    ],
    AnalysisMode.accessibility: [Category.accessibility],
    AnalysisMode.links: [Category.links],
}


class CategoryResult(BaseModel):
    issues: List[Issue] = Field(default_factory=list)
    score: int = 0


class AnalysisResult(BaseModel):
    """
    Output of one ``analyze_nodes`` call.

    ``issues`` is the concatenation, in checker-registration order, of every
    per-category issue list. ``categories`` always covers every Category.
    """
    issues: List[Issue] = Field(default_factory=list)
    score: int = 100
    categories: Dict[Category, CategoryResult] = Field(default_factory=dict)


class AnalysisOptions(BaseModel):
    """
    ``filter=None`` runs every registered checker; an empty list runs none.
    An explicit ``filter`` takes precedence over ``mode``.
    """
    filter: Optional[List[Category]] = None
    mode: Optional[AnalysisMode] = None
    enrich: bool = True

    def selected_categories(self) -> Optional[List[Category]]:
        if self.filter is not None:
            return self.filter
        if self.mode is not None:
            return MODE_CATEGORIES[self.mode]
        return None

    def includes(self, category: Category) -> bool:
        selected = self.selected_categories()
        return selected is None or category in selected


# ============================================================================
# Request Schemas
# ============================================================================

class NodeAnalysisRequest(BaseModel):
    """Analyse an already-normalized node list."""
    nodes: List[Node]
    filter: Optional[List[Category]] = None
    mode: Optional[AnalysisMode] = None

    class Config:
        json_schema_extra = {
            "example": {
                "nodes": [
                    {"id": "title", "name": "title", "text": "Welcome to our website", "type": "text"},
                    {
                        "id": "meta-description",
                        "name": "meta-description",
                        "metadata": {"name": "description", "content": "A sample meta description."},
                    },
                ],
                "mode": "seo",
            }
        }


class MarkupAnalysisRequest(BaseModel):
    """Analyse raw head markup injected into a page (title, meta, link and script tags)."""
    markup: str
    filter: Optional[List[Category]] = None
    mode: Optional[AnalysisMode] = None

    class Config:
        json_schema_extra = {
            "example": {
                "markup": '<html lang="en"><head><title>Handmade ceramics from Lisbon</title>'
                          '<meta name="description" content="Shop handmade ceramics."></head></html>',
                "filter": ["metadata", "social"],
            }
        }


class CanvasAnalysisRequest(BaseModel):
    """Analyse a raw canvas selection as sent by the host editor."""
    selection: List[Dict[str, Any]]
    filter: Optional[List[Category]] = None
    mode: Optional[AnalysisMode] = None
    flatten: bool = False
