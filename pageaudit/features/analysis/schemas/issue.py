"""
Issue Schemas

Findings emitted by checkers, plus the closed enums they are tagged with.
"""
import enum
from typing import Optional

from pydantic import BaseModel


class Category(str, enum.Enum):
    """Issue category classification"""
    metadata = "metadata"
    headings = "headings"
    images = "images"
    links = "links"
    structure = "structure"
    content = "content"
    performance = "performance"
    accessibility = "accessibility"
    mobile = "mobile"
    social = "social"
    security = "security"
    favicon = "favicon"
    schema = "schema"
    international = "international"


class IssueSeverity(str, enum.Enum):
    """Issue severity classes"""
    error = "error"
    warning = "warning"
    info = "info"
    success = "success"


class IssuePriority(str, enum.Enum):
    """Priority tiers; these drive score deductions"""
    critical = "critical"
    important = "important"
    nice_to_have = "nice-to-have"


class Rect(BaseModel):
    """On-canvas bounding box of a node."""
    x: float
    y: float
    width: float
    height: float


class Issue(BaseModel):
    """
    One detected problem or informational note.

    Priority is assigned by the checker at creation time. The enrichment step
    may set ``element_position`` and ``preview_image`` once before the issue
    is folded into a result.
    """
    severity: IssueSeverity
    message: str
    category: Category
    priority: IssuePriority
    element: Optional[str] = None
    element_id: Optional[str] = None
    recommendation: Optional[str] = None
    element_position: Optional[Rect] = None
    preview_image: Optional[str] = None  # data URI
    external_resource_link: Optional[str] = None
    external_resource_title: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "severity": "error",
                "message": "Missing meta description",
                "category": "metadata",
                "priority": "critical",
                "recommendation": "Add a meta description that accurately summarizes the page content and includes your target keywords",
                "external_resource_link": "https://developers.google.com/search/docs/appearance/snippet",
                "external_resource_title": "Google: Create good meta descriptions",
            }
        }
