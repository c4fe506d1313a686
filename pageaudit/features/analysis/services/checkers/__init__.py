"""
Checker registry.

Registration order is significant: it fixes the order of issues in every
AnalysisResult. International findings are merged into the metadata category.
"""
from typing import List

from pageaudit.features.analysis.schemas.issue import Category
from pageaudit.features.analysis.services.checkers.accessibility import AccessibilityChecker
from pageaudit.features.analysis.services.checkers.base import Checker, CompositeChecker
from pageaudit.features.analysis.services.checkers.content import ContentChecker
from pageaudit.features.analysis.services.checkers.images import ImagesChecker
from pageaudit.features.analysis.services.checkers.international import InternationalChecker
from pageaudit.features.analysis.services.checkers.links import LinksChecker
from pageaudit.features.analysis.services.checkers.metadata import MetadataChecker
from pageaudit.features.analysis.services.checkers.mobile import MobileChecker
from pageaudit.features.analysis.services.checkers.performance import PerformanceChecker
from pageaudit.features.analysis.services.checkers.schema import SchemaChecker
from pageaudit.features.analysis.services.checkers.security import SecurityChecker
from pageaudit.features.analysis.services.checkers.social import SocialChecker
from pageaudit.features.analysis.services.checkers.structure import StructureChecker


def default_checkers() -> List[Checker]:
    return [
        CompositeChecker(Category.metadata, [MetadataChecker(), InternationalChecker()]),
        StructureChecker(),
        SocialChecker(),
        ImagesChecker(),
        ContentChecker(),
        AccessibilityChecker(),
        LinksChecker(),
        PerformanceChecker(),
        MobileChecker(),
        SecurityChecker(),
        SchemaChecker(),
    ]


__all__ = [
    "Checker",
    "CompositeChecker",
    "default_checkers",
    "AccessibilityChecker",
    "ContentChecker",
    "ImagesChecker",
    "InternationalChecker",
    "LinksChecker",
    "MetadataChecker",
    "MobileChecker",
    "PerformanceChecker",
    "SchemaChecker",
    "SecurityChecker",
    "SocialChecker",
    "StructureChecker",
]
