from typing import Any, Dict, List, Optional

from fastapi import APIRouter, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from pageaudit.features.analysis.schemas.issue import Category
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.schemas.result import (
    MODE_CATEGORIES,
    AnalysisMode,
    AnalysisOptions,
    AnalysisResult,
    CanvasAnalysisRequest,
    MarkupAnalysisRequest,
    NodeAnalysisRequest,
)
from pageaudit.features.analysis.services.engine import AnalysisEngine
from pageaudit.features.analysis.services.head_markup import parse_head_markup
from pageaudit.features.analysis.services.node_builder import build_nodes, sample_nodes
from pageaudit.features.analysis.services.scoring import category_weight
from pageaudit.platform.logger import get_logger
from pageaudit.platform.response import api_response
from pageaudit.platform.schemas import APIResponse, ValidationErrorData

router = APIRouter(
    prefix="/analysis",
    tags=["analysis"],
    responses={422: {"model": APIResponse[ValidationErrorData]}},
)
logger = get_logger(__name__)

# No host bridge is reachable over HTTP, so API runs are never enriched
engine = AnalysisEngine()


async def _analyze(
    nodes: List[Node],
    filter: Optional[List[Category]],
    mode: Optional[AnalysisMode],
    source: str,
):
    options = AnalysisOptions(filter=filter, mode=mode, enrich=False)
    result = await engine.analyze_nodes(nodes, options)
    logger.info(f"{source} analysis finished with {len(result.issues)} issues (score {result.score})")

    return api_response(
        data=result,
        message="Analysis completed successfully",
        status_code=status.HTTP_200_OK,
        exclude_none=True,
    )


@router.post("", response_model=APIResponse[AnalysisResult])
async def analyze_nodes(data: NodeAnalysisRequest):
    """
    Analyse a normalized node list.

    **Filtering:**
    - `filter`: explicit list of categories to run (empty list runs nothing)
    - `mode`: preset group (`seo`, `accessibility`, `links`), ignored when `filter` is set
    """
    return await _analyze(data.nodes, data.filter, data.mode, "Node")


@router.post("/markup", response_model=APIResponse[AnalysisResult])
async def analyze_markup(data: MarkupAnalysisRequest):
    """Parse head markup (title, meta, link, script, style tags) and analyse it."""
    nodes = parse_head_markup(data.markup)
    return await _analyze(nodes, data.filter, data.mode, "Markup")


@router.post("/canvas", response_model=APIResponse[AnalysisResult])
async def analyze_canvas(data: CanvasAnalysisRequest):
    """Convert a raw canvas selection into nodes and analyse it."""
    try:
        nodes = build_nodes(data.selection, flatten=data.flatten)
    except ValidationError as e:
        # Selection entries are only validated once converted into nodes
        raise RequestValidationError(
            [{**err, "loc": ("body", "selection", *err["loc"])} for err in e.errors(include_url=False)]
        ) from e
    return await _analyze(nodes, data.filter, data.mode, "Canvas")


@router.get("/sample", response_model=APIResponse[AnalysisResult])
async def analyze_sample(mode: Optional[AnalysisMode] = None):
    """Analyse the built-in demonstration page."""
    return await _analyze(sample_nodes(), None, mode, "Sample")


@router.get("/categories", response_model=APIResponse[Dict[str, Any]])
async def list_categories():
    """Categories, their weights in the overall score and the preset modes."""
    return api_response(
        data={
            "categories": [
                {"name": category.value, "weight": category_weight(category)}
                for category in Category
            ],
            "modes": {
                mode.value: [category.value for category in categories]
                for mode, categories in MODE_CATEGORIES.items()
            },
        },
        message="Categories retrieved successfully",
    )
