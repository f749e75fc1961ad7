"""
Public Insights API Endpoints

One endpoint per narrative analysis. Each returns the normalized insight for
its category, or a 502 when the text generation service failed.
"""

import asyncio
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError

from valuator.config import get_settings
from valuator.domains.valuation.services.valuation import parse_valuation_input
from valuator.shared.exceptions import (
    InsightUnavailableException,
    InvalidValuationInputException,
    handle_domain_exception,
)
from valuator.shared.response_models import InsightResponse
from ..models.insight import CompetitorQuery, InsightCategory, RiskQuery, RoadmapReviewRequest
from ..services.insight_orchestration_service import (
    InsightOrchestrationService,
    get_insight_orchestration_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _insight_response(insight) -> InsightResponse:
    return InsightResponse(
        status="success" if insight.is_structured else "partial",
        message="Structured analysis generated" if insight.is_structured else "Unstructured analysis generated",
        data=insight.to_export_dict(),
        category=insight.category.value,
    )


def _risk_query(payload: Dict[str, Any]) -> RiskQuery:
    form = dict(payload)
    valuation = form.pop("valuation", None)
    valuation_input = parse_valuation_input(form)
    try:
        return RiskQuery(input=valuation_input, valuation=valuation)
    except ValidationError as e:
        raise InvalidValuationInputException(
            [{"loc": ["valuation", *map(str, error["loc"][1:])], "msg": error["msg"], "type": error["type"]}
             for error in e.errors()]
        ) from e


@router.post("/competitors", response_model=InsightResponse)
async def analyze_competitors(
    query: CompetitorQuery,
    insight_service: InsightOrchestrationService = Depends(get_insight_orchestration_service)
):
    """Competitor landscape for a project in a given vertical."""
    try:
        insight = await insight_service.analyze_competitors(
            query, timeout=get_settings().insight_timeout_seconds
        )
        return _insight_response(insight)
    except asyncio.TimeoutError:
        raise handle_domain_exception(InsightUnavailableException(InsightCategory.COMPETITORS.value, "timed out"))
    except Exception as e:
        raise handle_domain_exception(e)


@router.post("/risk", response_model=InsightResponse)
async def analyze_risks(
    payload: Dict[str, Any] = Body(..., description="Valuation metrics plus the computed 'valuation'"),
    insight_service: InsightOrchestrationService = Depends(get_insight_orchestration_service)
):
    """Risk audit of the project and its computed valuation."""
    try:
        insight = await insight_service.analyze_risks(
            _risk_query(payload), timeout=get_settings().insight_timeout_seconds
        )
        return _insight_response(insight)
    except asyncio.TimeoutError:
        raise handle_domain_exception(InsightUnavailableException(InsightCategory.RISKS.value, "timed out"))
    except Exception as e:
        raise handle_domain_exception(e)


@router.post("/roadmap", response_model=InsightResponse)
async def analyze_roadmap(
    request: RoadmapReviewRequest,
    insight_service: InsightOrchestrationService = Depends(get_insight_orchestration_service)
):
    """Timeline and dependency review of roadmap milestones."""
    try:
        insight = await insight_service.analyze_roadmap(
            request.milestones, timeout=get_settings().insight_timeout_seconds
        )
        return _insight_response(insight)
    except asyncio.TimeoutError:
        raise handle_domain_exception(InsightUnavailableException(InsightCategory.ROADMAP.value, "timed out"))
    except Exception as e:
        raise handle_domain_exception(e)
