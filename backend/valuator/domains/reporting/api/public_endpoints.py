"""
Public Reporting API Endpoints

Runs the whole pipeline and returns the downloadable report document.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError

from valuator.config import get_settings
from valuator.domains.insights.models.insight import DEFAULT_MILESTONES, RoadmapMilestone
from valuator.domains.valuation.services.valuation import parse_valuation_input
from valuator.shared.exceptions import InvalidValuationInputException, handle_domain_exception
from ..models.export import EXPORT_FILENAME
from ..services.report_assembler import ReportService, get_report_service

router = APIRouter()

_milestones_adapter = TypeAdapter(List[RoadmapMilestone])


def _parse_milestones(raw_milestones: Any) -> List[RoadmapMilestone]:
    if not raw_milestones:
        return list(DEFAULT_MILESTONES)
    try:
        return _milestones_adapter.validate_python(raw_milestones)
    except ValidationError as e:
        raise InvalidValuationInputException(
            [{"loc": ["roadmapMilestones", *map(str, error["loc"])], "msg": error["msg"], "type": error["type"]}
             for error in e.errors()]
        ) from e


@router.post("")
async def generate_report(
    payload: Dict[str, Any] = Body(..., description="Valuation metrics, optionally with roadmapMilestones"),
    report_service: ReportService = Depends(get_report_service)
) -> JSONResponse:
    """
    Calculates the valuation, gathers the AI insights that succeed, and returns
    the export document (estimatedValuation, breakdown, calculatedAt, summary, aiInsights).
    """
    try:
        fields = dict(payload)
        milestones = _parse_milestones(fields.pop("roadmapMilestones", None))
        valuation_input = parse_valuation_input(fields)

        record = await report_service.generate_report(
            valuation_input,
            milestones=milestones,
            timeout=get_settings().insight_timeout_seconds,
        )
        return JSONResponse(
            content=record.to_export_dict(),
            headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
        )

    except Exception as e:
        raise handle_domain_exception(e)
