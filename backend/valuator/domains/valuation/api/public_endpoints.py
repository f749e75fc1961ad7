"""
Public Valuation API Endpoints

Client-facing endpoint for the startup valuation calculator.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from valuator.shared.response_models import ValuationResponse, create_success_response
from valuator.shared.exceptions import handle_domain_exception
from ..services.valuation import ValuationService, format_currency, get_valuation_service, parse_valuation_input

router = APIRouter()


@router.post("", response_model=ValuationResponse)
async def calculate_valuation(
    payload: Dict[str, Any] = Body(..., description="Valuation metrics (companyStage, industryVertical, mrr, ...)"),
    valuation_service: ValuationService = Depends(get_valuation_service)
):
    """
    Calculates an estimated valuation with its per-component breakdown and summary.
    """
    try:
        valuation_input = parse_valuation_input(payload)
        result = valuation_service.calculate(valuation_input)

        return create_success_response(
            message="Valuation calculated successfully",
            response_class=ValuationResponse,
            data={
                "estimated_valuation": result.total,
                "formatted_valuation": format_currency(result.total),
                "breakdown": result.breakdown.as_labelled_dict(),
                "breakdown_shares": [share.model_dump(mode="json") for share in result.breakdown_shares()],
                "product_multiplier": result.product_multiplier,
                "summary": valuation_service.summarize(valuation_input, result),
            },
            valuation_type="Scorecard"
        )

    except Exception as e:
        raise handle_domain_exception(e)
