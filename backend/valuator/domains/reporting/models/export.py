"""
Export record for a completed valuation session.

``to_export_dict`` is the durable JSON contract for saved reports:
estimatedValuation, breakdown, calculatedAt, summary and aiInsights.
"""
import json
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from valuator.domains.insights.models.insight import InsightReport
from valuator.domains.valuation.models.valuation import ValuationResult

EXPORT_FILENAME = "web3-valuation-estimate.json"


class ExportRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    valuation: ValuationResult
    insights: InsightReport = Field(default_factory=InsightReport)
    summary: str = ""
    calculated_at: datetime

    def to_export_dict(self) -> Dict[str, Any]:
        return {
            "estimatedValuation": self.valuation.total,
            "breakdown": self.valuation.breakdown.as_labelled_dict(),
            "calculatedAt": self.calculated_at.isoformat(),
            "summary": self.summary,
            "aiInsights": self.insights.to_export_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_export_dict(), indent=indent, ensure_ascii=False)
