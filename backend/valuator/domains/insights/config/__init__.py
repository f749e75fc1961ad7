"""
Insights Domain Configuration

Settings for generating and normalizing the narrative analyses.
"""

# Standard library imports
from typing import Dict, List

# Third-party imports
from pydantic import Field

# App imports
from valuator.shared.config_helpers import BaseDomainConfig, create_domain_config
from ..models.insight import InsightCategory


# Section titles the generator tends to echo back, possibly several times
DEFAULT_SECTION_MARKERS: List[str] = [
    "AI Competitor Analysis",
    "Risk Assessment",
    "Roadmap Validation",
]


class InsightsConfig(BaseDomainConfig):
    """Configuration for the insights domain."""

    competitors_temperature: float = Field(default=0.6, ge=0, le=2)
    risks_temperature: float = Field(default=0.5, ge=0, le=2)
    roadmap_temperature: float = Field(default=0.6, ge=0, le=2)

    # Headings used to detect repeated sections in generated text
    section_markers: List[str] = Field(default_factory=lambda: list(DEFAULT_SECTION_MARKERS))

    def validate_required_fields(self) -> Dict[str, bool]:
        results = super().validate_required_fields()
        results["section_markers"] = all(marker for marker in self.section_markers)
        return results

    def temperature_for(self, category: InsightCategory) -> float:
        return {
            InsightCategory.COMPETITORS: self.competitors_temperature,
            InsightCategory.RISKS: self.risks_temperature,
            InsightCategory.ROADMAP: self.roadmap_temperature,
        }[category]


# Global configuration instance
_insights_config = None


def get_insights_config() -> InsightsConfig:
    """Get the global insights configuration."""
    global _insights_config
    if _insights_config is None:
        _insights_config = create_domain_config(InsightsConfig)
    return _insights_config


__all__ = [
    "DEFAULT_SECTION_MARKERS",
    "InsightsConfig",
    "get_insights_config",
]
