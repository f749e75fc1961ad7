"""
Insights Services

Prompt construction, text generation, response parsing and normalization.
"""

from .insight_normalizer import normalize
from .insight_orchestration_service import InsightOrchestrationService, get_insight_orchestration_service
from .llm_inference_layer import TextGenerationClient, get_llm_client
from .prompt_constructor import PromptConstructor, get_prompt_constructor
from .response_parser import ParsedResponse, deduplicate_sections, extract_structured

__all__ = [
    # Parsing and normalization
    "extract_structured",
    "deduplicate_sections",
    "ParsedResponse",
    "normalize",

    # Generation
    "TextGenerationClient",
    "get_llm_client",
    "PromptConstructor",
    "get_prompt_constructor",
    "InsightOrchestrationService",
    "get_insight_orchestration_service",
]
