"""
Shared Utilities

Configuration helpers, response envelopes and exception classes used across domains.
"""

from .config_helpers import BaseDomainConfig, create_domain_config
from .response_models import (
    APIResponse, ValuationResponse, InsightResponse, StatusEnum, create_success_response
)
from .exceptions import (
    DomainException, InvalidValuationInputException, GenerationException,
    InsightUnavailableException, APIKeyMissingException, ConfigurationException,
    handle_domain_exception, domain_exception_to_http_exception
)

__all__ = [
    # Configuration helpers
    "BaseDomainConfig",
    "create_domain_config",

    # Response models and helpers
    "APIResponse", "ValuationResponse", "InsightResponse", "StatusEnum", "create_success_response",

    # Exception classes and handlers
    "DomainException", "InvalidValuationInputException", "GenerationException",
    "InsightUnavailableException", "APIKeyMissingException", "ConfigurationException",
    "handle_domain_exception", "domain_exception_to_http_exception",
]
