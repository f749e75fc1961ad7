"""
Shared Configuration Helpers

Common configuration utilities used across domains.
"""

# Standard library imports
from typing import Dict, Any, Type, TypeVar

# Third-party imports
from pydantic_settings import BaseSettings, SettingsConfigDict

# App imports
from valuator.config import project_root
from valuator.shared.exceptions import ConfigurationException

# Type variable for configuration classes
T = TypeVar('T', bound='BaseDomainConfig')


class BaseDomainConfig(BaseSettings):
    """
    Base configuration class for all domains.

    Provides common configuration patterns and environment variable handling.
    """

    model_config = SettingsConfigDict(
        env_file=str(project_root / '.env'),
        case_sensitive=False,
        extra="ignore",
    )

    def validate_required_fields(self) -> Dict[str, bool]:
        """
        Validate that all required fields are present.

        Returns:
            Dictionary mapping field names to validation status
        """
        return {}


def create_domain_config(config_class: Type[T], **overrides: Any) -> T:
    """
    Create a domain configuration instance with validation.

    Args:
        config_class: Domain configuration class
        **overrides: Explicit values taking precedence over the environment

    Returns:
        Configured domain instance

    Raises:
        ConfigurationException: If configuration validation fails
    """
    try:
        config = config_class(**overrides)
    except Exception as e:
        raise ConfigurationException(config_class.__name__, str(e)) from e

    validation_results = config.validate_required_fields()
    missing_fields = [field for field, valid in validation_results.items() if not valid]

    if missing_fields:
        raise ConfigurationException(
            config_class.__name__,
            f"Missing or invalid configuration fields: {', '.join(missing_fields)}"
        )

    return config
