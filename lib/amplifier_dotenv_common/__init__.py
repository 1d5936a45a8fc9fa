"""Shared core for dotenv environment resolution.

This package holds everything the hook module needs:
- models: EnvironmentDescriptor, DotenvConfig, ValidationResult, LoadResult
- errors: ConfigurationError, ValidationError, LoadWarning
- ambient: AmbientEnvironment: explicit handle on the variable store
- registry: EnvironmentRegistry: the orchestrator's declared environments
- loader / validator / resolver: the resolution pipeline
"""

from .ambient import AmbientEnvironment
from .errors import ConfigurationError, DotenvError, LoadWarning, ValidationError
from .loader import VariableLoader, read_env_file
from .models import (
    DEFAULT_REQUIRED_VARIABLES,
    DotenvConfig,
    EnvironmentDescriptor,
    LoadResult,
    ValidationResult,
)
from .registry import EnvironmentRegistry
from .resolver import EnvironmentResolver
from .validator import Validator, format_missing_message, validate

__all__ = [
    "AmbientEnvironment",
    "ConfigurationError",
    "DotenvError",
    "LoadWarning",
    "ValidationError",
    "VariableLoader",
    "read_env_file",
    "DEFAULT_REQUIRED_VARIABLES",
    "DotenvConfig",
    "EnvironmentDescriptor",
    "LoadResult",
    "ValidationResult",
    "EnvironmentRegistry",
    "EnvironmentResolver",
    "Validator",
    "format_missing_message",
    "validate",
]
