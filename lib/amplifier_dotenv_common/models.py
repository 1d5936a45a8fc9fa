"""Data models for environment resolution.

- EnvironmentDescriptor: one entry of the orchestrator's environments map
- DotenvConfig: plugin configuration, resolved once at initialization
- ValidationResult: outcome of a required-variable check
- LoadResult: outcome of a loader call (local file or cloud no-op)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError

DEFAULT_REQUIRED_VARIABLES: tuple[str, ...] = (
    "CDK_ACCOUNT",
    "CDK_ENVIRONMENT",
    "CDK_DOMAIN",
)

ENVIRONMENT_VARIABLE = "CDK_ENVIRONMENT"
ENV_FILE_PREFIX = ".env."
TRIGGER_EVENT = "orchestrator:before:pattern-detection"
ERROR_EVENT = "plugin:error"


class EnvironmentDescriptor(BaseModel):
    """A named deployment target and whether its variables come from a local file."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    name: str = Field(..., description="Unique key in the environments registry")
    is_local: bool = Field(
        default=False,
        alias="isLocal",
        description="Load variables from .env.<name> instead of trusting the system",
    )


class DotenvConfig(BaseModel):
    """Resolved plugin configuration. Immutable after construction."""

    model_config = ConfigDict(frozen=True)

    required_variables: tuple[str, ...] = Field(
        default=DEFAULT_REQUIRED_VARIABLES,
        description="Variables that must be non-empty before setup proceeds",
    )
    env_file_prefix: str = Field(
        default=ENV_FILE_PREFIX, description="Prefix joined with the environment name"
    )
    working_dir: str = Field(
        default=".", description="Directory holding the environment-scoped files"
    )
    environment_variable: str = Field(
        default=ENVIRONMENT_VARIABLE,
        description="Ambient variable naming the current environment",
    )
    trigger_event: str = Field(
        default=TRIGGER_EVENT, description="Event that triggers resolution"
    )
    error_event: str = Field(
        default=ERROR_EVENT, description="Event observed for plugin errors"
    )

    @classmethod
    def from_plugin_config(cls, config: dict[str, Any] | None) -> DotenvConfig:
        """Build from a plugin config dict.

        Accepts the orchestrator shape (``{"config": {"requiredVariables": [...]}}``)
        as well as flat snake_case keys. Missing required variables fall back
        to DEFAULT_REQUIRED_VARIABLES; an explicit empty list is kept.
        """
        config = config or {}
        nested = config.get("config") or {}
        if not isinstance(nested, dict):
            raise ConfigurationError("Plugin 'config' section must be a mapping")

        required = nested.get("requiredVariables")
        if required is None:
            required = config.get("required_variables")
        if required is None:
            required = DEFAULT_REQUIRED_VARIABLES
        elif isinstance(required, str) or not isinstance(required, (list, tuple)):
            raise ConfigurationError("requiredVariables must be a list of names")

        overrides: dict[str, Any] = {}
        for key in (
            "env_file_prefix",
            "working_dir",
            "environment_variable",
            "trigger_event",
            "error_event",
        ):
            if config.get(key) is not None:
                overrides[key] = config[key]

        if not all(isinstance(v, str) and v for v in required):
            raise ConfigurationError("requiredVariables entries must be non-empty strings")

        return cls(required_variables=tuple(required), **overrides)

    def env_file_path(self, environment: str) -> Path:
        """Path of the environment-scoped file, e.g. ``./.env.dev``."""
        return Path(self.working_dir) / f"{self.env_file_prefix}{environment}"


class ValidationResult(BaseModel):
    """Missing required variables, in the order they were requested."""

    missing_variables: list[str] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.missing_variables


class LoadResult(BaseModel):
    """What a loader call did to the ambient environment."""

    environment: str = Field(..., description="Environment name that was loaded")
    source: str | None = Field(
        default=None, description="File read, or None for cloud environments"
    )
    loaded: bool = Field(default=False, description="Whether the source was merged")
    added: list[str] = Field(
        default_factory=list, description="Variables newly set by the merge"
    )
    error: str | None = Field(default=None, description="Why loading failed")
