"""Error taxonomy for environment resolution.

Two categories halt the gated stage:
- ConfigurationError: plugin not initialized, environment name unset or unknown
- ValidationError: required variables still missing after loading

LoadWarning is raised only inside the loader and recovered there.
"""

from __future__ import annotations


class DotenvError(Exception):
    """Base class for all dotenv resolution errors."""


class ConfigurationError(DotenvError):
    """The environment cannot be resolved from the given configuration."""


class ValidationError(DotenvError):
    """One or more required variables are absent. Raised once per attempt."""

    def __init__(
        self,
        message: str,
        missing_variables: list[str],
        is_local: bool,
        environment: str | None = None,
    ) -> None:
        super().__init__(message)
        self.missing_variables = list(missing_variables)
        self.is_local = is_local
        self.environment = environment


class LoadWarning(DotenvError):
    """A local env file could not be found or parsed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
