"""EnvironmentResolver: decides where variables come from, then validates them.

One resolve() call is one attempt: look up the current environment, load
(local file or cloud no-op), validate. Validation always runs, even when the
local file could not be loaded. Nothing is retried.
"""

from __future__ import annotations

import logging

from .ambient import AmbientEnvironment
from .errors import ConfigurationError
from .loader import VariableLoader
from .models import DotenvConfig, EnvironmentDescriptor
from .registry import EnvironmentRegistry
from .validator import Validator

logger = logging.getLogger(__name__)


class EnvironmentResolver:
    """Resolves the current environment against the registry and validates it."""

    def __init__(
        self,
        registry: EnvironmentRegistry,
        config: DotenvConfig | None = None,
        loader: VariableLoader | None = None,
        validator: Validator | None = None,
    ) -> None:
        self._registry = registry
        self._config = config or DotenvConfig()
        self._loader = loader or VariableLoader(self._config)
        self._validator = validator or Validator(self._config.env_file_prefix)

    @property
    def config(self) -> DotenvConfig:
        return self._config

    def lookup(self, environment: str | None) -> EnvironmentDescriptor:
        """Find the descriptor for ``environment``.

        Raises ConfigurationError if the name is unset or not declared.
        """
        if not environment:
            raise ConfigurationError(f"{self._config.environment_variable} not set")
        descriptor = self._registry.get(environment)
        if descriptor is None:
            available = ", ".join(self._registry.names())
            raise ConfigurationError(
                f"Environment '{environment}' not found in configuration. "
                f"Available: {available}"
            )
        return descriptor

    async def resolve(self, ambient: AmbientEnvironment) -> EnvironmentDescriptor:
        """Load and validate variables for the environment named in ``ambient``."""
        environment = ambient.get(self._config.environment_variable)
        descriptor = self.lookup(environment)

        if descriptor.is_local:
            await self._loader.load_local(descriptor.name, ambient)
        else:
            await self._loader.load_cloud(descriptor.name)

        self._validator.check(
            self._config.required_variables,
            ambient,
            is_local=descriptor.is_local,
            environment=descriptor.name,
        )
        logger.debug("dotenv: environment '%s' resolved", descriptor.name)
        return descriptor
