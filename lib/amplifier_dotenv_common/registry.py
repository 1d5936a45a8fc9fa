"""EnvironmentRegistry: read-only mapping from environment names to descriptors.

Built from the orchestrator configuration's ``environments`` section. Names
keep their configuration order so diagnostics list them stably.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

import pydantic

from .errors import ConfigurationError
from .models import EnvironmentDescriptor

logger = logging.getLogger(__name__)


class EnvironmentRegistry:
    """In-memory registry of the orchestrator's declared environments."""

    def __init__(self, environments: Mapping[str, Any] | None = None) -> None:
        self._environments: dict[str, EnvironmentDescriptor] = {}
        for name, entry in (environments or {}).items():
            self._environments[name] = self._to_descriptor(name, entry)

    @classmethod
    def from_orchestrator_config(
        cls, orchestrator_config: Mapping[str, Any] | None
    ) -> EnvironmentRegistry:
        """Build from ``{"environments": {name: {"isLocal": bool, ...}}}``."""
        orchestrator_config = orchestrator_config or {}
        environments = orchestrator_config.get("environments") or {}
        if not isinstance(environments, Mapping):
            raise ConfigurationError("'environments' must be a mapping of name to config")
        registry = cls(environments)
        logger.debug("registry: loaded %d environments", len(registry))
        return registry

    @staticmethod
    def _to_descriptor(name: str, entry: Any) -> EnvironmentDescriptor:
        if isinstance(entry, EnvironmentDescriptor):
            return entry
        if entry is None:
            entry = {}
        if not isinstance(entry, Mapping):
            raise ConfigurationError(f"Environment '{name}' must be a mapping")
        try:
            return EnvironmentDescriptor.model_validate({**entry, "name": name})
        except pydantic.ValidationError as exc:
            raise ConfigurationError(f"Environment '{name}' is invalid: {exc}") from exc

    def get(self, name: str) -> EnvironmentDescriptor | None:
        """Get a descriptor by environment name, or None if not declared."""
        return self._environments.get(name)

    def names(self) -> list[str]:
        """Environment names in configuration order."""
        return list(self._environments)

    def __contains__(self, name: object) -> bool:
        return name in self._environments

    def __iter__(self) -> Iterator[EnvironmentDescriptor]:
        return iter(self._environments.values())

    def __len__(self) -> int:
        return len(self._environments)
