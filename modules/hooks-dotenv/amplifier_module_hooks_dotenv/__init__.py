"""Dotenv environment hook for orchestrator runs.

Registers for the orchestrator's "before pattern detection" event to resolve
the current environment (CDK_ENVIRONMENT), load ``.env.<name>`` for local
environments and verify the required variables before the gated stage runs.
A second, log-only handler observes plugin:error events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from typing import Any

from amplifier_core import HookResult

from amplifier_dotenv_common.ambient import AmbientEnvironment
from amplifier_dotenv_common.errors import ConfigurationError, DotenvError
from amplifier_dotenv_common.models import DotenvConfig, EnvironmentDescriptor
from amplifier_dotenv_common.registry import EnvironmentRegistry
from amplifier_dotenv_common.resolver import EnvironmentResolver

logger = logging.getLogger(__name__)

MODULE_NAME = "hooks-dotenv"
MODULE_VERSION = "1.0.0"


class DotenvPlugin:
    """Lifecycle adapter between the host's hook registry and the resolver."""

    name = MODULE_NAME
    version = MODULE_VERSION

    def __init__(self) -> None:
        self._config: DotenvConfig | None = None
        self._registry: EnvironmentRegistry | None = None
        self._resolver: EnvironmentResolver | None = None
        self._ambient = AmbientEnvironment()
        self._handles: list[Callable[[], Any]] = []
        self.resolved: EnvironmentDescriptor | None = None

    @property
    def config(self) -> DotenvConfig | None:
        return self._config

    @property
    def required_variables(self) -> tuple[str, ...]:
        return self._config.required_variables if self._config else ()

    def initialize(
        self,
        plugin_config: dict[str, Any] | None,
        orchestrator_config: dict[str, Any] | None,
        hooks: Any,
        ambient: MutableMapping[str, str] | AmbientEnvironment | None = None,
    ) -> None:
        """Resolve configuration once and subscribe to the trigger and error events."""
        if self._handles:
            self.cleanup()

        self._config = DotenvConfig.from_plugin_config(plugin_config)
        self._registry = EnvironmentRegistry.from_orchestrator_config(
            orchestrator_config
        )
        self._resolver = EnvironmentResolver(self._registry, self._config)
        if isinstance(ambient, AmbientEnvironment):
            self._ambient = ambient
        else:
            self._ambient = AmbientEnvironment(ambient)
        self.resolved = None

        self._handles.append(
            hooks.register(
                self._config.trigger_event,
                self.handle_before_setup,
                priority=10,  # Early: variables must exist before setup
                name="dotenv-setup",
            )
        )
        self._handles.append(
            hooks.register(
                self._config.error_event,
                self.handle_plugin_error,
                name="dotenv-error-logger",
            )
        )
        logger.info(
            "dotenv: initialized with %d environments, %d required variables",
            len(self._registry),
            len(self._config.required_variables),
        )

    async def handle_before_setup(self, event: str, data: dict[str, Any]) -> HookResult:
        """Resolve, load and validate.

        Configuration and validation failures deny the event so the gated
        stage does not run. The host registry only logs handler exceptions.
        """
        self.resolved = None
        try:
            if self._resolver is None:
                raise ConfigurationError("Plugin not initialized")
            self.resolved = await self._resolver.resolve(self._ambient)
        except DotenvError as exc:
            logger.error("dotenv: environment setup failed for %s:\n%s", event, exc)
            return HookResult(action="deny", reason=str(exc))
        return HookResult(action="continue")

    async def handle_plugin_error(self, event: str, data: Any) -> HookResult:
        """Log an observed plugin error. Never raises."""
        try:
            payload = data.get("data", data) if isinstance(data, dict) else {}
            context = payload.get("context", "unknown")
            error = payload.get("error")
            message = getattr(error, "message", None) or str(error)
            logger.error("dotenv: Error in %s: %s", context, message)
        except Exception:
            logger.error("dotenv: unreadable %s event", event, exc_info=True)
        return HookResult(action="continue")

    def current_environment(self) -> EnvironmentDescriptor | None:
        """Descriptor for the environment named in the ambient store, if declared."""
        if self._registry is None or self._config is None:
            return None
        name = self._ambient.get(self._config.environment_variable)
        return self._registry.get(name) if name else None

    def cleanup(self) -> None:
        """Release both hook registrations. Safe to call repeatedly."""
        handles, self._handles = self._handles, []
        for unregister in handles:
            if not callable(unregister):
                continue
            try:
                unregister()
            except (KeyError, ValueError):
                logger.debug("dotenv: handler already unregistered", exc_info=True)
        if handles:
            logger.info("dotenv: released %d hook registrations", len(handles))


async def mount(
    coordinator: Any, config: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Mount the dotenv hook.

    The orchestrator configuration (with its ``environments`` map) is taken
    from the ``orchestrator_config`` capability, falling back to
    ``config["orchestrator"]``. The plugin is stored as the ``dotenv_plugin``
    capability so the host can call cleanup().
    """
    config = config or {}

    orchestrator_config = coordinator.get_capability("orchestrator_config")
    if not isinstance(orchestrator_config, dict):
        orchestrator_config = config.get("orchestrator", {})

    plugin = DotenvPlugin()
    plugin.initialize(config, orchestrator_config, coordinator.hooks)
    coordinator.register_capability("dotenv_plugin", plugin)

    return {
        "name": MODULE_NAME,
        "version": MODULE_VERSION,
        "description": "Environment-scoped .env loading and required variable validation",
    }
