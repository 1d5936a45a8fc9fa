"""VariableLoader: populates the ambient environment for the current target.

Local environments merge ``<prefix><name>`` (``.env.dev`` by default) into the
ambient environment without overriding anything already set. Cloud
environments receive their variables from the deployment system, so the
loader only records that it saw them.

Local loading is lenient: a missing or broken file is logged and reported in
the LoadResult, never raised. The validator decides whether the variables
that matter are actually present.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import dotenv_values

from .ambient import AmbientEnvironment
from .errors import LoadWarning
from .models import DotenvConfig, LoadResult

logger = logging.getLogger(__name__)


def read_env_file(path: Path) -> dict[str, str]:
    """Parse an env file, dropping keys declared without a value.

    Raises LoadWarning if the file is missing or cannot be decoded.
    """
    if not path.is_file():
        raise LoadWarning(f"Env file not found: {path}", path=str(path))
    try:
        values = dotenv_values(dotenv_path=path)
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadWarning(f"Could not read {path}: {exc}", path=str(path)) from exc
    return {key: value for key, value in values.items() if value is not None}


class VariableLoader:
    """Loads variables for local environments; observes cloud ones."""

    def __init__(self, config: DotenvConfig | None = None) -> None:
        self._config = config or DotenvConfig()

    def env_file_path(self, environment: str) -> Path:
        return self._config.env_file_path(environment)

    async def load_local(
        self, environment: str, ambient: AmbientEnvironment
    ) -> LoadResult:
        """Merge the environment-scoped file into ``ambient``. Never raises."""
        path = self.env_file_path(environment)
        try:
            values = await asyncio.to_thread(read_env_file, path)
        except LoadWarning as exc:
            logger.warning(
                "dotenv: failed to load env file for local environment '%s': %s",
                environment,
                exc,
            )
            return LoadResult(environment=environment, source=str(path), error=str(exc))

        added = ambient.merge_missing(values)
        logger.info(
            "dotenv: loaded environment variables from %s (%d new, %d kept)",
            path.name,
            len(added),
            len(values) - len(added),
        )
        return LoadResult(
            environment=environment, source=str(path), loaded=True, added=added
        )

    async def load_cloud(self, environment: str) -> LoadResult:
        """Cloud variables come from the deployment system; nothing is read."""
        logger.info(
            "dotenv: cloud environment '%s' detected - using system environment variables",
            environment,
        )
        return LoadResult(environment=environment)
