"""Validator: checks required variables against the ambient environment.

validate() is pure and returns a ValidationResult. Validator.check() turns an
invalid result into a single aggregated ValidationError whose message lists
each missing variable once and a remediation hint chosen by ``is_local``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .ambient import AmbientEnvironment
from .errors import ValidationError
from .models import ENV_FILE_PREFIX, ValidationResult

logger = logging.getLogger(__name__)


def validate(required: Iterable[str], ambient: AmbientEnvironment) -> ValidationResult:
    """Return the required names that are absent or empty, in input order."""
    missing: list[str] = []
    for name in required:
        if not ambient.is_set(name) and name not in missing:
            missing.append(name)
    return ValidationResult(missing_variables=missing)


def format_missing_message(
    missing: list[str],
    is_local: bool,
    environment: str | None,
    env_file_prefix: str = ENV_FILE_PREFIX,
) -> str:
    """Build the multi-line diagnostic for missing variables."""
    if is_local:
        suggestion = f"Please ensure your {env_file_prefix}{environment} file contains:"
    else:
        suggestion = "Please ensure the following environment variables are set:"
    lines = [
        "Missing required environment variables:",
        *(f"  - {name}" for name in missing),
        "",
        suggestion,
        *(f"  {name}=<value>" for name in missing),
    ]
    return "\n".join(lines)


class Validator:
    """Strict gate: raises when any required variable is missing."""

    def __init__(self, env_file_prefix: str = ENV_FILE_PREFIX) -> None:
        self._env_file_prefix = env_file_prefix

    def check(
        self,
        required: Iterable[str],
        ambient: AmbientEnvironment,
        is_local: bool,
        environment: str | None = None,
    ) -> ValidationResult:
        result = validate(required, ambient)
        if not result.valid:
            message = format_missing_message(
                result.missing_variables,
                is_local,
                environment,
                env_file_prefix=self._env_file_prefix,
            )
            raise ValidationError(
                message,
                missing_variables=result.missing_variables,
                is_local=is_local,
                environment=environment,
            )
        logger.info("dotenv: all required variables validated")
        return result
