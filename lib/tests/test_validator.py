"""Tests for the required-variable validator and its diagnostic message."""

from __future__ import annotations

import logging

import pytest

from amplifier_dotenv_common.ambient import AmbientEnvironment
from amplifier_dotenv_common.errors import ValidationError
from amplifier_dotenv_common.validator import Validator, format_missing_message, validate


class TestValidate:
    def test_all_present_is_valid(self):
        result = validate(["A", "B"], AmbientEnvironment({"A": "1", "B": "2"}))
        assert result.valid is True
        assert result.missing_variables == []

    def test_missing_in_input_order(self):
        result = validate(["C", "A", "B"], AmbientEnvironment({"A": "1"}))
        assert result.missing_variables == ["C", "B"]

    def test_empty_value_counts_as_missing(self):
        result = validate(["A"], AmbientEnvironment({"A": ""}))
        assert result.missing_variables == ["A"]

    def test_duplicates_reported_once(self):
        result = validate(["A", "A"], AmbientEnvironment({}))
        assert result.missing_variables == ["A"]

    def test_empty_requirement_is_valid(self):
        assert validate([], AmbientEnvironment({})).valid is True

    def test_does_not_mutate_store(self):
        store = {"A": "1"}
        validate(["A", "B"], AmbientEnvironment(store))
        assert store == {"A": "1"}


class TestFormatMissingMessage:
    def test_local_message(self):
        message = format_missing_message(["B"], is_local=True, environment="dev")
        assert message == (
            "Missing required environment variables:\n"
            "  - B\n"
            "\n"
            "Please ensure your .env.dev file contains:\n"
            "  B=<value>"
        )

    def test_cloud_message(self):
        message = format_missing_message(["A", "B"], is_local=False, environment="prod")
        assert "Please ensure the following environment variables are set:" in message
        assert ".env.prod" not in message
        assert message.splitlines()[1:3] == ["  - A", "  - B"]

    def test_hint_selected_by_flag_only(self):
        message = format_missing_message(["A"], is_local=True, environment="prod")
        assert "Please ensure your .env.prod file contains:" in message


class TestValidatorCheck:
    def test_raises_single_aggregated_error(self):
        with pytest.raises(ValidationError) as exc_info:
            Validator().check(["A", "B", "C"], AmbientEnvironment({"B": "1"}), True, "dev")
        error = exc_info.value
        assert error.missing_variables == ["A", "C"]
        assert error.is_local is True
        assert error.environment == "dev"
        assert str(error).count("  - ") == 2

    def test_success_returns_result_and_logs(self, caplog):
        with caplog.at_level(logging.INFO):
            result = Validator().check(["A"], AmbientEnvironment({"A": "1"}), False)
        assert result.valid is True
        assert "all required variables validated" in caplog.text

    def test_custom_prefix_in_hint(self):
        with pytest.raises(ValidationError, match="vars-dev"):
            Validator(env_file_prefix="vars-").check(
                ["A"], AmbientEnvironment({}), True, "dev"
            )
