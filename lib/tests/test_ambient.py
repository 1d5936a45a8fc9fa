"""Tests for AmbientEnvironment: the explicit variable store handle."""

from __future__ import annotations

import os

from amplifier_dotenv_common.ambient import AmbientEnvironment


class TestReads:
    def test_get_present(self):
        ambient = AmbientEnvironment({"A": "1"})
        assert ambient.get("A") == "1"

    def test_get_absent(self):
        assert AmbientEnvironment({}).get("A") is None

    def test_is_set_requires_non_empty(self):
        ambient = AmbientEnvironment({"A": "1", "B": ""})
        assert ambient.is_set("A") is True
        assert ambient.is_set("B") is False
        assert ambient.is_set("C") is False

    def test_defaults_to_os_environ(self, monkeypatch):
        monkeypatch.setenv("DOTENV_AMBIENT_CHECK", "yes")
        assert AmbientEnvironment().get("DOTENV_AMBIENT_CHECK") == "yes"
        assert AmbientEnvironment().snapshot() == dict(os.environ)


class TestMergeMissing:
    def test_fills_absent_keys(self):
        store: dict[str, str] = {}
        added = AmbientEnvironment(store).merge_missing({"A": "1", "B": "2"})
        assert store == {"A": "1", "B": "2"}
        assert added == ["A", "B"]

    def test_never_overwrites_existing(self):
        store = {"A": "system"}
        added = AmbientEnvironment(store).merge_missing({"A": "file", "B": "2"})
        assert store["A"] == "system"
        assert store["B"] == "2"
        assert added == ["B"]

    def test_existing_empty_value_is_not_overwritten(self):
        store = {"A": ""}
        AmbientEnvironment(store).merge_missing({"A": "file"})
        assert store["A"] == ""

    def test_repeat_merge_is_idempotent(self):
        store: dict[str, str] = {}
        ambient = AmbientEnvironment(store)
        ambient.merge_missing({"A": "1"})
        assert ambient.merge_missing({"A": "other"}) == []
        assert store == {"A": "1"}
