"""AmbientEnvironment: explicit handle on the process-wide variable store.

Resolution and validation receive this object instead of touching
``os.environ`` directly, so tests can pass a plain dict. The only write
operation is merge_missing(), which never overwrites an existing key.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, MutableMapping


class AmbientEnvironment:
    """Key/value view over the ambient environment (``os.environ`` by default)."""

    def __init__(self, store: MutableMapping[str, str] | None = None) -> None:
        self._store = os.environ if store is None else store

    def get(self, name: str) -> str | None:
        return self._store.get(name)

    def is_set(self, name: str) -> bool:
        """True if the variable is present with a non-empty value."""
        return bool(self._store.get(name))

    def merge_missing(self, values: Mapping[str, str]) -> list[str]:
        """Fill in keys absent from the store. Returns the names that were added."""
        added = []
        for key, value in values.items():
            if key in self._store:
                continue
            self._store[key] = value
            added.append(key)
        return added

    def snapshot(self) -> dict[str, str]:
        return dict(self._store)
