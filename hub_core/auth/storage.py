# =============================================================================
# hub_core/auth/storage.py
# Session storage port for the auth context
# =============================================================================

from __future__ import annotations
from typing import Any, Dict, MutableMapping, Optional, Protocol

import streamlit as st

from hub_core.errors import StorageError


class SessionStorage(Protocol):
    """String key/value store scoped to one browser session."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage:
    """In-process storage for tests and scripts."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class StreamlitSessionStorage:
    """
    Storage backed by ``st.session_state``.

    The session state is looked up on every call unless one is injected,
    so the object can be created before Streamlit has a script context.
    """

    def __init__(self, session_state: Optional[MutableMapping] = None):
        self._session_state = session_state

    @property
    def _state(self) -> MutableMapping:
        if self._session_state is not None:
            return self._session_state
        return st.session_state

    def get_item(self, key: str) -> Optional[Any]:
        try:
            return self._state.get(key)
        except Exception as e:
            raise StorageError(f"Could not read session storage: {e}", key=key, operation="get") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            self._state[key] = value
        except Exception as e:
            raise StorageError(f"Could not write session storage: {e}", key=key, operation="set") from e

    def remove_item(self, key: str) -> None:
        try:
            if key in self._state:
                del self._state[key]
        except Exception as e:
            raise StorageError(f"Could not clear session storage: {e}", key=key, operation="remove") from e
