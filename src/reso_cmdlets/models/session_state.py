"""Host session state: a variable store and the derived working location."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path


class SessionState:
    """Case-insensitive variable store of the host session."""

    def __init__(self, variables: dict[str, object] | None = None) -> None:
        self._variables: dict[str, tuple[str, object]] = {}
        for name, value in (variables or {}).items():
            self.set_variable(name, value)

    @classmethod
    def from_process(cls) -> SessionState:
        """Session seeded from the running process (``PWD`` = working directory)."""

        return cls({"PWD": Path.cwd()})

    def get_variable(self, name: str) -> object | None:
        entry = self._variables.get(name.lower())
        return entry[1] if entry is not None else None

    def set_variable(self, name: str, value: object) -> None:
        self._variables[name.lower()] = (name, value)

    def variable_names(self) -> list[str]:
        return [name for name, _ in self._variables.values()]


class HostState:
    """Values derived from the session state, resolved lazily on each access."""

    def __init__(self, get_session_state: Callable[[], SessionState]) -> None:
        self._get_session_state = get_session_state

    @property
    def session_state(self) -> SessionState:
        return self._get_session_state()

    def get_current_pwd(self) -> str | None:
        value = self.session_state.get_variable("PWD")
        if isinstance(value, str | os.PathLike):
            return os.fspath(value)
        return None
