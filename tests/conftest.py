"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from reso_cmdlets.logbridge import LogSource
from reso_cmdlets.models.session_state import SessionState
from reso_cmdlets.testing import RecordingStreams


@pytest.fixture()
def gif_bytes() -> bytes:
    return b"GIF89a" + b"\x00" * 32


@pytest.fixture()
def pdf_bytes() -> bytes:
    return b"%PDF-1.4\n" + b"\x00" * 32


@pytest.fixture()
def streams() -> RecordingStreams:
    return RecordingStreams()


@pytest.fixture()
def log_source() -> LogSource:
    """Private log source so tests never see each other's events."""
    return LogSource()


@pytest.fixture()
def session_state(tmp_path: Path) -> SessionState:
    return SessionState({"PWD": tmp_path})


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "RESO_CMDLETS_ERROR_ACTION",
        "RESO_CMDLETS_VERBOSE",
        "RESO_CMDLETS_BRIDGE_WAIT_SECONDS",
        "RESO_CMDLETS_FORWARDED_LOGGER",
        "RESO_CMDLETS_FORWARDED_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
