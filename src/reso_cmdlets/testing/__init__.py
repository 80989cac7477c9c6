"""Helpers for testing cmdlets in isolation."""

from reso_cmdlets.testing.scope import CommandTestScope, get_test_scope
from reso_cmdlets.testing.streams import NullStream, RecordingStreams

__all__ = [
    "CommandTestScope",
    "NullStream",
    "RecordingStreams",
    "get_test_scope",
]
