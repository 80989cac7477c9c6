"""Host collaborators consumed by cmdlets: file system and session state."""

from reso_cmdlets.models.filesystem import FileMode, FileSystem, LocalFileSystem
from reso_cmdlets.models.session_state import HostState, SessionState

__all__ = [
    "FileMode",
    "FileSystem",
    "HostState",
    "LocalFileSystem",
    "SessionState",
]
