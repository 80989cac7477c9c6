"""Pass-through file system adapter so cmdlets can be tested without disk access."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Protocol

from reso_cmdlets.utilities.mime import FileType, inspect_bytes, inspect_stream

_BINARY = getattr(os, "O_BINARY", 0)


class FileMode(str, Enum):
    """How ``create_file_stream`` opens or creates a file."""

    CREATE_NEW = "create_new"
    CREATE = "create"
    OPEN = "open"
    OPEN_OR_CREATE = "open_or_create"
    TRUNCATE = "truncate"
    APPEND = "append"


_MODE_FLAGS: dict[FileMode, tuple[int, str]] = {
    FileMode.CREATE_NEW: (os.O_RDWR | os.O_CREAT | os.O_EXCL, "r+b"),
    FileMode.CREATE: (os.O_RDWR | os.O_CREAT | os.O_TRUNC, "r+b"),
    FileMode.OPEN: (os.O_RDWR, "r+b"),
    FileMode.OPEN_OR_CREATE: (os.O_RDWR | os.O_CREAT, "r+b"),
    FileMode.TRUNCATE: (os.O_RDWR | os.O_TRUNC, "r+b"),
    FileMode.APPEND: (os.O_WRONLY | os.O_CREAT | os.O_APPEND, "ab"),
}


class FileSystem(Protocol):
    """File operations a cmdlet may perform."""

    def open_read(self, path: str | Path) -> BinaryIO:
        """Open an existing file for binary reading."""

    def create_file_stream(self, path: str | Path, mode: FileMode) -> BinaryIO:
        """Open or create a file according to ``mode``."""

    def exists(self, path: str | Path) -> bool:
        """Return whether a file or directory exists."""

    def is_directory(self, path: str | Path) -> bool:
        """Return whether ``path`` is an existing directory."""

    def create_directory(self, path: str | Path) -> Path:
        """Create a directory and any missing parents."""

    def rename_file(self, old_path: str | Path, new_path: str | Path, overwrite: bool) -> None:
        """Move a file, replacing the destination only when ``overwrite`` is set."""

    def get_file_type(self, source: bytes | BinaryIO | None) -> FileType | None:
        """Sniff the content type of a byte buffer or binary stream."""


class LocalFileSystem:
    """``FileSystem`` backed by the local disk."""

    def open_read(self, path: str | Path) -> BinaryIO:
        return open(path, "rb")  # noqa: SIM115

    def create_file_stream(self, path: str | Path, mode: FileMode) -> BinaryIO:
        flags, open_mode = _MODE_FLAGS[mode]
        fd = os.open(path, flags | _BINARY, 0o666)
        return os.fdopen(fd, open_mode)

    def exists(self, path: str | Path) -> bool:
        return Path(path).exists()

    def is_directory(self, path: str | Path) -> bool:
        return Path(path).is_dir()

    def create_directory(self, path: str | Path) -> Path:
        directory = Path(path)
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def rename_file(self, old_path: str | Path, new_path: str | Path, overwrite: bool) -> None:
        if not overwrite and Path(new_path).exists():
            raise FileExistsError(f"Destination already exists: {new_path}")
        os.replace(old_path, new_path)

    def get_file_type(self, source: bytes | BinaryIO | None) -> FileType | None:
        if source is None or isinstance(source, bytes | bytearray):
            return inspect_bytes(source)
        return inspect_stream(source)
