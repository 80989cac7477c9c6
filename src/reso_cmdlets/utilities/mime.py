"""Content-type sniffing from leading file bytes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

import filetype

SIGNATURE_BYTES = 8192


@dataclass(frozen=True, slots=True)
class FileType:
    """Detected content type."""

    mime: str
    extension: str


def inspect_bytes(data: bytes | bytearray | None) -> FileType | None:
    """Detect the content type of a byte buffer; ``None`` when unknown."""

    if not data:
        return None
    kind = filetype.guess(bytes(data[:SIGNATURE_BYTES]))
    if kind is None:
        return None
    return FileType(mime=kind.mime, extension=kind.extension)


def inspect_stream(stream: BinaryIO) -> FileType | None:
    """Detect the content type of a binary stream, restoring its position."""

    if stream.seekable():
        position = stream.tell()
        try:
            head = stream.read(SIGNATURE_BYTES)
        finally:
            stream.seek(position)
    else:
        head = stream.read(SIGNATURE_BYTES)
    return inspect_bytes(head)


def get_extension(file_type: FileType | None) -> str:
    """Primary extension of a detected type, or an empty string."""

    extension = file_type.extension if file_type is not None else ""
    return extension.split(",")[0].strip()
