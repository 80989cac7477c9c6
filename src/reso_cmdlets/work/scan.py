"""Directory scan that sniffs the content type of every file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from reso_cmdlets.models.filesystem import FileSystem
from reso_cmdlets.utilities.mime import get_extension

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FileTypeResult:
    """Detected type of one file."""

    path: str
    mime: str | None
    extension: str

    def to_dict(self) -> dict[str, str | None]:
        return {"path": self.path, "mime": self.mime, "extension": self.extension}


def sniff_file(path: Path, file_system: FileSystem) -> FileTypeResult:
    with file_system.open_read(path) as stream:
        detected = file_system.get_file_type(stream)
    return FileTypeResult(
        path=str(path),
        mime=detected.mime if detected is not None else None,
        extension=get_extension(detected),
    )


def scan_file_types(root: Path, file_system: FileSystem) -> list[FileTypeResult]:
    """Sniff every file below ``root``; unreadable files are logged and skipped."""

    results: list[FileTypeResult] = []
    unknown = 0
    for directory, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(directory) / filename
            try:
                result = sniff_file(path, file_system)
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", path, exc)
                continue
            if result.mime is None:
                unknown += 1
            logger.info("Scanned %s -> %s", path, result.mime or "unknown")
            results.append(result)

    if not results:
        logger.warning("No files found under %s", root)
    logger.info("Scan finished: files=%d unknown=%d", len(results), unknown)
    return results
