"""File cmdlets: content-type detection, rename, directory creation."""

from __future__ import annotations

from pathlib import Path

from reso_cmdlets.commands import BaseCmdlet
from reso_cmdlets.work.scan import scan_file_types, sniff_file


class GetFileTypeCmdlet(BaseCmdlet):
    """Detect the content type of each input path.

    Directories are only accepted with ``Recurse``; they are scanned on a
    background thread with the scan's log output bridged into this cmdlet.
    """

    _target: Path | None = None

    def prepare_cmdlet(self) -> None:
        if self.input_object is None:
            raise ValueError("Path is required.")
        target = self.resolve_path(self.input_object)
        if not self.file_system.exists(target):
            raise FileNotFoundError(f"Path not found: {target}")
        if self.file_system.is_directory(target) and not self.get_param("Recurse", False):
            raise IsADirectoryError(f"{target} is a directory. Pass --recurse to scan it.")
        self._target = target

    def execute_cmdlet(self) -> None:
        target = self._target
        if target is None:
            return
        if not self.file_system.is_directory(target):
            self.write_object(sniff_file(target, self.file_system).to_dict())
            return

        self.write_verbose(f"Scanning {target}")
        for result in self.run_bound(lambda: scan_file_types(target, self.file_system)):
            self.write_object(result.to_dict())


class RenameItemCmdlet(BaseCmdlet):
    """Rename a file in place, replacing an existing file only with ``Force``."""

    _source: Path | None = None
    _destination: Path | None = None

    def prepare_cmdlet(self) -> None:
        source = self.resolve_path(self.get_param("Path", ""))
        if not self.file_system.exists(source):
            raise FileNotFoundError(f"Path not found: {source}")
        new_name = str(self.get_param("NewName", "")).strip()
        if not new_name or Path(new_name).name != new_name:
            raise ValueError(f"NewName must be a plain file name: {new_name!r}")
        self._source = source
        self._destination = source.with_name(new_name)

    def execute_cmdlet(self) -> None:
        overwrite = bool(self.get_param("Force", False))
        self.file_system.rename_file(self._source, self._destination, overwrite)
        self.write_verbose(f"Renamed {self._source} -> {self._destination}")
        self.write_object(str(self._destination))


class NewDirectoryCmdlet(BaseCmdlet):
    """Create a directory; an existing one is an error unless ``Force`` is given."""

    def execute_cmdlet(self) -> None:
        target = self.resolve_path(self.get_param("Path", ""))
        if self.file_system.exists(target):
            if not self.get_param("Force", False):
                raise FileExistsError(f"Item already exists: {target}")
            if not self.file_system.is_directory(target):
                raise FileExistsError(f"A file with that name already exists: {target}")
            self.write_warning(f"Directory already exists: {target}")
        self.write_object(str(self.file_system.create_directory(target)))
