"""Concrete cmdlets exposed by the ``reso-cmdlets`` CLI."""

from reso_cmdlets.cmdlets.files import GetFileTypeCmdlet, NewDirectoryCmdlet, RenameItemCmdlet
from reso_cmdlets.cmdlets.location import GetLocationCmdlet
from reso_cmdlets.cmdlets.records import ConvertRecordIdCmdlet

__all__ = [
    "ConvertRecordIdCmdlet",
    "GetFileTypeCmdlet",
    "GetLocationCmdlet",
    "NewDirectoryCmdlet",
    "RenameItemCmdlet",
]
