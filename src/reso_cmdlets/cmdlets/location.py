"""Session location cmdlet."""

from __future__ import annotations

from reso_cmdlets.commands import BaseCmdlet


class GetLocationCmdlet(BaseCmdlet):
    """Write the session's current working location."""

    def execute_cmdlet(self) -> None:
        location = self.current_location
        if not location:
            raise RuntimeError("The session has no current location.")
        self.write_object(location)
