"""Record id cmdlet."""

from __future__ import annotations

from reso_cmdlets.commands import BaseCmdlet
from reso_cmdlets.utilities.record_id import parse_record_id


class ConvertRecordIdCmdlet(BaseCmdlet):
    """Split each input record id into owner and record parts."""

    def execute_cmdlet(self) -> None:
        value = str(self.input_object or "")
        parsed = parse_record_id(value)
        if parsed is None:
            raise ValueError(f"Invalid record id: {value!r}")
        if parsed.owner_id is None:
            self.write_verbose(f"{value!r} has no owner prefix")
        self.write_object({"owner_id": parsed.owner_id, "record_id": parsed.record_id})
