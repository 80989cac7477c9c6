"""Record id parsing: ``[<owner>/]R-<id>`` where owner is ``U-``, ``G-`` or ``M-``."""

from __future__ import annotations

import re
from dataclasses import dataclass

RECORD_ID_PATTERN = re.compile(
    r"^((?P<owner_id>[UGM]-.+)/)?(?P<record_id>R-[\w-]+)",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class RecordId:
    owner_id: str | None
    record_id: str


def parse_record_id(value: str) -> RecordId | None:
    match = RECORD_ID_PATTERN.match(value.strip())
    if match is None:
        return None
    return RecordId(owner_id=match.group("owner_id"), record_id=match.group("record_id"))
