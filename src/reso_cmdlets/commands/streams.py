"""Output channels a cmdlet writes to, and the error record they carry."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Protocol

import click


class ErrorCategory(str, Enum):
    """Classification attached to an error record."""

    NOT_SPECIFIED = "NotSpecified"
    WRITE_ERROR = "WriteError"
    INVALID_ARGUMENT = "InvalidArgument"
    OBJECT_NOT_FOUND = "ObjectNotFound"
    RESOURCE_EXISTS = "ResourceExists"


@dataclass(slots=True)
class ErrorRecord:
    """Recoverable failure reported on the error channel."""

    exception: BaseException
    category: ErrorCategory = ErrorCategory.WRITE_ERROR
    error_id: str = "EXCEPTION"
    target: Any = None
    timestamp_utc: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    @property
    def message(self) -> str:
        return str(self.exception)

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        category: ErrorCategory = ErrorCategory.WRITE_ERROR,
        target: Any = None,
    ) -> ErrorRecord:
        """Build a record and stamp the exception with the UTC time it was reported."""

        record = cls(exception=exc, category=category, target=target)
        exc.add_note(f"TimeStampUtc: {record.timestamp_utc.isoformat()}")
        return record


class OutputStreams(Protocol):
    """Sinks exposed by the host: one message per call, append-only."""

    def write_output(self, value: object) -> None:
        """Emit a result object."""

    def write_verbose(self, message: str) -> None:
        """Emit a low-priority diagnostic message."""

    def write_warning(self, message: str) -> None:
        """Emit a warning message."""

    def write_error(self, record: ErrorRecord) -> None:
        """Emit a recoverable error record."""


class ClickStreams:
    """Writes cmdlet output to the terminal; diagnostics go to stderr."""

    def __init__(self, *, color: bool | None = None) -> None:
        self.color = color

    def write_output(self, value: object) -> None:
        if isinstance(value, dict | list):
            click.echo(json.dumps(value, ensure_ascii=False, default=str), color=self.color)
            return
        click.echo(str(value), color=self.color)

    def write_verbose(self, message: str) -> None:
        click.echo(click.style(f"VERBOSE: {message}", fg="cyan"), err=True, color=self.color)

    def write_warning(self, message: str) -> None:
        click.echo(click.style(f"WARNING: {message}", fg="yellow"), err=True, color=self.color)

    def write_error(self, record: ErrorRecord) -> None:
        click.echo(
            click.style(f"ERROR [{record.category.value}]: {record.message}", fg="red"),
            err=True,
            color=self.color,
        )
