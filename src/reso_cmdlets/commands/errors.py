"""Exceptions raised by the cmdlet lifecycle."""

from __future__ import annotations


class CmdletError(Exception):
    """Base class for cmdlet framework errors."""


class InvalidOperationError(CmdletError):
    """Fatal invocation failure raised when no error action handles an exception."""


class PipelineStoppedError(CmdletError):
    """The host stopped the pipeline; never intercepted by the error policy."""
