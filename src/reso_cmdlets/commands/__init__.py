"""Cmdlet base class, lifecycle policy, and output channels."""

from reso_cmdlets.commands.base import BaseCmdlet
from reso_cmdlets.commands.errors import CmdletError, InvalidOperationError, PipelineStoppedError
from reso_cmdlets.commands.lifecycle import ErrorAction, RunState, examine_exception, run_phase
from reso_cmdlets.commands.streams import ClickStreams, ErrorCategory, ErrorRecord, OutputStreams

__all__ = [
    "BaseCmdlet",
    "ClickStreams",
    "CmdletError",
    "ErrorAction",
    "ErrorCategory",
    "ErrorRecord",
    "InvalidOperationError",
    "OutputStreams",
    "PipelineStoppedError",
    "RunState",
    "examine_exception",
    "run_phase",
]
