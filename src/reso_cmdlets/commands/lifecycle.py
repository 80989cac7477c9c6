"""Run-state and error-action policy shared by every cmdlet phase.

A phase is a sequence of zero-argument steps. ``run_phase`` executes them and
returns the next ``RunState``; once a phase fails the state stays ``FAILED``
for the rest of the invocation. What happens to the exception depends on the
``ErrorAction`` decided at invocation entry:

- ``DEFAULT`` re-raises it as ``InvalidOperationError`` (fail fast).
- ``IGNORE`` drops it without output.
- ``STOP`` and ``SILENTLY_CONTINUE`` hand it to ``on_error`` to be reported.

``PipelineStoppedError`` and non-``Exception`` errors (``KeyboardInterrupt``)
always propagate untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from reso_cmdlets.commands.errors import InvalidOperationError, PipelineStoppedError

logger = logging.getLogger(__name__)

PhaseStep = Callable[[], None]


class ErrorAction(str, Enum):
    """Caller-selected handling for exceptions raised inside a phase."""

    STOP = "stop"
    SILENTLY_CONTINUE = "silentlycontinue"
    IGNORE = "ignore"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: object) -> ErrorAction:
        """Map a bound ``ErrorAction`` value to a policy, case-insensitively."""

        if value is None:
            return cls.DEFAULT
        if isinstance(value, ErrorAction):
            return value
        normalized = str(getattr(value, "value", value)).strip().lower()
        for action in (cls.STOP, cls.SILENTLY_CONTINUE, cls.IGNORE):
            if action.value == normalized:
                return action
        return cls.DEFAULT

    @property
    def is_handled(self) -> bool:
        return self is not ErrorAction.DEFAULT


class RunState(str, Enum):
    """Outcome of an invocation so far."""

    PENDING = "pending"
    FAILED = "failed"
    COMPLETED = "completed"


def examine_exception(
    exc: Exception,
    *,
    error_action: ErrorAction,
    on_error: Callable[[Exception], None],
) -> None:
    """Apply the error policy to an exception raised by a phase step."""

    if not error_action.is_handled:
        raise InvalidOperationError(str(exc)) from exc

    if error_action is ErrorAction.IGNORE:
        logger.debug("Ignoring %s: %s", type(exc).__name__, exc)
        return

    on_error(exc)


def run_phase(
    state: RunState,
    steps: Iterable[PhaseStep],
    *,
    error_action: ErrorAction,
    on_error: Callable[[Exception], None],
    skip_when_failed: bool = False,
) -> RunState:
    """Run phase steps in order and return the resulting run state.

    Raises:
        InvalidOperationError: a step failed and ``error_action`` is ``DEFAULT``.
        PipelineStoppedError: a step signalled pipeline stop.
    """

    if skip_when_failed and state is RunState.FAILED:
        return state

    try:
        for step in steps:
            step()
    except PipelineStoppedError:
        raise
    except Exception as exc:  # noqa: BLE001
        examine_exception(exc, error_action=error_action, on_error=on_error)
        return RunState.FAILED
    return state
