"""Base class for all cmdlets."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from concurrent.futures import Future
from pathlib import Path
from typing import Any, TypeVar

from reso_cmdlets.commands.errors import InvalidOperationError
from reso_cmdlets.commands.lifecycle import ErrorAction, RunState, run_phase
from reso_cmdlets.commands.streams import ClickStreams, ErrorCategory, ErrorRecord, OutputStreams
from reso_cmdlets.logbridge import ENGINE_LOG, LogBridge, LogSource, result_of
from reso_cmdlets.models.filesystem import FileSystem, LocalFileSystem
from reso_cmdlets.models.session_state import HostState, SessionState

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NO_INPUT = object()


class BaseCmdlet:
    """Runs a unit of work through begin, process and end phases.

    Subclasses override any of ``perform_preprocess_setup``, ``prepare_cmdlet``,
    ``execute_cmdlet`` and ``clean_up_cmdlet``. The phase entry points
    (``begin_processing``, ``process_record``, ``end_processing``) are not
    meant to be overridden.

    Exceptions raised by the extension points are routed through the
    invocation's ``ErrorAction``: without one, the invocation fails fast with
    ``InvalidOperationError``; with ``Stop`` or ``SilentlyContinue`` an error
    record is written and the remaining process phases are skipped; with
    ``Ignore`` nothing is written.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        bound_parameters: Mapping[str, Any] | None = None,
        streams: OutputStreams | None = None,
        file_system: FileSystem | None = None,
        session_state: SessionState | None = None,
        log_source: LogSource = ENGINE_LOG,
        default_error_action: ErrorAction = ErrorAction.DEFAULT,
        verbose: bool = False,
        bridge_wait_seconds: float = 0.1,
    ) -> None:
        self.bound_parameters: dict[str, Any] = dict(bound_parameters or {})
        self.streams: OutputStreams = streams or ClickStreams()
        self.file_system: FileSystem = file_system or LocalFileSystem()
        self.session_state = session_state or SessionState.from_process()
        self.host_state = HostState(lambda: self.session_state)
        self.log_source = log_source
        self.default_error_action = default_error_action
        self.is_verbose_specified = verbose
        self.bridge_wait_seconds = bridge_wait_seconds
        self.input_object: Any = None
        self._error_action = default_error_action
        self._state = RunState.PENDING

    @property
    def error_action(self) -> ErrorAction:
        """Policy decided at invocation entry."""

        return self._error_action

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def current_location(self) -> str:
        return self.host_state.get_current_pwd() or ""

    def is_param_specified(self, name: str) -> bool:
        """Whether ``name`` was given explicitly on the invocation."""

        return self._bound_key(name) is not None

    def get_param(self, name: str, default: Any = None) -> Any:
        key = self._bound_key(name)
        return self.bound_parameters[key] if key is not None else default

    def resolve_path(self, path: str | Path) -> Path:
        """Resolve ``path`` against the session's current location."""

        candidate = Path(path).expanduser()
        if candidate.is_absolute() or not self.current_location:
            return candidate
        return Path(self.current_location) / candidate

    # Extension points

    def perform_preprocess_setup(self) -> None:
        """Check preconditions that do not depend on the parameters."""

    def prepare_cmdlet(self) -> None:
        """Validate the parameters before execution."""

    def execute_cmdlet(self) -> None:
        """Main logic of the cmdlet."""

    def clean_up_cmdlet(self) -> None:
        """Release anything acquired by earlier phases."""

    # Phases

    def begin_processing(self) -> None:
        self.is_verbose_specified |= bool(self.get_param("Verbose", False))
        if self.is_param_specified("ErrorAction"):
            self._error_action = ErrorAction.parse(self.get_param("ErrorAction"))
        else:
            self._error_action = self.default_error_action
        logger.debug(
            "Begin %s error_action=%s verbose=%s",
            type(self).__name__,
            self._error_action.value,
            self.is_verbose_specified,
        )
        self._run_phase(self.perform_preprocess_setup)

    def process_record(self, input_object: Any = None) -> None:
        if self._state is RunState.FAILED:
            return
        self.input_object = input_object
        self._run_phase(self.prepare_cmdlet, self.execute_cmdlet, skip_when_failed=True)

    def end_processing(self) -> None:
        self._run_phase(self.clean_up_cmdlet)
        if self._state is RunState.PENDING:
            self._state = RunState.COMPLETED
        logger.debug("End %s state=%s", type(self).__name__, self._state.value)

    def invoke(self, inputs: Iterable[Any] | None = None) -> RunState:
        """Run all phases; one process phase per input object."""

        self.begin_processing()
        for input_object in (_NO_INPUT,) if inputs is None else inputs:
            self.process_record(None if input_object is _NO_INPUT else input_object)
        self.end_processing()
        return self._state

    def _run_phase(self, *steps: Callable[[], None], skip_when_failed: bool = False) -> None:
        try:
            self._state = run_phase(
                self._state,
                steps,
                error_action=self._error_action,
                on_error=self.write_error_record,
                skip_when_failed=skip_when_failed,
            )
        except InvalidOperationError:
            self._state = RunState.FAILED
            raise

    # Output

    def write_object(self, value: object) -> None:
        self.streams.write_output(value)

    def write_verbose(self, message: str) -> None:
        if not self.is_verbose_specified:
            return
        self.streams.write_verbose(message)

    def write_warning(self, message: str) -> None:
        self.streams.write_warning(message)

    def write_error(self, message: str) -> None:
        """Report ``message`` as a recoverable error."""

        if message is None:
            raise TypeError("message must not be None")
        self.write_error_record(Exception(message))

    def write_error_record(
        self,
        exc: BaseException,
        category: ErrorCategory = ErrorCategory.WRITE_ERROR,
        target: Any = None,
    ) -> None:
        self.streams.write_error(ErrorRecord.from_exception(exc, category, target))

    # Log bridging

    def bind_to_log(self, work: Future[T] | Awaitable[T] | Callable[[], T]) -> Future[T]:
        """Run ``work`` while forwarding the log source into this cmdlet's output."""

        bridge = LogBridge(
            on_info=self.write_verbose,
            on_warning=self.write_warning,
            on_error=self.write_error,
            source=self.log_source,
            include_verbose=self.is_verbose_specified,
            wait_seconds=self.bridge_wait_seconds,
        )
        return bridge.bind(work)

    def run_bound(self, work: Future[T] | Awaitable[T] | Callable[[], T]) -> T:
        """``bind_to_log`` then return the work's result, re-raising its failure."""

        return result_of(self.bind_to_log(work))

    def _bound_key(self, name: str) -> str | None:
        lowered = name.lower()
        for key in self.bound_parameters:
            if key.lower() == lowered:
                return key
        return None
