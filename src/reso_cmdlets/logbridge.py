"""Forward a process-wide log source into a cmdlet's output channels.

Background work logs through ``ENGINE_LOG`` (directly, or through the
standard ``logging`` module via ``LogSourceHandler``). Host output channels
must only be written from the invoking thread, so ``LogBridge.bind`` runs the
work concurrently and replays its log events on the calling thread:

1. subscribe to the warning and error channels, and to info when verbose;
2. block on a private queue, dispatching entries as they arrive, until the
   work's completion marker is dequeued;
3. unsubscribe from all three channels, dispatch whatever is still queued,
   and return the work's future.

Each bind owns its queue, so two binds running at the same time both receive
every event published while they are subscribed and never consume each
other's entries.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import queue
import threading
from collections.abc import Awaitable, Callable
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

LogHandler = Callable[[str], None]

_WORK_DONE = object()


class LogLevel(str, Enum):
    """Severity of a bridged log entry."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One message captured from the log source."""

    level: LogLevel
    message: str


class LogChannel:
    """Publish/subscribe point carrying one string message per event."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[LogHandler] = []
        self._lock = threading.Lock()

    def subscribe(self, handler: LogHandler) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def unsubscribe(self, handler: LogHandler) -> None:
        with self._lock:
            if handler in self._handlers:
                self._handlers.remove(handler)

    def publish(self, message: str) -> None:
        with self._lock:
            handlers = tuple(self._handlers)
        for handler in handlers:
            handler(message)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)


class LogSource:
    """Three independent channels: info, warning and error."""

    def __init__(self) -> None:
        self.info = LogChannel(LogLevel.INFO.value)
        self.warning = LogChannel(LogLevel.WARNING.value)
        self.error = LogChannel(LogLevel.ERROR.value)

    def log(self, message: str) -> None:
        self.info.publish(message)

    def warn(self, message: str) -> None:
        self.warning.publish(message)

    def error_message(self, message: str) -> None:
        self.error.publish(message)


ENGINE_LOG = LogSource()


class LogSourceHandler(logging.Handler):
    """Publishes standard library log records into a ``LogSource``."""

    def __init__(self, source: LogSource = ENGINE_LOG, level: int = logging.NOTSET) -> None:
        super().__init__(level=level)
        self.source = source

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:  # noqa: BLE001
            self.handleError(record)
            return
        if record.levelno >= logging.ERROR:
            self.source.error_message(message)
        elif record.levelno >= logging.WARNING:
            self.source.warn(message)
        else:
            self.source.log(message)


def install_log_forwarding(
    logger_name: str,
    source: LogSource = ENGINE_LOG,
    level: int = logging.INFO,
) -> LogSourceHandler:
    """Attach a ``LogSourceHandler`` to a logger once and return it."""

    target = logging.getLogger(logger_name)
    target.setLevel(level)
    for handler in target.handlers:
        if isinstance(handler, LogSourceHandler) and handler.source is source:
            return handler
    handler = LogSourceHandler(source)
    target.addHandler(handler)
    return handler


def start_work(work: Future[T] | Awaitable[T] | Callable[[], T]) -> Future[T]:
    """Return a future for ``work``, starting it on a background thread if needed.

    Awaitables run in a fresh event loop on their own thread. To bridge work
    living on an already running loop, pass the future returned by
    ``asyncio.run_coroutine_threadsafe`` instead.
    """

    if isinstance(work, Future):
        return work
    if inspect.iscoroutinefunction(work):
        work = work()

    if inspect.isawaitable(work):
        awaitable = work

        async def _await() -> Any:
            return await awaitable

        def target() -> Any:
            return asyncio.run(_await())

    elif callable(work):
        target = work
    else:
        raise TypeError(
            f"Cannot bind {type(work).__name__!r}: expected a future, awaitable or callable",
        )

    future: Future[T] = Future()

    def _run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = target()
        except BaseException as exc:  # noqa: BLE001
            future.set_exception(exc)
        else:
            future.set_result(result)

    threading.Thread(target=_run, name="reso-cmdlets-bound-work", daemon=True).start()
    return future


def result_of(future: Future[T]) -> T:
    """Block until ``future`` settles and return its result or raise its failure."""

    return future.result()


class LogBridge:
    """Replays log source events on the calling thread while work runs."""

    def __init__(
        self,
        *,
        on_info: LogHandler,
        on_warning: LogHandler,
        on_error: LogHandler,
        source: LogSource = ENGINE_LOG,
        include_verbose: bool = False,
        wait_seconds: float = 0.1,
    ) -> None:
        self.source = source
        self.include_verbose = include_verbose
        self.wait_seconds = wait_seconds
        self._dispatch_table = {
            LogLevel.INFO: on_info,
            LogLevel.WARNING: on_warning,
            LogLevel.ERROR: on_error,
        }
        self._queue: queue.Queue[LogEntry | object] = queue.Queue()

    def bind(self, work: Future[T] | Awaitable[T] | Callable[[], T]) -> Future[T]:
        """Run ``work`` and return its future once all of its log output is dispatched.

        The work's outcome is not inspected; call ``result_of`` on the
        returned future to surface its failure.
        """

        self.subscribe(include_verbose=self.include_verbose)
        try:
            future = start_work(work)
            future.add_done_callback(lambda _: self._queue.put(_WORK_DONE))
            self._drain_until_done()
        finally:
            self.unsubscribe()
        drained = self._drain_pending()
        if drained:
            logger.debug("Dispatched %d log entries queued after work completion", drained)
        return future

    def subscribe(self, *, include_verbose: bool) -> None:
        self.source.warning.subscribe(self._enqueue_warning)
        self.source.error.subscribe(self._enqueue_error)
        if include_verbose:
            self.source.info.subscribe(self._enqueue_info)
        else:
            self.source.info.unsubscribe(self._enqueue_info)

    def unsubscribe(self) -> None:
        self.source.warning.unsubscribe(self._enqueue_warning)
        self.source.error.unsubscribe(self._enqueue_error)
        self.source.info.unsubscribe(self._enqueue_info)

    def _enqueue_info(self, message: str) -> None:
        self._queue.put(LogEntry(LogLevel.INFO, message))

    def _enqueue_warning(self, message: str) -> None:
        self._queue.put(LogEntry(LogLevel.WARNING, message))

    def _enqueue_error(self, message: str) -> None:
        self._queue.put(LogEntry(LogLevel.ERROR, message))

    def _drain_until_done(self) -> None:
        while True:
            # Short timeout keeps KeyboardInterrupt deliverable on the calling thread.
            try:
                item = self._queue.get(timeout=self.wait_seconds)
            except queue.Empty:
                continue
            if item is _WORK_DONE:
                return
            self._dispatch(item)

    def _drain_pending(self) -> int:
        drained = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return drained
            if item is not _WORK_DONE:
                self._dispatch(item)
                drained += 1

    def _dispatch(self, entry: LogEntry) -> None:
        self._dispatch_table[entry.level](entry.message)
