"""Per-session run loop driver.

Each fresh `play` owns one `PlaybackSession`: a dedicated thread that starts
the engine and then blocks on a private `RunLoop` until the engine reports
end-of-stream or an error, or until the controller asks it to quit.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from enum import Enum

from .media_engine import EndOfStream, EngineError, EngineEvent, MediaEngine

logger = logging.getLogger(__name__)


class SessionState(Enum):
    STARTING = "starting"
    RUNNING = "running"
    END_OF_STREAM = "end_of_stream"
    ERROR = "error"
    TERMINATED = "terminated"


class RunLoop:
    """Blocking loop that processes posted engine events until told to quit."""

    _QUIT = object()

    def __init__(self) -> None:
        self._queue: queue.Queue[object] = queue.Queue()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def post(self, event: EngineEvent) -> None:
        self._queue.put(event)

    def quit(self) -> None:
        self._queue.put(self._QUIT)

    def run(self, handler: Callable[[EngineEvent], None]) -> None:
        self._running = True
        try:
            while True:
                item = self._queue.get()
                if item is self._QUIT:
                    return
                if not isinstance(item, EngineEvent):
                    logger.warning("Run loop ignoring non-event item %r", item)
                    continue
                handler(item)
        finally:
            self._running = False


class PlaybackSession:
    """One play-to-termination lifetime of the engine's run loop."""

    def __init__(
        self,
        engine: MediaEngine,
        session_id: int,
        *,
        on_finished: Callable[[int], None] | None = None,
    ) -> None:
        self.session_id = session_id
        self._engine = engine
        self._on_finished = on_finished
        self._loop = RunLoop()
        self._state = SessionState.STARTING
        self._outcome: SessionState | None = None
        self._error: str | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def outcome(self) -> SessionState | None:
        """`END_OF_STREAM` or `ERROR` once a signal ended the session."""
        return self._outcome

    @property
    def error(self) -> str | None:
        """Diagnostic message captured from the last engine error, if any."""
        return self._error

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._thread_main,
            name=f"PlaybackSession-{self.session_id}",
            daemon=True,
        )
        self._thread.start()

    def post(self, event: EngineEvent) -> None:
        self._loop.post(event)

    def quit(self) -> None:
        """Terminate the loop without touching the engine."""
        self._loop.quit()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the session thread; return True when it has exited."""
        if self._thread is None:
            return True
        self._thread.join(timeout=timeout)
        return not self._thread.is_alive()

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def wait_started(self, timeout: float | None = None) -> bool:
        """Wait until the starting phase (`engine.play()`) has completed."""
        return self._started.wait(timeout)

    def _thread_main(self) -> None:
        try:
            try:
                self._engine.play()
            except Exception as exc:
                self._record_error(str(exc) or exc.__class__.__name__)
                return
            finally:
                self._started.set()
            self._state = SessionState.RUNNING
            logger.info("Playback session %d running", self.session_id)
            self._loop.run(self._handle_event)
        finally:
            self._state = SessionState.TERMINATED
            logger.debug("Playback session %d terminated", self.session_id)
            if self._on_finished is not None:
                self._on_finished(self.session_id)

    def _handle_event(self, event: EngineEvent) -> None:
        if isinstance(event, EndOfStream):
            self._state = self._outcome = SessionState.END_OF_STREAM
            logger.info("Playback session %d reached end of stream", self.session_id)
            self._stop_engine()
            self._loop.quit()
        elif isinstance(event, EngineError):
            self._record_error(event.message)
            # Errors end the session the same way end-of-stream does.
            self._loop.quit()
        else:
            logger.debug("Ignoring unregistered engine event %r", event)

    def _record_error(self, message: str) -> None:
        self._state = self._outcome = SessionState.ERROR
        self._error = message
        logger.error("Playback session %d error: %s", self.session_id, message)
        self._stop_engine()

    def _stop_engine(self) -> None:
        try:
            self._engine.stop()
        except Exception:
            logger.exception("Engine stop failed in session %d", self.session_id)
