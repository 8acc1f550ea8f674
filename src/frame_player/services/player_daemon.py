"""Command dispatcher that serializes playback commands onto one worker thread."""

from __future__ import annotations

import logging
import queue
import threading
import time

from .commands import Command, Pause, Play, Resume, SessionFinished, Stop
from .media_engine import MediaEngine
from .playback_controller import PlaybackController, PlaybackState

logger = logging.getLogger(__name__)


class DaemonStoppedError(RuntimeError):
    """Raised when a command is sent after the worker thread has died."""


class PlayerDaemon:
    """Owns the command queue and the worker that applies it to the controller.

    Commands from any number of threads are applied one at a time in
    submission order. The worker loop has no shutdown path; it ends with the
    process.
    """

    def __init__(self, engine: MediaEngine, *, join_timeout_s: float = 2.0) -> None:
        self._queue: queue.Queue[Command] = queue.Queue()
        self._controller = PlaybackController(
            engine,
            on_session_finished=self._session_finished,
            join_timeout_s=join_timeout_s,
        )
        self._thread = threading.Thread(
            target=self._thread_main,
            name="PlayerDaemonThread",
            daemon=True,
        )
        self._thread.start()

    @property
    def state(self) -> PlaybackState:
        return self._controller.state

    def play(self, uri: str) -> None:
        self.submit(Play(uri))

    def pause(self) -> None:
        self.submit(Pause())

    def resume(self) -> None:
        self.submit(Resume())

    def stop(self) -> None:
        self.submit(Stop())

    def submit(self, command: Command) -> None:
        if not self._thread.is_alive():
            raise DaemonStoppedError("Player daemon worker is not running.")
        self._queue.put(command)

    def drain(self, timeout: float | None = None) -> bool:
        """Block until every submitted command has been applied.

        Returns False if `timeout` elapsed first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        # Relies on Queue.all_tasks_done and Queue.unfinished_tasks, the same
        # state Queue.join() waits on; join() itself has no timeout.
        with self._queue.all_tasks_done:
            while self._queue.unfinished_tasks:
                if not self._thread.is_alive():
                    raise DaemonStoppedError("Player daemon worker is not running.")
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                # Poll so a dead worker cannot leave us waiting forever.
                wait = 0.1 if remaining is None else min(0.1, remaining)
                self._queue.all_tasks_done.wait(wait)
        return True

    def _session_finished(self, session_id: int) -> None:
        # Called on a session thread; the worker applies it.
        try:
            self.submit(SessionFinished(session_id))
        except DaemonStoppedError:
            logger.error("Dropped finish notice for session %d", session_id)

    def _thread_main(self) -> None:
        while True:
            command = self._queue.get()
            try:
                self._dispatch(command)
            except Exception:
                logger.exception("Player daemon failed to apply %r", command)
            finally:
                self._queue.task_done()

    def _dispatch(self, command: Command) -> None:
        logger.debug("Applying %r", command)
        controller = self._controller
        if isinstance(command, Play):
            controller.play(command.uri)
        elif isinstance(command, Pause):
            controller.pause()
        elif isinstance(command, Resume):
            controller.resume()
        elif isinstance(command, Stop):
            controller.stop()
        elif isinstance(command, SessionFinished):
            controller.handle_session_finished(command.session_id)
        else:
            raise ValueError(f"Unknown command {command!r}")
