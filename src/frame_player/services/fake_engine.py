"""Fake media engine for deterministic testing and engine-less runs."""

from __future__ import annotations

import logging
import threading
from typing import Literal

from .media_engine import EndOfStream, EngineError, EngineEvent, EngineEventHandler

logger = logging.getLogger(__name__)

FakeStatus = Literal["idle", "playing", "paused", "stopped"]


class FakeMediaEngine:
    """In-memory engine that records calls and raises signals on request.

    With `auto_end_after_s` set, every fresh load that starts playing emits
    `EndOfStream` after that many seconds, mimicking a finite media file.
    """

    def __init__(self, *, auto_end_after_s: float | None = None) -> None:
        self._auto_end_after_s = auto_end_after_s
        self._handler: EngineEventHandler | None = None
        self._cond = threading.Condition()
        self._uri = ""
        self._status: FakeStatus = "idle"
        self._loaded = False
        self._timer: threading.Timer | None = None
        self.calls: list[tuple[str, ...]] = []

    @property
    def uri(self) -> str:
        with self._cond:
            return self._uri

    @property
    def status(self) -> FakeStatus:
        with self._cond:
            return self._status

    def set_event_handler(self, handler: EngineEventHandler) -> None:
        self._handler = handler

    def set_uri(self, uri: str) -> None:
        with self._cond:
            self._cancel_timer()
            self._uri = uri
            self._loaded = True
            self._record("set_uri", uri)

    def play(self) -> None:
        with self._cond:
            fresh = self._loaded
            self._loaded = False
            self._status = "playing"
            self._record("play")
            if fresh and self._auto_end_after_s is not None:
                self._timer = threading.Timer(
                    self._auto_end_after_s, self.emit_end_of_stream
                )
                self._timer.daemon = True
                self._timer.start()

    def pause(self) -> None:
        with self._cond:
            if self._status == "playing":
                self._status = "paused"
            self._record("pause")

    def stop(self) -> None:
        with self._cond:
            self._cancel_timer()
            self._status = "stopped"
            self._record("stop")

    def emit_end_of_stream(self) -> None:
        """Simulate the engine reaching the end of the loaded stream."""
        self._emit(EndOfStream())

    def emit_error(self, message: str = "simulated engine error") -> None:
        """Simulate an asynchronous engine runtime error."""
        self._emit(EngineError(message))

    def count(self, name: str) -> int:
        with self._cond:
            return sum(1 for call in self.calls if call[0] == name)

    def wait_for_calls(self, name: str, count: int = 1, timeout: float = 2.0) -> bool:
        """Block until `name` has been called at least `count` times."""
        with self._cond:
            return self._cond.wait_for(
                lambda: sum(1 for call in self.calls if call[0] == name) >= count,
                timeout=timeout,
            )

    def _record(self, *call: str) -> None:
        self.calls.append(call)
        self._cond.notify_all()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _emit(self, event: EngineEvent) -> None:
        handler = self._handler
        if handler is None:
            logger.debug("Fake engine dropped %r with no handler", event)
            return
        handler(event)
