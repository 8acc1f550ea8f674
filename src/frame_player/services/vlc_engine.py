"""VLC media engine binding using python-vlc."""

from __future__ import annotations

import logging
import threading
from typing import Any

from .media_engine import (
    EndOfStream,
    EngineError,
    EngineEvent,
    EngineEventHandler,
    EngineUnavailableError,
)

logger = logging.getLogger(__name__)


class VLCMediaEngine:
    """Media engine backed by a single libVLC media player.

    libVLC delivers end-of-stream and error notifications on its own event
    thread. Handlers must not call back into the player from that thread, so
    this binding only forwards signals; the session thread issues `stop()`.
    """

    def __init__(self, *, instance_args: tuple[str, ...] = ("--no-video",)) -> None:
        try:
            import vlc

            instance = vlc.Instance(*instance_args)
            if instance is None:
                raise RuntimeError("libvlc_new returned no instance")
            player = instance.media_player_new()
        except Exception as exc:
            raise EngineUnavailableError(
                "VLC engine unavailable. Ensure VLC/libVLC is installed."
            ) from exc

        self._vlc: Any = vlc
        self._instance: Any = instance
        self._player: Any = player
        self._uri = ""
        self._handler: EngineEventHandler | None = None
        self._lock = threading.Lock()

        events = player.event_manager()
        events.event_attach(vlc.EventType.MediaPlayerEndReached, self._on_end_reached)
        events.event_attach(
            vlc.EventType.MediaPlayerEncounteredError, self._on_encountered_error
        )

    @property
    def uri(self) -> str:
        with self._lock:
            return self._uri

    def set_event_handler(self, handler: EngineEventHandler) -> None:
        self._handler = handler

    def set_uri(self, uri: str) -> None:
        media = self._instance.media_new(uri)
        with self._lock:
            self._player.set_media(media)
            self._uri = uri
        logger.debug("VLC media set: %s", uri)

    def play(self) -> None:
        with self._lock:
            result = self._player.play()
        if result == -1:
            raise RuntimeError(f"libVLC refused to play {self._uri!r}")

    def pause(self) -> None:
        with self._lock:
            self._player.set_pause(1)

    def stop(self) -> None:
        with self._lock:
            self._player.stop()

    def _on_end_reached(self, _event: Any) -> None:
        self._emit_event(EndOfStream())

    def _on_encountered_error(self, _event: Any) -> None:
        self._emit_event(EngineError(_last_error_message(self._vlc)))

    def _emit_event(self, event: EngineEvent) -> None:
        handler = self._handler
        if handler is None:
            return
        try:
            handler(event)
        except Exception:  # pragma: no cover - never raise into libVLC
            logger.exception("Engine event handler failed for %r", event)


def _last_error_message(vlc: Any) -> str:
    """Best-effort extraction of libVLC's last error string."""
    getter = getattr(vlc, "libvlc_errmsg", None)
    if callable(getter):
        try:
            message = getter()
        except Exception:
            message = None
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        if message:
            return str(message)
    return "libVLC reported a playback error"
