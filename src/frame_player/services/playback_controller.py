"""Playback state machine driving a single media engine.

`PlaybackController` decides, per command, whether to start fresh, resume or
ignore a request. It is built once by `PlayerDaemon` and afterwards touched
only from the daemon's worker thread; the engine handle is shared with at most
one live `PlaybackSession` thread.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from enum import Enum

from .media_engine import EngineEvent, MediaEngine
from .run_loop import PlaybackSession

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    STOPPED = "stopped"
    PAUSED = "paused"
    PLAYING = "playing"


class PlaybackController:
    """Owns the engine lifecycle and the paused/stopped flags."""

    def __init__(
        self,
        engine: MediaEngine,
        *,
        on_session_finished: Callable[[int], None] | None = None,
        join_timeout_s: float = 2.0,
    ) -> None:
        self._engine = engine
        self._on_session_finished = on_session_finished
        self._join_timeout_s = join_timeout_s
        self._session_ids = itertools.count(1)
        self._session: PlaybackSession | None = None
        self._is_paused = False
        self._is_stopped = True
        self._engine.set_event_handler(self._handle_engine_event)

    @property
    def state(self) -> PlaybackState:
        if self._is_paused:
            return PlaybackState.PAUSED
        if self._is_stopped:
            return PlaybackState.STOPPED
        return PlaybackState.PLAYING

    @property
    def session(self) -> PlaybackSession | None:
        return self._session

    def play(self, uri: str) -> PlaybackSession | None:
        """Apply a play request and return the new session, if one was spawned.

        | paused | stopped | same uri | action      |
        |--------|---------|----------|-------------|
        | yes    | any     | yes      | resume      |
        | no     | yes     | any      | fresh start |
        | any    | no      | no       | fresh start |
        | no     | no      | yes      | no-op       |
        """
        self._settle_ended_session()
        current_uri = self._engine.uri
        if self._is_paused and uri == current_uri:
            self.resume()
            return None
        if self._is_stopped or uri != current_uri:
            return self._start_fresh(uri)
        logger.debug("Already playing %s; ignoring play request", uri)
        return None

    def resume(self) -> bool:
        """Continue a paused stream; a no-op unless paused."""
        if not self._is_paused:
            return False
        self._is_paused = False
        self._engine.play()
        logger.info("Playback resumed: %s", self._engine.uri)
        return True

    def pause(self) -> bool:
        """Pause the playing stream; a no-op unless playing."""
        self._settle_ended_session()
        if self._is_paused or self._is_stopped:
            return False
        self._is_paused = True
        self._engine.pause()
        logger.info("Playback paused: %s", self._engine.uri)
        return True

    def stop(self) -> None:
        """Tear down the live session and stop the engine."""
        self._teardown_session()
        self._is_paused = False
        self._is_stopped = True
        self._engine.stop()
        logger.info("Playback stopped")

    def handle_session_finished(self, session_id: int) -> bool:
        """Mark playback stopped if `session_id` is still the current session."""
        session = self._session
        if session is None or session.session_id != session_id:
            logger.debug("Ignoring finish notice from stale session %d", session_id)
            return False
        self._session = None
        self._is_paused = False
        self._is_stopped = True
        if session.error is not None:
            logger.warning("Playback ended with error: %s", session.error)
        else:
            logger.info("Playback finished")
        return True

    def _start_fresh(self, uri: str) -> PlaybackSession:
        self._teardown_session()
        self._is_paused = False
        self._is_stopped = True
        self._engine.set_uri(uri)
        self._is_stopped = False
        session = PlaybackSession(
            self._engine,
            next(self._session_ids),
            on_finished=self._on_session_finished,
        )
        self._session = session
        session.start()
        if not session.wait_started(self._join_timeout_s):
            logger.warning(
                "Playback session %d did not finish starting within %.1f seconds",
                session.session_id,
                self._join_timeout_s,
            )
        logger.info("Playback started: %s (session %d)", uri, session.session_id)
        return session

    def _settle_ended_session(self) -> None:
        # A session that hit end-of-stream or an error is over even though its
        # SessionFinished notice may still be queued behind this command.
        session = self._session
        if self._is_stopped or session is None:
            return
        if session.outcome is None and session.is_alive():
            return
        self._is_paused = False
        self._is_stopped = True
        logger.debug(
            "Session %d already ended; treating as stopped", session.session_id
        )

    def _teardown_session(self) -> None:
        session = self._session
        self._session = None
        if session is None or not session.is_alive():
            return
        session.quit()
        if not session.join(self._join_timeout_s):
            logger.warning(
                "Playback session %d did not stop within %.1f seconds",
                session.session_id,
                self._join_timeout_s,
            )

    def _handle_engine_event(self, event: EngineEvent) -> None:
        # Called on the engine's notification thread.
        session = self._session
        if session is None or not session.is_alive():
            logger.debug("Dropping %r with no live session", event)
            return
        session.post(event)
