"""Media engine contracts and lifecycle signal payloads.

`PlaybackController` depends on this protocol to stay engine-agnostic. Concrete
bindings (fake/VLC) translate engine-specific callbacks into the shared
signals below and deliver them to the registered handler from whatever thread
the engine uses for notifications.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


class EngineUnavailableError(RuntimeError):
    """Raised when the media engine cannot be initialized."""


@dataclass(frozen=True)
class EngineEvent:
    """Marker base type for engine-originated lifecycle signals."""

    pass


@dataclass(frozen=True)
class EndOfStream(EngineEvent):
    """The loaded stream reached its end."""

    pass


@dataclass(frozen=True)
class EngineError(EngineEvent):
    """Engine-reported runtime error (decode, I/O, unsupported format)."""

    message: str


EngineEventHandler = Callable[[EngineEvent], None]


class MediaEngine(Protocol):
    """Playback engine protocol consumed by `PlaybackController`.

    Implementations must accept `play`/`pause`/`stop` calls from a thread other
    than the one that constructed them.
    """

    @property
    def uri(self) -> str: ...

    def set_event_handler(self, handler: EngineEventHandler) -> None: ...

    def set_uri(self, uri: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...
