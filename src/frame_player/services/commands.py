"""Commands accepted by `PlayerDaemon`."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """Marker base type for dispatcher commands."""

    pass


@dataclass(frozen=True)
class Play(Command):
    """Play `uri`, resuming or ignoring it when already current."""

    uri: str


@dataclass(frozen=True)
class Pause(Command):
    pass


@dataclass(frozen=True)
class Resume(Command):
    pass


@dataclass(frozen=True)
class Stop(Command):
    pass


@dataclass(frozen=True)
class SessionFinished(Command):
    """Posted by a terminating session so the worker can mark playback stopped."""

    session_id: int
