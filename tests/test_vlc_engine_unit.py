"""Unit tests for the VLC engine binding without libVLC."""

from __future__ import annotations

import sys
from types import SimpleNamespace

import pytest

from frame_player.services.media_engine import (
    EndOfStream,
    EngineError,
    EngineEvent,
    EngineUnavailableError,
)
from frame_player.services.vlc_engine import VLCMediaEngine


class _DummyEventManager:
    def __init__(self) -> None:
        self.attached: dict[str, object] = {}

    def event_attach(self, event_type: str, callback: object) -> None:
        self.attached[event_type] = callback


class _DummyPlayer:
    def __init__(self) -> None:
        self.events = _DummyEventManager()
        self.media: object = None
        self.play_result = 0
        self.calls: list[str] = []

    def event_manager(self) -> _DummyEventManager:
        return self.events

    def set_media(self, media: object) -> None:
        self.media = media

    def play(self) -> int:
        self.calls.append("play")
        return self.play_result

    def set_pause(self, flag: int) -> None:
        self.calls.append(f"set_pause:{flag}")

    def stop(self) -> None:
        self.calls.append("stop")


class _DummyInstance:
    def __init__(self) -> None:
        self.player = _DummyPlayer()

    def media_player_new(self) -> _DummyPlayer:
        return self.player

    def media_new(self, mrl: str) -> tuple[str, str]:
        return ("media", mrl)


def _install_vlc(monkeypatch, instance: object) -> SimpleNamespace:
    module = SimpleNamespace(
        Instance=lambda *args: instance,
        EventType=SimpleNamespace(
            MediaPlayerEndReached="end-reached",
            MediaPlayerEncounteredError="encountered-error",
        ),
        libvlc_errmsg=lambda: b"decoder failed",
    )
    monkeypatch.setitem(sys.modules, "vlc", module)
    return module


def test_set_uri_loads_media_and_reports_uri(monkeypatch) -> None:
    instance = _DummyInstance()
    _install_vlc(monkeypatch, instance)
    engine = VLCMediaEngine()

    assert engine.uri == ""
    engine.set_uri("file:///tmp/a.m4a")

    assert engine.uri == "file:///tmp/a.m4a"
    assert instance.player.media == ("media", "file:///tmp/a.m4a")


def test_transport_calls_map_to_player(monkeypatch) -> None:
    instance = _DummyInstance()
    _install_vlc(monkeypatch, instance)
    engine = VLCMediaEngine()

    engine.play()
    engine.pause()
    engine.stop()

    assert instance.player.calls == ["play", "set_pause:1", "stop"]


def test_play_failure_raises(monkeypatch) -> None:
    instance = _DummyInstance()
    instance.player.play_result = -1
    _install_vlc(monkeypatch, instance)
    engine = VLCMediaEngine()

    with pytest.raises(RuntimeError, match="refused to play"):
        engine.play()


def test_libvlc_events_forward_to_handler(monkeypatch) -> None:
    instance = _DummyInstance()
    _install_vlc(monkeypatch, instance)
    engine = VLCMediaEngine()
    received: list[EngineEvent] = []
    engine.set_event_handler(received.append)

    attached = instance.player.events.attached
    attached["end-reached"](object())  # type: ignore[operator]
    attached["encountered-error"](object())  # type: ignore[operator]

    assert received == [EndOfStream(), EngineError("decoder failed")]


def test_events_without_handler_are_ignored(monkeypatch) -> None:
    instance = _DummyInstance()
    _install_vlc(monkeypatch, instance)
    VLCMediaEngine()
    instance.player.events.attached["end-reached"](object())  # type: ignore[operator]


def test_missing_libvlc_raises_engine_unavailable(monkeypatch) -> None:
    def _boom(*_args: str) -> None:
        raise OSError("libvlc.so not found")

    module = _install_vlc(monkeypatch, _DummyInstance())
    module.Instance = _boom

    with pytest.raises(EngineUnavailableError, match="VLC engine unavailable"):
        VLCMediaEngine()


def test_null_instance_raises_engine_unavailable(monkeypatch) -> None:
    _install_vlc(monkeypatch, None)
    with pytest.raises(EngineUnavailableError):
        VLCMediaEngine()
