"""Tests for frame asset loading and media URI resolution."""

from __future__ import annotations

import pytest

from frame_player.frames import AssetNotFoundError, load_frames, resolve_media_uri


def test_load_frames_splits_and_replaces_placeholder(tmp_path) -> None:
    asset = tmp_path / "frames.txt"
    asset.write_text("a.bSPLIT..cSPLITd", encoding="utf-8")

    assert load_frames(asset) == ["a b", "  c", "d"]


def test_load_frames_custom_tokens(tmp_path) -> None:
    asset = tmp_path / "frames.txt"
    asset.write_text("x_y|z", encoding="utf-8")

    assert load_frames(asset, delimiter="|", placeholder="_") == ["x y", "z"]


def test_load_frames_without_delimiter_is_single_frame(tmp_path) -> None:
    asset = tmp_path / "frames.txt"
    asset.write_text("only", encoding="utf-8")

    assert load_frames(asset) == ["only"]


def test_load_frames_missing_asset(tmp_path) -> None:
    with pytest.raises(AssetNotFoundError, match="Frame asset not found"):
        load_frames(tmp_path / "missing.txt")


def test_load_frames_rejects_empty_delimiter(tmp_path) -> None:
    asset = tmp_path / "frames.txt"
    asset.write_text("x", encoding="utf-8")
    with pytest.raises(ValueError):
        load_frames(asset, delimiter="")


def test_resolve_media_uri_is_absolute_file_uri(tmp_path, monkeypatch) -> None:
    media = tmp_path / "song.m4a"
    media.write_bytes(b"\x00")
    monkeypatch.chdir(tmp_path)

    uri = resolve_media_uri(media.relative_to(tmp_path))

    assert uri.startswith("file://")
    assert uri == media.resolve().as_uri()


def test_resolve_media_uri_missing_file(tmp_path) -> None:
    with pytest.raises(AssetNotFoundError, match="Media file not found"):
        resolve_media_uri(tmp_path / "missing.m4a")


def test_resolve_media_uri_rejects_directory(tmp_path) -> None:
    with pytest.raises(AssetNotFoundError, match="not a file"):
        resolve_media_uri(tmp_path)


def test_asset_not_found_is_file_not_found() -> None:
    assert issubclass(AssetNotFoundError, FileNotFoundError)
