"""Tests for environment diagnostics probes and report behavior."""

from __future__ import annotations

import types

import frame_player.doctor as doctor_module


def _check(name: str, status: str, required: bool) -> doctor_module.DoctorCheck:
    return doctor_module.DoctorCheck(
        name=name,
        status=status,  # type: ignore[arg-type]
        required=required,
        detail="detail",
    )


def test_run_doctor_fake_backend_allows_missing_vlc(monkeypatch, tmp_path) -> None:
    frames = tmp_path / "frames.txt"
    media = tmp_path / "media.m4a"
    frames.write_text("a", encoding="utf-8")
    media.write_bytes(b"\x00")
    monkeypatch.setattr(
        doctor_module,
        "probe_vlc",
        lambda **kwargs: _check("vlc/libvlc", "missing", kwargs["required"]),
    )

    report = doctor_module.run_doctor("fake", frames_path=frames, media_path=media)

    assert report.exit_code == 0


def test_run_doctor_vlc_backend_fails_when_vlc_missing(monkeypatch, tmp_path) -> None:
    frames = tmp_path / "frames.txt"
    media = tmp_path / "media.m4a"
    frames.write_text("a", encoding="utf-8")
    media.write_bytes(b"\x00")
    monkeypatch.setattr(
        doctor_module,
        "probe_vlc",
        lambda **kwargs: _check("vlc/libvlc", "missing", kwargs["required"]),
    )

    report = doctor_module.run_doctor("vlc", frames_path=frames, media_path=media)

    assert report.exit_code == 2


def test_run_doctor_fails_on_missing_media(monkeypatch, tmp_path) -> None:
    frames = tmp_path / "frames.txt"
    frames.write_text("a", encoding="utf-8")
    monkeypatch.setattr(
        doctor_module,
        "probe_vlc",
        lambda **kwargs: _check("vlc/libvlc", "ok", kwargs["required"]),
    )

    report = doctor_module.run_doctor(
        "fake", frames_path=frames, media_path=tmp_path / "missing.m4a"
    )

    assert report.exit_code == 2
    assert report.checks[-1].status == "missing"


def test_probe_vlc_import_failure_is_missing(monkeypatch) -> None:
    def fail_import(_name: str) -> object:
        raise ImportError("no vlc")

    monkeypatch.setattr(doctor_module.importlib, "import_module", fail_import)
    check = doctor_module.probe_vlc(required=True)
    assert check.status == "missing"
    assert check.required is True


def test_probe_vlc_runtime_failure_is_error(monkeypatch) -> None:
    fake = types.SimpleNamespace(__version__="3.0.0", Instance=lambda: None)
    monkeypatch.setattr(doctor_module.importlib, "import_module", lambda _name: fake)
    check = doctor_module.probe_vlc(required=False)
    assert check.status == "error"
    assert "3.0.0" in check.detail


def test_probe_vlc_ok_reports_version(monkeypatch) -> None:
    instance = types.SimpleNamespace(media_player_new=lambda: object())
    fake = types.SimpleNamespace(
        __version__="3.0.0",
        Instance=lambda: instance,
        libvlc_get_version=lambda: b"3.0.20 Vetinari",
    )
    monkeypatch.setattr(doctor_module.importlib, "import_module", lambda _name: fake)
    check = doctor_module.probe_vlc(required=True)
    assert check.status == "ok"
    assert "3.0.20 Vetinari" in check.detail


def test_render_report_includes_result_and_hint() -> None:
    report = doctor_module.DoctorReport(
        backend="vlc",
        checks=[
            _check("frames", "ok", True),
            doctor_module.DoctorCheck(
                name="vlc/libvlc",
                status="missing",
                required=True,
                detail="missing",
                hint="install vlc",
            ),
        ],
    )
    text = doctor_module.render_report(report)
    assert "Result: FAIL" in text
    assert "[MISS]" in text
    assert "install vlc" in text
