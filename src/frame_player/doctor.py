"""Runtime diagnostics for engine readiness and input assets."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

DoctorStatus = Literal["ok", "missing", "error"]


@dataclass(frozen=True)
class DoctorCheck:
    """One environment readiness check result."""

    name: str
    status: DoctorStatus
    required: bool
    detail: str
    hint: str | None = None


@dataclass(frozen=True)
class DoctorReport:
    """Collection of doctor checks and derived process exit contract."""

    backend: str
    checks: list[DoctorCheck]

    @property
    def exit_code(self) -> int:
        """Return non-zero when any required check failed or is missing."""
        for check in self.checks:
            if check.required and check.status != "ok":
                return 2
        return 0


def run_doctor(backend: str, *, frames_path: Path, media_path: Path) -> DoctorReport:
    """Run diagnostics for the selected engine backend and input files."""
    checks = [
        probe_vlc(required=backend == "vlc"),
        probe_file("frames", frames_path),
        probe_file("media", media_path),
    ]
    return DoctorReport(backend=backend, checks=checks)


def render_report(report: DoctorReport) -> str:
    """Render terminal-friendly diagnostics report text."""
    lines = [f"frame-player doctor (backend={report.backend})", ""]
    for check in report.checks:
        state = _status_token(check.status)
        req = "required" if check.required else "optional"
        lines.append(f"{state} {check.name:<11} [{req}] {check.detail}")
        if check.hint:
            lines.append(f"      hint: {check.hint}")
    lines.append("")
    lines.append("Result: OK" if report.exit_code == 0 else "Result: FAIL")
    return "\n".join(lines)


def probe_vlc(*, required: bool) -> DoctorCheck:
    """Verify python-vlc import and libVLC runtime usability."""
    try:
        vlc = importlib.import_module("vlc")
    except Exception as exc:
        return DoctorCheck(
            name="vlc/libvlc",
            status="missing",
            required=required,
            detail=f"python-vlc import failed ({exc.__class__.__name__})",
            hint="Install VLC/libVLC and ensure python-vlc can locate libVLC.",
        )
    version = getattr(vlc, "__version__", "unknown")
    try:
        instance = vlc.Instance()
        if instance is None:
            raise RuntimeError("libvlc_new returned no instance")
        instance.media_player_new()
    except Exception as exc:
        return DoctorCheck(
            name="vlc/libvlc",
            status="error",
            required=required,
            detail=(
                f"python-vlc {version}; libVLC runtime unavailable "
                f"({exc.__class__.__name__})"
            ),
            hint="Install VLC/libVLC and verify runtime library search path.",
        )
    return DoctorCheck(
        name="vlc/libvlc",
        status="ok",
        required=required,
        detail=f"python-vlc {version}; libVLC {_libvlc_version(vlc)}",
    )


def probe_file(name: str, path: Path) -> DoctorCheck:
    """Verify that a required input file exists and is readable."""
    if not path.is_file():
        return DoctorCheck(
            name=name,
            status="missing",
            required=True,
            detail=f"{path} not found",
            hint="Pass the correct path on the command line.",
        )
    try:
        with path.open("rb") as handle:
            handle.read(1)
    except OSError as exc:
        return DoctorCheck(
            name=name,
            status="error",
            required=True,
            detail=f"{path} unreadable ({exc.__class__.__name__})",
        )
    return DoctorCheck(name=name, status="ok", required=True, detail=str(path))


def _status_token(status: DoctorStatus) -> str:
    if status == "ok":
        return "[OK]"
    if status == "missing":
        return "[MISS]"
    return "[ERR]"


def _libvlc_version(vlc: object) -> str:
    """Best-effort extraction of libVLC runtime version string."""
    getter = getattr(vlc, "libvlc_get_version", None)
    if not callable(getter):
        return "detected"
    try:
        release = getter()
    except Exception:
        return "detected"
    if isinstance(release, bytes):
        return release.decode("utf-8", errors="replace")
    return str(release) if release else "detected"
