"""Runtime configuration normalization helpers.

These helpers keep CLI flag interpretation deterministic.
"""

from __future__ import annotations

ENGINE_BACKENDS = ("vlc", "fake")
DEFAULT_BACKEND = "vlc"
FRAME_INTERVAL_MIN_MS = 1
FRAME_INTERVAL_MAX_MS = 1000


def resolve_log_level(*, verbose: bool, quiet: bool) -> str:
    """Resolve effective log level from CLI flags.

    Precedence is deterministic: --quiet overrides --verbose.
    """
    if quiet:
        return "WARNING"
    if verbose:
        return "DEBUG"
    return "INFO"


def resolve_backend_name(value: str | None) -> str:
    """Normalize a backend name, falling back to the default engine."""
    if value is None:
        return DEFAULT_BACKEND
    normalized = value.strip().lower()
    if normalized in ENGINE_BACKENDS:
        return normalized
    return DEFAULT_BACKEND


def clamp_frame_interval_ms(value: int) -> int:
    return max(FRAME_INTERVAL_MIN_MS, min(FRAME_INTERVAL_MAX_MS, int(value)))
