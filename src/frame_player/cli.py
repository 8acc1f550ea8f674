"""Command-line interface for frame-player.

Loads the frame asset, starts the player daemon on the media file and draws
the frames on stdout. Playback and display are started together and then run
independently.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .display import play_frames
from .doctor import render_report, run_doctor
from .frames import (
    DEFAULT_DELIMITER,
    DEFAULT_PLACEHOLDER,
    AssetNotFoundError,
    load_frames,
    resolve_media_uri,
)
from .logging_utils import setup_logging
from .paths import log_dir
from .runtime_config import (
    ENGINE_BACKENDS,
    clamp_frame_interval_ms,
    resolve_backend_name,
    resolve_log_level,
)
from .services.fake_engine import FakeMediaEngine
from .services.media_engine import EngineUnavailableError, MediaEngine
from .services.player_daemon import DaemonStoppedError, PlayerDaemon
from .services.vlc_engine import VLCMediaEngine
from .version import build_help_epilog

logger = logging.getLogger(__name__)

DEFAULT_FRAMES_PATH = Path("bad-apple.txt")
DEFAULT_MEDIA_PATH = Path("BadApple.m4a")
DEFAULT_INTERVAL_MS = 41
SHUTDOWN_TIMEOUT_S = 2.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frame-player",
        description="Play a media file while drawing text frames in lockstep.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=build_help_epilog(),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument(
        "--quiet", action="store_true", help="Only show warnings and errors"
    )
    parser.add_argument("--log-file", help="Write logs to a file path")
    parser.add_argument(
        "--log-stderr", action="store_true", help="Also write logs to stderr"
    )
    parser.add_argument(
        "--backend",
        choices=ENGINE_BACKENDS,
        default="vlc",
        help="Media engine to use (vlc or fake).",
    )
    parser.add_argument(
        "--frames",
        type=Path,
        default=DEFAULT_FRAMES_PATH,
        help="Text asset holding the frames.",
    )
    parser.add_argument(
        "--media",
        type=Path,
        default=DEFAULT_MEDIA_PATH,
        help="Media file played alongside the frames.",
    )
    parser.add_argument(
        "--interval-ms",
        type=int,
        default=DEFAULT_INTERVAL_MS,
        help="Delay between frames (clamped to 1-1000 ms).",
    )
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help="Token separating frames in the asset.",
    )
    parser.add_argument(
        "--placeholder",
        default=DEFAULT_PLACEHOLDER,
        help="Character drawn as a space.",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("doctor", help="Check engine and input file readiness.")
    return parser


def run_player(
    *,
    frames_path: Path,
    media_path: Path,
    backend: str,
    interval_ms: int,
    delimiter: str = DEFAULT_DELIMITER,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> int:
    """Start playback and draw every frame; return the number of frames drawn."""
    frames = load_frames(frames_path, delimiter=delimiter, placeholder=placeholder)
    uri = resolve_media_uri(media_path)
    interval_s = clamp_frame_interval_ms(interval_ms) / 1000
    engine = _build_engine(backend, expected_duration_s=len(frames) * interval_s)
    daemon = PlayerDaemon(engine)
    daemon.play(uri)
    logger.info("Drawing %d frames every %.3f s", len(frames), interval_s)
    drawn = play_frames(frames, interval_s=interval_s)
    sys.stdout.write("\n")
    daemon.stop()
    if not daemon.drain(timeout=SHUTDOWN_TIMEOUT_S):
        logger.warning("Player daemon did not settle before exit")
    return drawn


def _build_engine(name: str, *, expected_duration_s: float) -> MediaEngine:
    logger.info("Media engine selected: %s", name)
    if name == "vlc":
        return VLCMediaEngine()
    return FakeMediaEngine(auto_end_after_s=expected_duration_s)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        level = resolve_log_level(verbose=args.verbose, quiet=args.quiet)
        setup_logging(
            log_dir=log_dir(),
            level=level,
            log_file=Path(args.log_file) if args.log_file else None,
            console=args.log_stderr,
        )
        backend = resolve_backend_name(args.backend)
        if args.command == "doctor":
            report = run_doctor(
                backend, frames_path=args.frames, media_path=args.media
            )
            print(render_report(report))
            return report.exit_code
        logger.info("Starting frame-player %s", __version__)
        run_player(
            frames_path=args.frames,
            media_path=args.media,
            backend=backend,
            interval_ms=args.interval_ms,
            delimiter=args.delimiter,
            placeholder=args.placeholder,
        )
        return 0
    except AssetNotFoundError as exc:
        logger.error("Missing asset: %s", exc)
        print(exc, file=sys.stderr)
        return 1
    except EngineUnavailableError as exc:
        logger.exception("Engine initialization failed: %s", exc)
        print(f"{exc} Run 'frame-player doctor' for details.", file=sys.stderr)
        return 1
    except DaemonStoppedError as exc:
        logger.exception("Player daemon stopped: %s", exc)
        print(exc, file=sys.stderr)
        return 1
    except Exception as exc:  # pragma: no cover - top-level safety net
        logger.exception("Unhandled error: %s", exc)
        print("Unexpected error. Re-run with --verbose for details.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
