"""Play a media file through the VLC engine and player daemon for a few seconds."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from frame_player.frames import resolve_media_uri  # noqa: E402
from frame_player.services.player_daemon import PlayerDaemon  # noqa: E402
from frame_player.services.vlc_engine import VLCMediaEngine  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="VLC engine smoke test.")
    parser.add_argument("path", type=Path, help="Path to a media file.")
    parser.add_argument("--seconds", type=float, default=5.0)
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG, format="%(threadName)s %(name)s %(message)s"
    )

    daemon = PlayerDaemon(VLCMediaEngine())
    daemon.play(resolve_media_uri(args.path))
    time.sleep(args.seconds / 2)
    daemon.pause()
    time.sleep(0.5)
    daemon.resume()
    time.sleep(args.seconds / 2)
    daemon.stop()
    daemon.drain(timeout=2.0)
    print(f"final state: {daemon.state.value}")


if __name__ == "__main__":
    main()
