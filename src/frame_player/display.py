"""Fixed-interval text frame display."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Iterable
from typing import TextIO

DEFAULT_FRAME_INTERVAL_S = 0.041


def play_frames(
    frames: Iterable[str],
    *,
    interval_s: float = DEFAULT_FRAME_INTERVAL_S,
    out: TextIO | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Draw each frame in place, one per `interval_s`, and return the count.

    Frames end with a carriage return, never a newline, so each one overwrites
    the previous.
    """
    stream = out if out is not None else sys.stdout
    drawn = 0
    for frame in frames:
        stream.write(f"{frame}\r")
        stream.flush()
        drawn += 1
        sleep(interval_s)
    return drawn
