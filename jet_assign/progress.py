from __future__ import annotations

import time
from typing import Callable, TextIO


def progress_bar(fraction: float, *, width: int = 30) -> str:
    fraction = min(1.0, max(0.0, fraction))
    filled = int(round(fraction * width))
    return f"[{'#' * filled}{'.' * (width - filled)}] {int(round(fraction * 100)):>3}%"


def simulate_upload(
    out: TextIO,
    *,
    steps: int = 20,
    interval: float = 0.05,
    label: str = "Uploading the seating plan",
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Draw an upload progress bar on ``out``. Nothing is sent anywhere; the
    sleeps only pace the animation. ``interval == 0`` draws the finished bar.
    """
    steps = max(1, int(steps))
    if interval <= 0:
        out.write(f"{label} {progress_bar(1.0)}\n")
        out.flush()
        return

    for i in range(steps + 1):
        out.write(f"\r{label} {progress_bar(i / steps)}")
        out.flush()
        if i < steps:
            sleep(interval)
    out.write("\n")
    out.flush()
