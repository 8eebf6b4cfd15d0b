"""Terminal busy indicator bound to the scope of one turn."""

from __future__ import annotations

import asyncio
import contextlib
import sys
from typing import AsyncIterator, Sequence, TextIO

FRAMES: Sequence[str] = ("|", "/", "-", "\\")
INTERVAL_SECONDS = 0.25


async def _spin(stream: TextIO, label: str, frames: Sequence[str], interval: float) -> None:
    i = 0
    while True:
        stream.write(f"\r{label} {frames[i % len(frames)]}")
        stream.flush()
        i += 1
        await asyncio.sleep(interval)


@contextlib.asynccontextmanager
async def busy_indicator(
    label: str = "Thinking...",
    *,
    stream: TextIO | None = None,
    frames: Sequence[str] = FRAMES,
    interval: float = INTERVAL_SECONDS,
) -> AsyncIterator[None]:
    """
    Redraw a spinner while the body runs.

    The redraw task is cancelled and awaited before the context exits, whether
    the body returns or raises, and the line is wiped so the next print starts
    at column 0.
    """
    out = stream if stream is not None else sys.stdout
    task = asyncio.create_task(_spin(out, label, frames, interval))
    try:
        yield
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        out.write("\r" + " " * (len(label) + 2) + "\r")
        out.flush()
