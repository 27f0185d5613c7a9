"""Frame timing and a simple averaged frames-per-second display."""

from __future__ import annotations

import math
import sys
import time

FRAMES_TO_AVERAGE = 10
DELAY_SECONDS = 0.01


class FrameTimer:
    """Measures frame durations and reports the average rate every few frames."""

    def __init__(self, frames_to_average=FRAMES_TO_AVERAGE, clock=time.perf_counter, stream=None):
        if frames_to_average < 1:
            raise ValueError("frames_to_average must be at least 1")
        self.frames_to_average = frames_to_average
        self._clock = clock
        self._stream = stream
        self._start = 0.0
        self._end = 0.0
        self._total = 0.0
        self._count = 0

    def start(self) -> None:
        """Record the start of a frame."""
        self._start = self._clock()

    def end(self) -> None:
        """Record the end of a frame."""
        self._end = self._clock()

    def calculate_fps(self) -> float | None:
        """Account for the last frame; print and return the rate when a batch completes."""
        self._total += self._end - self._start
        self._count += 1
        if self._count < self.frames_to_average:
            return None
        fps = self._count / self._total if self._total > 0 else math.inf
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"\rFPS: {fps:g}")
        stream.flush()
        self._count = 0
        self._total = 0.0
        return fps

    def delay(self) -> None:
        """Pause briefly between frames."""
        time.sleep(DELAY_SECONDS)