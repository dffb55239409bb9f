"""
Frame rate and per-stage timing for the frame loop.
"""

import time
import logging
from collections import deque
from contextlib import contextmanager
from typing import Deque, Dict, Optional

logger = logging.getLogger(__name__)


class FrameRateMeter:
    """
    Rolling frame rate plus average time per named stage.

    Example:
        >>> meter = FrameRateMeter()
        >>> with meter.measure("inference"):
        ...     hands = detector.detect(frame.rgb)
        >>> meter.tick()
        >>> meter.fps
    """

    def __init__(self, window_size: int = 30):
        self.window_size = window_size
        self._ticks: Deque[float] = deque(maxlen=window_size)
        self._stage_times: Dict[str, Deque[float]] = {}
        self.total_frames = 0

    def tick(self, now: Optional[float] = None) -> None:
        """Mark one completed frame."""
        self._ticks.append(time.perf_counter() if now is None else now)
        self.total_frames += 1

    @contextmanager
    def measure(self, stage: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self._stage_times.setdefault(stage, deque(maxlen=self.window_size)).append(elapsed)

    @property
    def fps(self) -> float:
        if len(self._ticks) < 2:
            return 0.0
        span = self._ticks[-1] - self._ticks[0]
        return (len(self._ticks) - 1) / span if span > 0 else 0.0

    def stage_time_ms(self, stage: str) -> float:
        """Average time for a stage in milliseconds."""
        times = self._stage_times.get(stage)
        if not times:
            return 0.0
        return (sum(times) / len(times)) * 1000

    def report(self) -> str:
        stages = ", ".join(
            f"{name}={self.stage_time_ms(name):.1f}ms" for name in self._stage_times
        )
        return f"{self.total_frames} frames, {self.fps:.1f} fps" + (f" ({stages})" if stages else "")
