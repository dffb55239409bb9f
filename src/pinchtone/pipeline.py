"""
Frame loop: clear -> detect -> (draw, trigger), one frame at a time.

Iterations are strictly sequential. The loop only ends when its
cancellation event is set.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .capture.camera import Frame
from .control.pinch_trigger import TriggerEvent
from .utils.performance import FrameRateMeter

logger = logging.getLogger(__name__)

READ_RETRY_S = 0.03


@dataclass
class FrameResult:
    """Outcome of one loop iteration."""
    frame_number: int
    hand_detected: bool = False
    hand_count: int = 0
    event: TriggerEvent = TriggerEvent.NONE
    distance: Optional[float] = None


class FrameLoop:
    """
    Drives capture, inference, overlay and trigger for each frame.

    Only the first detection of a frame is used. A frame without a
    detection draws nothing and leaves the cue untouched.

    Example:
        >>> loop = FrameLoop(camera, detector, canvas, renderer, trigger)
        >>> cancel = threading.Event()
        >>> loop.run(cancel)
    """

    def __init__(
        self,
        camera,
        detector,
        canvas,
        renderer,
        trigger,
        display: Optional[Callable[[np.ndarray], None]] = None,
        meter: Optional[FrameRateMeter] = None,
    ):
        self._camera = camera
        self._detector = detector
        self._canvas = canvas
        self._renderer = renderer
        self._trigger = trigger
        self._display = display
        self._meter = meter or FrameRateMeter()

    @property
    def meter(self) -> FrameRateMeter:
        return self._meter

    def step(self, frame: Frame) -> FrameResult:
        """Run one iteration on an already captured frame."""
        result = FrameResult(frame_number=frame.frame_number)

        self._canvas.clear(frame.image)

        with self._meter.measure("inference"):
            hands = self._detector.detect(frame.rgb)

        result.hand_count = len(hands)
        if hands:
            keypoints = hands[0].keypoints
            self._renderer.draw_keypoints(self._canvas, keypoints)
            result.event = self._trigger.update(keypoints)
            result.distance = self._trigger.last_distance
            result.hand_detected = True

        self._meter.tick()
        return result

    def run(self, cancel: threading.Event) -> int:
        """
        Loop until ``cancel`` is set.

        Returns:
            Number of frames processed
        """
        logger.info("Frame loop started")
        frames = 0
        while not cancel.is_set():
            frame = self._camera.read()
            if frame is None:
                # Keep the window responsive while the source is stalled
                if self._display is not None:
                    self._display(self._canvas.present())
                cancel.wait(READ_RETRY_S)
                continue

            result = self.step(frame)
            frames += 1
            if result.event is not TriggerEvent.NONE:
                logger.debug(f"Frame {result.frame_number}: {result.event.name}")

            if self._display is not None:
                self._display(self._canvas.present())

        logger.info(f"Frame loop stopped: {self._meter.report()}")
        return frames
