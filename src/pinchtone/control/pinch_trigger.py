"""
Pinch Trigger
==============

Plays the audio cue while the thumb tip and index fingertip are pinched
together and pauses it once they separate.
"""

import math
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Protocol, Sequence

from ..detection.landmarks import LandmarkIndex, Point

logger = logging.getLogger(__name__)

PINCH_THRESHOLD = 60.0


class Cue(Protocol):
    """Audio primitive driven by the trigger."""

    @property
    def paused(self) -> bool: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def rewind(self) -> None: ...


class CueState(Enum):
    PLAYING = auto()
    PAUSED = auto()


class TriggerEvent(Enum):
    """Transition caused by a single update."""
    NONE = auto()
    STARTED = auto()
    PAUSED = auto()


@dataclass
class PinchTriggerConfig:
    """Distance threshold and the two landmarks it is measured between."""
    threshold: float = PINCH_THRESHOLD
    thumb_index: int = LandmarkIndex.THUMB_TIP
    finger_index: int = LandmarkIndex.INDEX_TIP

    @classmethod
    def from_dict(cls, config: dict) -> "PinchTriggerConfig":
        """Create config from dictionary."""
        return cls(
            threshold=float(config.get("pinch_threshold", PINCH_THRESHOLD)),
            thumb_index=config.get("thumb_index", LandmarkIndex.THUMB_TIP),
            finger_index=config.get("finger_index", LandmarkIndex.INDEX_TIP),
        )


def distance(a: Point, b: Point) -> float:
    """Euclidean distance in the image plane; any z component is ignored."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


class PinchTrigger:
    """
    Two-state cue toggle driven by thumb-to-index distance.

    - distance below the threshold while paused: restart the cue from 0
    - distance above the threshold: pause, keeping the position
    - distance exactly at the threshold: no change

    Example:
        >>> trigger = PinchTrigger(cue)
        >>> event = trigger.update(hand.keypoints)
    """

    def __init__(self, cue: Cue, config: Optional[PinchTriggerConfig] = None):
        self.cue = cue
        self.config = config or PinchTriggerConfig()
        self.last_distance: Optional[float] = None

    def measure(self, keypoints: Sequence[Point]) -> float:
        """Distance between the thumb tip and the index fingertip."""
        return distance(
            keypoints[self.config.thumb_index],
            keypoints[self.config.finger_index],
        )

    def update(self, keypoints: Sequence[Point]) -> TriggerEvent:
        """Apply one keypoint set to the cue."""
        dist = self.measure(keypoints)
        self.last_distance = dist
        logger.debug(f"Pinch distance: {dist:.1f}")

        if dist < self.config.threshold and self.cue.paused:
            self.cue.rewind()
            self.cue.play()
            logger.info(f"Pinch detected ({dist:.1f}px), cue started")
            return TriggerEvent.STARTED

        if dist > self.config.threshold:
            was_playing = not self.cue.paused
            self.cue.pause()
            if was_playing:
                logger.info(f"Pinch released ({dist:.1f}px), cue paused")
                return TriggerEvent.PAUSED

        return TriggerEvent.NONE

    @property
    def state(self) -> CueState:
        return CueState.PAUSED if self.cue.paused else CueState.PLAYING
