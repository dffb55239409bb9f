"""
Hand Landmark Types
====================

Keypoint containers produced by the hand detector, plus the fixed
finger index groups used for drawing.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, NamedTuple, Tuple

Point = Tuple[float, float]


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


NUM_LANDMARKS = 21

# One polyline per finger, each rooted at the wrist
FINGER_LOOKUP_INDICES: Dict[str, List[int]] = {
    "thumb": [0, 1, 2, 3, 4],
    "index_finger": [0, 5, 6, 7, 8],
    "middle_finger": [0, 9, 10, 11, 12],
    "ring_finger": [0, 13, 14, 15, 16],
    "pinky": [0, 17, 18, 19, 20],
}


class Landmark(NamedTuple):
    """A single landmark point with normalized coordinates."""
    x: float  # 0.0 to 1.0, normalized by image width
    y: float  # 0.0 to 1.0, normalized by image height
    z: float = 0.0  # Depth relative to wrist, unused

    def to_pixel(self, width: int, height: int) -> Point:
        """Convert normalized coordinates to source pixel coordinates."""
        return (self.x * width, self.y * height)


@dataclass
class HandLandmarks:
    """One detection: 21 landmarks for a single hand."""
    landmarks: List[Landmark]
    handedness: str = "Right"
    confidence: float = 0.0
    image_width: int = 640
    image_height: int = 500

    def get(self, index: LandmarkIndex) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    def get_pixel(self, index: LandmarkIndex) -> Point:
        """Get landmark as pixel coordinates."""
        return self.get(index).to_pixel(self.image_width, self.image_height)

    @property
    def keypoints(self) -> List[Point]:
        """Ordered (x, y) keypoints in source pixel space."""
        return [lm.to_pixel(self.image_width, self.image_height) for lm in self.landmarks]

    @classmethod
    def from_pixels(
        cls,
        points: List[Point],
        image_width: int = 640,
        image_height: int = 500,
    ) -> "HandLandmarks":
        """Build a detection from pixel-space (x, y) points."""
        landmarks = [
            Landmark(x=x / image_width, y=y / image_height)
            for x, y in points
        ]
        return cls(landmarks=landmarks, image_width=image_width, image_height=image_height)
