"""
Drawing surface backed by a BGR numpy image.
"""

from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

Color = Tuple[int, int, int]
RED: Color = (0, 0, 255)


class Canvas:
    """
    Overlay surface for one video frame.

    ``clear`` resets the surface to the current video frame so drawing
    appears on top of the feed. The horizontal flip is fixed at
    construction and applied by ``present``.
    """

    def __init__(self, width: int, height: int, mirror: bool = True):
        self.width = width
        self.height = height
        self.mirror = mirror
        self.stroke_color: Color = RED
        self.fill_color: Color = RED
        self.line_width = 1
        self.image = np.zeros((height, width, 3), dtype=np.uint8)

    def clear(self, background: Optional[np.ndarray] = None) -> None:
        if background is None:
            self.image[:] = 0
        else:
            if background.shape[:2] != (self.height, self.width):
                background = cv2.resize(background, (self.width, self.height))
            self.image = background.copy()

    def fill_circle(self, center: Sequence[float], radius: int) -> None:
        cv2.circle(self.image, _px(center), radius, self.fill_color, -1, cv2.LINE_AA)

    def polyline(self, points: Sequence[Sequence[float]], closed: bool = False) -> None:
        pts = np.array([_px(p) for p in points], dtype=np.int32).reshape((-1, 1, 2))
        cv2.polylines(self.image, [pts], closed, self.stroke_color, self.line_width, cv2.LINE_AA)

    def present(self) -> np.ndarray:
        """Image to display, mirrored if configured."""
        if self.mirror:
            return cv2.flip(self.image, 1)
        return self.image


def _px(point: Sequence[float]) -> Tuple[int, int]:
    return (int(round(point[0])), int(round(point[1])))
