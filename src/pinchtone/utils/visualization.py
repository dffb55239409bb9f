"""
Visualization Module
=====================

Skeletal hand overlay plus the loading / error status panel.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from ..detection.landmarks import FINGER_LOOKUP_INDICES, Point
from .canvas import Canvas

logger = logging.getLogger(__name__)


@dataclass
class VisualizerConfig:
    """Visualization settings."""
    mirror: bool = True
    keypoint_radius: int = 3
    line_width: int = 1
    show_fps: bool = False

    # Colors (BGR format)
    landmark_color: Tuple[int, int, int] = (0, 0, 255)      # Red
    connection_color: Tuple[int, int, int] = (0, 0, 255)    # Red
    text_color: Tuple[int, int, int] = (0, 255, 255)        # Yellow
    warning_color: Tuple[int, int, int] = (0, 0, 255)       # Red

    # Font settings
    font_scale: float = 0.7
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "VisualizerConfig":
        """Create config from dictionary."""
        colors = config.get("colors", {})
        return cls(
            mirror=config.get("mirror", True),
            keypoint_radius=config.get("keypoint_radius", 3),
            line_width=config.get("line_width", 1),
            show_fps=config.get("show_fps", False),
            landmark_color=tuple(colors.get("landmarks", [0, 0, 255])),
            connection_color=tuple(colors.get("connections", [0, 0, 255])),
            text_color=tuple(colors.get("text", [0, 255, 255])),
            font_scale=config.get("font_scale", 0.7),
            font_thickness=config.get("font_thickness", 2),
        )


class OverlayRenderer:
    """
    Draws one hand as dots plus one open polyline per finger.

    Example:
        >>> renderer = OverlayRenderer()
        >>> canvas.clear(frame.image)
        >>> renderer.draw_keypoints(canvas, hand.keypoints)
    """

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()

    def setup(self, canvas: Canvas) -> None:
        """Apply stroke and fill state to the canvas once."""
        canvas.fill_color = self.config.landmark_color
        canvas.stroke_color = self.config.connection_color
        canvas.line_width = self.config.line_width

    def draw_keypoints(self, canvas: Canvas, keypoints: Sequence[Point]) -> None:
        for point in keypoints:
            canvas.fill_circle(point, self.config.keypoint_radius)

        for indices in FINGER_LOOKUP_INDICES.values():
            points = [keypoints[idx] for idx in indices]
            self.draw_path(canvas, points, close_path=False)

    @staticmethod
    def draw_path(canvas: Canvas, points: Sequence[Point], close_path: bool) -> None:
        canvas.polyline(points, closed=close_path)


class StatusPanel:
    """
    Loading indicator, loaded indicator and error message.

    Each transition happens at most once: loading -> loaded on camera
    success, or loading -> error on camera failure.
    """

    def __init__(self):
        self.loading = True
        self.loaded = False
        self.error_message: Optional[str] = None

    def show_loaded(self) -> None:
        if not self.loading:
            return
        self.loading = False
        self.loaded = True
        logger.info("Loaded")

    def show_error(self, message: str) -> None:
        if self.error_message is not None:
            return
        self.loading = False
        self.error_message = message

    @property
    def has_error(self) -> bool:
        return self.error_message is not None


class Visualizer:
    """Text overlays drawn on the presented (already mirrored) image."""

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def draw_status(self, image: np.ndarray, panel: StatusPanel) -> np.ndarray:
        """Draw the loading indicator or the error panel, if showing."""
        if panel.has_error:
            height, width = image.shape[:2]
            cv2.rectangle(image, (0, 0), (width, 60), (40, 40, 40), -1)
            cv2.putText(image, panel.error_message, (10, 38),
                        self._font, 0.5, self.config.warning_color, 1)
        elif panel.loading:
            cv2.putText(image, "Loading...", (20, 40),
                        self._font, self.config.font_scale,
                        self.config.text_color, self.config.font_thickness)
        return image

    def draw_fps(self, image: np.ndarray, fps: float) -> np.ndarray:
        if not self.config.show_fps:
            return image
        height, width = image.shape[:2]
        cv2.putText(image, f"FPS: {fps:.1f}", (width - 130, 30),
                    self._font, 0.6, self.config.text_color, 1)
        return image

    def error_screen(self, panel: StatusPanel, width: int = 640, height: int = 500) -> np.ndarray:
        """Blank frame carrying only the status panel."""
        image = np.zeros((height, width, 3), dtype=np.uint8)
        return self.draw_status(image, panel)
