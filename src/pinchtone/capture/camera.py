"""
Camera Capture Module
======================

Acquires the webcam through OpenCV and hands frames to the frame loop.
Capture failures are reported with the error taxonomy in ``errors``.
"""

import cv2
import time
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np

from ..errors import CameraAccessError, CameraUnavailableError

logger = logging.getLogger(__name__)

VIDEO_WIDTH = 640
VIDEO_HEIGHT = 500


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    device_id: int = 0
    width: int = VIDEO_WIDTH
    height: int = VIDEO_HEIGHT
    fps: int = 30
    buffer_size: int = 1  # Minimal buffering for low latency
    handheld: bool = False  # Accept the driver's default size
    facing_mode: str = "user"
    warmup_frames: int = 0

    @classmethod
    def from_dict(cls, config: dict) -> "CameraConfig":
        """Create config from dictionary (YAML parsed)."""
        return cls(
            device_id=config.get("device_id", 0),
            width=config.get("width", VIDEO_WIDTH),
            height=config.get("height", VIDEO_HEIGHT),
            fps=config.get("fps", 30),
            buffer_size=config.get("buffer_size", 1),
            handheld=config.get("handheld", False),
            facing_mode=config.get("facing_mode", "user"),
            warmup_frames=config.get("warmup_frames", 0),
        )


@dataclass
class Frame:
    """Container for captured frame with metadata."""
    image: np.ndarray
    timestamp: float
    frame_number: int

    @property
    def rgb(self) -> np.ndarray:
        """Convert BGR to RGB."""
        return cv2.cvtColor(self.image, cv2.COLOR_BGR2RGB)


@dataclass
class VideoSource:
    """Native frame size reported once the first frame has arrived."""
    width: int
    height: int


def available_backends() -> List[int]:
    """Camera backends compiled into this OpenCV build."""
    return list(cv2.videoio_registry.getCameraBackends())


class Camera:
    """
    Synchronous webcam capture on the caller's thread.

    Example:
        >>> camera = Camera(CameraConfig())
        >>> source = camera.start()
        >>> frame = camera.read()
        >>> if frame:
        ...     process(frame.image)
        >>> camera.stop()
    """

    def __init__(self, config: Optional[CameraConfig] = None):
        self.config = config or CameraConfig()
        self._cap: Optional[cv2.VideoCapture] = None
        self._frame_number = 0
        self._running = False
        self._source: Optional[VideoSource] = None

    def start(self) -> VideoSource:
        """
        Open the camera and wait for the first frame.

        Returns:
            VideoSource with the native frame width and height

        Raises:
            CameraUnavailableError: OpenCV has no camera backend
            CameraAccessError: the device could not be opened or read
        """
        backends = available_backends()
        if not backends:
            raise CameraUnavailableError("OpenCV camera capture API not available")

        logger.info("Starting camera (device={}, facing={}, {})".format(
            self.config.device_id,
            self.config.facing_mode,
            "default size" if self.config.handheld
            else "{}x{}".format(self.config.width, self.config.height),
        ))

        first_frame = None
        for backend in [cv2.CAP_V4L2, cv2.CAP_ANY]:
            if backend != cv2.CAP_ANY and backend not in backends:
                continue
            self._cap = cv2.VideoCapture(self.config.device_id, backend)

            if not self._cap.isOpened():
                logger.warning("Backend {} failed, trying next...".format(backend))
                self._cap.release()
                self._cap = None
                continue

            if not self.config.handheld:
                self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
                self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
            self._cap.set(cv2.CAP_PROP_FPS, self.config.fps)
            self._cap.set(cv2.CAP_PROP_BUFFERSIZE, self.config.buffer_size)

            # The first successful read plays the role of "metadata loaded"
            ret, image = self._cap.read()
            if ret and image is not None:
                first_frame = image
                break

            logger.warning("Can't read frames, trying next backend...")
            self._cap.release()
            self._cap = None

        if first_frame is None:
            raise CameraAccessError(
                "Could not access camera device {}: permission denied or "
                "no device found".format(self.config.device_id)
            )

        height, width = first_frame.shape[:2]
        self._source = VideoSource(width=width, height=height)
        logger.info("Camera initialized: {}x{}".format(width, height))

        for _ in range(self.config.warmup_frames):
            self._cap.read()

        self._running = True
        self._frame_number = 0

        return self._source

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._running = False

        if self._cap:
            self._cap.release()
            self._cap = None

        logger.info("Camera stopped")

    def read(self) -> Optional[Frame]:
        """
        Capture a new frame from the device.

        Every call blocks for a fresh frame, so no frame is seen twice.
        """
        if not self._running:
            return None
        return self._capture_frame()

    def _capture_frame(self) -> Optional[Frame]:
        if not self._cap:
            return None

        ret, image = self._cap.read()
        if not ret or image is None:
            logger.warning("Failed to capture frame")
            return None

        self._frame_number += 1
        return Frame(
            image=image,
            timestamp=time.time(),
            frame_number=self._frame_number,
        )

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def source(self) -> Optional[VideoSource]:
        """Native frame size, available after start()."""
        return self._source

    @property
    def resolution(self) -> Tuple[int, int]:
        """Requested camera resolution."""
        return (self.config.width, self.config.height)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
