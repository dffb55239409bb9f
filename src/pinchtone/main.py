"""
Pinchtone - Main Application
=============================

Entry point: loads the hand model, opens the webcam and runs the frame
loop that draws the hand skeleton and plays the audio cue on a pinch.
"""

import cv2
import yaml
import logging
import argparse
import signal
import sys
import threading
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .capture.camera import Camera, CameraConfig
from .control.audio_cue import AudioCue, AudioConfig
from .control.pinch_trigger import PinchTrigger, PinchTriggerConfig
from .detection.hand_detector import HandDetector, HandDetectorConfig
from .errors import CameraError, PinchtoneError
from .pipeline import FrameLoop
from .utils.canvas import Canvas
from .utils.logger import setup_logging
from .utils.visualization import OverlayRenderer, StatusPanel, Visualizer, VisualizerConfig

logger = logging.getLogger(__name__)

WINDOW_NAME = "Pinchtone"
ERROR_DISPLAY_MS = 3000


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None

    @classmethod
    def from_dict(cls, config: dict) -> "LoggingConfig":
        return cls(level=config.get("level", "INFO"), file=config.get("file"))


@dataclass
class AppConfig:
    """Application configuration container."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: HandDetectorConfig = field(default_factory=HandDetectorConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    gesture: PinchTriggerConfig = field(default_factory=PinchTriggerConfig)
    visualization: VisualizerConfig = field(default_factory=VisualizerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path) -> dict:
    """Load configuration from YAML file."""
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def create_app_config(config_dict: dict) -> AppConfig:
    """Create AppConfig from configuration dictionary."""
    return AppConfig(
        camera=CameraConfig.from_dict(config_dict.get("camera", {})),
        mediapipe=HandDetectorConfig.from_dict(config_dict.get("mediapipe", {})),
        audio=AudioConfig.from_dict(config_dict.get("audio", {})),
        gesture=PinchTriggerConfig.from_dict(config_dict.get("gesture", {})),
        visualization=VisualizerConfig.from_dict(config_dict.get("visualization", {})),
        logging=LoggingConfig.from_dict(config_dict.get("logging", {})),
    )


class HandposeApp:
    """
    Wires the camera, detector, overlay and pinch trigger together.

    Startup order: model, camera, canvas, audio. A camera failure is
    shown in the error panel and re-raised.
    """

    def __init__(self, config: AppConfig):
        self.config = config

        self.detector = HandDetector(config.mediapipe)
        self.camera = Camera(config.camera)
        self.audio = AudioCue(config.audio)
        self.renderer = OverlayRenderer(config.visualization)
        self.visualizer = Visualizer(config.visualization)
        self.status = StatusPanel()

        self.canvas: Optional[Canvas] = None
        self.loop: Optional[FrameLoop] = None
        self._cancel = threading.Event()

    def start(self) -> None:
        """Load the model and acquire the camera."""
        logger.info("Starting Pinchtone...")
        self.detector.start()

        try:
            source = self.camera.start()
        except CameraError as e:
            logger.error(f"Camera setup failed: {e}")
            self.status.show_error(str(e))
            self._show_error_panel()
            raise
        self.status.show_loaded()

        self.canvas = Canvas(source.width, source.height, mirror=self.config.visualization.mirror)
        self.renderer.setup(self.canvas)

        self.audio.load()

        trigger = PinchTrigger(self.audio, self.config.gesture)
        self.loop = FrameLoop(
            self.camera,
            self.detector,
            self.canvas,
            self.renderer,
            trigger,
            display=self._display,
        )

    def stop(self) -> None:
        """Release all components."""
        self.camera.stop()
        self.detector.stop()
        self.audio.close()
        cv2.destroyAllWindows()
        logger.info("Pinchtone stopped")

    def request_stop(self) -> None:
        self._cancel.set()

    def run(self) -> None:
        try:
            self.start()

            signal.signal(signal.SIGINT, self._signal_handler)
            signal.signal(signal.SIGTERM, self._signal_handler)

            self.loop.run(self._cancel)
        finally:
            self.stop()

    def _display(self, image: np.ndarray) -> None:
        self.visualizer.draw_fps(image, self.loop.meter.fps)
        self.visualizer.draw_status(image, self.status)
        cv2.imshow(WINDOW_NAME, image)

        key = cv2.waitKey(1) & 0xFF
        if key == ord("q") or key == 27:
            self.request_stop()

    def _show_error_panel(self) -> None:
        image = self.visualizer.error_screen(
            self.status, self.config.camera.width, self.config.camera.height
        )
        try:
            cv2.imshow(WINDOW_NAME, image)
            cv2.waitKey(ERROR_DISPLAY_MS)
        except cv2.error as e:
            logger.warning(f"Could not show error panel: {e}")

    def _signal_handler(self, signum, frame) -> None:
        logger.info(f"Received signal {signum}, shutting down...")
        self.request_stop()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play an audio cue by pinching thumb and index finger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keyboard Controls:
  q/ESC     - Quit

Examples:
  pinchtone --audio sounds/bell.mp3
  pinchtone --handheld --config config/config.yaml
        """,
    )
    parser.add_argument("--config", "-c", default="config/config.yaml",
                        help="Path to configuration file")
    parser.add_argument("--audio", "-a", help="Audio cue file (overrides config)")
    parser.add_argument("--handheld", action="store_true",
                        help="Use the camera's default resolution")
    parser.add_argument("--no-mirror", action="store_true",
                        help="Do not mirror the display")
    parser.add_argument("--debug", "-d", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    """Load the YAML config and apply command line overrides."""
    config_path = Path(args.config)
    if config_path.exists():
        logger.info(f"Loading configuration from {config_path}")
        config = create_app_config(load_config(config_path))
    else:
        logger.warning(f"Config file not found: {config_path}, using defaults")
        config = AppConfig()

    if args.audio:
        config.audio.path = args.audio
    if args.handheld:
        config.camera.handheld = True
    if args.no_mirror:
        config.visualization.mirror = False
    if args.debug:
        config.logging.level = "DEBUG"
    return config


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging("DEBUG" if args.debug else "INFO")

    config = build_config(args)
    setup_logging(config.logging.level, config.logging.file)

    app = HandposeApp(config)
    try:
        app.run()
    except PinchtoneError as e:
        logger.error(f"Startup aborted: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
