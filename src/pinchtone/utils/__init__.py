"""Drawing, logging and timing utilities."""
from .canvas import Canvas
from .performance import FrameRateMeter
from .visualization import OverlayRenderer, StatusPanel, Visualizer

__all__ = ["Canvas", "FrameRateMeter", "OverlayRenderer", "StatusPanel", "Visualizer"]
