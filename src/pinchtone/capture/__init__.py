"""Camera frame acquisition."""
from .camera import Camera, CameraConfig, Frame, VideoSource

__all__ = ["Camera", "CameraConfig", "Frame", "VideoSource"]
