"""Hand detection module using MediaPipe."""
from .landmarks import FINGER_LOOKUP_INDICES, HandLandmarks, Landmark, LandmarkIndex

__all__ = ["FINGER_LOOKUP_INDICES", "HandLandmarks", "Landmark", "LandmarkIndex"]
