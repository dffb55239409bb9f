"""
Error types raised during application startup.
"""


class PinchtoneError(Exception):
    """Base class for application errors."""


class CameraError(PinchtoneError):
    """Camera could not be acquired."""


class CameraUnavailableError(CameraError):
    """The host exposes no usable camera capture API."""


class CameraAccessError(CameraError):
    """Camera access was denied or no matching device was found."""


class ModelLoadError(PinchtoneError):
    """The hand landmark model could not be loaded."""
