"""Audio cue control driven by the pinch gesture."""
from .pinch_trigger import CueState, PinchTrigger, PinchTriggerConfig, TriggerEvent

__all__ = ["CueState", "PinchTrigger", "PinchTriggerConfig", "TriggerEvent"]
