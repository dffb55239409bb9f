"""
Pinchtone
==========

Webcam hand tracking that plays an audio cue when the thumb tip and
index fingertip are pinched together, with a live skeletal overlay.

Modules:
    - capture: Camera frame acquisition
    - detection: MediaPipe hand landmark detection
    - control: Audio cue and pinch trigger
    - utils: Drawing surface, overlay, logging, timing
"""

__version__ = "1.0.0"
