"""
Audio Cue Module
=================

A single audio clip played through pygame's music stream.
Exposes play/pause/rewind and a queryable paused flag.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pygame

logger = logging.getLogger(__name__)


@dataclass
class AudioConfig:
    """Audio cue configuration."""
    path: str = "assets/cue.mp3"
    volume: float = 1.0
    enabled: bool = True

    @classmethod
    def from_dict(cls, config: dict) -> "AudioConfig":
        """Create config from dictionary."""
        return cls(
            path=config.get("path", "assets/cue.mp3"),
            volume=config.get("volume", 1.0),
            enabled=config.get("enabled", True),
        )


class AudioCue:
    """
    Audio primitive toggled by the pinch trigger.

    Falls back to simulated playback when the mixer cannot be opened
    or the clip is missing, so the rest of the pipeline still runs.

    Example:
        >>> cue = AudioCue(AudioConfig(path="cue.mp3"))
        >>> cue.load()
        >>> cue.rewind(); cue.play()
        >>> cue.pause()
    """

    def __init__(self, config: Optional[AudioConfig] = None):
        self.config = config or AudioConfig()
        self._simulated = True
        self._started = False
        # Simulated mode only
        self._sim_playing = False

    def load(self) -> None:
        """Initialise the mixer and load the clip."""
        if not self.config.enabled:
            logger.info("Audio disabled, cue will be simulated")
            return

        path = Path(self.config.path)
        if not path.exists():
            logger.warning(f"Audio file not found: {path}. Cue will be simulated.")
            return

        try:
            pygame.mixer.init()
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.set_volume(self.config.volume)
        except pygame.error as e:
            logger.warning(f"Audio mixer unavailable ({e}). Cue will be simulated.")
            return

        self._simulated = False
        logger.info(f"Audio cue loaded: {path}")

    def play(self) -> None:
        """Start playback from the current position."""
        if self._simulated:
            logger.debug("[SIMULATED] play")
            self._sim_playing = True
            return

        if self._started:
            pygame.mixer.music.unpause()
        else:
            pygame.mixer.music.play()
            self._started = True

    def pause(self) -> None:
        """Pause playback, keeping the current position."""
        if self._simulated:
            if self._sim_playing:
                logger.debug("[SIMULATED] pause")
            self._sim_playing = False
            return

        pygame.mixer.music.pause()

    def rewind(self) -> None:
        """Seek back to the start of the clip."""
        if self._simulated:
            logger.debug("[SIMULATED] rewind")
            return

        # play() on the next start restarts from position 0
        pygame.mixer.music.stop()
        self._started = False

    @property
    def paused(self) -> bool:
        """True unless the clip is currently audible; an ended clip is paused."""
        if self._simulated:
            return not self._sim_playing
        return not pygame.mixer.music.get_busy()

    @property
    def is_simulated(self) -> bool:
        return self._simulated

    def close(self) -> None:
        """Release the mixer."""
        if not self._simulated:
            pygame.mixer.music.stop()
            pygame.mixer.quit()
            self._simulated = True
        self._sim_playing = False
