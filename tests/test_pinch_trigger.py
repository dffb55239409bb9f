"""
Tests for Pinch Trigger
========================
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pinchtone.control.pinch_trigger import (
    CueState,
    PinchTrigger,
    PinchTriggerConfig,
    TriggerEvent,
    distance,
)


class FakeCue:
    """In-memory audio primitive recording what the trigger did."""

    def __init__(self, playing: bool = False, position: float = 0.0):
        self.playing = playing
        self.position = position
        self.rewinds = 0
        self.plays = 0
        self.pauses = 0

    @property
    def paused(self) -> bool:
        return not self.playing

    def play(self):
        self.plays += 1
        self.playing = True

    def pause(self):
        self.pauses += 1
        self.playing = False

    def rewind(self):
        self.rewinds += 1
        self.position = 0.0


def make_keypoints(pinch_distance: float):
    """21 keypoints with thumb tip and index tip ``pinch_distance`` apart."""
    points = [(200.0, 300.0)] * 21
    points[4] = (100.0, 100.0)
    points[8] = (100.0 + pinch_distance, 100.0)
    return points


class TestDistance:
    """Test suite for the distance computation."""

    @pytest.mark.parametrize("a,b", [
        ((0, 0), (3, 4)),
        ((12.5, -3.0), (100.25, 48.0)),
        ((640, 500), (0, 0)),
    ])
    def test_symmetric(self, a, b):
        """Distance does not depend on argument order."""
        assert distance(a, b) == distance(b, a)

    def test_known_value(self):
        """3-4-5 triangle."""
        assert distance((0, 0), (3, 4)) == pytest.approx(5.0)

    def test_z_ignored(self):
        """A third coordinate does not change the distance."""
        assert distance((0, 0, 10.0), (3, 4, -50.0)) == pytest.approx(5.0)


class TestPinchTrigger:
    """Test suite for the cue state machine."""

    def test_paused_below_threshold_restarts(self):
        """Paused cue starts from position 0 when pinched."""
        cue = FakeCue(playing=False, position=7.5)
        trigger = PinchTrigger(cue)

        event = trigger.update(make_keypoints(59))

        assert event == TriggerEvent.STARTED
        assert trigger.state == CueState.PLAYING
        assert cue.rewinds == 1
        assert cue.position == 0.0
        assert cue.plays == 1

    def test_playing_below_threshold_continues(self):
        """Playing cue is not restarted while the pinch is held."""
        cue = FakeCue(playing=True, position=2.0)
        trigger = PinchTrigger(cue)

        event = trigger.update(make_keypoints(59))

        assert event == TriggerEvent.NONE
        assert trigger.state == CueState.PLAYING
        assert cue.position == 2.0
        assert cue.rewinds == 0
        assert cue.plays == 0

    def test_playing_above_threshold_pauses(self):
        """Releasing the pinch pauses without rewinding."""
        cue = FakeCue(playing=True, position=3.0)
        trigger = PinchTrigger(cue)

        event = trigger.update(make_keypoints(61))

        assert event == TriggerEvent.PAUSED
        assert trigger.state == CueState.PAUSED
        assert cue.position == 3.0
        assert cue.rewinds == 0

    def test_paused_above_threshold_stays_paused(self):
        """Open hand with a paused cue reports no transition."""
        cue = FakeCue(playing=False)
        trigger = PinchTrigger(cue)

        event = trigger.update(make_keypoints(150))

        assert event == TriggerEvent.NONE
        assert trigger.state == CueState.PAUSED
        assert cue.plays == 0

    def test_exact_threshold_keeps_playing(self):
        """Distance exactly 60 neither plays nor pauses (playing case)."""
        cue = FakeCue(playing=True, position=1.0)
        trigger = PinchTrigger(cue)

        event = trigger.update(make_keypoints(60))

        assert event == TriggerEvent.NONE
        assert trigger.state == CueState.PLAYING
        assert cue.pauses == 0
        assert cue.position == 1.0

    def test_exact_threshold_keeps_paused(self):
        """Distance exactly 60 neither plays nor pauses (paused case)."""
        cue = FakeCue(playing=False)
        trigger = PinchTrigger(cue)

        event = trigger.update(make_keypoints(60))

        assert event == TriggerEvent.NONE
        assert trigger.state == CueState.PAUSED
        assert cue.plays == 0

    def test_sequence(self):
        """Pinch, hold, release, pinch again."""
        cue = FakeCue()
        trigger = PinchTrigger(cue)

        events = [trigger.update(make_keypoints(d)) for d in (80, 30, 20, 60, 90, 10)]

        assert events == [
            TriggerEvent.NONE,
            TriggerEvent.STARTED,
            TriggerEvent.NONE,
            TriggerEvent.NONE,
            TriggerEvent.PAUSED,
            TriggerEvent.STARTED,
        ]
        assert cue.rewinds == 2

    def test_last_distance_recorded(self):
        """The measured distance is kept for display."""
        trigger = PinchTrigger(FakeCue())

        trigger.update(make_keypoints(42))

        assert trigger.last_distance == pytest.approx(42.0)

    def test_custom_threshold(self):
        """Threshold comes from the config."""
        cue = FakeCue()
        trigger = PinchTrigger(cue, PinchTriggerConfig(threshold=20))

        assert trigger.update(make_keypoints(30)) == TriggerEvent.NONE
        assert trigger.update(make_keypoints(19)) == TriggerEvent.STARTED


class TestPinchTriggerConfig:
    """Test suite for PinchTriggerConfig."""

    def test_default_values(self):
        config = PinchTriggerConfig()

        assert config.threshold == 60.0
        assert config.thumb_index == 4
        assert config.finger_index == 8

    def test_from_dict_partial(self):
        config = PinchTriggerConfig.from_dict({"pinch_threshold": 45})

        assert config.threshold == 45.0
        assert config.thumb_index == 4


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
