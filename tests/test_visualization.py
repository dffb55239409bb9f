"""
Tests for Overlay Rendering and Status Panel
=============================================
"""

import pytest
import numpy as np
import sys
from pathlib import Path
from unittest.mock import Mock, call

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pinchtone.detection.landmarks import FINGER_LOOKUP_INDICES
from pinchtone.utils.canvas import Canvas
from pinchtone.utils.visualization import (
    OverlayRenderer,
    StatusPanel,
    Visualizer,
    VisualizerConfig,
)


@pytest.fixture
def keypoints():
    """21 distinct keypoints, index i at (10*i, 5*i)."""
    return [(10.0 * i, 5.0 * i) for i in range(21)]


class TestOverlayRenderer:
    """Test suite for OverlayRenderer."""

    def test_dot_per_keypoint(self, keypoints):
        """Every keypoint gets one filled circle."""
        canvas = Mock()
        OverlayRenderer().draw_keypoints(canvas, keypoints)

        assert canvas.fill_circle.call_count == 21
        assert canvas.fill_circle.call_args_list[8] == call(keypoints[8], 3)

    def test_one_open_path_per_finger(self, keypoints):
        """Five polylines, none closed."""
        canvas = Mock()
        OverlayRenderer().draw_keypoints(canvas, keypoints)

        assert canvas.polyline.call_count == 5
        for c in canvas.polyline.call_args_list:
            assert c.kwargs["closed"] is False

    def test_thumb_path_order(self, keypoints):
        """Thumb path visits 0,1,2,3,4 in order and ends at the tip."""
        canvas = Mock()
        OverlayRenderer().draw_keypoints(canvas, keypoints)

        thumb_points = canvas.polyline.call_args_list[0].args[0]
        assert thumb_points == [keypoints[i] for i in [0, 1, 2, 3, 4]]
        assert thumb_points[-1] != thumb_points[0]

    def test_all_groups_rooted_at_wrist(self):
        """Each finger group starts at the wrist."""
        assert list(FINGER_LOOKUP_INDICES) == [
            "thumb", "index_finger", "middle_finger", "ring_finger", "pinky"
        ]
        for indices in FINGER_LOOKUP_INDICES.values():
            assert indices[0] == 0
            assert len(indices) == 5

    def test_setup_applies_colors(self):
        """Stroke and fill state come from the config."""
        config = VisualizerConfig(landmark_color=(1, 2, 3), connection_color=(4, 5, 6), line_width=2)
        canvas = Canvas(10, 10)

        OverlayRenderer(config).setup(canvas)

        assert canvas.fill_color == (1, 2, 3)
        assert canvas.stroke_color == (4, 5, 6)
        assert canvas.line_width == 2


class TestCanvas:
    """Test suite for Canvas."""

    def test_clear_to_background(self):
        """Clearing copies the video frame."""
        canvas = Canvas(4, 3)
        background = np.full((3, 4, 3), 7, dtype=np.uint8)

        canvas.clear(background)
        canvas.image[0, 0] = 0

        assert background[0, 0, 0] == 7
        assert canvas.image[1, 1, 0] == 7

    def test_clear_to_black(self):
        canvas = Canvas(4, 3)
        canvas.image[:] = 9

        canvas.clear()

        assert not canvas.image.any()

    def test_fill_circle(self):
        canvas = Canvas(20, 20, mirror=False)

        canvas.fill_circle((10, 10), 3)

        assert tuple(canvas.image[10, 10]) == (0, 0, 255)

    def test_open_polyline_has_no_closing_segment(self):
        """An open path leaves the start-to-end chord empty."""
        canvas = Canvas(100, 100, mirror=False)

        canvas.polyline([(10, 10), (90, 10), (90, 90)], closed=False)

        assert canvas.image[10, 50].any()
        assert not canvas.image[50, 50].any()

    def test_closed_polyline_draws_closing_segment(self):
        canvas = Canvas(100, 100, mirror=False)

        canvas.polyline([(10, 10), (90, 10), (90, 90)], closed=True)

        assert canvas.image[50, 50].any()

    def test_present_mirrors(self):
        """Mirroring flips left and right."""
        canvas = Canvas(4, 2, mirror=True)
        canvas.image[0, 0] = 255

        shown = canvas.present()

        assert shown[0, 3].all()
        assert not shown[0, 0].any()

    def test_present_without_mirror(self):
        canvas = Canvas(4, 2, mirror=False)
        canvas.image[0, 0] = 255

        assert canvas.present()[0, 0].all()


class TestStatusPanel:
    """Test suite for StatusPanel."""

    def test_initially_loading(self):
        panel = StatusPanel()

        assert panel.loading
        assert not panel.loaded
        assert not panel.has_error

    def test_show_loaded(self):
        panel = StatusPanel()
        panel.show_loaded()

        assert panel.loaded
        assert not panel.loading

    def test_show_error_once(self):
        """The first error message is kept."""
        panel = StatusPanel()
        panel.show_error("no camera")
        panel.show_error("second")

        assert panel.error_message == "no camera"
        assert not panel.loading
        assert not panel.loaded

    def test_loaded_ignored_after_error(self):
        panel = StatusPanel()
        panel.show_error("denied")
        panel.show_loaded()

        assert not panel.loaded


class TestVisualizer:
    """Test suite for Visualizer text overlays."""

    def test_error_screen_has_text(self):
        panel = StatusPanel()
        panel.show_error("Could not access camera")

        image = Visualizer().error_screen(panel, 320, 240)

        assert image.shape == (240, 320, 3)
        assert image.any()

    def test_nothing_drawn_when_loaded(self):
        panel = StatusPanel()
        panel.show_loaded()
        image = np.zeros((100, 100, 3), dtype=np.uint8)

        Visualizer().draw_status(image, panel)

        assert not image.any()

    def test_fps_hidden_by_default(self):
        image = np.zeros((100, 200, 3), dtype=np.uint8)

        Visualizer().draw_fps(image, 30.0)

        assert not image.any()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
