"""Tests for camera presets and pose controls"""
import logging

import pytest

from isometric_city.rendering.camera import (
    CameraPose,
    apply_preset,
    drag,
    pan,
    preset_pose,
    zoom,
)


class TestPresets:
    """Test named camera presets"""

    def test_default_matches_pose_defaults(self):
        assert preset_pose('default') == CameraPose()

    def test_aerial(self):
        assert preset_pose('aerial') == CameraPose(60, 45, 1.2, 0, -50)

    def test_ground_and_side(self):
        assert preset_pose('ground').rotation_x == 15
        assert preset_pose('side').rotation_y == 90

    def test_unknown_preset_keeps_pose(self, caplog):
        pose = CameraPose(rotation_x=40, zoom=2.0)
        with caplog.at_level(logging.WARNING):
            assert apply_preset(pose, 'orbit') is pose
        assert "Unknown camera preset" in caplog.text


class TestControls:
    """Test drag, zoom and pan"""

    def test_drag_rotates(self):
        pose = drag(CameraPose(), 20, 10)
        assert pose.rotation_y == 55
        assert pose.rotation_x == 25

    def test_drag_clamps_tilt(self):
        assert drag(CameraPose(), 0, -1000).rotation_x == 90
        assert drag(CameraPose(), 0, 1000).rotation_x == 0

    def test_zoom(self):
        assert zoom(CameraPose(), 100).zoom == pytest.approx(0.9)
        assert zoom(CameraPose(), -500).zoom == pytest.approx(1.5)

    def test_zoom_clamps(self):
        assert zoom(CameraPose(), 10000).zoom == 0.3
        assert zoom(CameraPose(), -10000).zoom == 3.0

    def test_pan(self):
        pose = pan(CameraPose(offset_x=5), 10, -4)
        assert (pose.offset_x, pose.offset_y) == (15, -4)

    def test_controls_return_new_pose(self):
        pose = CameraPose()
        drag(pose, 10, 10)
        zoom(pose, 100)
        assert pose == CameraPose()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
