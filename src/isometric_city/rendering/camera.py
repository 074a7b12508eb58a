"""Camera pose for the isometric view and the pure pose updates applied to it"""
import logging
from dataclasses import dataclass, replace

from isometric_city.config.render_config import CAMERA_PRESETS

logger = logging.getLogger(__name__)

MIN_TILT = 0.0
MAX_TILT = 90.0
MIN_ZOOM = 0.3
MAX_ZOOM = 3.0
DRAG_SENSITIVITY = 0.5
ZOOM_SPEED = 0.001


@dataclass(frozen=True)
class CameraPose:
    """Orbit camera: tilt and rotation in degrees, zoom factor and pixel offset"""
    rotation_x: float = 30.0
    rotation_y: float = 45.0
    zoom: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def preset_pose(name: str) -> CameraPose:
    """Pose for a named preset (default, aerial, ground, side)"""
    rotation_x, rotation_y, zoom, offset_x, offset_y = CAMERA_PRESETS[name]
    return CameraPose(rotation_x, rotation_y, zoom, offset_x, offset_y)


def apply_preset(pose: CameraPose, name: str) -> CameraPose:
    """Switch to a preset; unknown names leave the pose unchanged"""
    if name not in CAMERA_PRESETS:
        logger.warning(f"Unknown camera preset '{name}', keeping current pose")
        return pose
    return preset_pose(name)


def drag(pose: CameraPose, delta_x: float, delta_y: float) -> CameraPose:
    """Orbit by a mouse drag of (delta_x, delta_y) pixels"""
    return replace(
        pose,
        rotation_y=pose.rotation_y + delta_x * DRAG_SENSITIVITY,
        rotation_x=_clamp(pose.rotation_x - delta_y * DRAG_SENSITIVITY, MIN_TILT, MAX_TILT),
    )


def zoom(pose: CameraPose, wheel_delta: float) -> CameraPose:
    """Zoom by a wheel delta; scrolling down (positive) zooms out"""
    return replace(pose, zoom=_clamp(pose.zoom - wheel_delta * ZOOM_SPEED, MIN_ZOOM, MAX_ZOOM))


def pan(pose: CameraPose, delta_x: float, delta_y: float) -> CameraPose:
    return replace(pose, offset_x=pose.offset_x + delta_x, offset_y=pose.offset_y + delta_y)
