"""
Pillow drawing primitives with alpha blending and gradients.

All functions draw onto an RGBA image in place. Gradients are rasterized
with numpy over the shape's bounding box, masked by the shape, and
alpha-composited onto the target.
"""
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

RGBA = Tuple[int, int, int, int]
Point = Tuple[float, float]
GradientStops = Sequence[Tuple[float, RGBA]]


def _draw(image: Image.Image) -> ImageDraw.ImageDraw:
    return ImageDraw.Draw(image, 'RGBA')


def fill_polygon(image: Image.Image, points: Sequence[Point], fill: Optional[RGBA], outline: Optional[RGBA] = None):
    _draw(image).polygon([tuple(p) for p in points], fill=fill, outline=outline)


def fill_rect(image: Image.Image, x: float, y: float, width: float, height: float, fill: RGBA):
    if width <= 0 or height <= 0:
        return
    _draw(image).rectangle([x, y, x + width, y + height], fill=fill)


def fill_circle(image: Image.Image, center: Point, radius: float, fill: RGBA):
    cx, cy = center
    _draw(image).ellipse([cx - radius, cy - radius, cx + radius, cy + radius], fill=fill)


def draw_line(image: Image.Image, start: Point, end: Point, color: RGBA, width: int = 1):
    _draw(image).line([tuple(start), tuple(end)], fill=color, width=width)


def _clipped_bbox(image: Image.Image, xs: Sequence[float], ys: Sequence[float]) -> Optional[Tuple[int, int, int, int]]:
    x0 = max(0, int(np.floor(min(xs))))
    y0 = max(0, int(np.floor(min(ys))))
    x1 = min(image.width, int(np.ceil(max(xs))) + 1)
    y1 = min(image.height, int(np.ceil(max(ys))) + 1)
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


def _interpolate_stops(t: np.ndarray, stops: GradientStops) -> np.ndarray:
    """Map t in [0, 1] to RGBA through piecewise-linear color stops"""
    offsets = [offset for offset, _ in stops]
    channels = [
        np.interp(t, offsets, [color[channel] for _, color in stops])
        for channel in range(4)
    ]
    return np.stack(channels, axis=-1)


def _composite(image: Image.Image, bbox, colors: np.ndarray, mask: Image.Image):
    x0, y0, _, _ = bbox
    mask_array = np.asarray(mask, dtype=np.float32) / 255.0
    colors[..., 3] *= mask_array
    overlay = Image.fromarray(np.clip(colors, 0, 255).astype(np.uint8))
    image.alpha_composite(overlay, dest=(x0, y0))


def _pixel_grid(bbox) -> Tuple[np.ndarray, np.ndarray]:
    x0, y0, x1, y1 = bbox
    xs = np.arange(x0, x1, dtype=np.float32) + 0.5
    ys = np.arange(y0, y1, dtype=np.float32) + 0.5
    return np.meshgrid(xs, ys)


def linear_gradient_polygon(
    image: Image.Image,
    points: Sequence[Point],
    start: Point,
    end: Point,
    stops: GradientStops,
):
    """
    Fill a polygon with a linear gradient.

    Args:
        image: Target RGBA image
        points: Polygon vertices
        start, end: Gradient axis; t=0 at start, t=1 at end, clamped beyond
        stops: (offset, rgba) pairs with ascending offsets in [0, 1]
    """
    bbox = _clipped_bbox(image, [p[0] for p in points], [p[1] for p in points])
    if bbox is None:
        return
    x0, y0, x1, y1 = bbox

    mask = Image.new('L', (x1 - x0, y1 - y0), 0)
    ImageDraw.Draw(mask).polygon([(px - x0, py - y0) for px, py in points], fill=255)

    px, py = _pixel_grid(bbox)
    dx, dy = end[0] - start[0], end[1] - start[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        t = np.zeros_like(px)
    else:
        t = np.clip(((px - start[0]) * dx + (py - start[1]) * dy) / length_sq, 0.0, 1.0)

    _composite(image, bbox, _interpolate_stops(t, stops), mask)


def _radial_t(bbox, center: Point, inner_radius: float, outer_radius: float) -> np.ndarray:
    px, py = _pixel_grid(bbox)
    dist = np.sqrt((px - center[0]) ** 2 + (py - center[1]) ** 2)
    span = max(outer_radius - inner_radius, 1e-6)
    return np.clip((dist - inner_radius) / span, 0.0, 1.0)


def radial_gradient_polygon(
    image: Image.Image,
    points: Sequence[Point],
    center: Point,
    inner_radius: float,
    outer_radius: float,
    stops: GradientStops,
):
    """Fill a polygon with a radial gradient around center"""
    bbox = _clipped_bbox(image, [p[0] for p in points], [p[1] for p in points])
    if bbox is None:
        return
    x0, y0, x1, y1 = bbox

    mask = Image.new('L', (x1 - x0, y1 - y0), 0)
    ImageDraw.Draw(mask).polygon([(px - x0, py - y0) for px, py in points], fill=255)

    t = _radial_t(bbox, center, inner_radius, outer_radius)
    _composite(image, bbox, _interpolate_stops(t, stops), mask)


def radial_gradient_ellipse(
    image: Image.Image,
    center: Point,
    radii: Point,
    inner_radius: float,
    outer_radius: float,
    stops: GradientStops,
):
    """
    Fill an axis-aligned ellipse with a circular radial gradient.

    t is 0 inside inner_radius and 1 at outer_radius from center; the
    ellipse (rx, ry) only clips the painted area.
    """
    cx, cy = center
    rx, ry = radii
    if rx <= 0 or ry <= 0:
        return
    bbox = _clipped_bbox(image, [cx - rx, cx + rx], [cy - ry, cy + ry])
    if bbox is None:
        return
    x0, y0, x1, y1 = bbox

    mask = Image.new('L', (x1 - x0, y1 - y0), 0)
    ImageDraw.Draw(mask).ellipse([cx - rx - x0, cy - ry - y0, cx + rx - x0, cy + ry - y0], fill=255)

    t = _radial_t(bbox, center, inner_radius, outer_radius)
    _composite(image, bbox, _interpolate_stops(t, stops), mask)


def vertical_gradient(width: int, height: int, stops: List[Tuple[float, Tuple[int, int, int]]]) -> Image.Image:
    """Full-size opaque top-to-bottom gradient, used for the sky"""
    t = (np.arange(height, dtype=np.float32) + 0.5) / max(height, 1)
    rgba_stops = [(offset, (r, g, b, 255)) for offset, (r, g, b) in stops]
    column = _interpolate_stops(t, rgba_stops)
    pixels = np.broadcast_to(column[:, np.newaxis, :], (height, width, 4))
    return Image.fromarray(np.round(pixels).astype(np.uint8))
