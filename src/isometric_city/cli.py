"""
Generate and render a city from a place name.

Usage:
  uv run isometric-city "New York" --view 3d --time 20 -o nyc.png

  # Coastal map, rainy dusk, 24 animated frames as a GIF
  uv run isometric-city "Miami" --shape coastal --weather rainy \\
    --time 18 --frames 24 -o miami.gif

  # Also dump the generated grid as JSON
  uv run isometric-city "Tokyo" --export-json tokyo.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from isometric_city.config.render_config import CAMERA_PRESETS
from isometric_city.generation.models import MapShape
from isometric_city.rendering.animation import iter_frames
from isometric_city.rendering.scene_renderer import ViewMode
from isometric_city.rendering.sky import Weather
from isometric_city.session import CitySession

logger = logging.getLogger(__name__)

GIF_FRAME_DURATION_MS = 40


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic city layout from a place name and render it as PNG or GIF."
    )
    parser.add_argument("prompt", help="City name or description, e.g. 'Paris' or 'dense downtown'")
    parser.add_argument("--grid-size", type=int, default=20, help="Cells per side (default: 20)")
    parser.add_argument(
        "--shape",
        choices=[shape.value for shape in MapShape],
        default=MapShape.SQUARE.value,
        help="Map shape (default: square)",
    )
    parser.add_argument(
        "--water-density",
        type=float,
        default=0.15,
        help="Water feature density 0.0-1.0 (default: 0.15)",
    )
    parser.add_argument(
        "--view",
        choices=[mode.value for mode in ViewMode],
        default=ViewMode.ISOMETRIC.value,
        help="2d flat map or 3d isometric scene (default: 3d)",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(CAMERA_PRESETS),
        default="default",
        help="Camera preset for the 3d view (default: default)",
    )
    parser.add_argument("--time", type=float, default=12.0, help="Hour of day 0-24 (default: 12)")
    parser.add_argument(
        "--weather",
        choices=[weather.value for weather in Weather],
        default=Weather.CLEAR.value,
        help="Weather overlay (default: clear)",
    )
    parser.add_argument("--width", type=int, default=700, help="Image width in pixels (default: 700)")
    parser.add_argument("--height", type=int, default=700, help="Image height in pixels (default: 700)")
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of animation frames; more than one writes an animated GIF",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible layout")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("city.png"),
        help="Output image path (default: city.png)",
    )
    parser.add_argument("--export-json", type=Path, default=None, help="Also write the grid as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def print_summary(summary: dict) -> None:
    print(f"\n🏙️  {summary['name']}")
    print(f"   Style:    {summary['style']}")
    print(f"   Density:  {summary['density_percent']}%")
    print(f"   Height:   {summary['avg_height_floors']} floors")
    counts = ", ".join(f"{name}={count}" for name, count in summary["counts"].items() if count)
    print(f"   Cells:    {counts}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.grid_size < 1:
        print(f"❌ Error: grid size must be positive, got {args.grid_size}")
        return 1
    if args.frames < 1:
        print(f"❌ Error: frame count must be positive, got {args.frames}")
        return 1

    session = CitySession(
        grid_size=args.grid_size,
        map_shape=MapShape(args.shape),
        water_density=args.water_density,
        view_mode=ViewMode(args.view),
        rng=np.random.default_rng(args.seed),
    )
    session.set_time_of_day(args.time)
    session.set_weather(Weather(args.weather))
    session.apply_camera_preset(args.preset)

    try:
        grid = session.generate(args.prompt)
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 1

    print_summary(session.summary())

    if args.export_json:
        args.export_json.parent.mkdir(parents=True, exist_ok=True)
        args.export_json.write_text(json.dumps(grid.to_dict()))
        logger.info(f"Wrote grid JSON to {args.export_json}")

    args.output.parent.mkdir(parents=True, exist_ok=True)

    if args.frames == 1:
        image = session.render(args.width, args.height)
        image.save(args.output)
    else:
        frames = []
        for sky in iter_frames(session.sky, args.frames):
            session.sky = sky
            frames.append(session.render(args.width, args.height))
        frames[0].save(
            args.output,
            save_all=True,
            append_images=frames[1:],
            duration=GIF_FRAME_DURATION_MS,
            loop=0,
        )

    logger.info(f"Saved {args.frames} frame(s) to {args.output}")
    print(f"\n✅ Saved {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
