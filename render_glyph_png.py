#!/usr/bin/env python3
"""
Render BDF glyph geometry to a PNG preview without a GPU pipeline.

The geometry is produced exactly as a downstream renderer would receive it
(run-length strokes or per-pixel squares) and then rasterized with Pillow so
the extraction can be eyeballed.  Example:

    python render_glyph_png.py fonts/HaxorNarrow-17.bdf --text "READY" \
        --output ready.png --size 512
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

from PIL import Image, ImageDraw

from bdfgeom import BdfParseError, CurveTable, FontDocument, builtin_font, compute_bounds, layout_rects, load_bdf
from bdfgeom.entities import Point, Segment


def collect_curves(font: FontDocument, text: str) -> List[Segment]:
    return CurveTable.from_font(font).layout(text)


def _build_transform(
    bounds: Tuple[float, float, float, float],
    size_px: int,
    padding_ratio: float,
    *,
    y_down: bool,
) -> Callable[[Point], Point]:
    min_x, min_y, max_x, max_y = bounds
    width = max(max_x - min_x, 1e-9)
    height = max(max_y - min_y, 1e-9)
    pad = max(width, height) * padding_ratio

    world_min_x = min_x - pad
    world_min_y = min_y - pad
    world_width = width + 2 * pad
    world_height = height + 2 * pad

    scale = min(size_px / world_width, size_px / world_height)
    offset_x = (size_px - world_width * scale) / 2.0
    offset_y = (size_px - world_height * scale) / 2.0

    def transform(point: Point) -> Point:
        x, y = point
        px = (x - world_min_x) * scale + offset_x
        py = (y - world_min_y) * scale + offset_y
        if not y_down:
            py = size_px - py
        return px, py

    return transform


def render_png(
    shapes: Sequence[Sequence[Point]],
    destination: Path,
    size_px: int,
    *,
    filled: bool,
    padding_ratio: float = 0.05,
) -> None:
    """
    Draw ``shapes`` scaled to fit a square image.  Filled shapes are pixel
    squares in y-up glyph space; open shapes are strokes in y-down layout
    space.
    """

    bounds = compute_bounds(shapes)
    if bounds is None:
        raise RuntimeError("Nothing to render: the geometry is empty.")
    transform = _build_transform(bounds, size_px, padding_ratio, y_down=not filled)

    image = Image.new("RGBA", (size_px, size_px), (255, 255, 255, 0))
    draw = ImageDraw.Draw(image)
    stroke = max(1, int(size_px / 256))

    for shape in shapes:
        points = [transform(pt) for pt in shape]
        if filled:
            draw.polygon(points, fill="black")
        else:
            draw.line(points, fill="black", width=stroke)

    destination.parent.mkdir(parents=True, exist_ok=True)
    image.save(destination)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render BDF glyph geometry to PNG.")
    parser.add_argument("input", type=Path, nargs="?", help="Source .bdf font (defaults to the bundled font)")
    parser.add_argument("--output", type=Path, required=True, help="Destination PNG path")
    parser.add_argument("--text", default="0123456789", help="String to lay out (default: digits)")
    parser.add_argument("--size", type=int, default=512, help="Image size in pixels (square)")
    parser.add_argument("--mode", choices=("curves", "rects"), default="curves", help="Geometry to render")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        font = builtin_font() if args.input is None else load_bdf(args.input)
    except BdfParseError as exc:
        raise SystemExit(f"Unable to parse {args.input}: {exc}") from exc

    if args.mode == "curves":
        shapes = collect_curves(font, args.text)
    else:
        shapes = layout_rects(font, args.text)
    if not shapes:
        raise SystemExit(f"No glyphs in the font cover {args.text!r}.")
    render_png(shapes, args.output, args.size, filled=args.mode == "rects")
    print(f"[+] PNG written to {args.output} ({len(shapes)} shapes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
