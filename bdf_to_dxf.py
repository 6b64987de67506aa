#!/usr/bin/env python3
"""
Export BDF glyph geometry to DXF so a bitmap font can be inspected or reused
in a CAD package.

Two geometry modes are available:

* ``curves`` (default) emits one LINE per horizontal run of lit pixels, laid
  out against the font ascent line.
* ``rects`` emits one closed LWPOLYLINE per lit pixel in glyph-local space.

Without ``--text`` every glyph is arranged in a grid; with ``--text`` the
string is laid out along a single baseline.  Example:

    python bdf_to_dxf.py fonts/HaxorNarrow-17.bdf --text "HELLO 42" -o hello.dxf
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Sequence, Tuple

from bdfgeom import (
    BdfParseError,
    CurveTable,
    FontDocument,
    LineEntity,
    PolygonEntity,
    builtin_font,
    glyph_to_lines,
    glyph_to_rects,
    layout_rects,
    load_bdf,
    write_dxf,
)
from bdfgeom.geometry import translate


def _cell_size(font: FontDocument, margin: float) -> Tuple[float, float]:
    width, height, _, _ = font.bounding_box
    advances = [glyph.device_width[0] for glyph in font.glyphs]
    cell_w = max([width, *advances]) if advances else width
    cell_h = max(height, font.properties.font_ascent + font.properties.font_descent)
    return cell_w + margin, cell_h + margin


def build_grid_lines(font: FontDocument, columns: int, margin: float = 2.0) -> List[LineEntity]:
    cell_w, cell_h = _cell_size(font, margin)
    ascent = font.properties.font_ascent
    entities: List[LineEntity] = []
    for idx, glyph in enumerate(font.glyphs):
        tx = (idx % columns) * cell_w
        ty = (idx // columns) * cell_h
        for line in glyph_to_lines(glyph, ascent):
            entities.append(
                LineEntity(
                    layer=0,
                    start=(line.start[0] + tx, line.start[1] + ty),
                    end=(line.end[0] + tx, line.end[1] + ty),
                )
            )
    return entities


def build_grid_polygons(font: FontDocument, columns: int, margin: float = 2.0) -> List[PolygonEntity]:
    cell_w, cell_h = _cell_size(font, margin)
    polygons: List[PolygonEntity] = []
    for idx, glyph in enumerate(font.glyphs):
        tx = (idx % columns) * cell_w
        # Rectangles grow upward, so rows of the grid go down.
        ty = -(idx // columns) * cell_h
        for rect in glyph_to_rects(glyph):
            polygons.append(PolygonEntity(layer=0, points=translate(rect, tx, ty)))
    return polygons


def build_text_polygons(font: FontDocument, text: str) -> List[PolygonEntity]:
    return [PolygonEntity(layer=0, points=rect) for rect in layout_rects(font, text)]


def load_font(path: Path | None) -> FontDocument:
    if path is None:
        return builtin_font()
    return load_bdf(path)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert BDF glyph bitmaps into DXF vector geometry.")
    parser.add_argument("input", type=Path, nargs="?", help="Path to the .bdf font (defaults to the bundled font)")
    parser.add_argument("-o", "--output", type=Path, help="DXF destination (defaults to <input>.dxf)")
    parser.add_argument(
        "--mode",
        choices=("curves", "rects"),
        default="curves",
        help="Emit run-length strokes or per-pixel squares (default: curves)",
    )
    parser.add_argument("--text", help="Lay out this string instead of the full glyph grid")
    parser.add_argument("--columns", type=int, default=16, help="Glyphs per grid row (default: 16)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.columns <= 0:
        raise SystemExit("--columns must be positive.")
    try:
        font = load_font(args.input)
    except BdfParseError as exc:
        raise SystemExit(f"Unable to parse {args.input}: {exc}") from exc
    print(f"[+] Loaded {font.name or 'font'} ({len(font.glyphs)} glyphs)")

    lines: List[LineEntity] = []
    polygons: List[PolygonEntity] = []
    if args.mode == "curves":
        if args.text is not None:
            lines = CurveTable.from_font(font).layout_lines(args.text)
        else:
            lines = build_grid_lines(font, args.columns)
    else:
        if args.text is not None:
            polygons = build_text_polygons(font, args.text)
        else:
            polygons = build_grid_polygons(font, args.columns)
    if not (lines or polygons):
        raise SystemExit("No glyph geometry was produced; nothing to write.")

    if args.output:
        output_path = args.output
    elif args.input:
        output_path = args.input.with_suffix(".dxf")
    else:
        output_path = Path("builtin.dxf")
    write_dxf(lines, polygons, output_path)
    print(f"[+] DXF written to {output_path} ({len(lines)} lines, {len(polygons)} polygons)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
