#!/usr/bin/env python3
"""
Summarize a BDF font:
  - header records (FONT, SIZE, FONTBOUNDINGBOX, CHARS) and known properties
  - per-glyph bbx / advance / lit pixel / stroke counts
  - optional JSON dump of the parsed document and a plain-text glyph report

Usage:
    python bdf_probe.py fonts/HaxorNarrow-17.bdf --limit 20
    python bdf_probe.py fonts/HaxorNarrow-17.bdf --json haxor.json --report haxor.txt
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from bdfgeom import BdfParseError, FontDocument, builtin_font, font_to_curves, glyph_stats, load_bdf, write_glyph_report


def _print_header(font: FontDocument) -> None:
    width, height, x_off, y_off = font.bounding_box
    print(f"[+] FONT {font.name or '(unnamed)'}")
    print(f"    size={font.point_size_spec} bbox=({width},{height},{x_off:+d},{y_off:+d})")
    print(f"    chars declared={font.declared_glyph_count} parsed={len(font.glyphs)}")
    props = {key: value for key, value in asdict(font.properties).items() if value not in (0, "")}
    if props:
        print("[properties]")
        for key, value in props.items():
            print(f"  {key:<18} {value}")


def _print_preview(font: FontDocument, limit: int) -> None:
    preview = font.glyphs[: max(0, limit)]
    if not preview:
        print("No glyphs to preview.")
        return
    print("[preview]")
    ascent = font.properties.font_ascent
    for glyph in preview:
        stats = glyph_stats(glyph, ascent)
        print(
            f"  {stats.name:<14} enc={stats.encoding:<6} advance={stats.advance:<3} "
            f"lit={stats.lit_pixels:<4} rects={stats.rect_count:<4} segments={stats.segment_count}"
        )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize a BDF bitmap font.")
    parser.add_argument("input", type=Path, nargs="?", help="Path to the .bdf font (defaults to the bundled font)")
    parser.add_argument("--json", type=Path, help="Optional destination for the parsed document + curves JSON")
    parser.add_argument("--report", type=Path, help="Optional destination for a per-glyph text report")
    parser.add_argument("--limit", type=int, default=10, help="Preview line cap (default: 10)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show parser log messages")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="[%(levelname)s] %(message)s")
    try:
        font = builtin_font() if args.input is None else load_bdf(args.input)
    except BdfParseError as exc:
        raise SystemExit(f"Unable to parse {args.input}: {exc}") from exc

    _print_header(font)
    _print_preview(font, args.limit)
    if args.json:
        bundle = {
            "source": str(args.input) if args.input else "builtin",
            "document": font.to_dict(),
            "curves": [entry.to_dict() for entry in font_to_curves(font)],
        }
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(json.dumps(bundle, indent=2), encoding="utf-8")
        print(f"[+] JSON summary written to {args.json}")
    if args.report:
        write_glyph_report(font, args.report)
        print(f"[+] Glyph report written to {args.report}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
