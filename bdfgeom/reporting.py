from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import numpy as np

from .bdf import FontDocument, Glyph
from .geometry import glyph_to_curves, glyph_to_rects


def ink_matrix(glyph: Glyph) -> np.ndarray:
    """Unpack the significant bits of ``glyph`` into a rows x width 0/1 array."""

    width = glyph.width
    rows = np.asarray(glyph.bitmap, dtype=np.uint16).reshape(-1, 1)
    if rows.size == 0 or width <= 0:
        return np.zeros((rows.shape[0], max(width, 0)), dtype=np.uint8)
    shifts = 15 - np.arange(width, dtype=np.int32)
    valid = shifts >= 0
    bits = (rows >> np.clip(shifts, 0, 15).astype(np.uint16)) & 1
    return (bits * valid).astype(np.uint8)


@dataclass(frozen=True)
class GlyphStats:
    name: str
    encoding: int
    bbx: tuple[int, int, int, int]
    advance: int
    lit_pixels: int
    rect_count: int
    segment_count: int


def glyph_stats(glyph: Glyph, ascent: int) -> GlyphStats:
    return GlyphStats(
        name=glyph.name,
        encoding=glyph.encoding,
        bbx=glyph.bbx,
        advance=glyph.device_width[0],
        lit_pixels=int(ink_matrix(glyph).sum()),
        rect_count=len(glyph_to_rects(glyph)),
        segment_count=len(glyph_to_curves(glyph, ascent)),
    )


def format_glyph_report(font: FontDocument) -> List[str]:
    ascent = font.properties.font_ascent
    lines: List[str] = []
    for idx, glyph in enumerate(font.glyphs, start=1):
        stats = glyph_stats(glyph, ascent)
        w, h, xo, yo = stats.bbx
        lines.append(
            f"#{idx:04d} enc={stats.encoding:<6} name={stats.name:<16} "
            f"bbx=({w},{h},{xo:+d},{yo:+d}) dwidth={stats.advance:<3} "
            f"lit={stats.lit_pixels:<4} rects={stats.rect_count:<4} segments={stats.segment_count}"
        )
    return lines


def write_glyph_report(font: FontDocument, destination: Path) -> None:
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    lines = format_glyph_report(font)
    destination.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
