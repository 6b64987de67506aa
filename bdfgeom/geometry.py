from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .bdf import FontDocument, Glyph
from .entities import GlyphCurves, LineEntity, Point, Polygon, PolygonEntity, Segment


def local_row_y(glyph: Glyph, row: int) -> float:
    """Glyph-local y of bitmap ``row``: the top row gets the highest y."""

    _, height, _, y_offset = glyph.bbx
    return float(y_offset + (height - 1 - row))


def ascent_row_y(ascent: int, glyph: Glyph, row: int) -> float:
    """Layout y of bitmap ``row`` measured down from the font ascent line."""

    _, height, _, y_offset = glyph.bbx
    return float(ascent - y_offset - height + row)


def unit_square(x: float, y: float) -> Polygon:
    return ((x, y), (x + 1.0, y), (x + 1.0, y + 1.0), (x, y + 1.0), (x, y))


def glyph_to_rects(glyph: Glyph) -> List[Polygon]:
    """One closed unit square per lit pixel, in glyph-local design space."""

    width, _, x_offset, _ = glyph.bbx
    rects: List[Polygon] = []
    for row in range(len(glyph.bitmap)):
        y = local_row_y(glyph, row)
        for col in range(width):
            if glyph.is_set(row, col):
                rects.append(unit_square(float(x_offset + col), y))
    return rects


def glyph_to_polygons(glyph: Glyph, *, layer: int = 0) -> List[PolygonEntity]:
    return [PolygonEntity(layer=layer, points=rect) for rect in glyph_to_rects(glyph)]


def glyph_to_curves(glyph: Glyph, ascent: int) -> List[Segment]:
    """
    Collapse each bitmap row into horizontal strokes, one per run of lit pixels.

    A run still open at the last declared column is closed at the right edge
    of the bounding box, so runs never continue onto the next row.
    """

    width, _, x_offset, _ = glyph.bbx
    segments: List[Segment] = []
    for row in range(len(glyph.bitmap)):
        y = ascent_row_y(ascent, glyph, row)
        start_col: int | None = None
        for col in range(width):
            lit = glyph.is_set(row, col)
            if lit and start_col is None:
                start_col = col
            elif not lit and start_col is not None:
                segments.append(((float(x_offset + start_col), y), (float(x_offset + col), y)))
                start_col = None
        if start_col is not None:
            segments.append(((float(x_offset + start_col), y), (float(x_offset + width), y)))
    return segments


def glyph_to_lines(glyph: Glyph, ascent: int, *, layer: int = 0) -> List[LineEntity]:
    return [
        LineEntity(layer=layer, start=seg[0], end=seg[1])
        for seg in glyph_to_curves(glyph, ascent)
    ]


def font_to_curves(font: FontDocument) -> List[GlyphCurves]:
    """Curve set for every glyph of ``font`` in source order."""

    ascent = font.properties.font_ascent
    return [
        GlyphCurves(
            id=str(glyph.encoding),
            advance=glyph.device_width[0],
            segments=tuple(glyph_to_curves(glyph, ascent)),
        )
        for glyph in font.glyphs
    ]


def translate(points: Iterable[Point], dx: float, dy: float, scale: float = 1.0) -> Tuple[Point, ...]:
    return tuple((dx + x * scale, dy + y * scale) for x, y in points)


def compute_bounds(shapes: Sequence[Sequence[Point]]) -> Tuple[float, float, float, float] | None:
    xs: List[float] = []
    ys: List[float] = []
    for shape in shapes:
        for x, y in shape:
            xs.append(x)
            ys.append(y)
    if not xs:
        return None
    return min(xs), min(ys), max(xs), max(ys)
