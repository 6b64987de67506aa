"""
BDF bitmap-font parsing and glyph-to-vector geometry extraction.
"""

from .errors import BdfParseError, MalformedHexRow, MalformedIntegerField, UnterminatedGlyph
from .entities import GlyphCurves, LineEntity, PolygonEntity
from .bdf import FontDocument, FontProperties, Glyph, PROPERTY_FIELDS, decode_hex_row, load_bdf, parse_bdf
from .geometry import (
    ascent_row_y,
    compute_bounds,
    font_to_curves,
    glyph_to_curves,
    glyph_to_lines,
    glyph_to_polygons,
    glyph_to_rects,
    local_row_y,
)
from .fonts import (
    BUILTIN_FONT_NAME,
    CurveTable,
    FontRegistry,
    builtin_curves,
    builtin_font,
    builtin_font_text,
    layout_rects,
)
from .dxf import render_dxf, write_dxf
from .reporting import GlyphStats, glyph_stats, ink_matrix, write_glyph_report

__all__ = [
    "BdfParseError",
    "MalformedHexRow",
    "MalformedIntegerField",
    "UnterminatedGlyph",
    "GlyphCurves",
    "LineEntity",
    "PolygonEntity",
    "FontDocument",
    "FontProperties",
    "Glyph",
    "PROPERTY_FIELDS",
    "decode_hex_row",
    "load_bdf",
    "parse_bdf",
    "ascent_row_y",
    "compute_bounds",
    "font_to_curves",
    "glyph_to_curves",
    "glyph_to_lines",
    "glyph_to_polygons",
    "glyph_to_rects",
    "local_row_y",
    "BUILTIN_FONT_NAME",
    "CurveTable",
    "FontRegistry",
    "builtin_curves",
    "builtin_font",
    "builtin_font_text",
    "layout_rects",
    "render_dxf",
    "write_dxf",
    "GlyphStats",
    "glyph_stats",
    "ink_matrix",
    "write_glyph_report",
]
