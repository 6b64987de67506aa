"""
Reader for the Glyph Bitmap Distribution Format (BDF) text fonts.

The parser makes a single forward pass over the lines of a font, recognising
records by their leading keyword and skipping anything it does not know so
newer or vendor-specific records do not break loading.  Bitmap rows are stored
as 16-bit integers with bit 15 holding the leftmost pixel; rows written with a
single byte are shifted into the high byte on the way in.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

from .errors import MalformedHexRow, MalformedIntegerField, UnterminatedGlyph

logger = logging.getLogger(__name__)

ROW_BITS = 16

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_HEX_RE = re.compile(r"[0-9A-Fa-f]+")

# Property keyword -> (attribute, is_integer)
PROPERTY_FIELDS: dict[str, Tuple[str, bool]] = {
    "POINT_SIZE": ("point_size", True),
    "PIXEL_SIZE": ("pixel_size", True),
    "RESOLUTION_X": ("resolution_x", True),
    "RESOLUTION_Y": ("resolution_y", True),
    "FONT_ASCENT": ("font_ascent", True),
    "FONT_DESCENT": ("font_descent", True),
    "AVERAGE_WIDTH": ("average_width", True),
    "SPACING": ("spacing", False),
    "_GBDFED_INFO": ("gbdfed_info", False),
    "CHARSET_ENCODING": ("charset_encoding", False),
    "CHARSET_REGISTRY": ("charset_registry", False),
    "FAMILY_NAME": ("family_name", False),
    "FOUNDRY": ("foundry", False),
    "SETWIDTH_NAME": ("setwidth_name", False),
    "SLANT": ("slant", False),
    "WEIGHT_NAME": ("weight_name", False),
}


@dataclass(frozen=True)
class FontProperties:
    point_size: int = 0
    pixel_size: int = 0
    resolution_x: int = 0
    resolution_y: int = 0
    font_ascent: int = 0
    font_descent: int = 0
    average_width: int = 0
    spacing: str = ""
    gbdfed_info: str = ""
    charset_encoding: str = ""
    charset_registry: str = ""
    family_name: str = ""
    foundry: str = ""
    setwidth_name: str = ""
    slant: str = ""
    weight_name: str = ""


@dataclass(frozen=True)
class Glyph:
    """One STARTCHAR block."""

    name: str
    encoding: int = 0
    scalable_width: Tuple[int, int] = (0, 0)
    device_width: Tuple[int, int] = (0, 0)
    bbx: Tuple[int, int, int, int] = (0, 0, 0, 0)
    bitmap: Tuple[int, ...] = ()

    @property
    def width(self) -> int:
        return self.bbx[0]

    @property
    def height(self) -> int:
        return self.bbx[1]

    def is_set(self, row: int, col: int) -> bool:
        """Test the pixel at ``col`` of bitmap ``row`` (bit 15 is column 0)."""

        if not 0 <= col < ROW_BITS:
            return False
        return (self.bitmap[row] >> (ROW_BITS - 1 - col)) & 1 != 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "encoding": self.encoding,
            "swidth": list(self.scalable_width),
            "dwidth": list(self.device_width),
            "bbx": list(self.bbx),
            "bitmap": [f"{row:04X}" for row in self.bitmap],
        }


@dataclass(frozen=True)
class FontDocument:
    point_size_spec: Tuple[int, int, int] = (0, 0, 0)
    name: str = ""
    bounding_box: Tuple[int, int, int, int] = (0, 0, 0, 0)
    declared_glyph_count: int = 0
    properties: FontProperties = field(default_factory=FontProperties)
    glyphs: Tuple[Glyph, ...] = ()

    def glyph_for(self, codepoint: int) -> Glyph | None:
        for glyph in self.glyphs:
            if glyph.encoding == codepoint:
                return glyph
        return None

    def to_dict(self) -> dict:
        return {
            "font": self.name,
            "size": list(self.point_size_spec),
            "bounding_box": list(self.bounding_box),
            "chars": self.declared_glyph_count,
            "properties": asdict(self.properties),
            "glyphs": [glyph.to_dict() for glyph in self.glyphs],
        }


def _parse_ints(
    keyword: str,
    rest: str,
    signed: Sequence[bool],
    line_number: int,
    line: str,
) -> Tuple[int, ...]:
    """Parse ``len(signed)`` leading integer tokens from ``rest``; extra tokens are ignored."""

    tokens = rest.split()
    if len(tokens) < len(signed):
        raise MalformedIntegerField(
            keyword,
            f"expected {len(signed)} integer(s), found {len(tokens)}",
            line_number=line_number,
            line=line,
        )
    values: List[int] = []
    for token, allow_negative in zip(tokens, signed):
        pattern = _SIGNED_RE if allow_negative else _UNSIGNED_RE
        if not pattern.fullmatch(token):
            kind = "integer" if allow_negative else "non-negative integer"
            raise MalformedIntegerField(
                keyword,
                f"{token!r} is not a valid {kind}",
                line_number=line_number,
                line=line,
            )
        values.append(int(token))
    return tuple(values)


def _parse_uint(keyword: str, rest: str, line_number: int, line: str) -> int:
    return _parse_ints(keyword, rest, (False,), line_number, line)[0]


def decode_hex_row(text: str, *, line_number: int | None = None) -> int:
    """Decode one BITMAP row into a 16-bit value with bit 15 as the leftmost pixel."""

    if not _HEX_RE.fullmatch(text):
        raise MalformedHexRow("bitmap row is not hexadecimal", line_number=line_number, line=text)
    value = int(text, 16)
    if value >= 1 << ROW_BITS:
        raise MalformedHexRow("bitmap row is wider than 16 bits", line_number=line_number, line=text)
    if len(text) <= 2:
        value <<= 8
    return value


def _parse_properties(lines: List[str], idx: int, values: dict[str, object]) -> int:
    """Consume a STARTPROPERTIES body starting at ``idx``; return the index after ENDPROPERTIES."""

    while idx < len(lines) and not lines[idx].startswith("ENDPROPERTIES"):
        line = lines[idx]
        keyword, sep, rest = line.partition(" ")
        entry = PROPERTY_FIELDS.get(keyword) if sep else None
        if entry:
            attr, is_integer = entry
            if is_integer:
                values[attr] = _parse_uint(keyword, rest, idx + 1, line)
            else:
                values[attr] = rest
        idx += 1
    return idx + 1


def _parse_glyph(lines: List[str], idx: int, name: str) -> Tuple[Glyph, int]:
    """Parse the body of a STARTCHAR block; ``idx`` points just past the STARTCHAR line."""

    start_line = idx
    encoding = 0
    swidth: Tuple[int, ...] = (0, 0)
    dwidth: Tuple[int, ...] = (0, 0)
    bbx: Tuple[int, ...] = (0, 0, 0, 0)
    while idx < len(lines):
        line = lines[idx]
        line_number = idx + 1
        if line.rstrip() == "BITMAP":
            rows: List[int] = []
            idx += 1
            while idx < len(lines) and lines[idx].rstrip() != "ENDCHAR":
                rows.append(decode_hex_row(lines[idx].rstrip(), line_number=idx + 1))
                idx += 1
            if idx >= len(lines):
                raise UnterminatedGlyph(name, "BITMAP body has no ENDCHAR", line_number=start_line)
            glyph = Glyph(
                name=name,
                encoding=encoding,
                scalable_width=(swidth[0], swidth[1]),
                device_width=(dwidth[0], dwidth[1]),
                bbx=(bbx[0], bbx[1], bbx[2], bbx[3]),
                bitmap=tuple(rows),
            )
            return glyph, idx + 1
        if line.rstrip() == "ENDCHAR":
            glyph = Glyph(
                name=name,
                encoding=encoding,
                scalable_width=(swidth[0], swidth[1]),
                device_width=(dwidth[0], dwidth[1]),
                bbx=(bbx[0], bbx[1], bbx[2], bbx[3]),
            )
            return glyph, idx + 1
        if line.rstrip() == "ENDFONT" or line.startswith("STARTCHAR "):
            raise UnterminatedGlyph(name, "block ends without ENDCHAR", line_number=line_number, line=line)
        keyword, sep, rest = line.partition(" ")
        if sep:
            if keyword == "ENCODING":
                encoding = _parse_uint(keyword, rest, line_number, line)
            elif keyword == "SWIDTH":
                swidth = _parse_ints(keyword, rest, (False, False), line_number, line)
            elif keyword == "DWIDTH":
                dwidth = _parse_ints(keyword, rest, (False, False), line_number, line)
            elif keyword == "BBX":
                bbx = _parse_ints(keyword, rest, (False, False, True, True), line_number, line)
        idx += 1
    raise UnterminatedGlyph(name, "input ends inside the glyph block", line_number=start_line)


def parse_bdf(text: str) -> FontDocument:
    """
    Parse BDF source text into a :class:`FontDocument`.

    Raises a :class:`~bdfgeom.errors.BdfParseError` subclass on the first
    malformed numeric field, hex row or unterminated glyph; nothing is
    returned for a partially valid font.
    """

    lines = text.splitlines()
    size: Tuple[int, ...] = (0, 0, 0)
    name = ""
    bounding_box: Tuple[int, ...] = (0, 0, 0, 0)
    declared = 0
    properties: dict[str, object] = {}
    glyphs: List[Glyph] = []

    idx = 0
    while idx < len(lines):
        line = lines[idx]
        if line.rstrip() == "ENDFONT":
            break
        keyword, sep, rest = line.partition(" ")
        if not sep:
            idx += 1
            continue
        if keyword == "FONT":
            name = rest
        elif keyword == "SIZE":
            size = _parse_ints(keyword, rest, (False, False, False), idx + 1, line)
        elif keyword == "FONTBOUNDINGBOX":
            bounding_box = _parse_ints(keyword, rest, (False, False, True, True), idx + 1, line)
        elif keyword == "STARTPROPERTIES":
            _parse_uint(keyword, rest, idx + 1, line)
            idx = _parse_properties(lines, idx + 1, properties)
            continue
        elif keyword == "CHARS":
            declared = _parse_uint(keyword, rest, idx + 1, line)
        elif keyword == "STARTCHAR":
            glyph, idx = _parse_glyph(lines, idx + 1, rest)
            glyphs.append(glyph)
            continue
        idx += 1

    if declared and declared != len(glyphs):
        logger.warning("CHARS declares %d glyph(s) but %d were parsed", declared, len(glyphs))
    logger.debug("Parsed BDF font %r with %d glyph(s)", name, len(glyphs))
    return FontDocument(
        point_size_spec=(size[0], size[1], size[2]),
        name=name,
        bounding_box=(bounding_box[0], bounding_box[1], bounding_box[2], bounding_box[3]),
        declared_glyph_count=declared,
        properties=FontProperties(**properties),
        glyphs=tuple(glyphs),
    )


def load_bdf(path: Path) -> FontDocument:
    return parse_bdf(Path(path).read_text(encoding="utf-8", errors="replace"))
