from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, List, Mapping, Tuple

from .bdf import FontDocument, load_bdf, parse_bdf
from .entities import GlyphCurves, LineEntity, Polygon, Segment
from .geometry import font_to_curves, glyph_to_rects, translate

logger = logging.getLogger(__name__)

BUILTIN_FONT_NAME = "BUILTIN"
BUILTIN_FONT_RESOURCE = "tiny5x7.bdf"
REGISTRY_FILENAME = "bdffonts.lst"


class CurveTable:
    """Read-only lookup from codepoint string to a glyph's curve set."""

    def __init__(self, curves: List[GlyphCurves], *, name: str = "") -> None:
        self.name = name
        entries: dict[str, GlyphCurves] = {}
        for entry in curves:
            # First definition of an encoding wins, like a linear search would.
            entries.setdefault(entry.id, entry)
        self._entries: Mapping[str, GlyphCurves] = MappingProxyType(entries)

    @classmethod
    def from_font(cls, font: FontDocument) -> "CurveTable":
        return cls(font_to_curves(font), name=font.name)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and len(char) == 1 and str(ord(char)) in self._entries

    def __iter__(self) -> Iterator[GlyphCurves]:
        return iter(self._entries.values())

    def get(self, glyph_id: str) -> GlyphCurves | None:
        return self._entries.get(glyph_id)

    def lookup(self, char: str) -> GlyphCurves | None:
        return self._entries.get(str(ord(char)))

    def layout(
        self,
        text: str,
        *,
        origin: Tuple[float, float] = (0.0, 0.0),
        scale: float = 1.0,
        tracking: float = 0.0,
    ) -> List[Segment]:
        """
        Place the strokes for ``text`` along a horizontal cursor.

        Each glyph's segments are scaled and shifted to the cursor position,
        then the cursor advances by the glyph's advance width (plus
        ``tracking``).  Characters missing from the table are skipped and do
        not move the cursor.
        """

        origin_x, origin_y = origin
        cursor_x = origin_x
        placed: List[Segment] = []
        for ch in text:
            entry = self.lookup(ch)
            if entry is None:
                continue
            for segment in entry.segments:
                placed.append(translate(segment, cursor_x, origin_y, scale))
            cursor_x += entry.advance * scale + tracking
        return placed

    def layout_lines(self, text: str, *, layer: int = 0, **kwargs) -> List[LineEntity]:
        return [
            LineEntity(layer=layer, start=seg[0], end=seg[1])
            for seg in self.layout(text, **kwargs)
        ]

    def advance_of(self, text: str, *, scale: float = 1.0, tracking: float = 0.0) -> float:
        total = 0.0
        for ch in text:
            entry = self.lookup(ch)
            if entry is not None:
                total += entry.advance * scale + tracking
        return total


def builtin_font_text() -> str:
    return resources.files("bdfgeom").joinpath("data").joinpath(BUILTIN_FONT_RESOURCE).read_text(encoding="utf-8")


@lru_cache(maxsize=None)
def builtin_font() -> FontDocument:
    return parse_bdf(builtin_font_text())


@lru_cache(maxsize=None)
def builtin_curves() -> CurveTable:
    """Curve table for the bundled font, built on first use and shared afterwards."""

    return CurveTable.from_font(builtin_font())


class FontRegistry:
    """
    Named BDF fonts configured for a directory.

    ``bdffonts.lst`` lists ``NAME FILENAME`` pairs; without it every ``*.bdf``
    in the directory is registered under its upper-cased stem.  Fonts are
    parsed the first time they are requested and kept for the registry's
    lifetime.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self._config = self._load_config()
        self._tables: dict[str, CurveTable] = {}
        self._fonts: dict[str, FontDocument] = {}

    def _load_config(self) -> dict[str, str]:
        config_path = self.root / REGISTRY_FILENAME
        if not config_path.exists():
            return {path.stem.upper(): path.name for path in sorted(self.root.glob("*.bdf"))}
        config: dict[str, str] = {}
        for line in config_path.read_text(encoding="utf-8", errors="ignore").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) < 2:
                logger.debug("Skipping registry line without a filename: %r", line)
                continue
            config[parts[0].upper()] = parts[1]
        return config

    @property
    def names(self) -> List[str]:
        return sorted({BUILTIN_FONT_NAME, *self._config})

    def font(self, name: str) -> FontDocument | None:
        key = name.upper()
        if key in self._fonts:
            return self._fonts[key]
        if key == BUILTIN_FONT_NAME and key not in self._config:
            return builtin_font()
        fontfile = self._config.get(key)
        if not fontfile:
            return None
        document = load_bdf(self.root / fontfile)
        logger.info("Loaded font %s from %s (%d glyphs)", key, fontfile, len(document.glyphs))
        self._fonts[key] = document
        return document

    def get(self, name: str) -> CurveTable | None:
        key = name.upper()
        if key in self._tables:
            return self._tables[key]
        if key == BUILTIN_FONT_NAME and key not in self._config:
            return builtin_curves()
        document = self.font(key)
        if document is None:
            return None
        table = CurveTable.from_font(document)
        self._tables[key] = table
        return table


def layout_rects(font: FontDocument, text: str, *, origin: Tuple[float, float] = (0.0, 0.0)) -> List[Polygon]:
    """Pixel squares for ``text`` placed along a cursor in glyph-local (y-up) space."""

    cursor_x, origin_y = origin
    placed: List[Polygon] = []
    for ch in text:
        glyph = font.glyph_for(ord(ch))
        if glyph is None:
            continue
        for rect in glyph_to_rects(glyph):
            placed.append(translate(rect, cursor_x, origin_y))
        cursor_x += glyph.device_width[0]
    return placed
