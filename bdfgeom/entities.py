from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

Point = Tuple[float, float]
Segment = Tuple[Point, Point]
Polygon = Tuple[Point, ...]


@dataclass(frozen=True)
class LineEntity:
    layer: int
    start: Point
    end: Point


@dataclass(frozen=True)
class PolygonEntity:
    layer: int
    points: Tuple[Point, ...]

    @property
    def closed(self) -> bool:
        return len(self.points) > 2 and self.points[0] == self.points[-1]


@dataclass(frozen=True)
class GlyphCurves:
    """Stroke segments for one glyph, keyed by its encoding rendered as decimal."""

    id: str
    advance: int
    segments: Tuple[Segment, ...]

    def __iter__(self) -> Iterator:
        # Unpacks as (id, advance_width, segments).
        return iter((self.id, self.advance, self.segments))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "advance": self.advance,
            "segment_count": len(self.segments),
            "lines": [
                {"start": [seg[0][0], seg[0][1]], "end": [seg[1][0], seg[1][1]]}
                for seg in self.segments
            ],
        }
