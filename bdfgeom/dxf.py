from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .entities import LineEntity, PolygonEntity


def _layer_name(layer: int) -> str:
    return f"BDF_Layer_{layer}"


def render_dxf(lines: Sequence[LineEntity], polygons: Sequence[PolygonEntity]) -> str:
    """
    Build a bare-bones DXF document with LINE entities for strokes and closed
    LWPOLYLINE entities for pixel squares.  Z stays at 0.
    """

    def emit(code: str, value: str) -> str:
        return f"{code}\n{value}\n"

    chunks: list[str] = []
    chunks.append(emit("0", "SECTION"))
    chunks.append(emit("2", "ENTITIES"))

    for line in lines:
        chunks.append(emit("0", "LINE"))
        chunks.append(emit("8", _layer_name(line.layer)))
        chunks.append(emit("10", f"{line.start[0]:.6f}"))
        chunks.append(emit("20", f"{line.start[1]:.6f}"))
        chunks.append(emit("30", "0.0"))
        chunks.append(emit("11", f"{line.end[0]:.6f}"))
        chunks.append(emit("21", f"{line.end[1]:.6f}"))
        chunks.append(emit("31", "0.0"))

    for polygon in polygons:
        points = list(polygon.points)
        closed = polygon.closed
        if closed:
            # Closure comes from flag 70 instead of a repeated vertex.
            points = points[:-1]
        if len(points) < 2:
            continue
        chunks.append(emit("0", "LWPOLYLINE"))
        chunks.append(emit("8", _layer_name(polygon.layer)))
        chunks.append(emit("90", str(len(points))))
        chunks.append(emit("70", "1" if closed else "0"))
        for x, y in points:
            chunks.append(emit("10", f"{x:.6f}"))
            chunks.append(emit("20", f"{y:.6f}"))

    chunks.append(emit("0", "ENDSEC"))
    chunks.append(emit("0", "EOF"))
    return "".join(chunks)


def write_dxf(
    lines: Sequence[LineEntity],
    polygons: Sequence[PolygonEntity],
    destination: Path,
) -> None:
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render_dxf(lines, polygons), encoding="utf-8")
