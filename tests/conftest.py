from __future__ import annotations

from pathlib import Path

import pytest

from bdfgeom import FontDocument, parse_bdf

SAMPLE_BDF = """\
STARTFONT 2.1
COMMENT two glyph sample
FONT -Test-Sample-Medium-R-Normal--8-80-75-75-C-80-ISO10646-1
SIZE 8 75 75
FONTBOUNDINGBOX 8 8 0 -1
STARTPROPERTIES 4
FONT_ASCENT 7
FONT_DESCENT 1
FAMILY_NAME "Sample"
COPYRIGHT "Public domain"
ENDPROPERTIES
CHARS 2
STARTCHAR A
ENCODING 65
SWIDTH 1000 0
DWIDTH 8 0
BBX 3 2 1 0
BITMAP
E0
A0
ENDCHAR
STARTCHAR B
ENCODING 66
SWIDTH 1000 0
DWIDTH 6 0
BBX 10 1 0 -1
BITMAP
FFC0
ENDCHAR
ENDFONT
"""


def glyph_block(name: str, encoding: int, bbx: str, rows: list[str], dwidth: str = "8 0") -> str:
    body = "\n".join(rows)
    if body:
        body += "\n"
    return (
        f"STARTCHAR {name}\nENCODING {encoding}\nSWIDTH 1000 0\nDWIDTH {dwidth}\n"
        f"BBX {bbx}\nBITMAP\n{body}ENDCHAR\n"
    )


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_BDF


@pytest.fixture
def sample_font() -> FontDocument:
    return parse_bdf(SAMPLE_BDF)


@pytest.fixture
def sample_path(tmp_path: Path) -> Path:
    path = tmp_path / "sample.bdf"
    path.write_text(SAMPLE_BDF, encoding="utf-8")
    return path
