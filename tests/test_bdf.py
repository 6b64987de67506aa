from __future__ import annotations

import logging

import pytest

from bdfgeom import (
    BdfParseError,
    FontProperties,
    MalformedHexRow,
    MalformedIntegerField,
    UnterminatedGlyph,
    decode_hex_row,
    load_bdf,
    parse_bdf,
)
from conftest import glyph_block


def test_single_byte_rows_land_in_high_byte():
    assert decode_hex_row("FF") == 0xFF00
    assert decode_hex_row("0F") == 0x0F00
    assert decode_hex_row("8") == 0x0800


def test_two_byte_rows_are_stored_unshifted():
    assert decode_hex_row("FF00") == 0xFF00
    assert decode_hex_row("00FF") == 0x00FF
    assert decode_hex_row("abc") == 0x0ABC


@pytest.mark.parametrize("row", ["GG", "0xFF", "", "F F", "-1"])
def test_non_hex_rows_are_rejected(row):
    with pytest.raises(MalformedHexRow):
        decode_hex_row(row)


def test_rows_wider_than_sixteen_bits_are_rejected():
    with pytest.raises(MalformedHexRow):
        decode_hex_row("12345")


def test_header_records(sample_font):
    assert sample_font.name == "-Test-Sample-Medium-R-Normal--8-80-75-75-C-80-ISO10646-1"
    assert sample_font.point_size_spec == (8, 75, 75)
    assert sample_font.bounding_box == (8, 8, 0, -1)
    assert sample_font.declared_glyph_count == 2


def test_known_properties_are_parsed_and_unknown_ones_skipped(sample_font):
    props = sample_font.properties
    assert props.font_ascent == 7
    assert props.font_descent == 1
    # String values are copied literally, quotes included.
    assert props.family_name == '"Sample"'
    assert props.point_size == 0
    assert props.weight_name == ""


def test_glyphs_are_decoded_in_source_order(sample_font):
    first, second = sample_font.glyphs
    assert (first.name, second.name) == ("A", "B")
    assert first.encoding == 65
    assert first.scalable_width == (1000, 0)
    assert first.device_width == (8, 0)
    assert first.bbx == (3, 2, 1, 0)
    assert first.bitmap == (0xE000, 0xA000)
    assert second.bbx == (10, 1, 0, -1)
    assert second.bitmap == (0xFFC0,)


def test_minimal_document_uses_defaults():
    font = parse_bdf("STARTFONT 2.1\nENDFONT\n")
    assert font.properties == FontProperties()
    assert font.properties.font_ascent == 0
    assert font.properties.family_name == ""
    assert font.point_size_spec == (0, 0, 0)
    assert font.bounding_box == (0, 0, 0, 0)
    assert font.name == ""
    assert font.glyphs == ()


def test_glyph_order_follows_the_text():
    text = "STARTFONT 2.1\n" + glyph_block("B", 66, "1 1 0 0", ["80"]) + glyph_block("A", 65, "1 1 0 0", ["80"])
    font = parse_bdf(text)
    assert [glyph.name for glyph in font.glyphs] == ["B", "A"]


def test_lines_after_endfont_are_ignored():
    tail = glyph_block("C", 67, "1 1 0 0", ["80"]) + "SIZE 1\n"
    font = parse_bdf("STARTFONT 2.1\n" + glyph_block("A", 65, "1 1 0 0", ["80"]) + "ENDFONT\n" + tail)
    assert [glyph.name for glyph in font.glyphs] == ["A"]


def test_size_with_two_tokens_fails():
    with pytest.raises(MalformedIntegerField) as excinfo:
        parse_bdf("STARTFONT 2.1\nSIZE 17 75\nENDFONT\n")
    assert excinfo.value.field == "SIZE"
    assert excinfo.value.line_number == 2
    assert str(excinfo.value).startswith("line 2: SIZE:")


@pytest.mark.parametrize(
    "record",
    [
        "ENCODING abc",
        "DWIDTH 8",
        "DWIDTH -1 0",
        "SWIDTH 1.5 0",
        "BBX 3 2 x 0",
        "ENCODING 1_000",
    ],
)
def test_malformed_glyph_integers_fail(record):
    text = f"STARTCHAR A\n{record}\nBITMAP\n80\nENDCHAR\n"
    with pytest.raises(MalformedIntegerField):
        parse_bdf(text)


def test_malformed_property_integer_fails():
    text = "STARTPROPERTIES 1\nFONT_ASCENT tall\nENDPROPERTIES\n"
    with pytest.raises(MalformedIntegerField):
        parse_bdf(text)


def test_malformed_property_count_fails():
    with pytest.raises(MalformedIntegerField):
        parse_bdf("STARTPROPERTIES many\nENDPROPERTIES\n")


@pytest.mark.parametrize(
    "text, field",
    [
        ("STARTFONT 2.1\nSIZE \nENDFONT\n", "SIZE"),
        ("FONTBOUNDINGBOX \n", "FONTBOUNDINGBOX"),
        ("STARTPROPERTIES \nFONT_ASCENT 7\nENDPROPERTIES\n", "STARTPROPERTIES"),
        ("STARTCHAR A\nENCODING \nBITMAP\n80\nENDCHAR\n", "ENCODING"),
        ("STARTCHAR A\nDWIDTH  \nBITMAP\n80\nENDCHAR\n", "DWIDTH"),
        ("STARTCHAR A\nBBX \nBITMAP\n80\nENDCHAR\n", "BBX"),
    ],
)
def test_records_with_blank_values_fail(text, field):
    with pytest.raises(MalformedIntegerField) as excinfo:
        parse_bdf(text)
    assert excinfo.value.field == field


def test_sentinels_and_rows_tolerate_trailing_whitespace():
    text = "STARTCHAR A\nENCODING 65\nBBX 8 1 0 0\nBITMAP  \nFF \nENDCHAR\t\nENDFONT \nSIZE 1\n"
    font = parse_bdf(text)
    assert font.glyphs[0].bitmap == (0xFF00,)


def test_font_name_and_string_properties_are_kept_verbatim():
    text = "FONT name  \nSTARTPROPERTIES 1\nFOUNDRY \"Acme\"  \nFONT_ASCENT 7\nENDPROPERTIES  \nCHARS 3\n"
    font = parse_bdf(text)
    assert font.name == "name  "
    assert font.properties.foundry == '"Acme"  '
    # A line starting with ENDPROPERTIES closes the block.
    assert font.properties.font_ascent == 7
    assert font.declared_glyph_count == 3


def test_property_count_does_not_bound_the_block():
    text = "STARTPROPERTIES 1\nFONT_ASCENT 12\nFONT_DESCENT 3\nFOUNDRY \"Acme\"\nENDPROPERTIES\nCHARS 0\n"
    font = parse_bdf(text)
    assert font.properties.font_ascent == 12
    assert font.properties.font_descent == 3
    assert font.properties.foundry == '"Acme"'


def test_bad_hex_row_aborts_the_parse():
    text = "STARTFONT 2.1\n" + glyph_block("A", 65, "8 2 0 0", ["FF", "ZZ"])
    with pytest.raises(MalformedHexRow) as excinfo:
        parse_bdf(text)
    assert excinfo.value.line_number == 9


def test_glyph_without_bitmap_at_end_of_input_fails():
    text = "STARTFONT 2.1\nSTARTCHAR A\nENCODING 65\nBBX 1 1 0 0\n"
    with pytest.raises(UnterminatedGlyph) as excinfo:
        parse_bdf(text)
    assert excinfo.value.glyph_name == "A"


def test_bitmap_without_endchar_fails():
    with pytest.raises(UnterminatedGlyph):
        parse_bdf("STARTCHAR A\nBBX 8 1 0 0\nBITMAP\nFF\n")


def test_glyph_block_cannot_swallow_the_next_glyph():
    text = "STARTCHAR A\nENCODING 65\n" + glyph_block("B", 66, "1 1 0 0", ["80"])
    with pytest.raises(UnterminatedGlyph):
        parse_bdf(text)


def test_endchar_without_bitmap_yields_empty_glyph():
    text = "STARTCHAR space\nENCODING 32\nDWIDTH 4 0\nENDCHAR\n" + glyph_block("A", 65, "1 1 0 0", ["80"])
    font = parse_bdf(text)
    assert [glyph.name for glyph in font.glyphs] == ["space", "A"]
    assert font.glyphs[0].bitmap == ()
    assert font.glyphs[0].device_width == (4, 0)


def test_unknown_records_are_skipped():
    text = (
        "STARTFONT 2.1\nCOMMENT anything\nMETRICSSET 0\n"
        "STARTCHAR A\nENCODING 65\nVVECTOR 1 2\nBBX 1 1 0 0\nBITMAP\n80\nENDCHAR\nENDFONT\n"
    )
    font = parse_bdf(text)
    assert font.glyphs[0].bitmap == (0x8000,)


def test_crlf_line_endings():
    font = parse_bdf("STARTFONT 2.1\r\nSIZE 8 75 75\r\n" + glyph_block("A", 65, "1 1 0 0", ["80"]).replace("\n", "\r\n"))
    assert font.point_size_spec == (8, 75, 75)
    assert font.glyphs[0].bitmap == (0x8000,)


def test_signed_offsets():
    font = parse_bdf("FONTBOUNDINGBOX 6 9 -1 -2\n" + glyph_block("A", 65, "3 2 -1 -2", ["E0", "A0"]))
    assert font.bounding_box == (6, 9, -1, -2)
    assert font.glyphs[0].bbx == (3, 2, -1, -2)


def test_glyph_names_keep_spaces():
    font = parse_bdf(glyph_block("LATIN CAPITAL A", 65, "1 1 0 0", ["80"]))
    assert font.glyphs[0].name == "LATIN CAPITAL A"


def test_chars_mismatch_is_logged_not_enforced(caplog):
    text = "CHARS 5\n" + glyph_block("A", 65, "1 1 0 0", ["80"])
    with caplog.at_level(logging.WARNING, logger="bdfgeom.bdf"):
        font = parse_bdf(text)
    assert font.declared_glyph_count == 5
    assert len(font.glyphs) == 1
    assert "CHARS declares 5" in caplog.text


def test_glyph_for_returns_first_match(sample_font):
    assert sample_font.glyph_for(66).name == "B"
    assert sample_font.glyph_for(67) is None


def test_errors_share_a_base_class():
    for exc_type in (MalformedIntegerField, MalformedHexRow, UnterminatedGlyph):
        assert issubclass(exc_type, BdfParseError)
        assert issubclass(exc_type, ValueError)


def test_load_bdf_reads_files(sample_path):
    font = load_bdf(sample_path)
    assert len(font.glyphs) == 2


def test_to_dict(sample_font):
    data = sample_font.to_dict()
    assert data["chars"] == 2
    assert data["properties"]["font_ascent"] == 7
    assert data["glyphs"][0]["bitmap"] == ["E000", "A000"]
