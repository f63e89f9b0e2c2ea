import logging

import pytest

from bdf2c import bdf
from bdf2c.bdf import (BdfReader, FontBoundingBox, convert_font, detect_placement,
                       place_rows, read_font_header, vertical_offset)
from bdf2c.errors import BdfError

from conftest import A_ROWS, make_bdf


def test_read_font_header(font_a_lines):
    header = read_font_header(font_a_lines)
    assert header.bbox == FontBoundingBox(8, 13, 0, -2)
    assert header.chars == 1
    assert header.name.startswith('-misc-fixed')


def test_header_keywords_are_case_insensitive():
    header = read_font_header(["fontboundingbox 6 9 0 -1\n", "Chars 3\n"])
    assert header.bbox == FontBoundingBox(6, 9, 0, -1)
    assert header.chars == 3


@pytest.mark.parametrize('lines, message', [
    (["CHARS 1\n"], "character size"),
    (["FONTBOUNDINGBOX 0 8 0 0\n", "CHARS 1\n"], "character size"),
    (["FONTBOUNDINGBOX 8 -1 0 0\n", "CHARS 1\n"], "character size"),
    (["FONTBOUNDINGBOX 8 8 0 0\n", "CHARS 0\n"], "number of characters"),
    (["FONTBOUNDINGBOX 8 8 0 0\n"], "number of characters"),
])
def test_bad_header_is_fatal(lines, message):
    with pytest.raises(BdfError, match=message):
        read_font_header(lines)


def test_detect_placement():
    bbox = FontBoundingBox(8, 8, 0, 0)
    assert detect_placement(bbox, 0, 0, 8, 8) == (False, False)
    assert detect_placement(bbox, bbox.xoff - 1, 0, 8, 8) == (True, True)
    assert detect_placement(bbox, 2, 0, 4, 8) == (True, False)
    assert detect_placement(bbox, 2, 0, 8, 8) == (True, True)
    assert detect_placement(bbox, 0, 0, 8, 4) == (True, False)
    assert detect_placement(bbox, 0, 2, 8, 8) == (True, True)
    assert detect_placement(bbox, 0, -1, 8, 4) == (True, True)


def test_vertical_offset():
    bbox = FontBoundingBox(16, 18, 0, -2)
    assert vertical_offset(bbox, -1, 15) == 2
    assert vertical_offset(bbox, -2, 18) == 0
    assert vertical_offset(bbox, -2, 20) == -2


def test_place_rows():
    rows = [b'\x01', b'\x02', b'\x03']
    assert place_rows(rows, 0, 1) == rows
    assert place_rows(rows, 1, 1) == [b'\x00', b'\x01', b'\x02']
    assert place_rows(rows, -1, 1) == [b'\x02', b'\x03', b'\x00']
    assert place_rows(rows, 5, 1) == [b'\x00'] * 3
    assert place_rows(rows, -5, 1) == [b'\x00'] * 3


def test_font_a_end_to_end(font_a_lines, monkeypatch):
    def no_shift(*args, **kwargs):
        raise AssertionError("shift_bitmap should not be called")

    monkeypatch.setattr(bdf, 'shift_bitmap', no_shift)
    tables = convert_font(font_a_lines)
    assert tables.widths == [8]
    assert tables.encodings == [65]
    assert tables.bitmap == bytes(A_ROWS)
    assert tuple(tables.trailer) == (8, 13, 1)
    assert tables.trailer.width == 8
    glyph = tables.glyphs[0]
    assert glyph.name == 'A'
    assert not glyph.shifted
    assert not glyph.overflow
    assert glyph.comment == "width 8, bbx 0, bby -2, bbw 8, bbh 13"


def test_glyph_is_shifted_right():
    lines = make_bdf((8, 8, 0, 0), 1, [('bar', 66, 8, (4, 8, 2, 0), ['F0'] * 8)])
    tables = convert_font(lines)
    assert tables.bitmap == b'\x3c' * 8
    assert tables.widths == [8]
    assert tables.glyphs[0].shifted
    assert not tables.glyphs[0].overflow


def test_negative_bbx_grows_width_and_overflows(caplog):
    lines = make_bdf((8, 8, -1, 0), 1, [('wide', 67, 8, (8, 8, -1, 0), ['FF'] * 8)])
    with caplog.at_level(logging.WARNING):
        tables = convert_font(lines)
    glyph = tables.glyphs[0]
    assert tables.widths == [9]
    assert glyph.shifted
    assert glyph.overflow
    assert glyph.raw_rows == [b'\xff'] * 8
    assert tables.bitmap == b'\x7f' * 8
    assert "overflows" in caplog.text


def test_bbx_wider_than_dwidth_grows_width():
    lines = make_bdf((8, 8, 0, 0), 1, [('w', 87, 4, (6, 8, 0, 0), ['FC'] * 8)])
    assert convert_font(lines).widths == [6]


def test_unsupported_shift_keeps_raw_rows(caplog):
    lines = make_bdf((8, 8, 1, 0), 1, [('g', 71, 8, (8, 8, 0, 0), ['81'] * 8)])
    with caplog.at_level(logging.WARNING):
        tables = convert_font(lines)
    assert tables.bitmap == b'\x81' * 8
    assert tables.glyphs[0].overflow
    assert "isn't supported" in caplog.text


def test_short_glyph_is_placed_on_baseline():
    lines = make_bdf((8, 8, 0, 0), 1, [('dot', 46, 8, (8, 4, 0, 0), ['FF'] * 4)])
    tables = convert_font(lines)
    glyph = tables.glyphs[0]
    assert glyph.yoffset == 4
    assert glyph.shifted
    assert not glyph.overflow
    assert tables.bitmap == b'\x00' * 4 + b'\xff' * 4


def test_extra_glyph_warns_and_is_kept(caplog):
    glyph = ('A', 65, 8, (8, 2, 0, 0), ['18', '24'])
    lines = make_bdf((8, 2, 0, 0), 1, [glyph, ('B', 66, 8, (8, 2, 0, 0), ['7E', '42'])])
    with caplog.at_level(logging.WARNING):
        tables = convert_font(lines)
    assert "Too many bitmaps" in caplog.text
    assert tables.widths == [8, 8]
    assert tables.encodings == [65, 66]
    assert tables.bitmap == bytes([0x18, 0x24, 0x7E, 0x42])
    assert tables.trailer.chars == 1


def test_missing_glyphs_are_padded(caplog):
    lines = make_bdf((8, 2, 0, 0), 3, [('A', 65, 8, (8, 2, 0, 0), ['18', '24'])])
    with caplog.at_level(logging.WARNING):
        tables = convert_font(lines)
    assert tables.widths == [8, 0, 0]
    assert tables.encodings == [65, 0, 0]
    assert len(tables.bitmap) == 6
    assert "padding" in caplog.text


def test_width_not_specified_is_fatal():
    lines = ["FONTBOUNDINGBOX 8 1 0 0\n", "CHARS 1\n",
             "ENCODING 65\n", "BBX 8 1 0 0\n", "BITMAP\n", "FF\n", "ENDCHAR\n"]
    with pytest.raises(BdfError, match="character width not specified"):
        convert_font(lines)


def test_startchar_defaults_width_to_font_box():
    lines = make_bdf((7, 1, 0, 0), 1, [('A', 65, None, (7, 1, 0, 0), ['FE'])])
    assert convert_font(lines).widths == [7]


def test_extra_rows_are_dropped(caplog):
    lines = make_bdf((8, 2, 0, 0), 1, [('A', 65, 8, (8, 2, 0, 0), ['01', '02', '03'])])
    with caplog.at_level(logging.WARNING):
        tables = convert_font(lines)
    assert tables.bitmap == b'\x01\x02'
    assert "Too many bitmap rows" in caplog.text


def test_outline_mode():
    lines = make_bdf((2, 2, 0, 0), 1, [('dot', 46, 2, (2, 2, 0, 0), ['80', '00'])])
    reader = BdfReader(lines, outline=True)
    assert (reader.cell_width, reader.cell_height) == (3, 3)
    assert len(reader.workspace.buffer) == 6

    tables = convert_font(lines, outline=True)
    assert tables.widths == [3]
    assert tuple(tables.trailer) == (3, 3, 1)
    assert tables.bitmap == bytes([0x40, 0xA0, 0x40])
    assert not tables.glyphs[0].shifted


def test_workspace_is_reused_between_glyphs():
    lines = make_bdf((8, 2, 0, 0), 2, [('A', 65, 8, (8, 2, 0, 0), ['FF', 'FF']),
                                       ('B', 66, 8, (8, 1, 0, 1), ['81'])])
    reader = BdfReader(lines)
    buffer = reader.workspace.buffer
    glyphs = list(reader.glyphs())
    assert reader.workspace.buffer is buffer
    assert glyphs[0].data() == b'\xff\xff'
    # second glyph only sets its first row, nothing left over from the first
    assert glyphs[1].data() == b'\x81\x00'
