import pytest

A_ROWS = [0x00, 0x38, 0x7C, 0xC6, 0xC6, 0xC6, 0xFE, 0xC6, 0xC6, 0xC6, 0xC6, 0x00, 0x00]

FONT_A = """STARTFONT 2.1
FONT -misc-fixed-medium-r-normal--13-120-75-75-C-80-ISO10646-1
SIZE 13 75 75
FONTBOUNDINGBOX 8 13 0 -2
STARTPROPERTIES 1
FONT_ASCENT 11
ENDPROPERTIES
CHARS 1
STARTCHAR A
ENCODING 65
SWIDTH 568 0
DWIDTH 8 0
BBX 8 13 0 -2
BITMAP
""" + "".join(f"{row:02X}\n" for row in A_ROWS) + """ENDCHAR
ENDFONT
"""


def make_bdf(bbox, chars, glyphs, name="test"):
    """Build BDF text; glyphs are (name, encoding, dwidth, (bbw, bbh, bbx, bby), rows)."""
    lines = ["STARTFONT 2.1", f"FONT {name}",
             "FONTBOUNDINGBOX %d %d %d %d" % tuple(bbox), f"CHARS {chars}"]
    for glyph_name, encoding, dwidth, bbx, rows in glyphs:
        lines.append(f"STARTCHAR {glyph_name}")
        lines.append(f"ENCODING {encoding}")
        if dwidth is not None:
            lines.append(f"DWIDTH {dwidth} 0")
        lines.append("BBX %d %d %d %d" % tuple(bbx))
        lines.append("BITMAP")
        lines.extend(rows)
        lines.append("ENDCHAR")
    lines.append("ENDFONT")
    return [line + "\n" for line in lines]


@pytest.fixture
def font_a_lines():
    return FONT_A.splitlines(keepends=True)


@pytest.fixture
def font_a_file(tmp_path):
    path = tmp_path / "a.bdf"
    path.write_text(FONT_A)
    return path
