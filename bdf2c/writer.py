"""Write FontTables as C source, and the font.h header that source includes."""

from . import VERSION


def byte_pattern(value):
    """0xC6 -> 'XX___XX_'"""
    return ''.join('X' if value & (0x80 >> bit) else '_' for bit in range(8))


def dump_rows(out, rows, prefix=''):
    for row in rows:
        out.write(f"\t{prefix}" + ''.join(f"{byte_pattern(b)}," for b in row) + "\n")


def write_font_header(out):
    """Write font.h: the bitmap_font structure and the 256 byte pattern macros."""
    out.write("\t/// bitmap font structure\n"
              "struct bitmap_font {\n"
              "\tunsigned char Width;\t\t///< max. character width\n"
              "\tunsigned char Height;\t\t///< character height\n"
              "\tunsigned short Chars;\t\t///< number of characters in font\n"
              "\tconst unsigned char *Widths;\t///< width of each character\n"
              "\tconst unsigned short *Index;\t///< encoding to character index\n"
              "\tconst unsigned char *Bitmap;\t///< bitmap of all characters\n"
              "};\n\n")
    out.write("\t/// @{ defines to have human readable font files\n")
    for i in range(256):
        out.write(f"#define {byte_pattern(i)} 0x{i:02X}\n")
    out.write("\t/// @}\n")


def write_table(out, ctype, name, comment, values):
    out.write(f"\t/// {comment}\n")
    out.write(f"static const {ctype} {name}[] = {{\n")
    for value in values:
        out.write(f"\t{value},\n")
    out.write("};\n\n")


def write_font_source(out, tables, name="font", source=None):
    """Write the bitmap, widths and index arrays and the bitmap_font trailer."""
    trailer = tables.trailer
    out.write(f"// Created from bdf2c Version {VERSION}\n")
    if source:
        out.write(f"// Source: {source}\n")
    out.write('\n#include "font.h"\n\n')

    out.write("\t/// character bitmap for each encoding\n")
    out.write(f"static const unsigned char __{name}_bitmap__[] = {{\n")
    if tables.bbox is not None:
        # cell size, grown by the outline border when there is one
        out.write("// FONTBOUNDINGBOX %d %d %d %d\n"
                  % (trailer.width, trailer.height, tables.bbox.xoff, tables.bbox.yoff))

    stride = (trailer.width + 7) // 8
    for index in range(len(tables.widths)):
        if index < len(tables.glyphs):
            glyph = tables.glyphs[index]
            encoding = glyph.encoding
            out.write(f"// {encoding:3d} ${encoding & 0xFFFF:02x} '{glyph.name}'\n")
            out.write(f"//\t{glyph.comment}\n")
            if glyph.overflow and glyph.raw_rows is not None:
                dump_rows(out, glyph.raw_rows, "//")
            dump_rows(out, glyph.rows)
        else:
            out.write("// missing character\n")
            data = tables.glyph_bitmap(index)
            dump_rows(out, [data[y:y + stride] for y in range(0, len(data), stride)])
    out.write("};\n\n")

    write_table(out, "unsigned char", f"__{name}_widths__",
                "character width for each encoding", tables.widths)
    write_table(out, "unsigned short", f"__{name}_index__",
                "character encoding for each index entry",
                (encoding & 0xFFFF for encoding in tables.encodings))

    out.write("\t/// bitmap font structure\n")
    out.write(f"const struct bitmap_font {name} = {{\n")
    out.write(f"\t.Width = {trailer.width}, .Height = {trailer.height},\n")
    out.write(f"\t.Chars = {trailer.chars},\n")
    out.write(f"\t.Widths = __{name}_widths__,\n")
    out.write(f"\t.Index = __{name}_index__,\n")
    out.write(f"\t.Bitmap = __{name}_bitmap__,\n")
    out.write("};\n")
