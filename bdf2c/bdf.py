"""Read BDF fonts and normalize every glyph into the font bounding box.

In the following diagram the font bounding box is dashed and the glyph's
own bounding box (BBX) is dotted, for FONTBOUNDINGBOX 16 18 0 -2 and
BBX 16 15 0 -1:

                |<--- width --->|
                -----------------      -
a blank row-->  |               |      ^
a blank row-->  |               |      |
                |...............| -    |
                |///////////////| ^    |
                |// 16x15  /////| |15  |18
                |///////////////| |    |
baseline ---->  O---------------- |    |   O = origin (0, 0)
                |///////////////| v    |
              -1|...............| -    |   -1 = bby
a blank row-->  |               |      v
              -2-----------------      -   -2 = yoff of FONTBOUNDINGBOX
"""

import logging
from collections import namedtuple

from .assembler import FontAssembler
from .bitmap import GlyphWorkspace, outline_bitmap, shift_bitmap
from .errors import BdfError
from .hexrow import decode_hex_row

log = logging.getLogger(__name__)

FontBoundingBox = namedtuple('FontBoundingBox', 'width height xoff yoff')
FontHeader = namedtuple('FontHeader', 'bbox name chars')


def tokens(line):
    return line.split()


def int_arg(args, index):
    """Integer argument of a keyword line, 0 when missing or unparsable."""
    try:
        return int(args[index])
    except (IndexError, ValueError):
        return 0


def read_font_header(lines):
    """Parse FONTBOUNDINGBOX, FONT and CHARS, stopping at CHARS."""
    width = height = xoff = yoff = 0
    name = ''
    chars = 0
    for line in lines:
        args = tokens(line)
        if not args:
            continue
        keyword = args[0].upper()
        if keyword == 'FONTBOUNDINGBOX':
            width, height, xoff, yoff = (int_arg(args, i) for i in range(1, 5))
        elif keyword == 'FONT':
            name = args[1] if len(args) > 1 else ''
        elif keyword == 'CHARS':
            chars = int_arg(args, 1)
            break

    if width <= 0 or height <= 0:
        raise BdfError("Need to know the character size")
    if chars <= 0:
        raise BdfError("Need to know the number of characters")
    return FontHeader(FontBoundingBox(width, height, xoff, yoff), name, chars)


def detect_placement(bbox, bbx, bby, bbw, bbh):
    """Return (shifted, overflow) for a glyph box against the font box.

    Only the horizontal shift is ever applied; a vertical difference is
    handled when the rows are placed, and reported here.
    """
    shifted = overflow = False
    if bbx != bbox.xoff:
        shifted = True
        if bbx < bbox.xoff or bbx + bbw > bbox.xoff + bbox.width:
            overflow = True
    if bby + bbh != bbox.yoff + bbox.height:
        shifted = True
        if bby < bbox.yoff or bby + bbh > bbox.yoff + bbox.height:
            overflow = True
    return shifted, overflow


def vertical_offset(bbox, bby, bbh):
    """Blank rows needed above the glyph, negative when it sticks out on top."""
    return bbox.height - (bby - bbox.yoff + bbh)


def place_rows(rows, offset, row_bytes):
    """Move `rows` down by `offset` rows (up when negative), keeping the count."""
    height = len(rows)
    blank = bytes(row_bytes)
    if offset >= 0:
        offset = min(offset, height)
        return [blank] * offset + list(rows[:height - offset])
    offset = min(-offset, height)
    return list(rows[offset:]) + [blank] * offset


class GlyphMetrics:
    """Values declared between STARTCHAR and BITMAP."""

    def __init__(self, name, width):
        self.name = name
        self.encoding = -1
        self.width = width
        self.bbx = 0
        self.bby = 0
        self.bbw = 0
        self.bbh = 0

    def describe(self):
        return (f"width {self.width}, bbx {self.bbx}, bby {self.bby}, "
                f"bbw {self.bbw}, bbh {self.bbh}")


class NormalizedGlyph:
    """A glyph ready for the tables: cell sized rows plus what it took to get there."""

    def __init__(self, metrics, comment, width, rows, bitmap, yoffset,
                 shifted=False, overflow=False, raw_rows=None):
        self.name = metrics.name
        self.encoding = metrics.encoding
        self.comment = comment
        self.width = width
        self.rows = rows
        self.bitmap = bitmap
        self.yoffset = yoffset
        self.shifted = shifted
        self.overflow = overflow
        self.raw_rows = raw_rows

    def data(self):
        return b''.join(self.rows)


class BdfReader:
    """Walks the lines of a BDF font and yields normalized glyphs.

    With `outline` set every glyph is turned into its outline and the cell
    grows by one column and one row for the border.
    """

    def __init__(self, lines, outline=False):
        self.lines = list(lines)
        self.outline = outline
        self.header = read_font_header(self.lines)
        bbox = self.header.bbox
        if outline:
            self.cell_width, self.cell_height = bbox.width + 1, bbox.height + 1
        else:
            self.cell_width, self.cell_height = bbox.width, bbox.height
        self.workspace = GlyphWorkspace(self.cell_width, self.cell_height)

    @property
    def bbox(self):
        return self.header.bbox

    def glyphs(self):
        """Yield a NormalizedGlyph for every STARTCHAR ... ENDCHAR block."""
        metrics = GlyphMetrics('unknown character', None)
        comment = None
        scanline = None
        count = 0

        for lineno, line in enumerate(self.lines, 1):
            args = tokens(line)
            if not args:
                continue
            keyword = args[0].upper()

            if keyword == 'STARTCHAR':
                metrics = GlyphMetrics(args[1] if len(args) > 1 else '', self.cell_width)
            elif keyword == 'ENCODING':
                metrics.encoding = int_arg(args, 1)
            elif keyword == 'DWIDTH':
                metrics.width = int_arg(args, 1)
            elif keyword == 'BBX':
                metrics.bbw, metrics.bbh, metrics.bbx, metrics.bby = (int_arg(args, i) for i in range(1, 5))
            elif keyword == 'BITMAP':
                comment = metrics.describe()
                if count >= self.header.chars:
                    log.warning("Too many bitmaps for characters, chars=%d, line=%d",
                                self.header.chars, lineno)
                if metrics.width is None:
                    raise BdfError("character width not specified")
                self.adjust_width(metrics)
                count += 1
                self.workspace.clear()
                scanline = 1 if self.outline else 0
            elif keyword == 'ENDCHAR':
                if scanline is None:
                    log.warning("ENDCHAR without BITMAP on line %d, ignored", lineno)
                    continue
                yield self.normalize(metrics, comment)
                scanline = None
                metrics.width = None
            elif scanline is not None:
                if scanline >= self.cell_height:
                    log.warning("Too many bitmap rows for '%s' on line %d, ignored", metrics.name, lineno)
                    continue
                decode_hex_row(args[0], self.workspace.buffer, scanline, self.workspace.row_bytes)
                scanline += 1

    def adjust_width(self, metrics):
        """Grow the advance width so the glyph box fits, clamping bbx at 0."""
        if metrics.bbx < 0:
            metrics.width -= metrics.bbx
            metrics.bbx = 0
        if metrics.bbx + metrics.bbw > metrics.width:
            metrics.width = metrics.bbx + metrics.bbw
        if self.outline:
            metrics.width += 1

    def normalize(self, metrics, comment):
        bbox = self.bbox
        workspace = self.workspace
        shifted, overflow = detect_placement(bbox, metrics.bbx, metrics.bby, metrics.bbw, metrics.bbh)
        raw_rows = None
        if overflow:
            log.warning("Glyph '%s' (%d) overflows the font bounding box: %s",
                        metrics.name, metrics.encoding, metrics.describe())
            raw_rows = workspace.rows()

        shift_x = metrics.bbx - bbox.xoff
        if shift_x:
            shift_bitmap(workspace.buffer, shift_x, 0, self.cell_width, self.cell_height,
                         metrics.bbw, metrics.bbh)
        if self.outline:
            shift_bitmap(workspace.buffer, 1, 0, self.cell_width, self.cell_height,
                         metrics.bbw, metrics.bbh)
            outline_bitmap(workspace.buffer, self.cell_width, self.cell_height)

        yoffset = vertical_offset(bbox, metrics.bby, metrics.bbh)
        rows = place_rows(workspace.rows(), yoffset, workspace.row_bytes)
        return NormalizedGlyph(metrics, comment, metrics.width, rows, workspace.snapshot(),
                               yoffset, shifted, overflow, raw_rows)


def convert_font(lines, outline=False, proof=None):
    """Run the whole pipeline over BDF `lines` and return the FontTables.

    `proof` is an optional ProofSheet receiving every normalized glyph.
    """
    reader = BdfReader(lines, outline=outline)
    header = reader.header
    log.debug("%s: %d chars, FONTBOUNDINGBOX %d %d %d %d", header.name, header.chars, *header.bbox)

    if proof is not None:
        proof.start(header.chars, reader.cell_width, reader.cell_height, header.name)
    assembler = FontAssembler(header.bbox.width, header.bbox.height, header.chars, outline=outline)
    for glyph in reader.glyphs():
        assembler.add(glyph)
        if proof is not None:
            proof.add(glyph.bitmap, reader.cell_width, reader.cell_height, 0, glyph.yoffset,
                      glyph.encoding, glyph.shifted, glyph.overflow)
    return assembler.tables(header.bbox)
