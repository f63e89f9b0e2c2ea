"""Collect normalized glyphs into the width, encoding and bitmap tables."""

import logging
from collections import namedtuple

from .bitmap import row_stride

log = logging.getLogger(__name__)

Trailer = namedtuple('Trailer', 'width height chars')


class FontTables:
    """The three parallel tables of a font plus the trailer describing them."""

    def __init__(self, widths, encodings, bitmap, glyphs, trailer, bbox=None):
        self.widths = widths
        self.encodings = encodings
        self.bitmap = bitmap
        self.glyphs = glyphs
        self.trailer = trailer
        self.bbox = bbox

    @property
    def glyph_size(self):
        return row_stride(self.trailer.width) * self.trailer.height

    def glyph_bitmap(self, index):
        size = self.glyph_size
        return self.bitmap[index * size:(index + 1) * size]


class FontAssembler:
    """Accumulate one entry per glyph, in the order the glyphs are read.

    `width` and `height` are the font bounding box; in outline mode every
    glyph cell is one pixel wider and taller.
    """

    def __init__(self, width, height, chars, outline=False):
        if outline:
            width, height = width + 1, height + 1
        self.width = width
        self.height = height
        self.chars = chars
        self.glyph_size = row_stride(width) * height
        self.widths = []
        self.encodings = []
        self.bitmap = bytearray()
        self.glyphs = []

    def add(self, glyph):
        data = glyph.data()
        if len(data) != self.glyph_size:
            raise ValueError(f"glyph '{glyph.name}' has {len(data)} bytes, expected {self.glyph_size}")
        self.widths.append(glyph.width)
        self.encodings.append(glyph.encoding)
        self.bitmap += data
        self.glyphs.append(glyph)

    def tables(self, bbox=None):
        """Build the FontTables, padding with blank entries up to `chars`."""
        widths = list(self.widths)
        encodings = list(self.encodings)
        bitmap = bytearray(self.bitmap)
        missing = self.chars - len(widths)
        if missing > 0:
            log.warning("Only %d of %d characters found, padding with blank glyphs",
                        len(widths), self.chars)
            widths += [0] * missing
            encodings += [0] * missing
            bitmap += bytes(self.glyph_size * missing)
        elif missing < 0:
            log.warning("%d characters more than the declared %d", -missing, self.chars)

        trailer = Trailer(self.width, self.height, self.chars)
        return FontTables(widths, encodings, bytes(bitmap), list(self.glyphs), trailer, bbox)
