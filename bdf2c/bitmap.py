"""Packed monochrome bitmaps: the per-glyph workspace, bit shifting and outlines.

A packed bitmap is row-major with ceil(width / 8) bytes per row, the most
significant bit of each byte being the leftmost pixel.
"""

import logging

log = logging.getLogger(__name__)


def row_stride(width):
    """Bytes needed for one row of `width` pixels."""
    return (width + 7) // 8


class GlyphWorkspace:
    """Reusable bitmap buffer for one glyph at a time.

    The buffer holds twice the nominal `row_stride(width) * height` bytes.
    `shift_bitmap` relies on that headroom, so callers must not shrink it.
    Call `clear()` before each glyph instead of allocating a new workspace.
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.row_bytes = row_stride(width)
        self.size = self.row_bytes * height
        self.buffer = bytearray(self.size * 2)

    def clear(self):
        self.buffer[:] = bytes(len(self.buffer))

    def snapshot(self):
        """Copy of the nominal bitmap, without the headroom."""
        return bytes(self.buffer[:self.size])

    def rows(self):
        return [bytes(self.buffer[y * self.row_bytes:(y + 1) * self.row_bytes])
                for y in range(self.height)]


def shift_bitmap(bitmap, shift_x, shift_y, width, height, glyph_width=None, glyph_height=None):
    """Shift every row of a packed bitmap right by `shift_x` bits, in place.

    Bits pushed past the byte aligned row width are lost and vacated bits
    become zero. Only non-negative horizontal shifts smaller than `width`
    are supported; vertical shifts are not. An unsupported request is logged
    and leaves the bitmap untouched. Returns True when the shift was applied.

    `bitmap` must provide at least `2 * row_stride(width) * height` bytes
    (see GlyphWorkspace).
    """
    if shift_x < 0 or shift_x >= width:
        log.warning("This shiftx isn't supported: w=%s,h=%s (max %d,%d), shiftx=%2d, shifty=%2d; ignored",
                    glyph_width, glyph_height, width, height, shift_x, shift_y)
        return False
    if shift_y != 0:
        log.warning("This shifty isn't supported: w=%s,h=%s (max %d,%d), shiftx=%2d, shifty=%2d; ignored",
                    glyph_width, glyph_height, width, height, shift_x, shift_y)
        return False
    if shift_x == 0:
        return True

    stride = row_stride(width)
    byte_shift = shift_x // 8
    bit_shift = shift_x % 8

    for y in range(height):
        start = y * stride
        src = start + stride - 1 - byte_shift
        # walk backwards so every source byte is read before it is overwritten
        for dst in range(start + stride - 1, start - 1, -1):
            value = 0
            if src >= start:
                value = bitmap[src]
                if bit_shift:
                    value >>= bit_shift
                    if src > start:
                        value |= (bitmap[src - 1] << (8 - bit_shift)) & 0xFF
            bitmap[dst] = value
            src -= 1
    return True


def outline_bitmap(bitmap, width, height):
    """Replace a packed bitmap by its one pixel outline, in place.

    A pixel is set in the result when it is clear in the input and one of
    its four direct neighbours is set.
    """
    stride = row_stride(width)
    size = stride * height
    outline = bytearray(size)

    def is_set(x, y):
        return bitmap[y * stride + x // 8] & (0x80 >> x % 8)

    for y in range(height):
        for x in range(width):
            if is_set(x, y):
                continue
            if ((y > 0 and is_set(x, y - 1))
                    or (x > 0 and is_set(x - 1, y))
                    or (x < width - 1 and is_set(x + 1, y))
                    or (y < height - 1 and is_set(x, y + 1))):
                outline[y * stride + x // 8] |= 0x80 >> x % 8

    bitmap[:size] = outline
