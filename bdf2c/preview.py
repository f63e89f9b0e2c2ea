"""Proof sheet: every normalized glyph drawn on one image for inspection."""

import os

from PIL import Image, ImageDraw, ImageFont

from .bdf import place_rows
from .bitmap import row_stride

# Colors & Layout
FG_COLOR = (255, 255, 255)
BG_COLOR = (0, 0, 0)
LABEL_COLOR = (255, 255, 0)
SHIFTED_COLOR = (255, 255, 0)
OVERFLOW_COLOR = (255, 0, 0)
SCALE = 3
COLUMNS = 16
BOX_PADDING = 2
SPACING = 4
LABEL_HEIGHT = 12
TITLE_HEIGHT = 16


def render_glyph(bitmap, width, height, xoff=0, yoff=0):
    """Render a packed bitmap as an RGB image, placed by the given offsets."""
    stride = row_stride(width)
    rows = [bytes(bitmap[y * stride:(y + 1) * stride]) for y in range(height)]
    rows = place_rows(rows, yoff, stride)
    img = Image.new("RGB", (width, height), BG_COLOR)
    draw = ImageDraw.Draw(img)

    for y, row in enumerate(rows):
        for x in range(width):
            if row[x // 8] & (0x80 >> (x % 8)) and 0 <= x + xoff < width:
                draw.point((x + xoff, y), fill=FG_COLOR)
    return img


class ProofSheet:
    """Collects glyphs and writes them as a labelled grid.

    The image format follows the extension of `path` (.ppm, .png, ...).
    """

    def __init__(self, path, chars=0, width=8, height=8, font_name=''):
        self.path = path
        self.glyphs = []
        self.label_font = ImageFont.load_default()
        self.start(chars, width, height, font_name)

    def start(self, chars, width, height, font_name=''):
        """Set the font geometry; called once the font header is known."""
        self.chars = chars
        self.width = width
        self.height = height
        self.font_name = font_name
        self.glyphs.clear()

    def add(self, bitmap, width, height, xoff, yoff, encoding, shifted=False, overflow=False):
        img = render_glyph(bitmap, width, height, xoff, yoff)
        self.glyphs.append((img, encoding, shifted, overflow))

    def label_width(self, text):
        left, _, right, _ = self.label_font.getbbox(text)
        return right - left

    def build(self):
        count = max(self.chars, len(self.glyphs), 1)
        widest = max([self.label_width(str(enc)) for _, enc, _, _ in self.glyphs] or [0])
        glyph_w = self.width * SCALE
        glyph_h = self.height * SCALE
        cell_w = max(glyph_w, widest) + BOX_PADDING * 2
        cell_h = glyph_h + LABEL_HEIGHT + BOX_PADDING * 3

        rows = (count + COLUMNS - 1) // COLUMNS
        canvas_w = COLUMNS * (cell_w + SPACING)
        canvas_h = TITLE_HEIGHT + rows * (cell_h + SPACING)
        sheet = Image.new("RGB", (canvas_w, canvas_h), BG_COLOR)
        draw = ImageDraw.Draw(sheet)
        draw.text((BOX_PADDING, BOX_PADDING),
                  f"{self.font_name} {self.width}x{self.height}, {len(self.glyphs)} chars",
                  font=self.label_font, fill=LABEL_COLOR)

        for i, (img, encoding, shifted, overflow) in enumerate(self.glyphs):
            x = (i % COLUMNS) * (cell_w + SPACING)
            y = TITLE_HEIGHT + (i // COLUMNS) * (cell_h + SPACING)

            glyph_x = x + (cell_w - glyph_w) // 2
            sheet.paste(img.resize((glyph_w, glyph_h), Image.NEAREST), (glyph_x, y + BOX_PADDING))

            if overflow:
                box_color = OVERFLOW_COLOR
            elif shifted:
                box_color = SHIFTED_COLOR
            else:
                box_color = None
            if box_color:
                draw.rectangle([x, y, x + cell_w - 1, y + glyph_h + BOX_PADDING * 2 - 1],
                               outline=box_color, width=1)

            label = str(encoding)
            label_x = x + (cell_w - self.label_width(label)) // 2
            draw.text((label_x, y + glyph_h + BOX_PADDING * 2), label,
                      font=self.label_font, fill=LABEL_COLOR)
        return sheet

    def save(self):
        """Write the sheet; an extension Pillow does not know is written as PPM."""
        sheet = self.build()
        ext = os.path.splitext(str(self.path))[1].lower()
        fmt = None if ext in Image.registered_extensions() else 'PPM'
        sheet.save(self.path, format=fmt)
        return sheet
