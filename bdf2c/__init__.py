"""bdf2c - converts BDF bitmap fonts into C source tables."""

from .errors import BdfError
from .bdf import BdfReader, FontBoundingBox, convert_font

VERSION = '4.1'
