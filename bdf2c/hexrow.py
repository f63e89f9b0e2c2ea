"""Decode BDF bitmap scanlines (hex text) into packed bytes."""


def hex_digit(c):
    """Convert one hex character to its value, no validation."""
    if c <= '9':
        return (ord(c) - ord('0')) & 0xFF
    elif c <= 'F':
        return (ord(c) - ord('A') + 10) & 0xFF
    return (ord(c) - ord('a') + 10) & 0xFF


def decode_hex_row(line, bitmap, scanline, row_bytes):
    """Write the bytes encoded by `line` into row `scanline` of `bitmap`.

    Digits are taken in pairs; an odd trailing digit becomes a byte of its
    own holding the nibble value. Bytes past `row_bytes` are dropped.
    Returns the number of bytes decoded from the line.
    """
    offset = scanline * row_bytes
    count = 0
    for i in range(0, len(line), 2):
        value = hex_digit(line[i])
        if i + 1 < len(line):
            value = ((value << 4) | hex_digit(line[i + 1])) & 0xFF
        if count < row_bytes:
            bitmap[offset + count] = value
        count += 1
    return count
