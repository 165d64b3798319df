from __future__ import annotations
from ..errors import Truncated

RLE_CODE = 0xE0
RLE_COUNT_MASK = 0x1F

# 4-byte compressed size, then one size byte per row
SIZE_FIELD = 4


def rle_row_sizes(payload: bytes | memoryview, height: int) -> bytes:
    return bytes(payload[SIZE_FIELD:SIZE_FIELD + height])


def decode_rle_bitmap(payload: bytes | memoryview, width: int, height: int) -> bytes:
    """
    Expand a scanline-RLE bitmap into ``width*height`` palette indices.

    Each row starts where the row-size table says it does, so a row whose
    codes stop early or overrun never shifts the rows after it.
    Codes: ``0xE0`` ends the row, ``0xE1..0xFF`` repeat the next byte
    ``code & 0x1F`` times, anything else is a literal pixel.
    The leading size field is not consulted.
    """
    table_end = SIZE_FIELD + height
    if len(payload) < table_end:
        raise Truncated(f"RLE payload of {len(payload)} bytes cannot hold {height} row sizes")

    src = bytes(payload)
    row_sizes = rle_row_sizes(src, height)
    end = len(src)
    dest = bytearray(width * height)
    row_start = table_end

    for row in range(height):
        pos = row_start
        out = row * width
        col = 0
        while col < width and pos < end:
            code = src[pos]
            pos += 1
            if code & RLE_CODE == RLE_CODE:
                count = code & RLE_COUNT_MASK
                if count == 0:
                    break
                if pos >= end:
                    break
                value = src[pos]
                pos += 1
                count = min(count, width - col)
                dest[out + col:out + col + count] = bytes((value,)) * count
                col += count
            else:
                dest[out + col] = code
                col += 1

        row_start += row_sizes[row]

    return bytes(dest)
