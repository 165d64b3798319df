import struct

import pytest

from pigfile.binary.codecs.disk_headers import BM_FLAG_TRANSPARENT, BM_FLAG_NO_LIGHTING, BM_FLAG_RLE
from pigfile.binary.formats import MAX_BITMAP_FILES
from pigfile.binary.writer import write_archive
from pigfile.models.bitmap import GameBitmap
from pigfile.models.sound import GameSound


def make_rle(rows):
    """Wrap already-encoded scanlines with the size field and row-size table."""
    body = b"".join(rows)
    table = bytes(len(r) for r in rows)
    return struct.pack("<i", 4 + len(table) + len(body)) + table + body


def sample_bitmaps():
    return [
        GameBitmap(name="wall", width=4, height=2, flags=BM_FLAG_TRANSPARENT, avg_color=7,
                   data=bytes(range(8))),
        GameBitmap(name="door#3", width=3, height=1, flags=BM_FLAG_RLE | BM_FLAG_NO_LIGHTING,
                   data=make_rle([b"\xe3\x05"])),
        GameBitmap(name="big", width=300, height=1, data=bytes(i % 256 for i in range(300))),
    ]


def sample_sounds():
    return [
        GameSound(name="laser", length=6, data=b"\x80\x81\x82\x83\x84\x85"),
        GameSound(name="boom", length=6, data=b"\x77\x77\x77"),
    ]


def sample_xlat():
    xlat = list(range(MAX_BITMAP_FILES))
    xlat[5] = 2
    return xlat


@pytest.fixture
def sample_pig() -> bytes:
    return write_archive(sample_bitmaps(), sample_sounds(), xlat=sample_xlat(), aux=b"HAMDATA!")
