from __future__ import annotations
from enum import Enum

from .codecs.disk_headers import BITMAP_HEADER_SIZE, SOUND_HEADER_SIZE

MAX_BITMAP_FILES = 1800
XLAT_SIZE = MAX_BITMAP_FILES * 2

# two int32 counts precede the directory records
COUNTS_SIZE = 8

PLACEHOLDER_NAME = "bogus"
PLACEHOLDER_SIZE = 64

SOUND_SAMPLE_RATE = 11025


class PigFormat(str, Enum):
    SHAREWARE = "shareware"
    REGISTERED_V10 = "registered-1.0"
    REGISTERED = "registered"


# Exact historical file sizes; everything else is parsed as the newest layout
D1_SHARE_PIGSIZE = 2509799        # v1.4 shareware
D1_SHARE_10_PIGSIZE = 2529454     # v1.0 - 1.2 shareware
D1_SHARE_BIG_PIGSIZE = 5092871    # v1.0 - 1.4 before RLE compression
D1_10_PIGSIZE = 4520145           # v1.0 registered
D1_10_BIG_PIGSIZE = 7640220       # v1.0 before RLE compression

KNOWN_SIZES = {
    D1_SHARE_PIGSIZE: PigFormat.SHAREWARE,
    D1_SHARE_10_PIGSIZE: PigFormat.SHAREWARE,
    D1_SHARE_BIG_PIGSIZE: PigFormat.SHAREWARE,
    D1_10_PIGSIZE: PigFormat.REGISTERED_V10,
    D1_10_BIG_PIGSIZE: PigFormat.REGISTERED_V10,
}


def classify_size(file_size: int) -> PigFormat:
    return KNOWN_SIZES.get(file_size, PigFormat.REGISTERED)


def absolute_offset(relative: int, hdr_size: int, data_start: int) -> int:
    return relative + hdr_size + COUNTS_SIZE + data_start


def header_size(bitmap_count: int, sound_count: int) -> int:
    return bitmap_count * BITMAP_HEADER_SIZE + sound_count * SOUND_HEADER_SIZE
