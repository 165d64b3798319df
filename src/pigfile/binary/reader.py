from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .codecs.bytecursor import ByteCursor, OutOfBounds
from .codecs.disk_headers import decode_bitmap_header, decode_sound_header
from .errors import FormatError, Truncated, InvalidDirectory, UnsupportedLayout, PaletteUnavailable
from .formats import (
    PigFormat, MAX_BITMAP_FILES, XLAT_SIZE, COUNTS_SIZE,
    classify_size, absolute_offset, header_size,
)

from pigfile.models.bitmap import GameBitmap
from pigfile.models.sound import GameSound
from pigfile.models.directory import PigDirectory

__all__ = [
    "parse_archive", "FormatError", "Truncated", "InvalidDirectory",
    "UnsupportedLayout", "PaletteUnavailable",
]

logger = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]


# -----------------------------
# Helpers
# -----------------------------

def _load_bytes(inp: BytesLike) -> Union[bytes, bytearray, memoryview]:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return inp
    p = Path(str(inp))
    return p.read_bytes()


def _read_xlat(cur: ByteCursor, directory: PigDirectory, data_start: int) -> None:
    """
    New-format prologue: an opaque blob from the current position up to the
    translation table, then MAX_BITMAP_FILES u16 entries ending at data_start.
    A table that would not fit the file is skipped and identity is kept.
    """
    xlat_offset = data_start - XLAT_SIZE
    aux_size = xlat_offset - cur.tell()
    if aux_size > 0:
        directory.aux_offset = cur.tell()
        directory.aux_length = aux_size

    if xlat_offset >= 4 and xlat_offset + XLAT_SIZE <= cur.length():
        cur.seek(xlat_offset)
        directory.bitmap_xlat = [cur.u16() for _ in range(MAX_BITMAP_FILES)]
    else:
        logger.debug("no translation table at %d, keeping identity", xlat_offset)


# -----------------------------
# Directory parse
# -----------------------------

def parse_archive(data: BytesLike) -> PigDirectory:
    """
    Build the bitmap/sound directory of a PIG archive.
    Only offsets and metadata are recorded; no payload bytes are copied.
    """
    cur = ByteCursor(_load_bytes(data))
    try:
        return _parse(cur)
    except OutOfBounds as e:
        raise Truncated(f"archive ends inside its directory: {e}") from e


def _parse(cur: ByteCursor) -> PigDirectory:
    file_size = cur.length()
    fmt = classify_size(file_size)
    directory = PigDirectory(format=fmt, file_size=file_size)

    data_start = 0
    if fmt is PigFormat.REGISTERED:
        data_start = cur.s32()
        if data_start < 0:
            raise InvalidDirectory(f"negative directory start {data_start}")
        if data_start > 0:
            _read_xlat(cur, directory, data_start)
    logger.info("PIG: %s format, size=%d, directory at %d", fmt.value, file_size, data_start)

    cur.seek(data_start)
    n_bitmaps = cur.s32()
    n_sounds = cur.s32()
    if n_bitmaps < 0 or n_sounds < 0:
        raise InvalidDirectory(f"negative counts: {n_bitmaps} bitmaps, {n_sounds} sounds")

    hdr_size = header_size(n_bitmaps, n_sounds)
    if data_start + COUNTS_SIZE + hdr_size > file_size:
        raise InvalidDirectory(
            f"{n_bitmaps} bitmaps and {n_sounds} sounds need {hdr_size} header bytes, "
            f"file has {file_size - data_start - COUNTS_SIZE}"
        )

    directory.directory_data_start = data_start
    directory.bitmap_count = n_bitmaps
    directory.sound_count = n_sounds
    directory.header_size = hdr_size

    directory.bitmaps.append(GameBitmap.placeholder())
    directory.bitmap_offsets.append(0)
    directory.bitmap_flags.append(0)

    for _ in range(n_bitmaps):
        h = decode_bitmap_header(cur)
        directory.bitmaps.append(GameBitmap(
            name=h["name"], width=h["width"], height=h["height"], avg_color=h["avg_color"],
        ))
        directory.bitmap_offsets.append(absolute_offset(h["offset"], hdr_size, data_start))
        directory.bitmap_flags.append(h["flags"])

    for _ in range(n_sounds):
        h = decode_sound_header(cur)
        directory.sounds.append(GameSound(
            name=h["name"], length=h["length"], data_length=h["data_length"],
        ))
        directory.sound_offsets.append(absolute_offset(h["offset"], hdr_size, data_start))

    logger.info("PIG: %d bitmaps, %d sounds", n_bitmaps, n_sounds)
    return directory
