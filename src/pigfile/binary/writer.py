from __future__ import annotations
import struct
from typing import Iterable, Optional, Sequence

from .codecs.disk_headers import encode_bitmap_header, encode_sound_header, BM_FLAGS_ON_DISK
from .formats import PigFormat, MAX_BITMAP_FILES, XLAT_SIZE, header_size
from ..models.bitmap import GameBitmap
from ..models.sound import GameSound


def _split_frame(name: str) -> tuple[str, int | None]:
    base, sep, frame = name.partition("#")
    if sep and frame.isdigit():
        return base, int(frame)
    return name, None


def write_archive(
    bitmaps: Iterable[GameBitmap],
    sounds: Iterable[GameSound],
    *,
    fmt: PigFormat = PigFormat.REGISTERED,
    xlat: Optional[Sequence[int]] = None,
    aux: bytes = b"",
    pad_to: Optional[int] = None,
) -> bytes:
    """
    Lay out a PIG archive. Bitmap and sound ``data`` is stored verbatim, so
    RLE bitmaps and ADPCM sounds must already be encoded. The placeholder
    bitmap is implicit and must not be passed in.

    ``fmt=REGISTERED`` writes the directory-start word, ``aux`` and the
    translation table in front of the directory. The legacy layouts are only
    recognised by exact size, so they normally need ``pad_to``.
    """
    bitmaps = list(bitmaps)
    sounds = list(sounds)

    records = bytearray()
    payload = bytearray()
    for bm in bitmaps:
        name, frame = _split_frame(bm.name)
        records += encode_bitmap_header(
            name, width=bm.width, height=bm.height, flags=bm.flags & BM_FLAGS_ON_DISK,
            avg_color=bm.avg_color, offset=len(payload), frame=frame,
        )
        payload += bm.data or b""
    for snd in sounds:
        stored = snd.data or b""
        records += encode_sound_header(snd.name, length=snd.length, data_length=len(stored), offset=len(payload))
        payload += stored

    assert len(records) == header_size(len(bitmaps), len(sounds))

    out = bytearray()
    if fmt is PigFormat.REGISTERED:
        table = list(xlat) if xlat is not None else list(range(MAX_BITMAP_FILES))
        if len(table) != MAX_BITMAP_FILES:
            raise ValueError(f"translation table needs {MAX_BITMAP_FILES} entries, got {len(table)}")
        out += struct.pack("<i", 4 + len(aux) + XLAT_SIZE)
        out += aux
        out += struct.pack(f"<{MAX_BITMAP_FILES}H", *table)

    out += struct.pack("<ii", len(bitmaps), len(sounds))
    out += records
    out += payload

    if pad_to is not None:
        if pad_to < len(out):
            raise ValueError(f"archive is {len(out)} bytes, cannot pad to {pad_to}")
        out += bytes(pad_to - len(out))
    return bytes(out)
