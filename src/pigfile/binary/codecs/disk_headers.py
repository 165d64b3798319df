from __future__ import annotations
import struct
from .bytecursor import ByteCursor

# Runtime bitmap flags
BM_FLAG_TRANSPARENT = 1
BM_FLAG_SUPER_TRANSPARENT = 2
BM_FLAG_NO_LIGHTING = 4
BM_FLAG_RLE = 8
BM_FLAG_PAGED_OUT = 16

BM_FLAGS_ON_DISK = BM_FLAG_TRANSPARENT | BM_FLAG_SUPER_TRANSPARENT | BM_FLAG_NO_LIGHTING | BM_FLAG_RLE

# dflags byte of the disk record
DBM_FLAG_LARGE = 128
DBM_FLAG_ABM = 64
DBM_FRAME_MASK = 63

BITMAP_HEADER_SIZE = 17
SOUND_HEADER_SIZE = 20
NAME_SIZE = 8

_BITMAP_TAIL = struct.Struct("<BBBBBi")
_SOUND_TAIL = struct.Struct("<iii")


def _encode_name(name: str) -> bytes:
    raw = name.encode("latin-1")
    if len(raw) > NAME_SIZE:
        raise ValueError(f"name {name!r} longer than {NAME_SIZE} bytes")
    return raw.ljust(NAME_SIZE, b"\x00")


def decode_bitmap_header(cur: ByteCursor) -> dict:
    """
    Parse one 17-byte DiskBitmapHeader.
    Width gets +256 when the LARGE bit is set; animated frames get a
    ``#<frame>`` suffix on the name. Flags are masked to the known bits.
    """
    name = cur.cstring(NAME_SIZE)
    dflags = cur.u8()
    width = cur.u8()
    height = cur.u8()
    flags = cur.u8()
    avg_color = cur.u8()
    offset = cur.s32()

    if dflags & DBM_FLAG_LARGE:
        width += 256
    if dflags & DBM_FLAG_ABM:
        name = f"{name}#{dflags & DBM_FRAME_MASK}"

    return {
        "name": name, "dflags": dflags, "width": width, "height": height,
        "flags": flags & BM_FLAGS_ON_DISK, "avg_color": avg_color, "offset": offset,
    }


def decode_sound_header(cur: ByteCursor) -> dict:
    """Parse one 20-byte DiskSoundHeader."""
    name = cur.cstring(NAME_SIZE)
    length = cur.s32()
    data_length = cur.s32()
    offset = cur.s32()
    return {"name": name, "length": length, "data_length": data_length, "offset": offset}


def encode_bitmap_header(name: str, *, width: int, height: int, flags: int = 0,
                         avg_color: int = 0, offset: int = 0, frame: int | None = None) -> bytes:
    dflags = 0
    if width > 255:
        dflags |= DBM_FLAG_LARGE
        width -= 256
    if frame is not None:
        dflags |= DBM_FLAG_ABM | (frame & DBM_FRAME_MASK)
    out = _encode_name(name) + _BITMAP_TAIL.pack(dflags, width, height, flags, avg_color, offset)
    assert len(out) == BITMAP_HEADER_SIZE
    return out


def encode_sound_header(name: str, *, length: int, data_length: int, offset: int = 0) -> bytes:
    out = _encode_name(name) + _SOUND_TAIL.pack(length, data_length, offset)
    assert len(out) == SOUND_HEADER_SIZE
    return out
