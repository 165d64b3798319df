from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .bytecursor import ByteCursor, OutOfBounds
from ..errors import PaletteUnavailable, Truncated

if TYPE_CHECKING:
    from ...resources import ResourceReader

logger = logging.getLogger(__name__)

PALETTE_ENTRIES = 256
PALETTE_SIZE = PALETTE_ENTRIES * 3

PALETTE_CANDIDATES = ("palette.256", "PALETTE.256", "groupa.256", "GROUPA.256")


def vga_to_rgb8(v: int) -> int:
    """6-bit DAC level to 8-bit, replicating the top bits into the bottom two."""
    return ((v << 2) | (v >> 4)) & 0xFF


def decode_palette(cur: ByteCursor) -> bytes:
    """Read 768 6-bit channel values and return them scaled to 8-bit RGB."""
    try:
        raw = cur.take(PALETTE_SIZE)
    except OutOfBounds as e:
        raise Truncated(f"palette resource shorter than {PALETTE_SIZE} bytes") from e
    return bytes(vga_to_rgb8(v) for v in raw)


def load_palette(resources: "ResourceReader", candidates: tuple[str, ...] = PALETTE_CANDIDATES) -> bytes:
    for name in candidates:
        cur = resources.find_file(name)
        if cur is not None:
            logger.debug("palette found as %s", name)
            return decode_palette(cur)
    logger.warning("no palette among %s", ", ".join(candidates))
    raise PaletteUnavailable(f"none of {candidates} could be located")
