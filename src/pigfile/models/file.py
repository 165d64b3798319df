from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, PrivateAttr

from ..binary.codecs.bytecursor import ByteCursor, OutOfBounds
from ..binary.codecs.adpcm_codec import decode_adpcm
from ..binary.codecs.rle_codec import decode_rle_bitmap
from ..binary.codecs.disk_headers import BM_FLAG_RLE
from ..binary.errors import FormatError, Truncated
from ..binary.formats import PigFormat
from .bitmap import GameBitmap
from .directory import PigDirectory
from .sound import GameSound

logger = logging.getLogger(__name__)


class PigFile(BaseModel):
    """
    A parsed archive plus its lazily filled payload caches.

    Bitmaps are paged in (raw bytes captured) on first use and decoded once;
    sounds are decoded once. A broken asset is logged and comes back as an
    empty buffer unless ``strict`` is set, in which case the error propagates.
    """
    directory: PigDirectory
    strict: bool = False

    _cursor: Optional[ByteCursor] = PrivateAttr(default=None)
    _pixels: Dict[int, bytes] = PrivateAttr(default_factory=dict)
    _lock: Any = PrivateAttr(default_factory=threading.RLock)

    @classmethod
    def from_binary(cls, data, *, strict: bool = False) -> "PigFile":
        from ..binary.reader import _load_bytes, parse_archive
        raw = _load_bytes(data)
        pig = cls(directory=parse_archive(raw), strict=strict)
        pig._cursor = ByteCursor(raw)
        return pig

    def to_binary(self) -> bytes:
        """Repack the archive from its stored payloads, keeping the sub-format."""
        from ..binary.writer import write_archive
        legacy = self.directory.format is not PigFormat.REGISTERED
        return write_archive(
            [self.bitmap_for_repack(i) for i in range(1, len(self.bitmaps))],
            [self.sound_for_repack(i) for i in range(len(self.sounds))],
            fmt=self.directory.format,
            xlat=self.directory.bitmap_xlat,
            aux=self.aux_data().take(self.directory.aux_length) if self.directory.aux_length else b"",
            pad_to=self.directory.file_size if legacy else None,
        )

    # -----------------------------
    # Directory access
    # -----------------------------

    @property
    def bitmaps(self) -> List[GameBitmap]:
        return self.directory.bitmaps

    @property
    def sounds(self) -> List[GameSound]:
        return self.directory.sounds

    def bitmap(self, index: int) -> GameBitmap:
        return self.directory.bitmaps[index]

    def sound(self, index: int) -> GameSound:
        return self.directory.sounds[index]

    def translate_bitmap_index(self, nominal: int) -> int:
        xlat = self.directory.bitmap_xlat
        return xlat[nominal] if 0 <= nominal < len(xlat) else nominal

    def find_bitmap_index_by_name(self, name: str) -> Optional[int]:
        wanted = name.lower()
        for i in range(1, len(self.bitmaps)):
            if self.bitmaps[i].name.lower() == wanted:
                return i
        return None

    def find_sound_index_by_name(self, name: str) -> Optional[int]:
        wanted = name.lower()
        for i, snd in enumerate(self.sounds):
            if snd.name.lower() == wanted:
                return i
        return None

    def aux_data(self) -> Optional[ByteCursor]:
        if not self.directory.aux_length:
            return None
        return self._archive().sub_cursor(self.directory.aux_offset, self.directory.aux_length)

    # -----------------------------
    # Bitmaps
    # -----------------------------

    def _archive(self) -> ByteCursor:
        if self._cursor is None:
            raise RuntimeError("PigFile has no archive buffer; build it with from_binary()")
        return self._cursor

    def _slice(self, offset: int, size: int) -> bytes:
        try:
            return self._archive().sub_cursor(offset, size).take(size)
        except OutOfBounds as e:
            raise Truncated(f"{size} bytes at {offset}: {e}") from e

    def _read_bitmap_payload(self, index: int) -> bytes:
        bm = self.bitmaps[index]
        offset = self.directory.bitmap_offsets[index]
        if self.directory.bitmap_flags[index] & BM_FLAG_RLE:
            try:
                zsize = self._archive().sub_cursor(offset, 4).s32()
            except OutOfBounds as e:
                raise Truncated(f"bitmap {index} size field at {offset}: {e}") from e
            return self._slice(offset, zsize)
        return self._slice(offset, bm.pixel_count)

    def _fail(self, what: str, err: FormatError) -> bytes:
        if self.strict:
            raise err
        logger.warning("%s unusable: %s", what, err)
        return b""

    def page_in(self, index: int) -> None:
        if index < 1 or index >= len(self.bitmaps):
            return
        with self._lock:
            bm = self.bitmaps[index]
            if bm.paged_in:
                return
            if self.directory.bitmap_offsets[index] == 0:
                return
            try:
                payload = self._read_bitmap_payload(index)
            except FormatError as e:
                self._fail(f"bitmap {index} ({bm.name})", e)
                return
            bm.data = payload
            bm.flags = self.directory.bitmap_flags[index]

    def page_in_all(self) -> None:
        for i in range(1, len(self.bitmaps)):
            self.page_in(i)
        logger.info("PIG: paged in %d bitmaps", len(self.bitmaps) - 1)

    def get_bitmap_pixels(self, index: int) -> bytes:
        """Palette indices for a bitmap, ``width*height`` bytes, or ``b""`` if unavailable."""
        if index < 0 or index >= len(self.bitmaps):
            return b""
        with self._lock:
            cached = self._pixels.get(index)
            if cached is not None:
                return cached
            self.page_in(index)
            bm = self.bitmaps[index]
            if bm.data is None:
                self._pixels[index] = b""
                return b""
            if not bm.rle:
                return bm.data
            try:
                pixels = decode_rle_bitmap(bm.data, bm.width, bm.height)
                logger.debug("decoded RLE bitmap %d (%s) %dx%d", index, bm.name, bm.width, bm.height)
            except FormatError as e:
                pixels = self._fail(f"bitmap {index} ({bm.name})", e)
            self._pixels[index] = pixels
            return pixels

    # -----------------------------
    # Sounds
    # -----------------------------

    def get_sound_pcm(self, index: int) -> bytes:
        """8-bit unsigned PCM for a sound, decoded once; ``b""`` if unavailable."""
        if index < 0 or index >= len(self.sounds):
            return b""
        with self._lock:
            snd = self.sounds[index]
            if snd.data is not None:
                return snd.data
            offset = self.directory.sound_offsets[index]
            if offset == 0 or snd.length <= 0:
                return b""
            try:
                if snd.compressed:
                    pcm = decode_adpcm(self._slice(offset, snd.data_length), snd.length)
                else:
                    pcm = self._slice(offset, snd.length)
            except FormatError as e:
                pcm = self._fail(f"sound {index} ({snd.name})", e)
            snd.data = pcm
            return pcm

    def load_all_sounds(self) -> None:
        for i in range(len(self.sounds)):
            self.get_sound_pcm(i)
        logger.info("PIG: loaded %d sounds", len(self.sounds))

    def bitmap_for_repack(self, index: int) -> GameBitmap:
        """The bitmap with its stored payload and on-disk flags, whether or not it paged in."""
        bm = self.bitmaps[index]
        return bm.model_copy(update={
            "data": self._read_bitmap_payload(index),
            "flags": self.directory.bitmap_flags[index],
        })

    def sound_for_repack(self, index: int) -> GameSound:
        """The sound with its stored (possibly still compressed) bytes as ``data``."""
        snd = self.sounds[index]
        offset = self.directory.sound_offsets[index]
        stored = self._slice(offset, snd.data_length) if offset and snd.data_length > 0 else b""
        return snd.model_copy(update={"data": stored})
