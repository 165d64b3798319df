import logging
import struct

import pytest

from conftest import make_rle
from pigfile.binary.codecs.disk_headers import BM_FLAG_RLE, BM_FLAG_TRANSPARENT, BM_FLAG_NO_LIGHTING
from pigfile.binary.errors import Truncated
from pigfile.binary.formats import D1_SHARE_PIGSIZE, PigFormat
from pigfile.binary.writer import write_archive
from pigfile.models.bitmap import GameBitmap
from pigfile.models.file import PigFile
from pigfile.models.sound import GameSound


def test_uncompressed_pixels_are_the_raw_slice(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    for i in (1, 3):
        bm = pig.bitmap(i)
        off = pig.directory.bitmap_offsets[i]
        pixels = pig.get_bitmap_pixels(i)
        assert len(pixels) == bm.width * bm.height
        assert pixels == sample_pig[off:off + bm.width * bm.height]
    assert pig.bitmap(1).flags == BM_FLAG_TRANSPARENT


def test_rle_bitmap_keeps_raw_payload(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    assert pig.get_bitmap_pixels(2) == b"\x05\x05\x05"
    bm = pig.bitmap(2)
    assert bm.flags == BM_FLAG_RLE | BM_FLAG_NO_LIGHTING
    assert bm.data == make_rle([b"\xe3\x05"])
    assert pig.get_bitmap_pixels(2) is pig.get_bitmap_pixels(2)


def test_placeholder_pixels(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    pig.page_in(0)
    assert pig.get_bitmap_pixels(0) == bytes(64 * 64)
    assert pig.bitmap(0).name == "bogus"


def test_page_in_is_lazy_and_idempotent(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    assert not pig.bitmap(1).paged_in
    pig.page_in(1)
    first = pig.bitmap(1).data
    pig.page_in(1)
    assert pig.bitmap(1).data is first
    pig.page_in(99)
    pig.page_in(-1)
    assert not pig.bitmap(2).paged_in
    pig.page_in_all()
    assert all(bm.paged_in for bm in pig.bitmaps)


def test_out_of_range_lookups(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    assert pig.get_bitmap_pixels(42) == b""
    assert pig.get_sound_pcm(-1) == b""


def test_sounds(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    assert pig.get_sound_pcm(0) == b"\x80\x81\x82\x83\x84\x85"
    boom = pig.get_sound_pcm(1)
    assert boom == bytes([0x80, 0x80, 0x80, 0x80, 0x82, 0x84])
    assert pig.get_sound_pcm(1) is boom
    assert pig.sound(1).compressed and not pig.sound(0).compressed
    pig.load_all_sounds()
    assert all(snd.data is not None for snd in pig.sounds)


def test_find_by_name(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    assert pig.find_bitmap_index_by_name("DOOR#3") == 2
    assert pig.find_bitmap_index_by_name("bogus") is None
    assert pig.find_bitmap_index_by_name("nothing") is None
    assert pig.find_sound_index_by_name("Boom") == 1
    assert pig.find_sound_index_by_name("nothing") is None


def test_translation_and_aux(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    assert pig.translate_bitmap_index(5) == 2
    assert pig.translate_bitmap_index(4) == 4
    assert pig.translate_bitmap_index(5000) == 5000
    assert pig.aux_data().take(8) == b"HAMDATA!"


def test_repack_is_byte_identical(sample_pig):
    assert PigFile.from_binary(sample_pig).to_binary() == sample_pig


def test_repack_keeps_legacy_size():
    data = write_archive(
        [GameBitmap(name="a", width=2, height=2, data=b"\x01\x02\x03\x04")],
        [GameSound(name="s", length=4, data=b"\x10\x20")],
        fmt=PigFormat.SHAREWARE, pad_to=D1_SHARE_PIGSIZE,
    )
    pig = PigFile.from_binary(data)
    assert pig.aux_data() is None
    assert pig.to_binary() == data


def _broken_pig():
    return write_archive(
        [
            GameBitmap(name="good", width=2, height=1, data=b"\x09\x08"),
            GameBitmap(name="flat", width=4, height=4, flags=BM_FLAG_RLE, data=struct.pack("<i", 5) + b"\x00"),
            GameBitmap(name="cut", width=8, height=8, flags=BM_FLAG_RLE, data=struct.pack("<i", 1000) + b"\x00"),
        ],
        [],
    )


def test_bad_assets_are_isolated(caplog):
    pig = PigFile.from_binary(_broken_pig())
    with caplog.at_level(logging.WARNING, logger="pigfile.models.file"):
        assert pig.get_bitmap_pixels(3) == b""
        assert pig.get_bitmap_pixels(2) == b""
    assert "cut" in caplog.text and "flat" in caplog.text
    assert not pig.bitmap(3).paged_in
    assert pig.get_bitmap_pixels(1) == b"\x09\x08"


def test_bad_assets_raise_when_strict():
    pig = PigFile.from_binary(_broken_pig(), strict=True)
    with pytest.raises(Truncated):
        pig.get_bitmap_pixels(3)
    with pytest.raises(Truncated):
        pig.get_bitmap_pixels(2)


def test_failed_bitmap_is_reported_once(caplog):
    pig = PigFile.from_binary(_broken_pig())
    with caplog.at_level(logging.WARNING, logger="pigfile.models.file"):
        assert pig.get_bitmap_pixels(3) == b""
        assert pig.get_bitmap_pixels(3) == b""
    assert len([r for r in caplog.records if "cut" in r.getMessage()]) == 1


def test_repack_refuses_unreadable_bitmap():
    pig = PigFile.from_binary(_broken_pig())
    assert pig.get_bitmap_pixels(3) == b""
    with pytest.raises(Truncated):
        pig.to_binary()


def test_repack_uses_stored_payload_for_unloaded_bitmaps(sample_pig):
    pig = PigFile.from_binary(sample_pig)
    assert not pig.bitmap(2).paged_in
    again = PigFile.from_binary(pig.to_binary())
    assert again.directory.bitmap_flags == pig.directory.bitmap_flags
    assert again.get_bitmap_pixels(2) == b"\x05\x05\x05"
    assert not pig.bitmap(2).paged_in


def test_truncated_sound_is_silent(sample_pig):
    pig = PigFile.from_binary(sample_pig[:-2])
    assert pig.get_sound_pcm(1) == b""
    assert pig.get_sound_pcm(0) == b"\x80\x81\x82\x83\x84\x85"
