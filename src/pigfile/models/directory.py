from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List
from ..binary.formats import PigFormat, MAX_BITMAP_FILES
from .bitmap import GameBitmap
from .sound import GameSound


def _identity_xlat() -> List[int]:
    return list(range(MAX_BITMAP_FILES))


class PigDirectory(BaseModel):
    format: PigFormat = PigFormat.REGISTERED
    file_size: int = Field(0, ge=0)
    directory_data_start: int = Field(0, ge=0)
    bitmap_count: int = Field(0, ge=0)
    sound_count: int = Field(0, ge=0)
    header_size: int = Field(0, ge=0)

    # parallel, indexed by bitmap number; index 0 is the placeholder
    bitmaps: List[GameBitmap] = Field(default_factory=list)
    bitmap_offsets: List[int] = Field(default_factory=list)
    bitmap_flags: List[int] = Field(default_factory=list)

    sounds: List[GameSound] = Field(default_factory=list)
    sound_offsets: List[int] = Field(default_factory=list)

    bitmap_xlat: List[int] = Field(default_factory=_identity_xlat)

    # secondary data blob that precedes the translation table (new format only)
    aux_offset: int = 0
    aux_length: int = 0

    def summary(self) -> dict:
        return self.model_dump(
            mode="json",
            include={"format", "file_size", "directory_data_start", "bitmap_count",
                     "sound_count", "header_size", "aux_offset", "aux_length"},
        )
