from __future__ import annotations
from pydantic import BaseModel, Field
from ..binary.codecs.disk_headers import BM_FLAG_PAGED_OUT, BM_FLAG_RLE
from ..binary.formats import PLACEHOLDER_NAME, PLACEHOLDER_SIZE


class GameBitmap(BaseModel):
    name: str = ""
    width: int = Field(0, ge=0)
    height: int = Field(0, ge=0)
    flags: int = BM_FLAG_PAGED_OUT
    avg_color: int = Field(0, ge=0, le=255)
    # raw paged-in payload; still RLE-compressed when the RLE flag is set
    data: bytes | None = Field(default=None, exclude=True)

    @property
    def paged_in(self) -> bool:
        return not (self.flags & BM_FLAG_PAGED_OUT)

    @property
    def rle(self) -> bool:
        return bool(self.flags & BM_FLAG_RLE)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @classmethod
    def placeholder(cls) -> "GameBitmap":
        return cls(
            name=PLACEHOLDER_NAME,
            width=PLACEHOLDER_SIZE,
            height=PLACEHOLDER_SIZE,
            flags=0,
            data=bytes(PLACEHOLDER_SIZE * PLACEHOLDER_SIZE),
        )
