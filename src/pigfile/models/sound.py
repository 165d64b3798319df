from __future__ import annotations
from pydantic import BaseModel, Field
from ..binary.codecs.adpcm_codec import is_compressed


class GameSound(BaseModel):
    name: str = ""
    length: int = Field(0, description="decoded sample count")
    data_length: int = Field(0, description="bytes stored in the archive")
    data: bytes | None = Field(default=None, exclude=True)

    @property
    def compressed(self) -> bool:
        return is_compressed(self.length, self.data_length)
