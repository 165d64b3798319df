from __future__ import annotations
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Protocol, Union

from .binary.codecs.bytecursor import ByteCursor


class ResourceReader(Protocol):
    """Anything that resolves a resource filename to a byte-range reader (e.g. a HOG archive)."""

    def find_file(self, name: str) -> Optional[ByteCursor]: ...


class MappingResources:
    """In-memory ResourceReader; names match case-insensitively."""

    def __init__(self, files: Mapping[str, Union[bytes, bytearray, memoryview]] | None = None):
        self._files: Dict[str, bytes] = {}
        for name, data in (files or {}).items():
            self.add(name, data)

    @classmethod
    def from_paths(cls, paths: Iterable[Union[str, Path]]) -> "MappingResources":
        res = cls()
        for p in map(Path, paths):
            res.add(p.name, p.read_bytes())
        return res

    def add(self, name: str, data: Union[bytes, bytearray, memoryview]) -> None:
        self._files[name.upper()] = bytes(data)

    def find_file(self, name: str) -> Optional[ByteCursor]:
        data = self._files.get(name.upper())
        return ByteCursor(data) if data is not None else None
