# bulkbridge/client/splitter.py
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Protocol, Tuple, Union

MAX_PART_SIZE = 5 * 1024 * 1024  # 5 MiB


@dataclass(frozen=True)
class PartRange:
    """Byte-range [start, end) van één part, 1-geïndexeerd."""

    part_number: int
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


def part_count(file_size: int, max_part_size: int = MAX_PART_SIZE) -> int:
    if file_size < 1:
        raise ValueError(f"file_size must be >= 1, got {file_size}")
    if max_part_size < 1:
        raise ValueError(f"max_part_size must be >= 1, got {max_part_size}")
    return math.ceil(file_size / max_part_size)


def split_parts(file_size: int, max_part_size: int = MAX_PART_SIZE) -> Tuple[PartRange, ...]:
    """
    Deel [0, file_size) op in aaneengesloten parts van max_part_size bytes.
    Alleen de laatste part mag kleiner zijn; geen enkele part is leeg.
    """
    count = part_count(file_size, max_part_size)
    return tuple(
        PartRange(
            part_number=i + 1,
            start=i * max_part_size,
            end=min((i + 1) * max_part_size, file_size),
        )
        for i in range(count)
    )


class FileSource(Protocol):
    name: str
    size: int

    def iter_slices(self, part: PartRange, slice_size: int) -> Iterator[bytes]:
        ...


class BytesSource:
    def __init__(self, data: bytes, name: str = "upload.bin"):
        self.data = data
        self.name = name
        self.size = len(data)

    def iter_slices(self, part: PartRange, slice_size: int) -> Iterator[bytes]:
        for offset in range(part.start, part.end, slice_size):
            yield self.data[offset:min(offset + slice_size, part.end)]


class PathSource:
    """Leest parts lazy van schijf; nooit meer dan één slice per part in geheugen."""

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = Path(path)
        self.name = self.path.name
        self.size = self.path.stat().st_size

    def iter_slices(self, part: PartRange, slice_size: int) -> Iterator[bytes]:
        with open(self.path, "rb") as fh:
            fh.seek(part.start)
            remaining = part.size
            while remaining > 0:
                chunk = fh.read(min(slice_size, remaining))
                if not chunk:
                    # bestand is tijdens de upload ingekort
                    raise OSError(f"{self.path} shrank while reading part {part.part_number}")
                remaining -= len(chunk)
                yield chunk


def as_source(source: Union[FileSource, bytes, str, os.PathLike]) -> FileSource:
    if isinstance(source, (bytes, bytearray)):
        return BytesSource(bytes(source))
    if isinstance(source, (str, os.PathLike)):
        return PathSource(source)
    return source


def format_file_size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"
