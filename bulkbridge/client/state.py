# bulkbridge/client/state.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional

from bulkbridge.client.errors import InvalidPartTransition
from bulkbridge.client.splitter import PartRange


class UploadStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"


class PartStatus(str, Enum):
    PENDING = "pending"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    ERROR = "error"


TERMINAL_PART_STATES = frozenset({PartStatus.COMPLETED, PartStatus.ERROR})


@dataclass(frozen=True)
class PartRecord:
    part_number: int
    size: int
    status: PartStatus = PartStatus.PENDING
    progress: float = 0.0
    etag: Optional[str] = None
    error: Optional[str] = None


# ----------------------------------------------------------------------
# Transities: pure functies PartRecord -> PartRecord
# ----------------------------------------------------------------------
def _guard(record: PartRecord, *allowed: PartStatus) -> None:
    if record.status not in allowed:
        raise InvalidPartTransition(record.part_number, record.status.value)


def mark_uploading(record: PartRecord) -> PartRecord:
    _guard(record, PartStatus.PENDING, PartStatus.UPLOADING)
    return replace(record, status=PartStatus.UPLOADING)


def mark_progress(record: PartRecord, percent: float) -> PartRecord:
    _guard(record, PartStatus.PENDING, PartStatus.UPLOADING)
    percent = min(max(percent, 0.0), 100.0)
    return replace(record, status=PartStatus.UPLOADING, progress=max(record.progress, percent))


def mark_completed(record: PartRecord, etag: str) -> PartRecord:
    _guard(record, PartStatus.UPLOADING)
    if not etag:
        raise ValueError(f"part {record.part_number}: etag is required")
    return replace(record, status=PartStatus.COMPLETED, progress=100.0, etag=etag)


def mark_error(record: PartRecord, reason: str) -> PartRecord:
    _guard(record, PartStatus.PENDING, PartStatus.UPLOADING)
    return replace(record, status=PartStatus.ERROR, error=reason)


class PartTable:
    """
    Status per part, gekeyed op part number.
    Elke update vervangt alleen het record van die ene part.
    """

    def __init__(self, parts: Iterable[PartRange] = ()):
        self._records: Dict[int, PartRecord] = {
            p.part_number: PartRecord(part_number=p.part_number, size=p.size) for p in parts
        }
        self._listeners: list[Callable[[PartRecord], None]] = []

    def subscribe(self, listener: Callable[[PartRecord], None]) -> None:
        self._listeners.append(listener)

    def apply(self, part_number: int, transition: Callable[..., PartRecord], *args) -> PartRecord:
        record = transition(self._records[part_number], *args)
        self._records[part_number] = record
        for listener in self._listeners:
            listener(record)
        return record

    def get(self, part_number: int) -> PartRecord:
        return self._records[part_number]

    def snapshot(self) -> Mapping[int, PartRecord]:
        return MappingProxyType(dict(self._records))

    @property
    def total(self) -> int:
        return len(self._records)

    @property
    def completed_count(self) -> int:
        return sum(1 for r in self._records.values() if r.status is PartStatus.COMPLETED)

    def __len__(self) -> int:
        return len(self._records)
