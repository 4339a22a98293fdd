# bulkbridge/client/part_uploader.py
from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterator, Dict, Union

import httpx

from bulkbridge.client.errors import MissingETagError, PartUploadError
from bulkbridge.client.splitter import FileSource, PartRange
from bulkbridge.client.state import (
    PartTable,
    mark_completed,
    mark_error,
    mark_progress,
    mark_uploading,
)
from bulkbridge.core.logging_config import logger

STREAM_SLICE_SIZE = 64 * 1024


@dataclass(frozen=True)
class CompletedPart:
    etag: str
    part_number: int

    def as_wire(self) -> Dict[str, Union[str, int]]:
        return {"ETag": self.etag, "PartNumber": self.part_number}


def strip_etag(raw: str) -> str:
    return raw.replace('"', "")


async def _stream_with_progress(
    source: FileSource, part: PartRange, table: PartTable
) -> AsyncIterator[bytes]:
    # Slices worden pas gelezen als de transport ze opvraagt
    sent = 0
    for chunk in source.iter_slices(part, STREAM_SLICE_SIZE):
        yield chunk
        sent += len(chunk)
        table.apply(part.part_number, mark_progress, sent / part.size * 100)


def _fail(table: PartTable, err: PartUploadError, **log_fields) -> PartUploadError:
    table.apply(err.part_number, mark_error, str(err))
    logger.bind(part_number=err.part_number, **log_fields).warning("part_upload_failed")
    return err


async def upload_part(
    client: httpx.AsyncClient,
    url: str,
    source: FileSource,
    part: PartRange,
    table: PartTable,
) -> CompletedPart:
    """
    PUT één part rechtstreeks naar de store.
    Geen retry: elke fout zet de part op 'error' en wordt doorgegooid.
    """
    part_number = part.part_number
    table.apply(part_number, mark_uploading)

    try:
        resp = await client.put(
            url,
            content=_stream_with_progress(source, part, table),
            headers={
                "Content-Type": "application/octet-stream",
                "Content-Length": str(part.size),
            },
        )
    except httpx.TransportError as e:
        raise _fail(table, PartUploadError(part_number), exc=type(e).__name__) from e
    except OSError as e:
        err = PartUploadError(part_number, message=f"Read error during part {part_number}: {e}")
        raise _fail(table, err, exc=type(e).__name__) from e

    if not resp.is_success:
        raise _fail(table, PartUploadError(part_number, resp.status_code), status_code=resp.status_code)

    raw_etag = resp.headers.get("ETag")
    etag = strip_etag(raw_etag) if raw_etag else ""
    if not etag:
        raise _fail(table, MissingETagError(part_number, resp.status_code), status_code=resp.status_code)

    table.apply(part_number, mark_completed, etag)
    return CompletedPart(etag=etag, part_number=part_number)
