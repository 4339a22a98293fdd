# bulkbridge/client/coordinator.py
from __future__ import annotations

import asyncio
import mimetypes
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import httpx

from bulkbridge.client.api import BulkBridgeAPI
from bulkbridge.client.errors import (
    PresignCountMismatchError,
    PresignPartNumbersError,
    UploadInProgressError,
)
from bulkbridge.client.part_uploader import CompletedPart, upload_part
from bulkbridge.client.splitter import (
    MAX_PART_SIZE,
    FileSource,
    PartRange,
    as_source,
    split_parts,
)
from bulkbridge.client.state import PartRecord, PartTable, UploadStatus
from bulkbridge.core.logging_config import logger


def guess_content_type(filename: str, fallback: str = "application/octet-stream") -> str:
    ctype, _ = mimetypes.guess_type(filename)
    return ctype or fallback


@dataclass
class UploadResult:
    upload_id: str
    key: str
    bucket: Optional[str]
    parts: List[CompletedPart]
    response: Dict[str, Any] = field(default_factory=dict)


class UploadCoordinator:
    """
    Stuurt één upload van begin tot eind:
    split -> initiate -> presign -> alle parts parallel -> complete.

    `api_client` praat met de backend (base_url gezet), `store_client` doet de
    PUTs naar de presigned URLs. Zonder `store_client` wordt `api_client`
    voor beide gebruikt.
    """

    def __init__(
        self,
        api_client: httpx.AsyncClient,
        store_client: Optional[httpx.AsyncClient] = None,
        *,
        max_part_size: int = MAX_PART_SIZE,
        max_concurrency: Optional[int] = None,
    ):
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.api = BulkBridgeAPI(api_client)
        self.store_client = store_client or api_client
        self.max_part_size = max_part_size
        self.max_concurrency = max_concurrency
        self.status = UploadStatus.IDLE
        self.file_name: Optional[str] = None
        self.table = PartTable()

    def parts_snapshot(self) -> Mapping[int, PartRecord]:
        return self.table.snapshot()

    @property
    def progress(self) -> tuple[int, int]:
        """(voltooide parts, totaal aantal parts), afgeleid uit de tabel."""
        return self.table.completed_count, self.table.total

    async def upload(
        self,
        source: Union[FileSource, bytes, str, os.PathLike],
        *,
        file_name: Optional[str] = None,
        file_type: Optional[str] = None,
        key: Optional[str] = None,
    ) -> UploadResult:
        if self.status is UploadStatus.UPLOADING:
            raise UploadInProgressError("an upload is already running on this coordinator")

        src = as_source(source)
        name = file_name or src.name
        ctype = file_type or guess_content_type(name)

        # Nieuwe sessie: validatie van de grootte gebeurt in split_parts
        parts = split_parts(src.size, self.max_part_size)
        self.file_name = name
        self.table = PartTable(parts)
        self.status = UploadStatus.UPLOADING

        try:
            result = await self._run(src, parts, name, ctype, key)
        except Exception as e:
            self.status = UploadStatus.ERROR
            logger.bind(
                file_name=name,
                completed=self.table.completed_count,
                total=self.table.total,
                exc=type(e).__name__,
                message=str(e),
            ).error("upload_failed")
            raise

        self.status = UploadStatus.SUCCESS
        logger.bind(file_name=name, upload_id=result.upload_id, key=result.key, parts=len(parts)).info(
            "upload_completed"
        )
        return result

    async def _run(
        self,
        src: FileSource,
        parts: Sequence[PartRange],
        name: str,
        ctype: str,
        key: Optional[str],
    ) -> UploadResult:
        init = await self.api.initiate(name, ctype, src.size, key)
        upload_id, object_key = init["uploadId"], init["key"]
        logger.bind(upload_id=upload_id, key=object_key, parts=len(parts)).info("upload_initiated")

        presigned = await self.api.presign(upload_id, object_key, len(parts))
        if len(presigned) != len(parts):
            raise PresignCountMismatchError(len(parts), len(presigned))
        numbers = sorted(p["partNumber"] for p in presigned)
        if numbers != [p.part_number for p in parts]:
            raise PresignPartNumbersError(len(parts), numbers)
        urls = {p["partNumber"]: p["url"] for p in presigned}

        completed = await self._upload_all(src, parts, urls)

        # Expliciet oplopend sorteren; de store eist PartNumber-volgorde
        ordered = sorted(completed, key=lambda c: c.part_number)
        response = await self.api.complete(upload_id, object_key, [c.as_wire() for c in ordered])

        return UploadResult(
            upload_id=upload_id,
            key=object_key,
            bucket=init.get("bucket"),
            parts=ordered,
            response=response,
        )

    async def _upload_all(
        self, src: FileSource, parts: Sequence[PartRange], urls: Mapping[int, str]
    ) -> List[CompletedPart]:
        sem = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def _one(part: PartRange) -> CompletedPart:
            url = urls[part.part_number]
            if sem is None:
                return await upload_part(self.store_client, url, src, part, self.table)
            async with sem:
                return await upload_part(self.store_client, url, src, part, self.table)

        # Alle uploads lopen af (geen cancel); daarna de eerste fout doorgooien
        results = await asyncio.gather(
            *(_one(part) for part in parts),
            return_exceptions=True,
        )
        for res in results:
            if isinstance(res, BaseException):
                raise res
        return list(results)
