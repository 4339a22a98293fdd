# bulkbridge/services/multipart.py
import asyncio
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from bulkbridge.services.object_store import ObjectStore

UPLOAD_PREFIX = "uploads/"
UPLOAD_TYPE_MARKER = "multipart"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")


class MultipartError(Exception):
    """Basisfout voor alle store-gerelateerde multipart-fouten."""


class UploadInitiationError(MultipartError):
    pass


class PresignError(MultipartError):
    pass


class UploadCompletionError(MultipartError):
    pass


def sanitize_file_name(file_name: str) -> str:
    """Vervang elk teken buiten [A-Za-z0-9.-_] door '_'.

    Verschillende namen kunnen hierdoor op dezelfde uitkomst uitkomen
    ("a b.txt" en "a?b.txt" geven allebei "a_b.txt").
    """
    return _UNSAFE_CHARS.sub("_", file_name)


def generate_unique_key(file_name: str, key: Optional[str] = None, now: Optional[datetime] = None) -> str:
    if key:
        return key
    today = (now or datetime.now(timezone.utc)).date().isoformat()
    return f"{UPLOAD_PREFIX}{today}/{uuid4()}-{file_name}"


def start_upload(
    store: ObjectStore,
    bucket: str,
    *,
    file_name: str,
    file_type: str,
    file_size: int,
    key: Optional[str] = None,
) -> Dict[str, str]:
    sanitized = sanitize_file_name(file_name)
    object_key = generate_unique_key(sanitized, key)
    metadata = {
        "originalFileName": sanitized,
        "fileSize": str(file_size),
        "upload-type": UPLOAD_TYPE_MARKER,
        "uploaded-at": datetime.now(timezone.utc).isoformat(),
    }

    try:
        upload_id = store.begin_multipart_upload(bucket, object_key, file_type, metadata)
    except (BotoCoreError, ClientError) as e:
        raise UploadInitiationError(f"Failed to upload file: {e}") from e

    if not upload_id:
        raise UploadInitiationError("Failed to upload file: Failed to initiate multipart upload")

    return {"uploadId": upload_id, "key": object_key, "bucket": bucket}


async def presign_parts(
    store: ObjectStore,
    bucket: str,
    *,
    upload_id: str,
    key: str,
    parts: int,
    ttl_seconds: int = 3600,
) -> List[Dict[str, Any]]:
    """Eén presigned PUT-URL per part 1..parts, alles-of-niets."""

    async def _sign(part_number: int) -> Dict[str, Any]:
        url = await run_in_threadpool(
            store.sign_part_upload_url, bucket, key, upload_id, part_number, ttl_seconds
        )
        return {"partNumber": part_number, "url": url}

    try:
        return list(await asyncio.gather(*(_sign(n) for n in range(1, parts + 1))))
    except (BotoCoreError, ClientError) as e:
        raise PresignError(f"Failed to generate presigned URL: {e}") from e


def complete_upload(
    store: ObjectStore,
    bucket: str,
    *,
    upload_id: str,
    key: str,
    parts: List[Dict[str, Any]],
) -> Dict[str, Any]:
    # Volgorde blijft zoals de client hem stuurt; de store controleert compleetheid.
    try:
        return store.complete_multipart_upload(bucket, key, upload_id, parts)
    except (BotoCoreError, ClientError) as e:
        raise UploadCompletionError(f"Failed to complete multipart upload: {e}") from e
