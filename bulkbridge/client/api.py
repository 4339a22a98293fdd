# bulkbridge/client/api.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

import httpx

from bulkbridge.client.errors import (
    ApiError,
    CompleteUploadError,
    InitiateUploadError,
    PresignRequestError,
)


class BulkBridgeAPI:
    """Dunne wrapper rond de drie backend-endpoints."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _post(self, path: str, payload: Dict[str, Any], error: Type[ApiError], message: str) -> Dict[str, Any]:
        try:
            resp = await self.client.post(path, json=payload)
        except httpx.TransportError as e:
            raise error(f"{message}: {e}") from e
        if not resp.is_success:
            raise error(message, status_code=resp.status_code)
        return resp.json()

    async def initiate(
        self, file_name: str, file_type: str, file_size: int, key: Optional[str] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"fileName": file_name, "fileType": file_type, "fileSize": file_size}
        if key:
            payload["key"] = key
        data = await self._post("/api/upload", payload, InitiateUploadError, "Failed to initialize upload")
        if not data.get("uploadId") or not data.get("key"):
            raise InitiateUploadError("Failed to initialize upload: incomplete response")
        return data

    async def presign(self, upload_id: str, key: str, parts: int) -> List[Dict[str, Any]]:
        data = await self._post(
            "/api/generate-presigned-url",
            {"uploadId": upload_id, "key": key, "parts": parts},
            PresignRequestError,
            "Failed to get presigned URLs",
        )
        return list(data.get("url") or [])

    async def complete(self, upload_id: str, key: str, parts: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._post(
            "/api/complete-upload",
            {"uploadId": upload_id, "key": key, "parts": parts},
            CompleteUploadError,
            "Failed to complete upload",
        )
