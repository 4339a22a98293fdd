# bulkbridge/services/object_store.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol


class ObjectStore(Protocol):
    """De drie store-operaties die het multipart-protocol nodig heeft."""

    def begin_multipart_upload(
        self, bucket: str, key: str, content_type: str, metadata: Mapping[str, str]
    ) -> Optional[str]:
        ...

    def sign_part_upload_url(
        self, bucket: str, key: str, upload_id: str, part_number: int, ttl_seconds: int
    ) -> str:
        ...

    def complete_multipart_upload(
        self, bucket: str, key: str, upload_id: str, parts: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        ...


class S3ObjectStore:
    """boto3-implementatie van ObjectStore."""

    def __init__(self, s3_client):
        self.s3 = s3_client

    def begin_multipart_upload(
        self, bucket: str, key: str, content_type: str, metadata: Mapping[str, str]
    ) -> Optional[str]:
        resp = self.s3.create_multipart_upload(
            Bucket=bucket,
            Key=key,
            ContentType=content_type,
            Metadata=dict(metadata),
        )
        return resp.get("UploadId")

    def sign_part_upload_url(
        self, bucket: str, key: str, upload_id: str, part_number: int, ttl_seconds: int
    ) -> str:
        return self.s3.generate_presigned_url(
            "upload_part",
            Params={
                "Bucket": bucket,
                "Key": key,
                "UploadId": upload_id,
                "PartNumber": part_number,
            },
            ExpiresIn=ttl_seconds,
        )

    def complete_multipart_upload(
        self, bucket: str, key: str, upload_id: str, parts: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        resp = self.s3.complete_multipart_upload(
            Bucket=bucket,
            Key=key,
            UploadId=upload_id,
            MultipartUpload={"Parts": parts},
        )
        # ResponseMetadata is SDK-transport, geen store-resultaat
        return {k: v for k, v in resp.items() if k != "ResponseMetadata"}
