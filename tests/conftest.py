import hashlib
import os
from typing import Dict, List, Optional

# Dummy env zodat Settings/boto3 niet zeuren; vóór de app-import zetten
os.environ.setdefault("AWS_REGION", "eu-west-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_S3_BUCKET_NAME", "bulkbridge-test")
os.environ.setdefault("PORT", "3000")

import httpx
import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from bulkbridge.dependencies import get_object_store
from bulkbridge.main import create_app

STORE_BASE = "https://store.test"


def _client_error(code: str, op: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, op)


class FakeObjectStore:
    """
    In-memory store met S3-achtige multipart-semantiek.
    Complete eist exact alle geüploade parts, oplopend, met kloppende ETags.
    """

    def __init__(self, upload_id: str = "abc123"):
        self.next_upload_id = upload_id
        self.uploads: Dict[str, dict] = {}
        self.begin_calls: List[dict] = []
        self.sign_calls: List[int] = []
        self.complete_calls: List[dict] = []
        self.fail_sign_part: Optional[int] = None
        self.fail_begin = False
        self.return_no_upload_id = False

    # --- ObjectStore ---
    def begin_multipart_upload(self, bucket, key, content_type, metadata):
        self.begin_calls.append(
            {"bucket": bucket, "key": key, "content_type": content_type, "metadata": dict(metadata)}
        )
        if self.fail_begin:
            raise _client_error("AccessDenied", "CreateMultipartUpload")
        if self.return_no_upload_id:
            return None
        self.uploads[self.next_upload_id] = {"bucket": bucket, "key": key, "parts": {}}
        return self.next_upload_id

    def sign_part_upload_url(self, bucket, key, upload_id, part_number, ttl_seconds):
        self.sign_calls.append(part_number)
        if part_number == self.fail_sign_part:
            raise _client_error("SignatureDoesNotMatch", "UploadPart")
        return f"{STORE_BASE}/{bucket}/{key}?uploadId={upload_id}&partNumber={part_number}&X-Amz-Expires={ttl_seconds}"

    def complete_multipart_upload(self, bucket, key, upload_id, parts):
        self.complete_calls.append({"bucket": bucket, "key": key, "upload_id": upload_id, "parts": list(parts)})
        upload = self.uploads.get(upload_id)
        if upload is None or upload["key"] != key:
            raise _client_error("NoSuchUpload", "CompleteMultipartUpload")
        numbers = [p["PartNumber"] for p in parts]
        if numbers != sorted(numbers):
            raise _client_error("InvalidPartOrder", "CompleteMultipartUpload")
        given = {p["PartNumber"]: p["ETag"].strip('"') for p in parts}
        if given != upload["parts"]:
            raise _client_error("InvalidPart", "CompleteMultipartUpload")
        return {
            "Location": f"{STORE_BASE}/{bucket}/{key}",
            "Bucket": bucket,
            "Key": key,
            "ETag": '"final-etag"',
        }


class FakeS3Endpoint:
    """Speelt de S3-kant van de presigned PUT; registreert parts bij de FakeObjectStore."""

    def __init__(self, store: FakeObjectStore):
        self.store = store
        self.fail_status: Dict[int, int] = {}
        self.omit_etag: set = set()
        self.etags: Dict[int, str] = {}
        self.network_error: set = set()
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        part_number = int(request.url.params["partNumber"])
        upload_id = request.url.params["uploadId"]

        if part_number in self.network_error:
            raise httpx.ConnectError("connection reset", request=request)
        if part_number in self.fail_status:
            return httpx.Response(self.fail_status[part_number])
        if part_number in self.omit_etag:
            return httpx.Response(200)

        etag = self.etags.get(part_number) or hashlib.md5(request.content).hexdigest()
        self.store.uploads[upload_id]["parts"][part_number] = etag
        return httpx.Response(200, headers={"ETag": f'"{etag}"'})


@pytest.fixture
def anyio_backend():
    # Dwing anyio om alleen asyncio te gebruiken (geen Trio nodig)
    return "asyncio"


@pytest.fixture
def fake_store():
    return FakeObjectStore()


@pytest.fixture
def s3_endpoint(fake_store):
    return FakeS3Endpoint(fake_store)


@pytest.fixture
def app(fake_store):
    app = create_app()
    app.dependency_overrides[get_object_store] = lambda: fake_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
async def api_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
async def store_client(s3_endpoint):
    async with httpx.AsyncClient(transport=httpx.MockTransport(s3_endpoint)) as sc:
        yield sc
