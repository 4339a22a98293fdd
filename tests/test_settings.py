from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from bulkbridge.core.settings import Settings
from bulkbridge.dependencies import get_object_store
from bulkbridge.main import create_app

REQUIRED = ["AWS_REGION", "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_S3_BUCKET_NAME", "PORT"]


@pytest.mark.parametrize("missing", REQUIRED)
def test_missing_required_env_refuses_to_start(monkeypatch, missing):
    monkeypatch.delenv(missing, raising=False)
    with pytest.raises(ValidationError) as exc:
        Settings(_env_file=None)
    assert missing in str(exc.value)


def test_defaults():
    s = Settings(_env_file=None)
    assert s.PRESIGN_EXPIRES_SECONDS == 3600
    assert s.AWS_S3_ENDPOINT_URL is None


def test_create_app_uses_given_settings(fake_store):
    s = Settings(
        AWS_REGION="us-east-1",
        AWS_ACCESS_KEY_ID="a",
        AWS_SECRET_ACCESS_KEY="b",
        AWS_S3_BUCKET_NAME="other",
        PORT=8080,
        APP_NAME="BulkBridge Test",
        _env_file=None,
    )
    app = create_app(s)
    app.dependency_overrides[get_object_store] = lambda: fake_store
    assert app.title == "BulkBridge Test"

    r = TestClient(app).post("/api/upload", json={"fileName": "f", "fileType": "t", "fileSize": 1})
    assert r.json()["bucket"] == "other"
    assert fake_store.begin_calls[0]["bucket"] == "other"


def _settings(region: str, endpoint=None) -> Settings:
    return Settings(
        AWS_REGION=region,
        AWS_ACCESS_KEY_ID="a",
        AWS_SECRET_ACCESS_KEY="b",
        AWS_S3_BUCKET_NAME="bucket",
        AWS_S3_ENDPOINT_URL=endpoint,
        PORT=3000,
        _env_file=None,
    )


def test_each_app_builds_its_own_s3_client():
    app_a = create_app(_settings("eu-west-1"))
    app_b = create_app(_settings("us-east-1", endpoint="http://minio.local:9000"))

    store_a = get_object_store(SimpleNamespace(app=app_a))
    store_b = get_object_store(SimpleNamespace(app=app_b))

    assert store_a.s3.meta.region_name == "eu-west-1"
    assert store_b.s3.meta.region_name == "us-east-1"
    assert store_b.s3.meta.endpoint_url == "http://minio.local:9000"
    # gecachet per app
    assert get_object_store(SimpleNamespace(app=app_a)) is store_a
