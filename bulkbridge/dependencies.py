from __future__ import annotations

from fastapi import Request

from bulkbridge.core.settings import Settings
from bulkbridge.infra.s3_client import build_s3_client
from bulkbridge.services.object_store import ObjectStore, S3ObjectStore


def get_app_settings(request: Request) -> Settings:
    """Settings waarmee de app gebouwd is (create_app zet ze op app.state)."""
    return request.app.state.settings


def get_object_store(request: Request) -> ObjectStore:
    """FastAPI dependency; tests overschrijven deze met een fake store."""
    # Eén store (en boto3 client) per app, gebouwd met de settings van die app
    state = request.app.state
    store = getattr(state, "object_store", None)
    if store is None:
        store = S3ObjectStore(build_s3_client(state.settings))
        state.object_store = store
    return store
