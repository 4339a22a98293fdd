# bulkbridge/routers/uploads.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from bulkbridge.aws.s3_errors import describe_client_error
from bulkbridge.core.logging_config import logger
from bulkbridge.core.settings import Settings
from bulkbridge.dependencies import get_app_settings, get_object_store
from bulkbridge.schemas.uploads_multipart import (
    CompleteIn,
    PartURL,
    PresignIn,
    PresignOut,
    UploadStartIn,
    UploadStartOut,
)
from bulkbridge.services import multipart
from bulkbridge.services.object_store import ObjectStore

router = APIRouter(prefix="/api", tags=["uploads"])


def _error_response(error: str, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": error, "message": str(exc)})


def _log_failure(event: str, exc: Exception, **ctx) -> None:
    cause = exc.__cause__ or exc
    logger.bind(**ctx, **describe_client_error(cause)).error(event)


@router.post("/upload", response_model=UploadStartOut)
def start_upload(
    body: UploadStartIn,
    store: ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_app_settings),
):
    try:
        result = multipart.start_upload(
            store,
            settings.AWS_S3_BUCKET_NAME,
            file_name=body.file_name,
            file_type=body.file_type,
            file_size=body.file_size,
            key=body.key,
        )
    except Exception as e:
        _log_failure("upload_initiate_failed", e, file_name=body.file_name)
        return _error_response("Internal server error", e)

    logger.info("upload_initiated", upload_id=result["uploadId"], key=result["key"])
    return UploadStartOut(uploadId=result["uploadId"], key=result["key"], bucket=result["bucket"])


@router.post("/generate-presigned-url", response_model=PresignOut)
async def generate_presigned_url(
    body: PresignIn,
    store: ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_app_settings),
):
    try:
        urls = await multipart.presign_parts(
            store,
            settings.AWS_S3_BUCKET_NAME,
            upload_id=body.upload_id,
            key=body.key,
            parts=body.parts,
            ttl_seconds=settings.PRESIGN_EXPIRES_SECONDS,
        )
    except Exception as e:
        _log_failure("presign_failed", e, upload_id=body.upload_id, key=body.key, parts=body.parts)
        return _error_response("Failed to generate presigned URL", e)

    logger.info("parts_presigned", upload_id=body.upload_id, parts=len(urls))
    return PresignOut(url=[PartURL(partNumber=u["partNumber"], url=u["url"]) for u in urls])


@router.post("/complete-upload")
def complete_upload(
    body: CompleteIn,
    store: ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_app_settings),
):
    parts = [{"ETag": p.etag, "PartNumber": p.part_number} for p in body.parts]
    try:
        result = multipart.complete_upload(
            store,
            settings.AWS_S3_BUCKET_NAME,
            upload_id=body.upload_id,
            key=body.key,
            parts=parts,
        )
    except Exception as e:
        _log_failure("upload_complete_failed", e, upload_id=body.upload_id, key=body.key)
        return _error_response("Failed to complete multipart upload", e)

    logger.info("upload_completed", upload_id=body.upload_id, key=body.key, parts=len(parts))
    return {"success": True, **result}
