# bulkbridge/schemas/uploads_multipart.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    # camelCase op de wire, snake_case in Python
    model_config = ConfigDict(populate_by_name=True)


class UploadStartIn(_WireModel):
    file_name: str = Field(alias="fileName")
    file_type: str = Field(alias="fileType")
    file_size: int = Field(alias="fileSize", ge=1)
    key: Optional[str] = None


class UploadStartOut(_WireModel):
    success: bool = True
    upload_id: str = Field(alias="uploadId")
    key: str
    bucket: str


class PresignIn(_WireModel):
    upload_id: str = Field(alias="uploadId")
    key: str
    parts: int = Field(ge=1)


class PartURL(_WireModel):
    part_number: int = Field(alias="partNumber", ge=1)
    url: str


class PresignOut(BaseModel):
    url: List[PartURL]


class CompletedPartIn(_WireModel):
    etag: str = Field(alias="ETag")
    part_number: int = Field(alias="PartNumber", ge=1)


class CompleteIn(_WireModel):
    upload_id: str = Field(alias="uploadId")
    key: str
    parts: List[CompletedPartIn]
