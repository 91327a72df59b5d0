"""Media upload/download request/response schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from charity_api.services.storage import MAX_UPLOAD_SIZE


class MediaUploadRequest(BaseModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(..., min_length=1)
    size_bytes: int = Field(..., gt=0, le=MAX_UPLOAD_SIZE)
    project_id: uuid.UUID | None = None
    caption: str | None = Field(None, max_length=500)
    sort_order: int = 0


class MediaUploadResponse(BaseModel):
    media_id: uuid.UUID
    upload_url: str
    s3_key: str
    expires_in: int


class MediaAssetResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID | None = None
    s3_key: str
    file_name: str
    content_type: str
    caption: str | None = None
    sort_order: int
    created_at: datetime

    model_config = {"from_attributes": True}


class MediaDownloadResponse(BaseModel):
    download_url: str
    expires_in: int
