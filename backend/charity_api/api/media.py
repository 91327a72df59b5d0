"""Presigned media upload/download endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from charity_api.core.dependencies import get_admin_user, get_db
from charity_api.models.media_asset import MediaAsset
from charity_api.models.project import Project
from charity_api.models.user import User
from charity_api.schemas.media import (
    MediaAssetResponse,
    MediaDownloadResponse,
    MediaUploadRequest,
    MediaUploadResponse,
)
from charity_api.services.storage import (
    ALLOWED_CONTENT_TYPES,
    URL_TTL_SECONDS,
    discard,
    download_url,
    media_key,
    upload_url,
)

router = APIRouter()


async def _get_media_or_404(db: AsyncSession, media_id: uuid.UUID) -> MediaAsset:
    media = await db.get(MediaAsset, media_id)
    if media is None:
        raise HTTPException(status_code=404, detail="Media asset not found")
    return media


@router.post("/upload-url", response_model=MediaUploadResponse, status_code=201)
async def create_upload_url(
    body: MediaUploadRequest,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> MediaUploadResponse:
    """Generate a presigned PUT URL for uploading a file to S3.

    Creates a media_assets row and returns the upload URL.
    The client should PUT the file directly to the returned URL.
    """
    if body.content_type not in ALLOWED_CONTENT_TYPES:
        allowed = ", ".join(sorted(ALLOWED_CONTENT_TYPES))
        raise HTTPException(
            status_code=400,
            detail=f"content_type must be one of: {allowed}",
        )

    if body.project_id is not None and await db.get(Project, body.project_id) is None:
        raise HTTPException(status_code=404, detail="Project not found")

    s3_key = media_key(body.project_id, body.file_name)

    media = MediaAsset(
        project_id=body.project_id,
        s3_key=s3_key,
        file_name=body.file_name,
        content_type=body.content_type,
        caption=body.caption,
        sort_order=body.sort_order,
    )
    db.add(media)
    await db.flush()

    return MediaUploadResponse(
        media_id=media.id,
        upload_url=upload_url(s3_key, body.content_type),
        s3_key=s3_key,
        expires_in=URL_TTL_SECONDS,
    )


@router.get("", response_model=list[MediaAssetResponse])
async def list_media(
    project_id: uuid.UUID | None = Query(None),
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> list[MediaAssetResponse]:
    stmt = select(MediaAsset).order_by(MediaAsset.created_at.desc(), MediaAsset.id)
    if project_id is not None:
        stmt = stmt.where(MediaAsset.project_id == project_id)
    result = await db.execute(stmt)
    return [MediaAssetResponse.model_validate(m) for m in result.scalars().all()]


@router.get("/{media_id}/download-url", response_model=MediaDownloadResponse)
async def get_download_url(
    media_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> MediaDownloadResponse:
    media = await _get_media_or_404(db, media_id)
    return MediaDownloadResponse(
        download_url=download_url(media.s3_key),
        expires_in=URL_TTL_SECONDS,
    )


@router.delete("/{media_id}", status_code=204)
async def delete_media(
    media_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    media = await _get_media_or_404(db, media_id)
    s3_key = media.s3_key
    await db.delete(media)
    await db.flush()
    discard(s3_key)
