"""Project CRUD endpoints plus the public gallery."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from charity_api.core.dependencies import get_admin_user, get_db
from charity_api.models.donation import Donation
from charity_api.models.media_asset import MediaAsset
from charity_api.models.project import Project
from charity_api.models.user import User
from charity_api.schemas.project import (
    GalleryItemResponse,
    ProjectCategory,
    ProjectCreate,
    ProjectResponse,
    ProjectStatus,
    ProjectUpdate,
)
from charity_api.services.storage import download_url

router = APIRouter()


async def _get_project_or_404(db: AsyncSession, project_id: uuid.UUID) -> Project:
    project = await db.get(Project, project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    status: ProjectStatus | None = Query(None),
    category: ProjectCategory | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[ProjectResponse]:
    stmt = select(Project).order_by(Project.created_at.desc(), Project.id)
    if status:
        stmt = stmt.where(Project.status == status)
    if category:
        stmt = stmt.where(Project.category == category)

    result = await db.execute(stmt)
    return [ProjectResponse.model_validate(p) for p in result.scalars().all()]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    return ProjectResponse.model_validate(await _get_project_or_404(db, project_id))


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    project = Project(**body.model_dump())
    db.add(project)
    await db.flush()
    await db.refresh(project)
    return ProjectResponse.model_validate(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    body: ProjectUpdate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    project = await _get_project_or_404(db, project_id)

    update_data = body.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(project, field, value)

    if project.start_date and project.end_date and project.end_date < project.start_date:
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")

    await db.flush()
    await db.refresh(project)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    project = await _get_project_or_404(db, project_id)

    # Donations and media outlive their project with project_id cleared
    await db.execute(
        update(Donation)
        .where(Donation.project_id == project_id)
        .values(project_id=None)
        .execution_options(synchronize_session=False)
    )
    await db.execute(
        update(MediaAsset)
        .where(MediaAsset.project_id == project_id)
        .values(project_id=None)
        .execution_options(synchronize_session=False)
    )
    await db.delete(project)
    await db.flush()


@router.get("/{project_id}/gallery", response_model=list[GalleryItemResponse])
async def get_project_gallery(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> list[GalleryItemResponse]:
    await _get_project_or_404(db, project_id)

    result = await db.execute(
        select(MediaAsset)
        .where(MediaAsset.project_id == project_id)
        .order_by(MediaAsset.sort_order, MediaAsset.created_at, MediaAsset.id)
    )
    return [
        GalleryItemResponse(
            id=asset.id,
            file_name=asset.file_name,
            content_type=asset.content_type,
            caption=asset.caption,
            sort_order=asset.sort_order,
            url=download_url(asset.s3_key),
        )
        for asset in result.scalars().all()
    ]
