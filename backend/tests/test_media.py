"""Presigned media upload/download endpoint tests."""

import uuid

import logging

import pytest
from httpx import AsyncClient
from botocore.exceptions import ClientError

from charity_api.api import media as media_api
from charity_api.core.config import settings
from charity_api.services import storage
from tests.helpers import auth_headers, create_project, make_admin, unique_identity


def _upload_body(**overrides) -> dict:
    body = {"file_name": "photo one.jpg", "content_type": "image/jpeg", "size_bytes": 1024}
    body.update(overrides)
    return body


async def test_upload_url_for_library(client: AsyncClient):
    admin = await make_admin()
    resp = await client.post("/api/media/upload-url", json=_upload_body(), headers=admin)
    assert resp.status_code == 201
    data = resp.json()
    assert data["expires_in"] == 900
    assert data["s3_key"].startswith("media/library/")
    assert data["s3_key"].endswith("-photo_one.jpg")
    assert "X-Amz-Signature" in data["upload_url"]


async def test_upload_url_for_project(client: AsyncClient):
    admin = await make_admin()
    project = await create_project(client, admin)
    resp = await client.post(
        "/api/media/upload-url",
        json=_upload_body(project_id=project["id"], caption="Opening day"),
        headers=admin,
    )
    assert resp.status_code == 201
    assert resp.json()["s3_key"].startswith(f"media/{project['id']}/")

    listed = await client.get(
        "/api/media", params={"project_id": project["id"]}, headers=admin
    )
    assert [m["caption"] for m in listed.json()] == ["Opening day"]


@pytest.mark.parametrize("content_type", ["application/javascript", "image/svg+xml", "text/html"])
async def test_upload_url_rejects_bad_content_type(client: AsyncClient, content_type: str):
    admin = await make_admin()
    resp = await client.post(
        "/api/media/upload-url", json=_upload_body(content_type=content_type), headers=admin
    )
    assert resp.status_code == 400
    assert "content_type" in resp.json()["detail"]


async def test_upload_url_rejects_oversized(client: AsyncClient):
    admin = await make_admin()
    resp = await client.post(
        "/api/media/upload-url",
        json=_upload_body(size_bytes=20 * 1024 * 1024),
        headers=admin,
    )
    assert resp.status_code == 422


async def test_upload_url_unknown_project_returns_404(client: AsyncClient):
    admin = await make_admin()
    resp = await client.post(
        "/api/media/upload-url", json=_upload_body(project_id=str(uuid.uuid4())), headers=admin
    )
    assert resp.status_code == 404


async def test_upload_url_requires_admin(client: AsyncClient):
    sub, email = unique_identity()
    resp = await client.post(
        "/api/media/upload-url", json=_upload_body(), headers=auth_headers(sub, email)
    )
    assert resp.status_code == 403


async def test_download_url_is_public(client: AsyncClient):
    admin = await make_admin()
    created = await client.post("/api/media/upload-url", json=_upload_body(), headers=admin)
    media_id = created.json()["media_id"]

    resp = await client.get(f"/api/media/{media_id}/download-url")
    assert resp.status_code == 200
    data = resp.json()
    assert data["expires_in"] == 900
    assert "X-Amz-Signature" in data["download_url"]


async def test_download_url_unknown_returns_404(client: AsyncClient):
    resp = await client.get(f"/api/media/{uuid.uuid4()}/download-url")
    assert resp.status_code == 404


async def test_delete_media_removes_row_and_object(client: AsyncClient, monkeypatch):
    deleted: list[str] = []
    monkeypatch.setattr(media_api, "discard", deleted.append)

    admin = await make_admin()
    created = (
        await client.post("/api/media/upload-url", json=_upload_body(), headers=admin)
    ).json()

    resp = await client.delete(f"/api/media/{created['media_id']}", headers=admin)
    assert resp.status_code == 204
    assert deleted == [created["s3_key"]]

    resp = await client.get(f"/api/media/{created['media_id']}/download-url")
    assert resp.status_code == 404


class _FailingBucket:
    def delete_object(self, **kwargs):
        raise ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "DeleteObject")


def test_media_key_layout():
    project_id = uuid.uuid4()
    key = storage.media_key(project_id, "  annual report 2026.jpg ")
    assert key.startswith(f"media/{project_id}/")
    assert key.endswith("-annual_report_2026.jpg")
    assert storage.media_key(None, "a.png").startswith("media/library/")


def test_discard_logs_storage_failure(monkeypatch, caplog):
    monkeypatch.setattr(storage, "_bucket_client", lambda: _FailingBucket())
    with caplog.at_level(logging.WARNING, logger=storage.__name__):
        storage.discard("media/library/x.png")
    assert "media/library/x.png" in caplog.text


def test_signed_urls_use_public_endpoint(monkeypatch):
    monkeypatch.setattr(settings, "S3_PUBLIC_ENDPOINT", "https://cdn.charity.example")
    url = storage.download_url("media/library/x.png")
    assert url.startswith("https://cdn.charity.example/")
    assert "X-Amz-Signature" in url
