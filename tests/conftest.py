import asyncio

import pytest

from webcam_live.config import Settings
from webcam_live.main import create_app
from webcam_live.services.media_store import UploadResult
from webcam_live.services.registry import SessionRegistry

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret"
FAKE_IMAGE = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQ=="


class FakeMediaStore:
    """In-memory stand-in for Cloudinary."""

    def __init__(self, fail_upload=False, fail_delete=False, fail_folder=False, delays=None):
        self.fail_upload = fail_upload
        self.fail_delete = fail_delete
        self.fail_folder = fail_folder
        # seconds a capture type (or "delete") spends "on the wire"
        self.delays = delays or {}
        self.uploads: list[dict] = []
        self.deleted_ids: list[list[str]] = []
        self.deleted_folders: list[str] = []

    async def upload(self, payload, *, folder, public_id, overwrite=True, resource_type="image"):
        # yield like a real network call would
        await asyncio.sleep(self.delays.get(public_id.split("_")[0], 0))
        if self.fail_upload:
            raise RuntimeError("cloudinary unavailable")
        self.uploads.append({
            "payload": payload,
            "folder": folder,
            "public_id": public_id,
            "overwrite": overwrite,
            "resource_type": resource_type,
        })
        full_id = f"{folder}/{public_id}"
        return UploadResult(secure_url=f"https://res.example.com/{full_id}.jpg", public_id=full_id)

    async def delete_resources(self, public_ids):
        await asyncio.sleep(self.delays.get("delete", 0))
        if self.fail_delete:
            raise RuntimeError("bulk delete failed")
        self.deleted_ids.append(list(public_ids))

    async def delete_folder(self, path):
        await asyncio.sleep(0)
        if self.fail_folder:
            raise RuntimeError("folder not empty")
        self.deleted_folders.append(path)


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        session_secret="test-secret",
    )


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def app(test_settings, media_store):
    return create_app(settings=test_settings, media_store=media_store)


async def login(client, username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
    return await client.post("/login", data={"username": username, "password": password})


async def upload(client, session_id="s1", capture_type="front", name="Alice", image=FAKE_IMAGE):
    return await client.post(
        "/upload",
        json={"image": image, "name": name, "type": capture_type, "sessionId": session_id},
    )
