"""Remote image hosting backed by Cloudinary."""
import logging
from dataclasses import dataclass
from typing import Protocol

import cloudinary
import cloudinary.api
import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from webcam_live.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    secure_url: str
    public_id: str


class MediaStore(Protocol):
    async def upload(
        self,
        payload: str,
        *,
        folder: str,
        public_id: str,
        overwrite: bool = True,
        resource_type: str = "image",
    ) -> UploadResult: ...

    async def delete_resources(self, public_ids: list[str]) -> None: ...

    async def delete_folder(self, path: str) -> None: ...


def configure_cloudinary(settings: Settings) -> bool:
    """Apply explicit credentials to the SDK.

    Returns False when no cloud is configured at all, neither through
    settings nor through the CLOUDINARY_URL the SDK reads on import.
    """
    if settings.cloudinary_cloud_name:
        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True,
        )
        return True

    cloudinary.config(secure=True)
    return bool(cloudinary.config().cloud_name)


class CloudinaryMediaStore:
    """MediaStore over the (blocking) Cloudinary SDK.

    Every call is pushed to the threadpool so the event loop keeps serving
    other requests while the upload is in flight.
    """

    async def upload(
        self,
        payload: str,
        *,
        folder: str,
        public_id: str,
        overwrite: bool = True,
        resource_type: str = "image",
    ) -> UploadResult:
        result = await run_in_threadpool(
            cloudinary.uploader.upload,
            payload,
            folder=folder,
            public_id=public_id,
            overwrite=overwrite,
            resource_type=resource_type,
        )
        logger.info("Uploaded %s to Cloudinary", result["public_id"])
        return UploadResult(secure_url=result["secure_url"], public_id=result["public_id"])

    async def delete_resources(self, public_ids: list[str]) -> None:
        await run_in_threadpool(cloudinary.api.delete_resources, public_ids)

    async def delete_folder(self, path: str) -> None:
        await run_in_threadpool(cloudinary.api.delete_folder, path)
