"""Receive a webcam frame, push it to the media store and record it."""
import logging
import re
import time
import uuid

from webcam_live.config import Settings, settings as default_settings
from webcam_live.models.session import ImageRecord
from webcam_live.services.media_store import MediaStore
from webcam_live.services.registry import SessionRegistry
from webcam_live.utils.exceptions import PayloadTooLarge, UploadError, ValidationError

logger = logging.getLogger(__name__)

# session ids and types end up in storage paths
SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def session_folder(session_id: str, settings: Settings | None = None) -> str:
    settings = settings or default_settings
    return f"{settings.media_root_folder}/{session_id}"


def _object_id(capture_type: str) -> str:
    return f"{capture_type}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def _validate(
    settings: Settings,
    image: str | None,
    user_name: str | None,
    capture_type: str | None,
    session_id: str | None,
) -> None:
    if not image or not user_name or not capture_type or not session_id:
        raise ValidationError("Missing fields")

    for label, value in (("sessionId", session_id), ("type", capture_type)):
        if not SAFE_SEGMENT.match(value):
            raise ValidationError(f"Invalid {label}")

    if len(image) > settings.max_image_payload_bytes:
        raise PayloadTooLarge()


async def submit_capture(
    registry: SessionRegistry,
    media_store: MediaStore,
    image: str | None,
    user_name: str | None,
    capture_type: str | None,
    session_id: str | None,
    settings: Settings | None = None,
) -> dict:
    """Upload one capture and append it to its session.

    Returns {"url": ...}. Raises ValidationError/PayloadTooLarge before any
    upload is attempted, UploadError when the media store fails. The registry
    is only touched after a successful upload.
    """
    settings = settings or default_settings
    _validate(settings, image, user_name, capture_type, session_id)

    try:
        uploaded = await media_store.upload(
            image,
            folder=session_folder(session_id, settings),
            public_id=_object_id(capture_type),
            overwrite=True,
            resource_type="image",
        )
    except Exception as e:
        logger.exception("Upload error for session %s: %s", session_id, e)
        raise UploadError() from e

    await registry.record_image(
        session_id,
        user_name,
        ImageRecord(url=uploaded.secure_url, type=capture_type, public_id=uploaded.public_id),
    )
    return {"url": uploaded.secure_url}
