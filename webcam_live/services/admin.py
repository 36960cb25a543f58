import logging
from dataclasses import dataclass

from webcam_live.config import Settings
from webcam_live.models.session import SessionRecord
from webcam_live.services.capture import session_folder
from webcam_live.services.media_store import MediaStore
from webcam_live.services.registry import SessionRegistry
from webcam_live.utils.exceptions import NotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionDetail:
    user_name: str
    image_urls: list[str]


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a session delete.

    ``local_deleted`` reflects the registry only; ``remote_error`` holds the
    media store failure, if any, that left assets behind.
    """

    local_deleted: bool
    remote_error: Exception | None = None

    @property
    def remote_cleaned(self) -> bool:
        return self.local_deleted and self.remote_error is None


def list_sessions(registry: SessionRegistry) -> dict[str, SessionRecord]:
    return registry.all()


def get_session_detail(registry: SessionRegistry, session_id: str) -> SessionDetail:
    record = registry.get(session_id)
    if record is None:
        raise NotFound()
    return SessionDetail(
        user_name=record.user_name,
        image_urls=[image.url for image in record.images],
    )


async def delete_session(
    registry: SessionRegistry,
    media_store: MediaStore,
    session_id: str,
    settings: Settings | None = None,
) -> DeleteResult:
    """Drop a session locally and clean up its remote assets best-effort.

    Holds the session lock throughout, so an upload finishing meanwhile
    waits and then starts a fresh session rather than slipping in an image
    that never reaches the bulk delete.
    """
    async with registry.session_lock(session_id):
        record = registry.get(session_id)
        if record is None:
            return DeleteResult(local_deleted=False)

        remote_error: Exception | None = None
        try:
            public_ids = [image.public_id for image in record.images]
            if public_ids:
                await media_store.delete_resources(public_ids)
            await media_store.delete_folder(session_folder(session_id, settings))
        except Exception as e:
            logger.warning("Media store delete warning for session %s: %s", session_id, e)
            remote_error = e

        registry.remove(session_id)

    logger.info("Deleted capture session %s (%d images)", session_id, len(record.images))
    return DeleteResult(local_deleted=True, remote_error=remote_error)
