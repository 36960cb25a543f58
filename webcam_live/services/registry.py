"""In-process registry of capture sessions.

Sessions live only as long as the server process. One registry is built per
application and reached through ``app.state``; route handlers get it via the
``get_registry`` dependency.
"""
import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from zoneinfo import ZoneInfo

from webcam_live.models.session import ImageRecord, SessionRecord

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """Render a datetime the way the en-IN locale prints it.

    e.g. ``16/8/2025, 10:05:09 am``
    """
    hour = moment.hour % 12 or 12
    meridiem = "am" if moment.hour < 12 else "pm"
    return (
        f"{moment.day}/{moment.month}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


class SessionRegistry:
    def __init__(self, timezone: str = "Asia/Kolkata"):
        self._tz = ZoneInfo(timezone)
        self._sessions: dict[str, SessionRecord] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get_or_create(self, session_id: str, user_name: str) -> SessionRecord:
        """Return the session, creating it on first sight.

        The user name of an existing session is never replaced.
        """
        record = self._sessions.get(session_id)
        if record is None:
            record = SessionRecord(
                session_id=session_id,
                user_name=user_name,
                timestamp=format_timestamp(datetime.now(self._tz)),
            )
            self._sessions[session_id] = record
            logger.info("Created capture session %s for %s", session_id, user_name)
        return record

    def append(self, session_id: str, image: ImageRecord) -> None:
        # KeyError on unknown ids: callers always go through get_or_create first
        self._sessions[session_id].images.append(image)

    def get(self, session_id: str) -> SessionRecord | None:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def all(self) -> dict[str, SessionRecord]:
        return dict(self._sessions)

    @asynccontextmanager
    async def session_lock(self, session_id: str) -> AsyncIterator[None]:
        """Serialize work on one session across await points.

        The lock lives only while someone holds or waits for it.
        """
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        self._lock_users[session_id] = self._lock_users.get(session_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[session_id] -= 1
            if not self._lock_users[session_id]:
                del self._lock_users[session_id]
                self._locks.pop(session_id, None)

    async def record_image(self, session_id: str, user_name: str, image: ImageRecord) -> SessionRecord:
        """Create-or-fetch the session and append ``image`` as one step.

        Waits for an in-flight delete of the same session, so the image lands
        in a fresh session instead of one about to be dropped.
        """
        async with self.session_lock(session_id):
            record = self.get_or_create(session_id, user_name)
            self.append(session_id, image)
        return record
