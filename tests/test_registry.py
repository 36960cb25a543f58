import asyncio
from datetime import datetime

import pytest

from webcam_live.models.session import ImageRecord
from webcam_live.services.registry import SessionRegistry, format_timestamp


def _image(n: int, capture_type: str = "front") -> ImageRecord:
    return ImageRecord(url=f"https://img/{n}.jpg", type=capture_type, public_id=f"pid-{n}")


def test_get_or_create_new_session():
    registry = SessionRegistry()
    record = registry.get_or_create("s1", "Alice")

    assert record.session_id == "s1"
    assert record.user_name == "Alice"
    assert record.accessed is False
    assert record.images == []
    assert record.timestamp
    assert "s1" in registry
    assert len(registry) == 1


def test_get_or_create_first_name_wins():
    registry = SessionRegistry()
    first = registry.get_or_create("s1", "Alice")
    second = registry.get_or_create("s1", "Bob")

    assert second is first
    assert second.user_name == "Alice"
    assert len(registry) == 1


def test_append_keeps_insertion_order():
    registry = SessionRegistry()
    registry.get_or_create("s1", "Alice")
    for n in range(5):
        registry.append("s1", _image(n))

    assert [img.public_id for img in registry.get("s1").images] == [f"pid-{n}" for n in range(5)]


def test_append_unknown_session_raises():
    registry = SessionRegistry()
    with pytest.raises(KeyError):
        registry.append("missing", _image(0))


def test_get_absent_returns_none():
    assert SessionRegistry().get("nope") is None


def test_remove_is_noop_when_absent():
    registry = SessionRegistry()
    registry.get_or_create("s1", "Alice")
    registry.remove("other")
    registry.remove("s1")
    registry.remove("s1")

    assert "s1" not in registry
    assert registry.all() == {}


def test_all_returns_snapshot():
    registry = SessionRegistry()
    registry.get_or_create("s1", "Alice")
    snapshot = registry.all()
    registry.get_or_create("s2", "Bob")

    assert list(snapshot) == ["s1"]
    assert set(registry.all()) == {"s1", "s2"}


@pytest.mark.asyncio
async def test_record_image_concurrent_same_session():
    registry = SessionRegistry()

    async def record(n: int, name: str):
        await asyncio.sleep(0)
        await registry.record_image("s1", name, _image(n))

    await asyncio.gather(record(0, "Alice"), record(1, "Bob"), record(2, "Carol"))

    record_ = registry.get("s1")
    assert len(registry) == 1
    assert record_.user_name == "Alice"
    assert len(record_.images) == 3


def test_format_timestamp_morning():
    assert format_timestamp(datetime(2025, 8, 16, 10, 5, 9)) == "16/8/2025, 10:05:09 am"


def test_format_timestamp_midnight_and_afternoon():
    assert format_timestamp(datetime(2025, 1, 2, 0, 0, 0)) == "2/1/2025, 12:00:00 am"
    assert format_timestamp(datetime(2025, 12, 31, 13, 7, 0)) == "31/12/2025, 1:07:00 pm"
    assert format_timestamp(datetime(2025, 12, 31, 12, 30, 0)) == "31/12/2025, 12:30:00 pm"


@pytest.mark.asyncio
async def test_session_lock_serializes_and_cleans_up():
    registry = SessionRegistry()
    events = []

    async def hold(name: str):
        async with registry.session_lock("s1"):
            events.append(f"{name}-in")
            await asyncio.sleep(0.01)
            events.append(f"{name}-out")

    await asyncio.gather(hold("a"), hold("b"))

    assert events == ["a-in", "a-out", "b-in", "b-out"]
    assert registry._locks == {}
    assert registry._lock_users == {}


@pytest.mark.asyncio
async def test_remove_while_locked_keeps_waiters_serialized():
    registry = SessionRegistry()
    registry.get_or_create("s1", "Alice")

    async def delete_slowly():
        async with registry.session_lock("s1"):
            await asyncio.sleep(0.01)
            registry.remove("s1")

    deleting = asyncio.create_task(delete_slowly())
    await asyncio.sleep(0)
    await registry.record_image("s1", "Bob", _image(1))
    await deleting

    record = registry.get("s1")
    assert record.user_name == "Bob"
    assert [img.public_id for img in record.images] == ["pid-1"]
