import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.core.errors import ConflictError
from app.db.base import Base
from app.models.complaint import Complaint, ComplaintStatus
from app.services.complaint_number import (
    format_complaint_number,
    last_sequence,
    next_complaint_number,
    parse_sequence,
)
from app.services.complaints import submit_complaint

DAY = datetime(2026, 10, 19, tzinfo=timezone.utc)


def test_number_format():
    assert format_complaint_number(DAY, 7) == "GP-20261019-0007"
    assert format_complaint_number(DAY, 12345) == "GP-20261019-12345"
    assert parse_sequence("GP-20261019-12345") == 12345


async def test_first_number_of_the_day_starts_at_one(db):
    assert await next_complaint_number(db, now=DAY) == "GP-20261019-0001"
    # retries re-read rather than skip ahead
    assert await next_complaint_number(db, attempt=2, now=DAY) == "GP-20261019-0001"


async def test_sequence_continues_from_highest_number(db, complaint_input):
    def fixed(number):
        async def factory(session, attempt):
            return number
        return factory

    await submit_complaint(db, complaint_input(), number_factory=fixed("GP-20261019-0007"))
    await submit_complaint(db, complaint_input(), number_factory=fixed("GP-20261019-9999"))
    await submit_complaint(db, complaint_input(), number_factory=fixed("GP-20261019-10000"))
    await submit_complaint(db, complaint_input(), number_factory=fixed("GP-20261018-0042"))

    assert await last_sequence(db, DAY) == 10000
    assert await next_complaint_number(db, now=DAY) == "GP-20261019-10001"


async def test_submissions_get_unique_numbers_and_start_submitted(db, complaint_input):
    numbers = set()
    for i in range(5):
        complaint = await submit_complaint(db, complaint_input(title=f"Broken streetlight {i}"))
        assert complaint.complaint_number
        assert complaint.status == ComplaintStatus.submitted
        numbers.add(complaint.complaint_number)
    assert len(numbers) == 5


async def test_collision_is_retried_with_a_fresh_number(db, complaint_input):
    first = await submit_complaint(db, complaint_input())
    taken = first.complaint_number

    async def collide_once(session, attempt):
        if attempt == 0:
            return taken
        return await next_complaint_number(session, attempt)

    second = await submit_complaint(db, complaint_input(title="Second complaint"), number_factory=collide_once)

    assert second.complaint_number != taken
    assert second.status == ComplaintStatus.submitted
    assert await db.scalar(select(func.count(Complaint.id))) == 2


async def test_submissions_after_a_race_do_not_collide(db, complaint_input):
    for _ in range(6):
        candidate = await next_complaint_number(db)

        async def racing(session, attempt):
            return candidate if attempt == 0 else await next_complaint_number(session, attempt)

        await submit_complaint(db, complaint_input(title="Racing A"), number_factory=racing)
        await submit_complaint(db, complaint_input(title="Racing B"), number_factory=racing)

    attempts = []

    async def counting(session, attempt):
        attempts.append(attempt)
        return await next_complaint_number(session, attempt)

    plain = await submit_complaint(db, complaint_input(title="Plain"), number_factory=counting)

    assert attempts == [0]
    assert plain.complaint_number.endswith("-0013")


async def test_simultaneous_submissions_get_distinct_numbers(tmp_path, complaint_input):
    # file database so each session holds its own connection
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/race.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    candidate = format_complaint_number(datetime.now(timezone.utc), 1)
    both_ready = asyncio.Event()
    waiting = []

    async def racing(session, attempt):
        if attempt == 0:
            waiting.append(session)
            if len(waiting) == 2:
                both_ready.set()
            await both_ready.wait()
            return candidate
        return await next_complaint_number(session, attempt)

    async def submit(title):
        async with factory() as session:
            complaint = await submit_complaint(session, complaint_input(title=title), number_factory=racing)
            return complaint.complaint_number

    try:
        numbers = await asyncio.gather(submit("Water leak A"), submit("Water leak B"))
        async with factory() as session:
            stored = list((await session.scalars(select(Complaint.complaint_number))).all())
    finally:
        await engine.dispose()

    assert len(set(numbers)) == 2
    assert candidate in numbers
    assert sorted(stored) == sorted(numbers)


async def test_exhausted_retries_surface_a_conflict(db, complaint_input):
    first = await submit_complaint(db, complaint_input())
    taken = first.complaint_number

    async def always_taken(session, attempt):
        return taken

    with pytest.raises(ConflictError):
        await submit_complaint(db, complaint_input(title="Never stored"), number_factory=always_taken)
    assert await db.scalar(select(func.count(Complaint.id))) == 1
