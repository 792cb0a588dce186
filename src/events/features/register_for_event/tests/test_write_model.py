"""Tests for SqlRegisterForEventWriteModel."""

import logging
from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from src.events.dtos import (
    CapacityExceededError,
    DeadlinePassedError,
    DuplicateRegistrationError,
    InternalError,
    InvalidOperationError,
    NotFoundError,
)
from src.events.features.register_for_event.write_model import SqlRegisterForEventWriteModel
from src.events.features.unregister_from_event.write_model import (
    SqlUnregisterFromEventWriteModel,
)
from src.events.repository.orm_models import Attendee, Registration
from src.events.testing import NOW, fixed_clock, savepoint_session_manager


async def count_attendees(session, event_id) -> int:
    stmt = select(func.count()).select_from(Attendee).where(Attendee.event_id == event_id)
    return (await session.execute(stmt)).scalar_one()


async def count_registrations(session, event_id, user_id=None) -> int:
    stmt = select(func.count()).select_from(Registration).where(Registration.event_id == event_id)
    if user_id is not None:
        stmt = stmt.where(Registration.user_id == user_id)
    return (await session.execute(stmt)).scalar_one()


async def test_register_creates_attendee_and_registration(db_session, seed):
    university = await seed.university(name="North University")
    club = await seed.club(university)
    event = await seed.event(club, max_attendees=10)
    student = await seed.user(university, name="Grace Hopper")
    write_model = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    registration = await write_model.register(event_id=event.uuid, user_id=student.uuid)

    assert registration.event_id == event.uuid
    assert registration.event_title == "Spring Tournament"
    assert registration.user_id == student.uuid
    assert registration.student_name == "Grace Hopper"
    assert registration.university_name == "North University"
    assert registration.registered_at == NOW
    assert await count_attendees(db_session, event.uuid) == 1
    assert await count_registrations(db_session, event.uuid) == 1


async def test_register_unknown_event(db_session, seed):
    student = await seed.user()
    write_model = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    with pytest.raises(NotFoundError):
        await write_model.register(event_id=uuid4(), user_id=student.uuid)


async def test_register_refused_when_not_required_even_with_room(db_session, seed):
    university = await seed.university()
    club = await seed.club(university)
    event = await seed.event(club, is_registration_required=False, max_attendees=100)
    student = await seed.user(university)
    write_model = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    with pytest.raises(InvalidOperationError):
        await write_model.register(event_id=event.uuid, user_id=student.uuid)

    assert await count_attendees(db_session, event.uuid) == 0
    assert await count_registrations(db_session, event.uuid) == 0


async def test_register_after_deadline(db_session, seed):
    university = await seed.university()
    club = await seed.club(university)
    event = await seed.event(club, registration_deadline=NOW - timedelta(hours=1))
    student = await seed.user(university)
    write_model = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    with pytest.raises(DeadlinePassedError):
        await write_model.register(event_id=event.uuid, user_id=student.uuid)


async def test_second_register_is_rejected_without_new_rows(db_session, seed):
    university = await seed.university()
    club = await seed.club(university)
    event = await seed.event(club, max_attendees=5)
    student = await seed.user(university)
    write_model = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    await write_model.register(event_id=event.uuid, user_id=student.uuid)
    with pytest.raises(DuplicateRegistrationError):
        await write_model.register(event_id=event.uuid, user_id=student.uuid)

    assert await count_attendees(db_session, event.uuid) == 1
    assert await count_registrations(db_session, event.uuid, student.uuid) == 1


async def test_sequential_registrations_never_exceed_capacity(db_session, seed):
    university = await seed.university()
    club = await seed.club(university)
    event = await seed.event(club, max_attendees=3)
    write_model = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    refused = 0
    for _ in range(5):
        student = await seed.user(university)
        try:
            await write_model.register(event_id=event.uuid, user_id=student.uuid)
        except CapacityExceededError:
            refused += 1

    assert refused == 2
    assert await count_attendees(db_session, event.uuid) == 3


async def test_university_name_falls_back_to_sentinel(db_session, seed):
    university = await seed.university(name="")
    club = await seed.club(university)
    event = await seed.event(club)
    student = await seed.user(None)
    write_model = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    registration = await write_model.register(event_id=event.uuid, user_id=student.uuid)

    assert registration.university_name == "Unknown University"


async def test_university_name_falls_back_to_users_university(db_session, seed):
    unnamed = await seed.university(name="")
    club = await seed.club(unnamed)
    event = await seed.event(club)
    home = await seed.university(name="South University")
    student = await seed.user(home)
    write_model = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    registration = await write_model.register(event_id=event.uuid, user_id=student.uuid)

    assert registration.university_name == "South University"


async def test_registration_store_failure_writes_nothing(db_session, seed, monkeypatch, caplog):
    university = await seed.university()
    club = await seed.club(university)
    event = await seed.event(club, max_attendees=10)
    student = await seed.user(university)
    event_id, user_id = event.uuid, student.uuid
    write_model = SqlRegisterForEventWriteModel(clock=fixed_clock)
    write_model.async_session_manager = savepoint_session_manager(db_session)

    flush = db_session.flush

    async def flush_failing_on_registration(*args, **kwargs):
        if any(isinstance(obj, Registration) for obj in db_session.new):
            raise OperationalError(
                "INSERT INTO event_registrations", {}, Exception("disk I/O error")
            )
        await flush(*args, **kwargs)

    monkeypatch.setattr(db_session, "flush", flush_failing_on_registration)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(InternalError):
            await write_model.register(event_id=event_id, user_id=user_id)

    assert await count_attendees(db_session, event_id) == 0
    assert await count_registrations(db_session, event_id) == 0
    assert "operation=register" in caplog.text
    assert f"event_id={event_id}" in caplog.text
    assert f"user_id={user_id}" in caplog.text


async def test_capacity_one_scenario(db_session, seed):
    university = await seed.university()
    club = await seed.club(university)
    event = await seed.event(club, max_attendees=1, registration_deadline=NOW + timedelta(days=1))
    user_a = await seed.user(university, name="A")
    user_b = await seed.user(university, name="B")
    register = SqlRegisterForEventWriteModel(session_overwrite=db_session, clock=fixed_clock)
    unregister = SqlUnregisterFromEventWriteModel(session_overwrite=db_session, clock=fixed_clock)

    await register.register(event_id=event.uuid, user_id=user_a.uuid)
    assert await count_attendees(db_session, event.uuid) == 1

    with pytest.raises(CapacityExceededError):
        await register.register(event_id=event.uuid, user_id=user_b.uuid)

    await unregister.unregister(event_id=event.uuid, user_id=user_a.uuid)
    assert await count_attendees(db_session, event.uuid) == 0
    assert await count_registrations(db_session, event.uuid, user_a.uuid) == 1

    await register.register(event_id=event.uuid, user_id=user_a.uuid)
    assert await count_attendees(db_session, event.uuid) == 1
    assert await count_registrations(db_session, event.uuid, user_a.uuid) == 2
