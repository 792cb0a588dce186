from dataclasses import replace
from uuid import UUID, uuid4

from src.auth.dependencies import get_current_caller
from src.events.dtos import (
    AttendeeDTO,
    CallerDTO,
    EventDTO,
    NotFoundError,
    UnauthorizedError,
)
from src.events.features.manage_attendees.router import get_manage_attendees_write_model
from src.events.features.manage_attendees.write_model import ManageAttendeesWriteModel
from src.events.testing import make_event_dto
from src.events.urls import ATTENDANCE_URL, ATTENDEE_URL
from src.models.user import UserRole


class InMemoryManageAttendeesWriteModel(ManageAttendeesWriteModel):
    """In-memory write model for testing."""

    def __init__(self, event: EventDTO, president_id: UUID):
        self.event = event
        self.president_id = president_id

    def _check(self, event_id: UUID, caller: CallerDTO, user_id: UUID) -> None:
        if event_id != self.event.id:
            raise NotFoundError("Event not found")
        if caller.id != self.president_id and not caller.is_admin:
            raise UnauthorizedError("Not authorized to manage attendees for this event")
        if all(a.user_id != user_id for a in self.event.attendees):
            raise NotFoundError("Attendee not found in this event")

    async def mark_attendance(
        self, event_id: UUID, caller: CallerDTO, user_id: UUID, attended: bool
    ) -> EventDTO:
        self._check(event_id, caller, user_id)
        attendees = [
            replace(a, attended=attended) if a.user_id == user_id else a
            for a in self.event.attendees
        ]
        self.event = replace(self.event, attendees=attendees)
        return self.event

    async def remove_attendee(self, event_id: UUID, caller: CallerDTO, user_id: UUID) -> EventDTO:
        self._check(event_id, caller, user_id)
        attendees = [a for a in self.event.attendees if a.user_id != user_id]
        self.event = replace(self.event, attendees=attendees)
        return self.event


def setup(caller_role: UserRole = UserRole.CLUB_ADMIN, is_president: bool = True):
    caller = CallerDTO(id=uuid4(), role=caller_role)
    student_id = uuid4()
    event = make_event_dto(attendees=[AttendeeDTO(user_id=student_id, name="Student")])
    write_model = InMemoryManageAttendeesWriteModel(
        event, president_id=caller.id if is_president else uuid4()
    )
    overrides = {
        get_current_caller: lambda: caller,
        get_manage_attendees_write_model: lambda: write_model,
    }
    return event, student_id, overrides


async def test_mark_attendance(client_factory):
    event, student_id, overrides = setup()

    async with client_factory(overrides) as client:
        response = await client.put(
            ATTENDANCE_URL.format(event_id=event.id, user_id=student_id),
            json={"attended": True},
        )

    assert response.status_code == 200
    attendees = response.json()["event"]["attendees"]
    assert attendees == [
        {"userId": str(student_id), "attended": True, "name": "Student", "email": None}
    ]


async def test_mark_attendance_not_president(client_factory):
    event, student_id, overrides = setup(UserRole.STUDENT, is_president=False)

    async with client_factory(overrides) as client:
        response = await client.put(
            ATTENDANCE_URL.format(event_id=event.id, user_id=student_id),
            json={"attended": True},
        )

    assert response.status_code == 403
    assert response.json()["error"] == "unauthorized"


async def test_mark_attendance_requires_flag(client_factory):
    event, student_id, overrides = setup()

    async with client_factory(overrides) as client:
        response = await client.put(
            ATTENDANCE_URL.format(event_id=event.id, user_id=student_id), json={}
        )

    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


async def test_remove_attendee(client_factory):
    event, student_id, overrides = setup(UserRole.ADMINISTRATOR, is_president=False)

    async with client_factory(overrides) as client:
        response = await client.delete(ATTENDEE_URL.format(event_id=event.id, user_id=student_id))

    assert response.status_code == 200
    assert response.json()["event"]["attendees"] == []


async def test_remove_unknown_attendee(client_factory):
    event, _, overrides = setup()

    async with client_factory(overrides) as client:
        response = await client.delete(ATTENDEE_URL.format(event_id=event.id, user_id=uuid4()))

    assert response.status_code == 404
    assert response.json()["message"] == "Attendee not found in this event"
