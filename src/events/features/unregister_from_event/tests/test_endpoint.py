from uuid import UUID, uuid4

from src.auth.dependencies import get_current_caller
from src.events.dtos import CallerDTO, InvalidOperationError, NotFoundError
from src.events.features.unregister_from_event.router import get_unregister_write_model
from src.events.features.unregister_from_event.write_model import UnregisterFromEventWriteModel
from src.events.urls import UNREGISTER_URL
from src.models.user import UserRole


class InMemoryUnregisterWriteModel(UnregisterFromEventWriteModel):
    """In-memory write model for testing."""

    def __init__(self, attendees: dict[UUID, set[UUID]], started: set[UUID] | None = None):
        self.attendees = attendees
        self.started = started or set()

    async def unregister(self, event_id: UUID, user_id: UUID) -> None:
        if event_id not in self.attendees:
            raise NotFoundError("Event not found")
        if event_id in self.started:
            raise InvalidOperationError("Cannot unregister from an event that has already started")
        if user_id not in self.attendees[event_id]:
            raise NotFoundError("You are not registered for this event")
        self.attendees[event_id].remove(user_id)


async def test_unregister_success(client_factory):
    caller = CallerDTO(id=uuid4(), role=UserRole.STUDENT)
    event_id = uuid4()
    write_model = InMemoryUnregisterWriteModel({event_id: {caller.id}})
    overrides = {
        get_current_caller: lambda: caller,
        get_unregister_write_model: lambda: write_model,
    }

    async with client_factory(overrides) as client:
        response = await client.post(UNREGISTER_URL.format(event_id=event_id))

    assert response.status_code == 200
    assert response.json() == {"message": "Successfully unregistered from the event"}
    assert write_model.attendees[event_id] == set()


async def test_unregister_started_event(client_factory):
    caller = CallerDTO(id=uuid4(), role=UserRole.STUDENT)
    event_id = uuid4()
    write_model = InMemoryUnregisterWriteModel({event_id: {caller.id}}, started={event_id})
    overrides = {
        get_current_caller: lambda: caller,
        get_unregister_write_model: lambda: write_model,
    }

    async with client_factory(overrides) as client:
        response = await client.post(UNREGISTER_URL.format(event_id=event_id))

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_operation"
    assert caller.id in write_model.attendees[event_id]


async def test_unregister_not_registered(client_factory):
    caller = CallerDTO(id=uuid4(), role=UserRole.STUDENT)
    event_id = uuid4()
    write_model = InMemoryUnregisterWriteModel({event_id: set()})
    overrides = {
        get_current_caller: lambda: caller,
        get_unregister_write_model: lambda: write_model,
    }

    async with client_factory(overrides) as client:
        response = await client.post(UNREGISTER_URL.format(event_id=event_id))

    assert response.status_code == 404
    assert response.json() == {
        "message": "You are not registered for this event",
        "error": "not_found",
    }
