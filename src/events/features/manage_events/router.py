from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.auth.dependencies import get_current_caller
from src.events.dtos import CallerDTO, ContactDTO
from src.events.features.manage_events.write_model import (
    EventCreateDTO,
    EventUpdateDTO,
    ManageEventsWriteModel,
    SqlManageEventsWriteModel,
)
from src.events.schemas import CamelModel, EventEnvelope, EventResponse, MessageResponse
from src.events.urls import EVENT_URL, EVENTS_URL

router = APIRouter()


class ContactInfo(CamelModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class EventCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    type: str | None = None
    organizer: UUID
    start_date: datetime
    end_date: datetime | None = None
    start_time: str | None = None
    end_time: str | None = None
    venue: str | None = None
    capacity: int | None = Field(default=None, ge=0)
    registration_required: bool = False
    registration_deadline: datetime | None = None
    entry_fee: float | None = Field(default=None, ge=0)
    requirements: str | None = None
    # older clients send a bare contact name
    contact_info: str | ContactInfo | None = None
    tags: list[str] = []
    is_public: bool = True

    def to_dto(self) -> EventCreateDTO:
        if isinstance(self.contact_info, str):
            contact = ContactDTO(name=self.contact_info)
        elif self.contact_info is not None:
            contact = ContactDTO(
                name=self.contact_info.name,
                email=self.contact_info.email,
                phone=self.contact_info.phone,
            )
        else:
            contact = ContactDTO()
        return EventCreateDTO(
            title=self.title,
            club_id=self.organizer,
            start_date=self.start_date,
            end_date=self.end_date,
            description=self.description,
            event_type=self.type,
            start_time=self.start_time,
            end_time=self.end_time,
            venue=self.venue,
            max_attendees=self.capacity,
            is_registration_required=self.registration_required,
            registration_deadline=self.registration_deadline,
            registration_fee=self.entry_fee,
            requirements=self.requirements,
            contact=contact,
            tags=list(self.tags),
            is_public=self.is_public,
        )


class EventUpdate(CamelModel):
    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    event_type: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    start_time: str | None = None
    end_time: str | None = None
    venue: str | None = None
    max_attendees: int | None = Field(default=None, ge=0)
    registration_fee: float | None = Field(default=None, ge=0)
    registration_deadline: datetime | None = None
    is_registration_required: bool | None = None
    tags: list[str] | None = None
    poster: str | None = None

    def to_dto(self) -> EventUpdateDTO:
        return EventUpdateDTO(**self.model_dump())


class EventCreatedResponse(CamelModel):
    message: str
    event: EventResponse


def get_manage_events_write_model() -> ManageEventsWriteModel:
    """Dependency to get event management write model instance."""
    return SqlManageEventsWriteModel()


@router.post(
    EVENTS_URL, response_model=EventCreatedResponse, status_code=status.HTTP_201_CREATED
)
async def create_event(
    body: EventCreate,
    caller: CallerDTO = Depends(get_current_caller),
    write_model: ManageEventsWriteModel = Depends(get_manage_events_write_model),
) -> EventCreatedResponse:
    """
    Create an event for a club.

    The club must belong to the caller's university. Administrators may
    create events for any such club, club admins only for clubs they preside
    and other users only for clubs they are a member of.
    """
    event = await write_model.create_event(caller=caller, data=body.to_dto())
    return EventCreatedResponse(
        message="Event created successfully", event=EventResponse.from_dto(event)
    )


@router.put(EVENT_URL, response_model=EventEnvelope)
async def update_event(
    event_id: UUID,
    body: EventUpdate,
    caller: CallerDTO = Depends(get_current_caller),
    write_model: ManageEventsWriteModel = Depends(get_manage_events_write_model),
) -> EventEnvelope:
    """Update an event. Club president or administrator only."""
    event = await write_model.update_event(
        caller=caller, event_id=event_id, changes=body.to_dto()
    )
    return EventEnvelope(event=EventResponse.from_dto(event))


@router.delete(EVENT_URL, response_model=MessageResponse)
async def delete_event(
    event_id: UUID,
    caller: CallerDTO = Depends(get_current_caller),
    write_model: ManageEventsWriteModel = Depends(get_manage_events_write_model),
) -> MessageResponse:
    """Delete an event with its attendees and reviews. The registration log is kept."""
    await write_model.delete_event(caller=caller, event_id=event_id)
    return MessageResponse(message="Event deleted successfully")
