from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.auth.dependencies import get_current_caller, get_optional_caller
from src.config.settings import settings
from src.events.dtos import CallerDTO, EventFiltersDTO, NotFoundError
from src.events.repository.read_models import EventReadModel, SqlEventReadModel
from src.events.schemas import EventPageResponse, EventResponse
from src.events.urls import (
    CLUB_EVENTS_URL,
    EVENT_URL,
    EVENTS_URL,
    MANAGED_EVENTS_URL,
    MY_REGISTRATIONS_URL,
)

router = APIRouter()


def get_event_read_model() -> EventReadModel:
    """Dependency to get event read model instance."""
    return SqlEventReadModel()


def _clamp_limit(limit: int | None) -> int:
    if not limit:
        return settings.default_page_size
    return min(limit, settings.max_page_size)


@router.get(EVENTS_URL, response_model=EventPageResponse)
async def list_events(
    search: str | None = None,
    type: str | None = None,
    club: UUID | None = None,
    university: UUID | None = None,
    upcoming: bool = True,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    caller: CallerDTO | None = Depends(get_optional_caller),
    read_model: EventReadModel = Depends(get_event_read_model),
) -> EventPageResponse:
    """
    Browse the event directory.

    Anonymous callers only see public events. Signed-in callers also see the
    private events of their own university.
    """
    filters = EventFiltersDTO(
        search=search,
        event_type=type,
        club_id=club,
        university_id=university,
        upcoming=upcoming,
        page=page,
        limit=_clamp_limit(limit),
    )
    event_page = await read_model.list_events(filters, caller=caller)
    return EventPageResponse.from_dto(event_page)


@router.get(MANAGED_EVENTS_URL, response_model=list[EventResponse])
async def list_managed_events(
    caller: CallerDTO = Depends(get_current_caller),
    read_model: EventReadModel = Depends(get_event_read_model),
) -> list[EventResponse]:
    """Events of the clubs the caller presides."""
    events = await read_model.list_managed_events(caller)
    return [EventResponse.from_dto(event) for event in events]


@router.get(MY_REGISTRATIONS_URL, response_model=list[EventResponse])
async def list_my_registrations(
    caller: CallerDTO = Depends(get_current_caller),
    read_model: EventReadModel = Depends(get_event_read_model),
) -> list[EventResponse]:
    events = await read_model.list_registered_events(caller.id)
    return [EventResponse.from_dto(event) for event in events]


@router.get(CLUB_EVENTS_URL, response_model=EventPageResponse)
async def list_club_events(
    club_id: UUID,
    upcoming: bool = True,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    read_model: EventReadModel = Depends(get_event_read_model),
) -> EventPageResponse:
    event_page = await read_model.list_club_events(
        club_id, upcoming=upcoming, page=page, limit=_clamp_limit(limit)
    )
    return EventPageResponse.from_dto(event_page)


@router.get(EVENT_URL, response_model=EventResponse)
async def get_event(
    event_id: UUID,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> EventResponse:
    event = await read_model.get_event(event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return EventResponse.from_dto(event)
