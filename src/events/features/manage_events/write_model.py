"""Write model for creating, updating and deleting events.

Who may do what is decided by src.events.policy; this module only loads the
ownership facts the policy needs and applies the change.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from src.events.clock import as_utc
from src.events.dtos import (
    CallerDTO,
    ClubFactsDTO,
    ContactDTO,
    EventDTO,
    EventOwnershipDTO,
    EventStatus,
    EventValidationError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from src.events.policy import can_create_event, can_delete_event, can_update_event
from src.events.repository.orm_models import Event, Registration
from src.events.repository.write_models import SqlEventWriteModel
from src.models.club import Club

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventCreateDTO:
    """DTO for the fields of a new event."""

    title: str
    club_id: UUID
    start_date: datetime
    end_date: datetime | None = None
    description: str | None = None
    event_type: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    venue: str | None = None
    max_attendees: int | None = None
    is_registration_required: bool = False
    registration_deadline: datetime | None = None
    registration_fee: float | None = None
    requirements: str | None = None
    contact: ContactDTO = field(default_factory=ContactDTO)
    tags: list[str] = field(default_factory=list)
    is_public: bool = True


@dataclass(frozen=True)
class EventUpdateDTO:
    """DTO for a partial event update. None means leave unchanged."""

    title: str | None = None
    description: str | None = None
    event_type: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    start_time: str | None = None
    end_time: str | None = None
    venue: str | None = None
    max_attendees: int | None = None
    registration_fee: float | None = None
    registration_deadline: datetime | None = None
    is_registration_required: bool | None = None
    tags: list[str] | None = None
    poster: str | None = None


class ManageEventsWriteModel(ABC):
    @abstractmethod
    async def create_event(self, caller: CallerDTO, data: EventCreateDTO) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_event(
        self, caller: CallerDTO, event_id: UUID, changes: EventUpdateDTO
    ) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_event(self, caller: CallerDTO, event_id: UUID) -> None:
        raise NotImplementedError


class SqlManageEventsWriteModel(SqlEventWriteModel, ManageEventsWriteModel):
    async def create_event(self, caller: CallerDTO, data: EventCreateDTO) -> EventDTO:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                result = await session.execute(select(Club).where(Club.uuid == data.club_id))
                club = result.scalar_one_or_none()
                if club is None:
                    raise NotFoundError("Club not found")

                decision = can_create_event(caller, ClubFactsDTO.from_club(club))
                if not decision:
                    logger.info(
                        "Event creation denied for user %s on club %s: %s",
                        caller.id,
                        club.uuid,
                        decision.reason,
                    )
                    raise UnauthorizedError(decision.reason)

                start_date = as_utc(data.start_date)
                end_date = as_utc(data.end_date)
                _validate_schedule(start_date, end_date)
                creator = await self._get_user(session, caller.id)

                event = Event(
                    title=data.title,
                    description=data.description,
                    event_type=data.event_type,
                    club=club,
                    club_id=club.uuid,
                    university=club.university,
                    university_id=club.university_id,
                    start_date=start_date,
                    end_date=end_date,
                    start_time=data.start_time or "09:00",
                    end_time=data.end_time or "17:00",
                    venue=data.venue or "TBD",
                    max_attendees=data.max_attendees,
                    is_registration_required=data.is_registration_required,
                    registration_deadline=as_utc(data.registration_deadline),
                    registration_fee=data.registration_fee or 0,
                    requirements=data.requirements,
                    contact_name=data.contact.name,
                    contact_email=data.contact.email,
                    contact_phone=data.contact.phone,
                    tags=list(data.tags),
                    is_public=data.is_public,
                    status=EventStatus.PUBLISHED,
                    organizers=[creator],
                    attendees=[],
                    reviews=[],
                )
                session.add(event)
                await session.flush()
                event_dto = EventDTO.from_event(event)
        except SQLAlchemyError as e:
            logger.exception(
                "create_event failed: club_id=%s user_id=%s operation=create_event",
                data.club_id,
                caller.id,
            )
            raise InternalError("Error saving event") from e

        logger.info("Event %s created by user %s", event_dto.id, caller.id)
        return event_dto

    async def update_event(
        self, caller: CallerDTO, event_id: UUID, changes: EventUpdateDTO
    ) -> EventDTO:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                event = await self._get_event(session, event_id, lock=True)
                decision = can_update_event(caller, EventOwnershipDTO.from_event(event))
                if not decision:
                    raise UnauthorizedError(decision.reason)

                _apply_changes(event, changes)
                _validate_schedule(as_utc(event.start_date), as_utc(event.end_date))
                capacity = event.effective_capacity
                if capacity and len(event.attendees) > capacity:
                    raise EventValidationError(
                        "maxAttendees cannot be lower than the number of registered attendees"
                    )

                await session.flush()
                return EventDTO.from_event(event)
        except SQLAlchemyError as e:
            logger.exception(
                "update_event failed: event_id=%s user_id=%s operation=update_event",
                event_id,
                caller.id,
            )
            raise InternalError("Server error") from e

    async def delete_event(self, caller: CallerDTO, event_id: UUID) -> None:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                event = await self._get_event(session, event_id, lock=True)
                decision = can_delete_event(caller, EventOwnershipDTO.from_event(event))
                if not decision:
                    logger.info(
                        "Event deletion denied for user %s (%s) on event %s",
                        caller.id,
                        caller.role,
                        event_id,
                    )
                    raise UnauthorizedError(decision.reason)

                # the registration log outlives the event it points to
                await session.execute(
                    update(Registration)
                    .where(Registration.event_id == event.uuid)
                    .values(event_id=None)
                )
                await session.delete(event)
                await session.flush()
        except SQLAlchemyError as e:
            logger.exception(
                "delete_event failed: event_id=%s user_id=%s operation=delete_event",
                event_id,
                caller.id,
            )
            raise InternalError("Server error") from e

        logger.info("Event %s deleted by user %s", event_id, caller.id)


def _validate_schedule(start_date: datetime | None, end_date: datetime | None) -> None:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise EventValidationError("endDate must not be before startDate")


def _apply_changes(event: Event, changes: EventUpdateDTO) -> None:
    if changes.title:
        event.title = changes.title
    if changes.description:
        event.description = changes.description
    if changes.event_type:
        event.event_type = changes.event_type
    if changes.start_date:
        event.start_date = as_utc(changes.start_date)
    if changes.end_date:
        event.end_date = as_utc(changes.end_date)
    if changes.start_time:
        event.start_time = changes.start_time
    if changes.end_time:
        event.end_time = changes.end_time
    if changes.venue:
        event.venue = changes.venue
    if changes.max_attendees is not None:
        event.max_attendees = changes.max_attendees
    if changes.registration_fee is not None:
        event.registration_fee = changes.registration_fee
    if changes.registration_deadline:
        event.registration_deadline = as_utc(changes.registration_deadline)
    if changes.is_registration_required is not None:
        event.is_registration_required = changes.is_registration_required
    if changes.tags:
        event.tags = list(changes.tags)
    if changes.poster:
        event.poster = changes.poster
