import abc
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.events.clock import Clock, utcnow
from src.events.dtos import (
    CallerDTO,
    EventDTO,
    EventFiltersDTO,
    EventPageDTO,
    ReviewDTO,
)
from src.events.repository.orm_models import Attendee, Event, Registration, Review
from src.models.club import Club


@dataclass(frozen=True)
class RegistrationReportRowDTO:
    """One line of the registration report."""

    student_name: str
    university: str | None
    event: str | None
    registered_at: datetime


class EventReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_events(
        self, filters: EventFiltersDTO, caller: CallerDTO | None = None
    ) -> EventPageDTO:
        """
        Browse the event directory.
        Anonymous callers see public events only, signed-in callers also see
        the private events of their own university.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def get_event(self, event_id: UUID) -> EventDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_club_events(
        self, club_id: UUID, upcoming: bool, page: int, limit: int
    ) -> EventPageDTO:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_managed_events(self, caller: CallerDTO) -> list[EventDTO]:
        """Events of the clubs the caller presides, newest first."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_registered_events(self, user_id: UUID) -> list[EventDTO]:
        """Events the user is currently an attendee of."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_reviews(self, event_id: UUID) -> list[ReviewDTO] | None:
        """Reviews of an event, or None when the event does not exist."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_registrations(self) -> list[RegistrationReportRowDTO]:
        raise NotImplementedError


class SqlEventReadModel(EventReadModel):
    """SQL implementation of event read model."""

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.clock = clock

    async def list_events(
        self, filters: EventFiltersDTO, caller: CallerDTO | None = None
    ) -> EventPageDTO:
        if caller is not None:
            conditions = [
                or_(
                    Event.is_public.is_(True),
                    and_(
                        Event.is_public.is_(False),
                        Event.university_id == caller.university_id,
                    ),
                )
            ]
        else:
            conditions = [Event.is_public.is_(True)]

        if filters.university_id:
            conditions.append(Event.university_id == filters.university_id)
        if filters.event_type and filters.event_type != "All":
            conditions.append(Event.event_type == filters.event_type)
        if filters.club_id:
            conditions.append(Event.club_id == filters.club_id)
        if filters.search:
            pattern = f"%{filters.search}%"
            conditions.append(or_(Event.title.ilike(pattern), Event.description.ilike(pattern)))
        if filters.upcoming:
            conditions.append(Event.start_date >= self.clock())

        return await self._page(conditions, filters.page, filters.limit)

    async def get_event(self, event_id: UUID) -> EventDTO | None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(Event).where(Event.uuid == event_id))
            event = result.scalar_one_or_none()
            if event is None:
                return None
            return EventDTO.from_event(event)

    async def list_club_events(
        self, club_id: UUID, upcoming: bool, page: int, limit: int
    ) -> EventPageDTO:
        conditions = [Event.club_id == club_id]
        if upcoming:
            conditions.append(Event.start_date >= self.clock())
        return await self._page(conditions, page, limit)

    async def list_managed_events(self, caller: CallerDTO) -> list[EventDTO]:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(Event)
                .join(Club, Event.club_id == Club.uuid)
                .where(Club.president_id == caller.id)
                .order_by(Event.start_date.desc())
            )
            result = await session.execute(stmt)
            return [EventDTO.from_event(event) for event in result.scalars().all()]

    async def list_registered_events(self, user_id: UUID) -> list[EventDTO]:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(Event)
                .join(Attendee, Attendee.event_id == Event.uuid)
                .where(Attendee.user_id == user_id)
                .order_by(Event.start_date.asc())
            )
            result = await session.execute(stmt)
            return [EventDTO.from_event(event) for event in result.scalars().all()]

    async def get_reviews(self, event_id: UUID) -> list[ReviewDTO] | None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            exists_stmt = select(Event.uuid).where(Event.uuid == event_id)
            if (await session.execute(exists_stmt)).scalar_one_or_none() is None:
                return None

            stmt = (
                select(Review).where(Review.event_id == event_id).order_by(Review.created_at)
            )
            result = await session.execute(stmt)
            return [ReviewDTO.from_review(review) for review in result.scalars().all()]

    async def list_registrations(self) -> list[RegistrationReportRowDTO]:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = select(Registration).order_by(Registration.registered_at.asc())
            result = await session.execute(stmt)
            return [
                RegistrationReportRowDTO(
                    student_name=registration.student_name,
                    university=registration.university_name,
                    event=registration.event_title,
                    registered_at=registration.registered_at,
                )
                for registration in result.scalars().all()
            ]

    async def _page(self, conditions: list, page: int, limit: int) -> EventPageDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            count_stmt = select(func.count()).select_from(Event).where(*conditions)
            total = (await session.execute(count_stmt)).scalar_one()

            stmt = (
                select(Event)
                .where(*conditions)
                .order_by(Event.start_date.asc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            result = await session.execute(stmt)
            events = [EventDTO.from_event(event) for event in result.scalars().all()]

        return EventPageDTO(events=events, total=total, page=page, limit=limit)
