"""Write model for the club president's attendee list tools."""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.events.dtos import (
    CallerDTO,
    EventDTO,
    EventOwnershipDTO,
    InternalError,
    UnauthorizedError,
)
from src.events.policy import can_manage_attendees
from src.events.repository.orm_models import Event
from src.events.repository.write_models import SqlEventWriteModel
from src.events.rules import get_attendee_or_404

logger = logging.getLogger(__name__)


class ManageAttendeesWriteModel(ABC):
    @abstractmethod
    async def mark_attendance(
        self, event_id: UUID, caller: CallerDTO, user_id: UUID, attended: bool
    ) -> EventDTO:
        """Set the attended flag of one attendee."""
        raise NotImplementedError

    @abstractmethod
    async def remove_attendee(self, event_id: UUID, caller: CallerDTO, user_id: UUID) -> EventDTO:
        """Remove one attendee entry. The registration log is left alone."""
        raise NotImplementedError


class SqlManageAttendeesWriteModel(SqlEventWriteModel, ManageAttendeesWriteModel):
    async def mark_attendance(
        self, event_id: UUID, caller: CallerDTO, user_id: UUID, attended: bool
    ) -> EventDTO:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                event = await self._get_event(session, event_id)
                self._authorize(event, caller)
                attendee = get_attendee_or_404(event, user_id)
                attendee.attended = attended
                await session.flush()
                return EventDTO.from_event(event)
        except SQLAlchemyError as e:
            logger.exception(
                "mark_attendance failed: event_id=%s user_id=%s operation=mark_attendance",
                event_id,
                user_id,
            )
            raise InternalError("Server error") from e

    async def remove_attendee(self, event_id: UUID, caller: CallerDTO, user_id: UUID) -> EventDTO:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                event = await self._get_event(session, event_id, lock=True)
                self._authorize(event, caller)
                attendee = get_attendee_or_404(event, user_id)
                event.attendees.remove(attendee)
                await session.flush()
                return EventDTO.from_event(event)
        except SQLAlchemyError as e:
            logger.exception(
                "remove_attendee failed: event_id=%s user_id=%s operation=remove_attendee",
                event_id,
                user_id,
            )
            raise InternalError("Server error") from e

    def _authorize(self, event: Event, caller: CallerDTO) -> None:
        decision = can_manage_attendees(caller, EventOwnershipDTO.from_event(event))
        if not decision:
            raise UnauthorizedError(decision.reason)
