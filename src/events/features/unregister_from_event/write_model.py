"""Write model for leaving an event before it starts.

Only the attendee entry is removed. The registration log keeps the entry of
the original registration: it records that the act happened, not who is
registered now.
"""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.events.dtos import InternalError
from src.events.repository.write_models import SqlEventWriteModel
from src.events.rules import ensure_can_unregister

logger = logging.getLogger(__name__)


class UnregisterFromEventWriteModel(ABC):
    @abstractmethod
    async def unregister(self, event_id: UUID, user_id: UUID) -> None:
        """Remove a user from an event's attendees.

        Raises:
            NotFoundError: the event does not exist or the user is not an attendee
            InvalidOperationError: the event has already started
        """
        raise NotImplementedError


class SqlUnregisterFromEventWriteModel(SqlEventWriteModel, UnregisterFromEventWriteModel):
    """SQL implementation of leaving an event."""

    async def unregister(self, event_id: UUID, user_id: UUID) -> None:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                event = await self._get_event(session, event_id, lock=True)
                attendee = ensure_can_unregister(event, user_id, now=self.clock())
                event.attendees.remove(attendee)
                await session.flush()
        except SQLAlchemyError as e:
            logger.exception(
                "unregister failed: event_id=%s user_id=%s operation=unregister",
                event_id,
                user_id,
            )
            raise InternalError("Server error") from e

        logger.info("User %s unregistered from event %s", user_id, event_id)
