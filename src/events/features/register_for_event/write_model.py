"""Write model for registering a user for an event.

Appends the user to the event's attendee list and records the act in the
registration log. Both writes happen in one transaction while the event row
is locked, so the capacity and duplicate checks cannot be raced.
"""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.config.settings import settings
from src.config.table_names import TableNames
from src.events.dtos import DuplicateRegistrationError, InternalError, RegistrationDTO
from src.events.repository.orm_models import Attendee, Event, Registration
from src.events.repository.write_models import SqlEventWriteModel, is_unique_violation
from src.events.rules import ensure_can_register
from src.models.university import University
from src.models.user import User

logger = logging.getLogger(__name__)


class RegisterForEventWriteModel(ABC):
    @abstractmethod
    async def register(self, event_id: UUID, user_id: UUID) -> RegistrationDTO:
        """Register a user for an event.

        Raises:
            NotFoundError: the event does not exist
            InvalidOperationError: the event does not take registrations
            DeadlinePassedError: the registration deadline has passed
            CapacityExceededError: the event is full
            DuplicateRegistrationError: the user is already an attendee
            InternalError: the store failed, nothing was written
        """
        raise NotImplementedError


class SqlRegisterForEventWriteModel(SqlEventWriteModel, RegisterForEventWriteModel):
    """SQL implementation of event registration."""

    async def register(self, event_id: UUID, user_id: UUID) -> RegistrationDTO:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                event = await self._get_event(session, event_id, lock=True)
                ensure_can_register(event, user_id, now=self.clock())
                user = await self._get_user(session, user_id)

                event.attendees.append(Attendee(user_id=user.uuid, user=user, attended=False))
                await session.flush()

                university_name = await self._resolve_university_name(session, event, user)
                registration = Registration(
                    event_id=event.uuid,
                    event_title=event.title or "Unknown Event",
                    user_id=user.uuid,
                    student_name=user.name,
                    university_id=user.university_id or event.university_id,
                    university_name=university_name,
                    registered_at=self.clock(),
                )
                session.add(registration)
                await session.flush()

                registration_dto = RegistrationDTO.from_registration(registration)
        except IntegrityError as e:
            if is_unique_violation(
                e, "uq_event_attendees_event_user", TableNames.EVENT_ATTENDEES.value
            ):
                # A concurrent request added the same attendee first
                raise DuplicateRegistrationError() from e
            self._log_failure(event_id, user_id)
            raise InternalError("Registration failed. Please try again.") from e
        except SQLAlchemyError as e:
            self._log_failure(event_id, user_id)
            raise InternalError("Registration failed. Please try again.") from e

        logger.info("User %s registered for event %s", user_id, event_id)
        return registration_dto

    def _log_failure(self, event_id: UUID, user_id: UUID) -> None:
        logger.exception(
            "register failed: event_id=%s user_id=%s operation=register", event_id, user_id
        )

    async def _resolve_university_name(self, session, event: Event, user: User) -> str:
        """Pick the organization name stored on the registration log entry."""
        if event.university and event.university.name:
            return event.university.name
        if user.university and user.university.name:
            return user.university.name
        if event.university_id:
            university = await session.get(University, event.university_id)
            if university is not None and university.name:
                return university.name
        return settings.unknown_university_name
