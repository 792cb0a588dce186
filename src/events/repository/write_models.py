"""Shared plumbing for the SQL write models of the event features."""

from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.events.clock import Clock, utcnow
from src.events.dtos import NotFoundError
from src.events.repository.orm_models import Event
from src.models.user import User


class SqlEventWriteModel:
    """Base for SQL write models. Returns DTOs, never ORM models."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.clock = clock

    async def _get_event(self, session, event_id: UUID, lock: bool = False) -> Event:
        """Load an event with its attendees and reviews, or raise NotFoundError.

        With lock=True the event row stays locked until the transaction ends,
        which serializes concurrent changes to the same event.
        """
        stmt = (
            select(Event)
            .where(Event.uuid == event_id)
            .execution_options(populate_existing=True)
        )
        if lock:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        event = result.scalar_one_or_none()
        if event is None:
            raise NotFoundError("Event not found")
        return event

    async def _get_user(self, session, user_id: UUID) -> User:
        result = await session.execute(select(User).where(User.uuid == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user


# SQLSTATE codes reported by PostgreSQL, message prefixes reported by SQLite
UNIQUE_VIOLATION = ("23505", "UNIQUE constraint failed")
CHECK_VIOLATION = ("23514", "CHECK constraint failed")


def _violates(error: IntegrityError, kind: tuple[str, str]) -> bool:
    sqlstate, sqlite_prefix = kind
    if getattr(error.orig, "sqlstate", None) == sqlstate:
        return True
    return str(error.orig).startswith(sqlite_prefix)


def is_unique_violation(error: IntegrityError, constraint: str, table: str) -> bool:
    """Whether the error is the given unique constraint failing.

    PostgreSQL names the constraint in its message, SQLite names the table.
    """
    if not _violates(error, UNIQUE_VIOLATION):
        return False
    message = str(error.orig)
    return constraint in message or f"{table}." in message


def is_check_violation(error: IntegrityError) -> bool:
    return _violates(error, CHECK_VIOLATION)
