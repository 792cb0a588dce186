"""Cross-checks between event attendee lists and the registration log.

The log is append-only, so a Registration without a live attendee is
normal. An attendee without any Registration means a write was lost.
"""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.events.repository.orm_models import Attendee, Event, Registration


@dataclass(frozen=True)
class UnloggedAttendeeDTO:
    event_id: UUID
    event_title: str
    user_id: UUID


async def find_attendees_without_registration(session: AsyncSession) -> list[UnloggedAttendeeDTO]:
    stmt = (
        select(Attendee.event_id, Event.title, Attendee.user_id)
        .join(Event, Event.uuid == Attendee.event_id)
        .outerjoin(
            Registration,
            and_(
                Registration.event_id == Attendee.event_id,
                Registration.user_id == Attendee.user_id,
            ),
        )
        .where(Registration.uuid.is_(None))
        .order_by(Event.title)
    )
    result = await session.execute(stmt)
    return [
        UnloggedAttendeeDTO(event_id=event_id, event_title=title, user_id=user_id)
        for event_id, title, user_id in result.all()
    ]
