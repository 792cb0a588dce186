from uuid import UUID

from fastapi import APIRouter, Depends

from src.auth.dependencies import get_current_caller
from src.events.dtos import CallerDTO
from src.events.features.manage_attendees.write_model import (
    ManageAttendeesWriteModel,
    SqlManageAttendeesWriteModel,
)
from src.events.schemas import CamelModel, EventEnvelope, EventResponse
from src.events.urls import ATTENDANCE_URL, ATTENDEE_URL

router = APIRouter()


class AttendanceSubmit(CamelModel):
    attended: bool


def get_manage_attendees_write_model() -> ManageAttendeesWriteModel:
    """Dependency to get attendee management write model instance."""
    return SqlManageAttendeesWriteModel()


@router.put(ATTENDANCE_URL, response_model=EventEnvelope)
async def mark_attendance(
    event_id: UUID,
    user_id: UUID,
    body: AttendanceSubmit,
    caller: CallerDTO = Depends(get_current_caller),
    write_model: ManageAttendeesWriteModel = Depends(get_manage_attendees_write_model),
) -> EventEnvelope:
    """Mark whether an attendee showed up. Club president or administrator only."""
    event = await write_model.mark_attendance(
        event_id=event_id, caller=caller, user_id=user_id, attended=body.attended
    )
    return EventEnvelope(event=EventResponse.from_dto(event))


@router.delete(ATTENDEE_URL, response_model=EventEnvelope)
async def remove_attendee(
    event_id: UUID,
    user_id: UUID,
    caller: CallerDTO = Depends(get_current_caller),
    write_model: ManageAttendeesWriteModel = Depends(get_manage_attendees_write_model),
) -> EventEnvelope:
    """Remove an attendee from an event. Club president or administrator only."""
    event = await write_model.remove_attendee(event_id=event_id, caller=caller, user_id=user_id)
    return EventEnvelope(event=EventResponse.from_dto(event))
