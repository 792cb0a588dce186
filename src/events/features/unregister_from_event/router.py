from uuid import UUID

from fastapi import APIRouter, Depends

from src.auth.dependencies import get_current_caller
from src.events.dtos import CallerDTO
from src.events.features.unregister_from_event.write_model import (
    SqlUnregisterFromEventWriteModel,
    UnregisterFromEventWriteModel,
)
from src.events.schemas import MessageResponse
from src.events.urls import UNREGISTER_URL

router = APIRouter()


def get_unregister_write_model() -> UnregisterFromEventWriteModel:
    """Dependency to get unregister write model instance."""
    return SqlUnregisterFromEventWriteModel()


@router.post(UNREGISTER_URL, response_model=MessageResponse)
async def unregister_from_event(
    event_id: UUID,
    caller: CallerDTO = Depends(get_current_caller),
    write_model: UnregisterFromEventWriteModel = Depends(get_unregister_write_model),
) -> MessageResponse:
    """Leave an event the caller registered for, as long as it has not started."""
    await write_model.unregister(event_id=event_id, user_id=caller.id)
    return MessageResponse(message="Successfully unregistered from the event")
