from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.auth.dependencies import get_current_caller
from src.events.dtos import CallerDTO
from src.events.features.register_for_event.write_model import (
    RegisterForEventWriteModel,
    SqlRegisterForEventWriteModel,
)
from src.events.schemas import CamelModel, RegistrationResponse
from src.events.urls import REGISTER_URL

router = APIRouter()


class RegisterResponse(CamelModel):
    message: str
    registration: RegistrationResponse


def get_register_write_model() -> RegisterForEventWriteModel:
    """Dependency to get register write model instance."""
    return SqlRegisterForEventWriteModel()


@router.post(REGISTER_URL, response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register_for_event(
    event_id: UUID,
    caller: CallerDTO = Depends(get_current_caller),
    write_model: RegisterForEventWriteModel = Depends(get_register_write_model),
) -> RegisterResponse:
    """
    Register the caller for an event.

    Fails when the event takes no registrations, the deadline has passed,
    the event is full or the caller is already registered.
    """
    registration = await write_model.register(event_id=event_id, user_id=caller.id)
    return RegisterResponse(
        message="Registered successfully",
        registration=RegistrationResponse.from_dto(registration),
    )
