from datetime import datetime

from fastapi import APIRouter, Depends

from src.auth.dependencies import get_current_caller
from src.events.dtos import CallerDTO
from src.events.features.browse_events.router import get_event_read_model
from src.events.repository.read_models import EventReadModel
from src.events.schemas import CamelModel
from src.events.urls import REGISTRATIONS_REPORT_URL

router = APIRouter()


class RegistrationReportRow(CamelModel):
    student_name: str
    university: str | None = None
    event: str | None = None
    registered_at: datetime


class RegistrationReportResponse(CamelModel):
    registrations: list[RegistrationReportRow]


@router.get(REGISTRATIONS_REPORT_URL, response_model=RegistrationReportResponse)
async def list_registrations(
    caller: CallerDTO = Depends(get_current_caller),
    read_model: EventReadModel = Depends(get_event_read_model),
) -> RegistrationReportResponse:
    """Every registration ever made, including those later withdrawn."""
    rows = await read_model.list_registrations()
    return RegistrationReportResponse(
        registrations=[
            RegistrationReportRow(
                student_name=row.student_name,
                university=row.university,
                event=row.event,
                registered_at=row.registered_at,
            )
            for row in rows
        ]
    )
