from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from src.auth.dependencies import get_identity_read_model
from src.auth.read_model import IdentityReadModel, SqlIdentityReadModel
from src.auth.tokens import InvalidTokenError, create_access_token, decode_access_token
from src.events.dtos import CallerDTO
from src.events.features.browse_events.router import get_event_read_model
from src.events.repository.read_models import RegistrationReportRowDTO
from src.events.testing import NOW
from src.events.urls import REGISTRATIONS_REPORT_URL
from src.models.user import UserRole


class InMemoryIdentityReadModel(IdentityReadModel):
    def __init__(self, callers: dict[UUID, CallerDTO]):
        self.callers = callers

    async def get_caller(self, user_id: UUID) -> CallerDTO | None:
        return self.callers.get(user_id)


class InMemoryReportReadModel:
    async def list_registrations(self) -> list[RegistrationReportRowDTO]:
        return [
            RegistrationReportRowDTO(
                student_name="Ada",
                university="State University",
                event="Hackathon",
                registered_at=NOW,
            )
        ]


def test_token_round_trip():
    user_id = uuid4()
    assert decode_access_token(create_access_token(user_id)) == user_id


def test_expired_token_is_rejected():
    token = create_access_token(uuid4(), expires_delta=timedelta(minutes=-1))

    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidTokenError):
        decode_access_token("not-a-token")


async def test_bearer_token_resolves_caller(client_factory):
    caller = CallerDTO(id=uuid4(), role=UserRole.STUDENT, name="Ada")
    overrides = {
        get_identity_read_model: lambda: InMemoryIdentityReadModel({caller.id: caller}),
        get_event_read_model: lambda: InMemoryReportReadModel(),
    }
    headers = {"Authorization": f"Bearer {create_access_token(caller.id)}"}

    async with client_factory(overrides) as client:
        response = await client.get(REGISTRATIONS_REPORT_URL, headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "registrations": [
            {
                "studentName": "Ada",
                "university": "State University",
                "event": "Hackathon",
                "registeredAt": "2026-03-01T12:00:00Z",
            }
        ]
    }


async def test_token_for_unknown_user_is_rejected(client_factory):
    overrides = {
        get_identity_read_model: lambda: InMemoryIdentityReadModel({}),
        get_event_read_model: lambda: InMemoryReportReadModel(),
    }
    headers = {"Authorization": f"Bearer {create_access_token(uuid4())}"}

    async with client_factory(overrides) as client:
        response = await client.get(REGISTRATIONS_REPORT_URL, headers=headers)

    assert response.status_code == 401
    assert response.json() == {"detail": "Could not validate credentials"}


async def test_sql_identity_skips_inactive_users(db_session, seed):
    university = await seed.university()
    active = await seed.user(university, role=UserRole.CLUB_ADMIN, name="Active")
    inactive = await seed.user(university)
    inactive.is_active = False
    await db_session.flush()
    read_model = SqlIdentityReadModel(session_overwrite=db_session)

    caller = await read_model.get_caller(active.uuid)

    assert caller == CallerDTO(
        id=active.uuid, role=UserRole.CLUB_ADMIN, university_id=university.uuid, name="Active"
    )
    assert await read_model.get_caller(inactive.uuid) is None
    assert await read_model.get_caller(uuid4()) is None
