"""Builders shared by the event tests."""

from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from src.events.dtos import CallerDTO, EventDTO, EventStatus
from src.events.repository.orm_models import Attendee, Event
from src.models import Club, ClubMember, University, User, UserRole

# Fixed "now" for everything that depends on the clock
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


def caller_for(user: User) -> CallerDTO:
    return CallerDTO(
        id=user.uuid, role=UserRole(user.role), university_id=user.university_id, name=user.name
    )


class Seeder:
    """Builds rows for write and read model tests inside one session."""

    def __init__(self, session):
        self.session = session

    async def university(self, name: str = "State University") -> University:
        university = University(name=name, code=uuid4().hex[:8], location="Campus")
        self.session.add(university)
        await self.session.flush()
        return university

    async def user(
        self,
        university: University | None = None,
        role: UserRole = UserRole.STUDENT,
        name: str = "Ada Student",
    ) -> User:
        user = User(
            name=name,
            email=f"{uuid4().hex}@example.com",
            role=role,
            is_active=True,
            university=university,
            university_id=university.uuid if university else None,
        )
        self.session.add(user)
        await self.session.flush()
        return user

    async def club(
        self,
        university: University,
        president: User | None = None,
        members: list[User] | None = None,
        name: str = "Chess Club",
    ) -> Club:
        club = Club(
            name=name,
            category="Games",
            university=university,
            university_id=university.uuid,
            president_id=president.uuid if president else None,
            members=[ClubMember(user_id=member.uuid) for member in members or []],
        )
        self.session.add(club)
        await self.session.flush()
        return club

    async def event(self, club: Club, **fields) -> Event:
        values = {
            "title": "Spring Tournament",
            "description": "Open chess tournament",
            "event_type": "Competition",
            "start_date": NOW + timedelta(days=10),
            "end_date": NOW + timedelta(days=10, hours=4),
            "start_time": "09:00",
            "end_time": "17:00",
            "venue": "Hall A",
            "is_registration_required": True,
            "registration_deadline": NOW + timedelta(days=5),
            "registration_fee": 0,
            "tags": [],
            "is_public": True,
            "status": EventStatus.PUBLISHED,
        }
        values.update(fields)
        event = Event(
            club=club,
            club_id=club.uuid,
            university=club.university,
            university_id=club.university_id,
            organizers=[],
            attendees=[],
            reviews=[],
            **values,
        )
        self.session.add(event)
        await self.session.flush()
        return event

    async def attendee(self, event: Event, user: User, attended: bool = False) -> Attendee:
        attendee = Attendee(user_id=user.uuid, user=user, attended=attended)
        event.attendees.append(attendee)
        await self.session.flush()
        return attendee


def savepoint_session_manager(session):
    """Session manager that runs each write in a SAVEPOINT of the given session.

    An error rolls the SAVEPOINT back, like the default manager rolls back its
    own transaction, while rows seeded before the write stay visible.
    """

    @asynccontextmanager
    async def manager(auto_commit=True, session_overwrite=None):
        async with session.begin_nested():
            yield session

    return manager


def make_event_dto(**fields) -> EventDTO:
    values = {
        "id": uuid4(),
        "title": "Spring Tournament",
        "club_id": uuid4(),
        "university_id": uuid4(),
        "start_date": NOW + timedelta(days=10),
        "club_name": "Chess Club",
        "university_name": "State University",
        "is_registration_required": True,
    }
    values.update(fields)
    return EventDTO(**values)
