"""Response schemas shared by the event routers.

Field names are serialized in camelCase for the web client; request bodies
accept either camelCase or snake_case.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.events.dtos import (
    AttendeeDTO,
    EventDTO,
    EventPageDTO,
    EventStatus,
    RegistrationDTO,
    ReviewDTO,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AttendeeResponse(CamelModel):
    user_id: UUID
    attended: bool
    name: str | None = None
    email: str | None = None

    @classmethod
    def from_dto(cls, attendee: AttendeeDTO) -> "AttendeeResponse":
        return cls(
            user_id=attendee.user_id,
            attended=attendee.attended,
            name=attendee.name,
            email=attendee.email,
        )


class ReviewResponse(CamelModel):
    user_id: UUID
    rating: int
    comment: str | None = None
    user_name: str | None = None
    profile_picture: str | None = None

    @classmethod
    def from_dto(cls, review: ReviewDTO) -> "ReviewResponse":
        return cls(
            user_id=review.user_id,
            rating=review.rating,
            comment=review.comment,
            user_name=review.user_name,
            profile_picture=review.profile_picture,
        )


class ContactResponse(CamelModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class EventResponse(CamelModel):
    id: UUID
    title: str
    description: str | None = None
    event_type: str | None = None
    club_id: UUID
    club_name: str | None = None
    university_id: UUID
    university_name: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    start_time: str
    end_time: str
    venue: str
    max_attendees: int | None = None
    is_registration_required: bool
    # mirror of is_registration_required kept for older clients
    registration_required: bool
    registration_deadline: datetime | None = None
    registration_fee: float
    requirements: str | None = None
    contact_person: ContactResponse
    tags: list[str] = []
    poster: str | None = None
    is_public: bool
    status: EventStatus
    attendees: list[AttendeeResponse] = []
    reviews: list[ReviewResponse] = []
    organizers: list[UUID] = []

    @classmethod
    def from_dto(cls, event: EventDTO) -> "EventResponse":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            event_type=event.event_type,
            club_id=event.club_id,
            club_name=event.club_name,
            university_id=event.university_id,
            university_name=event.university_name,
            start_date=event.start_date,
            end_date=event.end_date,
            start_time=event.start_time,
            end_time=event.end_time,
            venue=event.venue,
            max_attendees=event.max_attendees,
            is_registration_required=event.is_registration_required,
            registration_required=event.is_registration_required,
            registration_deadline=event.registration_deadline,
            registration_fee=event.registration_fee,
            requirements=event.requirements,
            contact_person=ContactResponse(
                name=event.contact.name,
                email=event.contact.email,
                phone=event.contact.phone,
            ),
            tags=event.tags,
            poster=event.poster,
            is_public=event.is_public,
            status=event.status,
            attendees=[AttendeeResponse.from_dto(a) for a in event.attendees],
            reviews=[ReviewResponse.from_dto(r) for r in event.reviews],
            organizers=event.organizer_ids,
        )


class EventPageResponse(CamelModel):
    events: list[EventResponse]
    total_pages: int
    current_page: int
    total: int

    @classmethod
    def from_dto(cls, page: EventPageDTO) -> "EventPageResponse":
        return cls(
            events=[EventResponse.from_dto(e) for e in page.events],
            total_pages=page.total_pages,
            current_page=page.page,
            total=page.total,
        )


class EventEnvelope(CamelModel):
    event: EventResponse


class MessageResponse(CamelModel):
    message: str


class RegistrationResponse(CamelModel):
    id: UUID
    event_id: UUID | None = None
    event_title: str
    user_id: UUID
    student_name: str
    university_id: UUID | None = None
    university_name: str
    registered_at: datetime

    @classmethod
    def from_dto(cls, registration: RegistrationDTO) -> "RegistrationResponse":
        return cls(
            id=registration.id,
            event_id=registration.event_id,
            event_title=registration.event_title,
            user_id=registration.user_id,
            student_name=registration.student_name,
            university_id=registration.university_id,
            university_name=registration.university_name,
            registered_at=registration.registered_at,
        )
