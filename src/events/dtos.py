from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from src.models.user import UserRole

if TYPE_CHECKING:
    from src.events.repository.orm_models import Attendee, Event, Registration, Review
    from src.models.club import Club


class EventActionError(Exception):
    """Base class for every rejected event action."""

    status_code = 400
    code = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(EventActionError):
    status_code = 404
    code = "not_found"


class UnauthorizedError(EventActionError):
    status_code = 403
    code = "unauthorized"


class InvalidOperationError(EventActionError):
    status_code = 400
    code = "invalid_operation"


class DeadlinePassedError(InvalidOperationError):
    code = "deadline_passed"

    def __init__(self) -> None:
        super().__init__("Registration deadline has passed")


class CapacityExceededError(EventActionError):
    status_code = 409
    code = "capacity_exceeded"

    def __init__(self) -> None:
        super().__init__("Event is at full capacity")


class DuplicateRegistrationError(EventActionError):
    status_code = 409
    code = "duplicate_registration"

    def __init__(self) -> None:
        super().__init__("You have already registered for this event.")


class DuplicateReviewError(EventActionError):
    status_code = 409
    code = "duplicate_review"

    def __init__(self) -> None:
        super().__init__("You already reviewed this event")


class EventValidationError(EventActionError):
    status_code = 422
    code = "validation_error"


class InternalError(EventActionError):
    status_code = 500
    code = "internal_error"


class EventStatus(str, Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class CallerDTO:
    """Verified identity of the user making a request."""

    id: UUID
    role: UserRole
    university_id: UUID | None = None
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMINISTRATOR


@dataclass(frozen=True)
class ClubFactsDTO:
    """Ownership facts about a club, as needed by the authorization policy."""

    club_id: UUID
    university_id: UUID
    president_id: UUID | None = None
    member_ids: frozenset[UUID] = frozenset()

    @classmethod
    def from_club(cls, club: "Club") -> "ClubFactsDTO":
        return cls(
            club_id=club.uuid,
            university_id=club.university_id,
            president_id=club.president_id,
            member_ids=frozenset(member.user_id for member in club.members),
        )


@dataclass(frozen=True)
class EventOwnershipDTO:
    """Ownership facts about an event, as needed by the authorization policy."""

    event_id: UUID
    club_president_id: UUID | None = None
    organizer_ids: frozenset[UUID] = frozenset()

    @classmethod
    def from_event(cls, event: "Event") -> "EventOwnershipDTO":
        return cls(
            event_id=event.uuid,
            club_president_id=event.club.president_id if event.club else None,
            organizer_ids=frozenset(organizer.uuid for organizer in event.organizers),
        )


@dataclass(frozen=True)
class AttendeeDTO:
    user_id: UUID
    attended: bool = False
    name: str | None = None
    email: str | None = None

    @classmethod
    def from_attendee(cls, attendee: "Attendee") -> "AttendeeDTO":
        user = attendee.user
        return cls(
            user_id=attendee.user_id,
            attended=attendee.attended,
            name=user.name if user else None,
            email=user.email if user else None,
        )


@dataclass(frozen=True)
class ReviewDTO:
    user_id: UUID
    rating: int
    comment: str | None = None
    user_name: str | None = None
    profile_picture: str | None = None

    @classmethod
    def from_review(cls, review: "Review") -> "ReviewDTO":
        user = review.user
        return cls(
            user_id=review.user_id,
            rating=review.rating,
            comment=review.comment,
            user_name=user.name if user else None,
            profile_picture=user.profile_picture if user else None,
        )


@dataclass(frozen=True)
class ContactDTO:
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class EventDTO:
    """DTO for an event with its embedded attendee and review lists."""

    id: UUID
    title: str
    club_id: UUID
    university_id: UUID
    start_date: datetime
    end_date: datetime | None = None
    description: str | None = None
    event_type: str | None = None
    club_name: str | None = None
    university_name: str | None = None
    start_time: str = "09:00"
    end_time: str = "17:00"
    venue: str = "TBD"
    max_attendees: int | None = None
    is_registration_required: bool = False
    registration_deadline: datetime | None = None
    registration_fee: float = 0
    requirements: str | None = None
    contact: ContactDTO = field(default_factory=ContactDTO)
    tags: list[str] = field(default_factory=list)
    poster: str | None = None
    is_public: bool = True
    status: EventStatus = EventStatus.PUBLISHED
    attendees: list[AttendeeDTO] = field(default_factory=list)
    reviews: list[ReviewDTO] = field(default_factory=list)
    organizer_ids: list[UUID] = field(default_factory=list)

    @classmethod
    def from_event(cls, event: "Event") -> "EventDTO":
        """Create EventDTO from Event ORM model."""
        return cls(
            id=event.uuid,
            title=event.title,
            description=event.description,
            event_type=event.event_type,
            club_id=event.club_id,
            club_name=event.club.name if event.club else None,
            university_id=event.university_id,
            university_name=event.university.name if event.university else None,
            start_date=event.start_date,
            end_date=event.end_date,
            start_time=event.start_time,
            end_time=event.end_time,
            venue=event.venue,
            max_attendees=event.effective_capacity,
            is_registration_required=event.is_registration_required,
            registration_deadline=event.registration_deadline,
            registration_fee=float(event.registration_fee or 0),
            requirements=event.requirements,
            contact=ContactDTO(
                name=event.contact_name or "",
                email=event.contact_email or "",
                phone=event.contact_phone or "",
            ),
            tags=list(event.tags or []),
            poster=event.poster,
            is_public=event.is_public,
            status=EventStatus(event.status),
            attendees=[AttendeeDTO.from_attendee(a) for a in event.attendees],
            reviews=[ReviewDTO.from_review(r) for r in event.reviews],
            organizer_ids=[organizer.uuid for organizer in event.organizers],
        )


@dataclass(frozen=True)
class RegistrationDTO:
    """DTO for one act of registering, as kept in the registration log."""

    id: UUID
    event_id: UUID | None
    event_title: str
    user_id: UUID
    student_name: str
    university_id: UUID | None
    university_name: str
    registered_at: datetime

    @classmethod
    def from_registration(cls, registration: "Registration") -> "RegistrationDTO":
        return cls(
            id=registration.uuid,
            event_id=registration.event_id,
            event_title=registration.event_title,
            user_id=registration.user_id,
            student_name=registration.student_name,
            university_id=registration.university_id,
            university_name=registration.university_name,
            registered_at=registration.registered_at,
        )


@dataclass(frozen=True)
class EventFiltersDTO:
    """Filters for browsing the event directory."""

    search: str | None = None
    event_type: str | None = None
    club_id: UUID | None = None
    university_id: UUID | None = None
    upcoming: bool = True
    page: int = 1
    limit: int = 12


@dataclass(frozen=True)
class EventPageDTO:
    events: list[EventDTO]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return -(-self.total // self.limit)
