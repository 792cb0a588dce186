"""Event-state rules checked before attendee and review lists change.

The checks run in a fixed order and the first failure wins.
"""

from datetime import datetime
from uuid import UUID

from src.events.clock import as_utc
from src.events.dtos import (
    CapacityExceededError,
    DeadlinePassedError,
    DuplicateRegistrationError,
    DuplicateReviewError,
    InvalidOperationError,
    NotFoundError,
)
from src.events.repository.orm_models import Attendee, Event


def ensure_can_register(event: Event, user_id: UUID, now: datetime) -> None:
    if not event.is_registration_required:
        raise InvalidOperationError("Registration is not required for this event")

    deadline = as_utc(event.registration_deadline)
    if deadline is not None and now > deadline:
        raise DeadlinePassedError()

    # a capacity of 0 means unlimited, as it always has for existing events
    capacity = event.effective_capacity
    if capacity and len(event.attendees) >= capacity:
        raise CapacityExceededError()

    if event.find_attendee(user_id) is not None:
        raise DuplicateRegistrationError()


def ensure_can_unregister(event: Event, user_id: UUID, now: datetime) -> Attendee:
    if now >= as_utc(event.start_date):
        raise InvalidOperationError("Cannot unregister from an event that has already started")

    attendee = event.find_attendee(user_id)
    if attendee is None:
        raise NotFoundError("You are not registered for this event")
    return attendee


def ensure_can_review(event: Event, user_id: UUID) -> None:
    attendee = event.find_attendee(user_id)
    if attendee is None or not attendee.attended:
        raise InvalidOperationError("You must attend the event before leaving a review")

    if event.find_review(user_id) is not None:
        raise DuplicateReviewError()


def get_attendee_or_404(event: Event, user_id: UUID) -> Attendee:
    attendee = event.find_attendee(user_id)
    if attendee is None:
        raise NotFoundError("Attendee not found in this event")
    return attendee
