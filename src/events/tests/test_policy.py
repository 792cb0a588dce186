from uuid import uuid4

import pytest

from src.events.dtos import CallerDTO, ClubFactsDTO, EventOwnershipDTO
from src.events.policy import (
    can_create_event,
    can_delete_event,
    can_manage_attendees,
    can_update_event,
)
from src.models.user import UserRole

UNIVERSITY_ID = uuid4()


def make_caller(role: UserRole, university_id=UNIVERSITY_ID) -> CallerDTO:
    return CallerDTO(id=uuid4(), role=role, university_id=university_id)


def test_create_refused_for_other_university():
    caller = make_caller(UserRole.ADMINISTRATOR, university_id=uuid4())
    club = ClubFactsDTO(club_id=uuid4(), university_id=UNIVERSITY_ID)

    decision = can_create_event(caller, club)

    assert not decision
    assert decision.reason == "You can only create events for clubs at your university"


def test_create_allowed_for_administrator_of_same_university():
    caller = make_caller(UserRole.ADMINISTRATOR)
    club = ClubFactsDTO(club_id=uuid4(), university_id=UNIVERSITY_ID)

    assert can_create_event(caller, club)


def test_create_club_admin_must_be_president():
    caller = make_caller(UserRole.CLUB_ADMIN)
    own_club = ClubFactsDTO(club_id=uuid4(), university_id=UNIVERSITY_ID, president_id=caller.id)
    other_club = ClubFactsDTO(
        club_id=uuid4(),
        university_id=UNIVERSITY_ID,
        president_id=uuid4(),
        member_ids=frozenset({caller.id}),
    )

    assert can_create_event(caller, own_club)
    decision = can_create_event(caller, other_club)
    assert not decision
    assert decision.reason == "You can only create events for clubs where you are the president"


def test_create_student_must_be_member():
    caller = make_caller(UserRole.STUDENT)
    member_club = ClubFactsDTO(
        club_id=uuid4(), university_id=UNIVERSITY_ID, member_ids=frozenset({caller.id})
    )
    other_club = ClubFactsDTO(club_id=uuid4(), university_id=UNIVERSITY_ID)

    assert can_create_event(caller, member_club)
    decision = can_create_event(caller, other_club)
    assert not decision
    assert decision.reason == "You must be a member of the club to create events"


@pytest.mark.parametrize("check", [can_update_event, can_manage_attendees])
def test_update_and_attendee_tools_for_admin_or_president(check):
    president = make_caller(UserRole.CLUB_ADMIN)
    organizer = make_caller(UserRole.STUDENT)
    event = EventOwnershipDTO(
        event_id=uuid4(),
        club_president_id=president.id,
        organizer_ids=frozenset({organizer.id}),
    )

    assert check(make_caller(UserRole.ADMINISTRATOR), event)
    assert check(president, event)
    assert not check(organizer, event)
    assert not check(make_caller(UserRole.CLUB_ADMIN), event)


def test_delete_also_allowed_for_organizer():
    organizer = make_caller(UserRole.STUDENT)
    event = EventOwnershipDTO(
        event_id=uuid4(), club_president_id=None, organizer_ids=frozenset({organizer.id})
    )

    assert can_delete_event(organizer, event)
    assert can_delete_event(make_caller(UserRole.ADMINISTRATOR), event)
    assert not can_delete_event(make_caller(UserRole.STUDENT), event)


def test_missing_president_never_matches():
    caller = make_caller(UserRole.CLUB_ADMIN)
    event = EventOwnershipDTO(event_id=uuid4(), club_president_id=None)

    assert not can_update_event(caller, event)
