"""Authorization policy for event actions.

Every function here is pure: it looks only at the caller and at ownership
facts that the caller of the policy already fetched.
"""

from dataclasses import dataclass

from src.events.dtos import CallerDTO, ClubFactsDTO, EventOwnershipDTO
from src.models.user import UserRole


@dataclass(frozen=True)
class PolicyDecision:
    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = PolicyDecision(allowed=True)


def can_create_event(caller: CallerDTO, club: ClubFactsDTO) -> PolicyDecision:
    if caller.university_id is None or caller.university_id != club.university_id:
        return PolicyDecision(False, "You can only create events for clubs at your university")

    if caller.role == UserRole.ADMINISTRATOR:
        return ALLOW

    if caller.role == UserRole.CLUB_ADMIN:
        if club.president_id == caller.id:
            return ALLOW
        return PolicyDecision(
            False, "You can only create events for clubs where you are the president"
        )

    if caller.id in club.member_ids:
        return ALLOW
    return PolicyDecision(False, "You must be a member of the club to create events")


def _is_president(caller: CallerDTO, event: EventOwnershipDTO) -> bool:
    return event.club_president_id is not None and event.club_president_id == caller.id


def can_update_event(caller: CallerDTO, event: EventOwnershipDTO) -> PolicyDecision:
    if caller.is_admin or _is_president(caller, event):
        return ALLOW
    return PolicyDecision(False, "Not authorized to update this event")


def can_manage_attendees(caller: CallerDTO, event: EventOwnershipDTO) -> PolicyDecision:
    if caller.is_admin or _is_president(caller, event):
        return ALLOW
    return PolicyDecision(False, "Not authorized to manage attendees for this event")


def can_delete_event(caller: CallerDTO, event: EventOwnershipDTO) -> PolicyDecision:
    if caller.is_admin or _is_president(caller, event) or caller.id in event.organizer_ids:
        return ALLOW
    return PolicyDecision(
        False,
        "Access denied. Only administrators, club presidents, or event organizers "
        "can delete events.",
    )
