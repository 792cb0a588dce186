from enum import Enum


class TableNames(str, Enum):
    USERS = "users"
    UNIVERSITIES = "universities"
    CLUBS = "clubs"
    CLUB_MEMBERS = "club_members"
    EVENTS = "events"
    EVENT_ORGANIZERS = "event_organizers"
    EVENT_ATTENDEES = "event_attendees"
    EVENT_REVIEWS = "event_reviews"
    EVENT_REGISTRATIONS = "event_registrations"
