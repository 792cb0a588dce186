EVENTS_URL = "/api/events"
MANAGED_EVENTS_URL = "/api/events/managed"
MY_REGISTRATIONS_URL = "/api/events/my-registrations"
CLUB_EVENTS_URL = "/api/events/club/{club_id}"
EVENT_URL = "/api/events/{event_id}"

REGISTER_URL = "/api/events/{event_id}/register"
UNREGISTER_URL = "/api/events/{event_id}/unregister"

ATTENDEE_URL = "/api/events/{event_id}/attendees/{user_id}"
ATTENDANCE_URL = "/api/events/{event_id}/attendees/{user_id}/attendance"

REVIEW_URL = "/api/events/{event_id}/review"
REVIEWS_URL = "/api/events/{event_id}/reviews"

REGISTRATIONS_REPORT_URL = "/api/event-registrations"
