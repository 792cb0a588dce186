from fastapi import APIRouter

from .features.browse_events.router import router as browse_events_router
from .features.manage_attendees.router import router as manage_attendees_router
from .features.manage_events.router import router as manage_events_router
from .features.register_for_event.router import router as register_for_event_router
from .features.registration_report.router import router as registration_report_router
from .features.reviews.router import router as reviews_router
from .features.unregister_from_event.router import router as unregister_from_event_router

router = APIRouter()

# browse first: its fixed paths must win over /api/events/{event_id}
router.include_router(browse_events_router)
router.include_router(manage_events_router)
router.include_router(register_for_event_router)
router.include_router(unregister_from_event_router)
router.include_router(manage_attendees_router)
router.include_router(reviews_router)
router.include_router(registration_report_router)
