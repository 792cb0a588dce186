from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import Field

from src.auth.dependencies import get_current_caller
from src.events.dtos import CallerDTO, NotFoundError
from src.events.features.browse_events.router import get_event_read_model
from src.events.features.reviews.write_model import (
    SqlSubmitReviewWriteModel,
    SubmitReviewWriteModel,
)
from src.events.repository.read_models import EventReadModel
from src.events.schemas import CamelModel, ReviewResponse
from src.events.urls import REVIEW_URL, REVIEWS_URL

router = APIRouter()


class ReviewSubmit(CamelModel):
    rating: int = Field(ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)


class ReviewsResponse(CamelModel):
    message: str
    reviews: list[ReviewResponse]


def get_submit_review_write_model() -> SubmitReviewWriteModel:
    """Dependency to get review write model instance."""
    return SqlSubmitReviewWriteModel()


@router.post(REVIEW_URL, response_model=ReviewsResponse)
async def submit_review(
    event_id: UUID,
    body: ReviewSubmit,
    caller: CallerDTO = Depends(get_current_caller),
    write_model: SubmitReviewWriteModel = Depends(get_submit_review_write_model),
) -> ReviewsResponse:
    """Review an event the caller attended. One review per user and event."""
    reviews = await write_model.submit_review(
        event_id=event_id, user_id=caller.id, rating=body.rating, comment=body.comment
    )
    return ReviewsResponse(
        message="Review added successfully",
        reviews=[ReviewResponse.from_dto(review) for review in reviews],
    )


@router.get(REVIEWS_URL, response_model=list[ReviewResponse])
async def get_reviews(
    event_id: UUID,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> list[ReviewResponse]:
    """List the reviews of an event with the reviewer's name attached."""
    reviews = await read_model.get_reviews(event_id)
    if reviews is None:
        raise NotFoundError("Event not found")
    return [ReviewResponse.from_dto(review) for review in reviews]
