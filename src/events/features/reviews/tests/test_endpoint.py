from uuid import UUID, uuid4

from src.auth.dependencies import get_current_caller
from src.events.dtos import (
    CallerDTO,
    DuplicateReviewError,
    InvalidOperationError,
    ReviewDTO,
)
from src.events.features.browse_events.router import get_event_read_model
from src.events.features.reviews.router import get_submit_review_write_model
from src.events.features.reviews.write_model import SubmitReviewWriteModel
from src.events.urls import REVIEW_URL, REVIEWS_URL
from src.models.user import UserRole


class InMemorySubmitReviewWriteModel(SubmitReviewWriteModel):
    """In-memory write model for testing."""

    def __init__(self, attended: set[UUID]):
        self.attended = attended
        self.reviews: list[ReviewDTO] = []

    async def submit_review(
        self, event_id: UUID, user_id: UUID, rating: int, comment: str | None
    ) -> list[ReviewDTO]:
        if user_id not in self.attended:
            raise InvalidOperationError("You must attend the event before leaving a review")
        if any(r.user_id == user_id for r in self.reviews):
            raise DuplicateReviewError()
        self.reviews.append(
            ReviewDTO(user_id=user_id, rating=rating, comment=comment, user_name="Reviewer")
        )
        return list(self.reviews)


class InMemoryReviewsReadModel:
    def __init__(self, reviews: dict[UUID, list[ReviewDTO]]):
        self.reviews = reviews

    async def get_reviews(self, event_id: UUID) -> list[ReviewDTO] | None:
        return self.reviews.get(event_id)


async def test_submit_review(client_factory):
    caller = CallerDTO(id=uuid4(), role=UserRole.STUDENT)
    write_model = InMemorySubmitReviewWriteModel(attended={caller.id})
    overrides = {
        get_current_caller: lambda: caller,
        get_submit_review_write_model: lambda: write_model,
    }

    async with client_factory(overrides) as client:
        response = await client.post(
            REVIEW_URL.format(event_id=uuid4()), json={"rating": 4, "comment": "Fun"}
        )
        second = await client.post(REVIEW_URL.format(event_id=uuid4()), json={"rating": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Review added successfully"
    assert data["reviews"][0]["rating"] == 4
    assert data["reviews"][0]["userName"] == "Reviewer"
    assert second.status_code == 409
    assert second.json() == {
        "message": "You already reviewed this event",
        "error": "duplicate_review",
    }


async def test_submit_review_without_attending(client_factory):
    caller = CallerDTO(id=uuid4(), role=UserRole.STUDENT)
    write_model = InMemorySubmitReviewWriteModel(attended=set())
    overrides = {
        get_current_caller: lambda: caller,
        get_submit_review_write_model: lambda: write_model,
    }

    async with client_factory(overrides) as client:
        response = await client.post(REVIEW_URL.format(event_id=uuid4()), json={"rating": 4})

    assert response.status_code == 400
    assert response.json()["message"] == "You must attend the event before leaving a review"


async def test_submit_review_rating_out_of_range(client_factory):
    caller = CallerDTO(id=uuid4(), role=UserRole.STUDENT)
    write_model = InMemorySubmitReviewWriteModel(attended={caller.id})
    overrides = {
        get_current_caller: lambda: caller,
        get_submit_review_write_model: lambda: write_model,
    }

    async with client_factory(overrides) as client:
        response = await client.post(REVIEW_URL.format(event_id=uuid4()), json={"rating": 6})

    assert response.status_code == 422
    assert write_model.reviews == []


async def test_get_reviews_is_public(client_factory):
    event_id = uuid4()
    review = ReviewDTO(user_id=uuid4(), rating=5, user_name="Ada", profile_picture="ada.png")
    read_model = InMemoryReviewsReadModel({event_id: [review]})

    async with client_factory({get_event_read_model: lambda: read_model}) as client:
        response = await client.get(REVIEWS_URL.format(event_id=event_id))
        missing = await client.get(REVIEWS_URL.format(event_id=uuid4()))

    assert response.status_code == 200
    assert response.json() == [
        {
            "userId": str(review.user_id),
            "rating": 5,
            "comment": None,
            "userName": "Ada",
            "profilePicture": "ada.png",
        }
    ]
    assert missing.status_code == 404
