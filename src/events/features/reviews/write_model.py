"""Write model for reviewing an event after attending it."""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.config.table_names import TableNames
from src.events.dtos import (
    DuplicateReviewError,
    EventValidationError,
    InternalError,
    ReviewDTO,
)
from src.events.repository.orm_models import Review
from src.events.repository.write_models import (
    SqlEventWriteModel,
    is_check_violation,
    is_unique_violation,
)
from src.events.rules import ensure_can_review

logger = logging.getLogger(__name__)


class SubmitReviewWriteModel(ABC):
    @abstractmethod
    async def submit_review(
        self, event_id: UUID, user_id: UUID, rating: int, comment: str | None
    ) -> list[ReviewDTO]:
        """Add the user's review and return every review of the event.

        Raises:
            NotFoundError: the event does not exist
            InvalidOperationError: the user has not attended the event
            DuplicateReviewError: the user already reviewed the event
            EventValidationError: the rating is outside 1-5
            InternalError: the store failed, nothing was written
        """
        raise NotImplementedError


class SqlSubmitReviewWriteModel(SqlEventWriteModel, SubmitReviewWriteModel):
    async def submit_review(
        self, event_id: UUID, user_id: UUID, rating: int, comment: str | None
    ) -> list[ReviewDTO]:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                event = await self._get_event(session, event_id, lock=True)
                ensure_can_review(event, user_id)
                user = await self._get_user(session, user_id)

                event.reviews.append(
                    Review(user_id=user.uuid, user=user, rating=rating, comment=comment)
                )
                await session.flush()
                return [ReviewDTO.from_review(review) for review in event.reviews]
        except IntegrityError as e:
            if is_unique_violation(
                e, "uq_event_reviews_event_user", TableNames.EVENT_REVIEWS.value
            ):
                raise DuplicateReviewError() from e
            if is_check_violation(e):
                raise EventValidationError("Rating must be between 1 and 5") from e
            self._log_failure(event_id, user_id)
            raise InternalError("Server error") from e
        except SQLAlchemyError as e:
            self._log_failure(event_id, user_id)
            raise InternalError("Server error") from e

    def _log_failure(self, event_id: UUID, user_id: UUID) -> None:
        logger.exception(
            "submit_review failed: event_id=%s user_id=%s operation=submit_review",
            event_id,
            user_id,
        )
