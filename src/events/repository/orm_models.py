from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config.table_names import TableNames
from src.events.dtos import EventStatus
from src.models.base import Base, BaseModel, TimeStamp
from src.models.club import Club
from src.models.university import University
from src.models.user import User

event_organizers = Table(
    TableNames.EVENT_ORGANIZERS.value,
    BaseModel.metadata,
    Column(
        "event_id",
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Attendee(Base, TimeStamp):
    __tablename__ = TableNames.EVENT_ATTENDEES.value
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_attendees_event_user"),
    )

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attended: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user: Mapped[User] = relationship(User, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Attendee {self.user_id} of {self.event_id} attended={self.attended}>"


class Review(Base, TimeStamp):
    __tablename__ = TableNames.EVENT_REVIEWS.value
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_reviews_event_user"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_event_reviews_rating"),
    )

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship(User, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Review {self.rating} by {self.user_id}>"


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=True)
    event_type: Mapped[str] = mapped_column(String(100), nullable=True)

    # Ownership
    club_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.CLUBS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    club: Mapped[Club] = relationship(Club, lazy="selectin")
    university_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.UNIVERSITIES.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    university: Mapped[University] = relationship(University, lazy="selectin")
    organizers: Mapped[list[User]] = relationship(
        User, secondary=event_organizers, lazy="selectin"
    )

    # Scheduling
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    start_time: Mapped[str] = mapped_column(String(10), default="09:00", nullable=False)
    end_time: Mapped[str] = mapped_column(String(10), default="17:00", nullable=False)
    venue: Mapped[str] = mapped_column(String(500), default="TBD", nullable=False)

    # Registration rules
    # max_attendees is authoritative, capacity is kept only for rows written before it existed
    max_attendees: Mapped[int | None] = mapped_column(Integer, nullable=True)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_registration_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    registration_deadline: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    registration_fee: Mapped[float] = mapped_column(Numeric(10, 2), default=0, nullable=False)

    # Details
    requirements: Mapped[str] = mapped_column(Text, nullable=True)
    contact_name: Mapped[str] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str] = mapped_column(String(50), nullable=True)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    poster: Mapped[str] = mapped_column(String(500), nullable=True)

    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    status: Mapped[str] = mapped_column(
        Enum(EventStatus, name="event_status_enum", values_callable=lambda x: [e.value for e in x]),
        default=EventStatus.PUBLISHED,
        nullable=False,
    )

    attendees: Mapped[list[Attendee]] = relationship(
        Attendee, lazy="selectin", cascade="all, delete-orphan", order_by=Attendee.created_at
    )
    reviews: Mapped[list[Review]] = relationship(
        Review, lazy="selectin", cascade="all, delete-orphan", order_by=Review.created_at
    )

    @property
    def effective_capacity(self) -> int | None:
        if self.max_attendees is not None:
            return self.max_attendees
        return self.capacity

    def find_attendee(self, user_id: UUID) -> Attendee | None:
        return next((a for a in self.attendees if a.user_id == user_id), None)

    def find_review(self, user_id: UUID) -> Review | None:
        return next((r for r in self.reviews if r.user_id == user_id), None)

    def __repr__(self) -> str:
        return f"<Event {self.title} on {self.start_date}>"


class Registration(Base, TimeStamp):
    """Append-only log of registration acts, denormalized for reporting."""

    __tablename__ = TableNames.EVENT_REGISTRATIONS.value

    event_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    event_title: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    university_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.UNIVERSITIES.value}.uuid", ondelete="SET NULL"),
        nullable=True,
    )
    university_name: Mapped[str] = mapped_column(String(255), nullable=False)
    registered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Registration {self.user_id} for {self.event_id} at {self.registered_at}>"
