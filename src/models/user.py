from enum import Enum as PyEnum
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp
from src.models.university import University


class UserRole(str, PyEnum):
    STUDENT = "Student"
    CLUB_ADMIN = "Club Admin"
    ADMINISTRATOR = "Administrator"


class User(Base, TimeStamp):
    __tablename__ = TableNames.USERS.value

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    role: Mapped[str] = mapped_column(
        Enum(UserRole, name="user_role_enum", values_callable=lambda x: [e.value for e in x]),
        default=UserRole.STUDENT,
        nullable=False,
    )

    # Home organization
    university_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.UNIVERSITIES.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    university: Mapped[University | None] = relationship(University, lazy="selectin")

    # Profile
    profile_picture: Mapped[str] = mapped_column(String(500), nullable=True)
    major: Mapped[str] = mapped_column(String(255), nullable=True)
    year: Mapped[str] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"

