from uuid import UUID

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp
from src.models.university import University


class ClubMember(Base, TimeStamp):
    __tablename__ = TableNames.CLUB_MEMBERS.value
    __table_args__ = (UniqueConstraint("club_id", "user_id", name="uq_club_members_club_user"),)

    club_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.CLUBS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(50), default="Member", nullable=False)

    def __repr__(self) -> str:
        return f"<ClubMember {self.user_id} of {self.club_id}>"


class Club(Base, TimeStamp):
    __tablename__ = TableNames.CLUBS.value

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=True)

    university_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.UNIVERSITIES.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    university: Mapped[University] = relationship(University, lazy="selectin")

    president_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    members: Mapped[list[ClubMember]] = relationship(
        ClubMember, lazy="selectin", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Club {self.name}>"
