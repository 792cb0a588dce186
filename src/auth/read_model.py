import abc
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.events.dtos import CallerDTO
from src.models.user import User, UserRole


class IdentityReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_caller(self, user_id: UUID) -> CallerDTO | None:
        """Resolve a verified user id to the caller's role and home university."""
        raise NotImplementedError


class SqlIdentityReadModel(IdentityReadModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_caller(self, user_id: UUID) -> CallerDTO | None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(User).where(User.uuid == user_id))
            user = result.scalar_one_or_none()
            if user is None or not user.is_active:
                return None
            return CallerDTO(
                id=user.uuid,
                role=UserRole(user.role),
                university_id=user.university_id,
                name=user.name,
            )
