from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from kontaflow.models.user import User, UserGroup
from kontaflow.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_with_groups(self, user_id: int) -> Optional[User]:
        """Usuario con sus membresías (la primera es el grupo activo)"""
        return await self.db.scalar(
            select(User)
            .options(selectinload(User.groups).selectinload(UserGroup.economic_group))
            .where(User.id == user_id)
        )

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.db.scalar(select(User).where(User.email == email))
