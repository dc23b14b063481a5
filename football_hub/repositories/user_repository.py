"""Repository de User (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Optional
from football_hub.models.user import User


class UserRepository:
    """Repository async para operações de banco com User"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).filter(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).filter(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def create(self, user_data: dict) -> User:
        """Cria novo usuário"""
        user = User(**user_data)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user
