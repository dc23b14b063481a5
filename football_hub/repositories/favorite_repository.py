"""Repository de Favorite (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload
from typing import List, Optional
from football_hub.models.favorite import Favorite


class FavoriteRepository:
    """Repository async para operações de banco com Favorite"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_by_user(self, user_id: int) -> List[Favorite]:
        """Favoritos do usuário com o time carregado"""
        result = await self.db.execute(
            select(Favorite)
            .options(selectinload(Favorite.team))
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        return list(result.scalars().all())

    async def get_for_user(self, favorite_id: int, user_id: int) -> Optional[Favorite]:
        result = await self.db.execute(
            select(Favorite).filter(Favorite.id == favorite_id, Favorite.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: int, team_id: int) -> Favorite:
        """Cria favorito; par duplicado levanta IntegrityError"""
        favorite = Favorite(user_id=user_id, team_id=team_id)
        self.db.add(favorite)
        await self.db.commit()
        result = await self.db.execute(
            select(Favorite)
            .options(selectinload(Favorite.team))
            .filter(Favorite.id == favorite.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def delete(self, favorite: Favorite) -> bool:
        """Remove favorito"""
        await self.db.execute(delete(Favorite).where(Favorite.id == favorite.id))
        await self.db.commit()
        return True
