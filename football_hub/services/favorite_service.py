"""Service de Favoritos (Async)"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from football_hub.core.exceptions import ConflictError, NotFoundError
from football_hub.models.favorite import Favorite
from football_hub.repositories.favorite_repository import FavoriteRepository
from football_hub.repositories.team_repository import TeamRepository
import logging

logger = logging.getLogger(__name__)


class FavoriteService:
    """Times favoritos do usuário autenticado"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = FavoriteRepository(db)

    async def list_favorites(self, user_id: int) -> List[Favorite]:
        return await self.repository.list_by_user(user_id)

    async def add_favorite(self, user_id: int, team_id: int) -> Favorite:
        """Adiciona time aos favoritos; par repetido é conflito"""
        team = await TeamRepository(self.db).get_by_id(team_id)
        if not team:
            raise NotFoundError(f"Team with ID {team_id} not found")
        try:
            favorite = await self.repository.create(user_id, team_id)
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Team is already in favorites")
        logger.info(f"Usuário {user_id} favoritou time {team_id}")
        return favorite

    async def remove_favorite(self, user_id: int, favorite_id: int) -> None:
        favorite = await self.repository.get_for_user(favorite_id, user_id)
        if not favorite:
            raise NotFoundError(f"Favorite with ID {favorite_id} not found for this user")
        await self.repository.delete(favorite)
