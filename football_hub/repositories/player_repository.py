"""Repository de Player (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List, Optional
from football_hub.models.player import Player
from football_hub.repositories.base import upsert_by_external_ref


class PlayerRepository:
    """Repository async para operações de banco com Player"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> List[Player]:
        """Todos os jogadores com o time"""
        result = await self.db.execute(
            select(Player).options(selectinload(Player.team)).order_by(Player.full_name.asc(), Player.id.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, player_id: int) -> Optional[Player]:
        result = await self.db.execute(
            select(Player).options(selectinload(Player.team)).filter(Player.id == player_id)
        )
        return result.scalar_one_or_none()

    async def get_by_team(self, team_id: int, limit: Optional[int] = None) -> List[Player]:
        """Elenco do time por número da camisa e nome"""
        query = (
            select(Player)
            .options(selectinload(Player.team))
            .filter(Player.team_id == team_id)
            .order_by(Player.shirt_number.asc(), Player.full_name.asc())
        )
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def upsert(self, values: dict) -> Player:
        """Cria ou atualiza jogador pela referência externa"""
        return await upsert_by_external_ref(self.db, Player, values)
