"""Repository de League (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional
from football_hub.models.league import League
from football_hub.repositories.base import upsert_by_external_ref


class LeagueRepository:
    """Repository async para operações de banco com League"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> List[League]:
        """Obtém todas as ligas, mais recentes primeiro"""
        result = await self.db.execute(
            select(League).order_by(League.created_at.desc(), League.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, league_id: int) -> Optional[League]:
        """Obtém liga por ID"""
        result = await self.db.execute(
            select(League).filter(League.id == league_id)
        )
        return result.scalar_one_or_none()

    async def find_by_name_and_country(self, name: str, country: str) -> Optional[League]:
        """Busca exata (sem diferenciar maiúsculas) por nome e país"""
        result = await self.db.execute(
            select(League).filter(
                func.lower(League.name) == name.lower(),
                func.lower(League.country) == country.lower(),
            )
        )
        return result.scalars().first()

    async def upsert(self, values: dict) -> League:
        """Cria ou atualiza liga pela referência externa"""
        return await upsert_by_external_ref(self.db, League, values)
