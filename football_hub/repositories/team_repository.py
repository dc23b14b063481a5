"""Repository de Team (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from typing import List, Optional, Sequence
from football_hub.models.team import Team
from football_hub.repositories.base import upsert_by_external_ref
from football_hub.services.pagination import PageParams, TeamFilters


class TeamRepository:
    """Repository async para operações de banco com Team"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _filtered(self, filters: TeamFilters):
        conditions = []
        if filters.search:
            conditions.append(Team.name.ilike(f"%{filters.search}%"))
        if filters.country:
            conditions.append(Team.country == filters.country)
        if filters.league_id is not None:
            conditions.append(Team.league_id == filters.league_id)
        return conditions

    async def list(self, filters: TeamFilters, page: Optional[PageParams] = None) -> List[Team]:
        """Times filtrados, ordenados por nome"""
        query = (
            select(Team)
            .options(selectinload(Team.league))
            .filter(*self._filtered(filters))
            .order_by(Team.name.asc(), Team.id.asc())
        )
        if page is not None:
            query = query.offset(page.offset).limit(page.size)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: TeamFilters) -> int:
        result = await self.db.execute(
            select(func.count(Team.id)).filter(*self._filtered(filters))
        )
        return result.scalar() or 0

    async def get_by_id(self, team_id: int) -> Optional[Team]:
        """Obtém time por ID com a liga carregada"""
        result = await self.db.execute(
            select(Team).options(selectinload(Team.league)).filter(Team.id == team_id)
        )
        return result.scalar_one_or_none()

    async def get_by_external_refs(self, external_refs: Sequence[str]) -> dict:
        """Mapa external_ref -> Team para as referências encontradas"""
        refs = [ref for ref in external_refs if ref]
        if not refs:
            return {}
        result = await self.db.execute(
            select(Team).filter(Team.external_ref.in_(refs))
        )
        return {team.external_ref: team for team in result.scalars().all()}

    async def upsert(self, values: dict) -> Team:
        """Cria ou atualiza time pela referência externa"""
        return await upsert_by_external_ref(self.db, Team, values)

    async def update(self, team: Team, team_data: dict) -> Team:
        """Atualiza time"""
        for key, value in team_data.items():
            setattr(team, key, value)
        await self.db.commit()
        return team
