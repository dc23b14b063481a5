"""Repository de Match (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from sqlalchemy.orm import selectinload
from typing import List, Optional
from football_hub.models.match import Match
from football_hub.repositories.base import upsert_by_external_ref
from football_hub.services.pagination import MatchFilters, PageParams


def _with_relations(query):
    return query.options(
        selectinload(Match.home_team),
        selectinload(Match.away_team),
        selectinload(Match.league),
    )


class MatchRepository:
    """Repository async para operações de banco com Match"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _filtered(self, filters: MatchFilters):
        conditions = []
        if filters.search:
            pattern = f"%{filters.search}%"
            conditions.append(or_(Match.venue.ilike(pattern), Match.status.ilike(pattern)))
        if filters.status:
            conditions.append(Match.status == filters.status)
        if filters.league_id is not None:
            conditions.append(Match.league_id == filters.league_id)
        if filters.date_range is not None:
            start, end = filters.date_range
            conditions.append(Match.match_date >= start)
            conditions.append(Match.match_date < end)
        return conditions

    async def list(self, filters: MatchFilters, page: Optional[PageParams] = None) -> List[Match]:
        """Partidas filtradas por data e hora"""
        query = _with_relations(
            select(Match)
            .filter(*self._filtered(filters))
            .order_by(Match.match_date.asc(), Match.match_time.asc(), Match.id.asc())
        )
        if page is not None:
            query = query.offset(page.offset).limit(page.size)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: MatchFilters) -> int:
        result = await self.db.execute(
            select(func.count(Match.id)).filter(*self._filtered(filters))
        )
        return result.scalar() or 0

    async def get_by_id(self, match_id: int) -> Optional[Match]:
        result = await self.db.execute(
            _with_relations(select(Match).filter(Match.id == match_id))
        )
        return result.scalar_one_or_none()

    async def get_by_league(self, league_id: int) -> List[Match]:
        """Todas as partidas da liga com os times (entrada da classificação)"""
        result = await self.db.execute(
            _with_relations(select(Match).filter(Match.league_id == league_id))
        )
        return list(result.scalars().all())

    async def upsert(self, values: dict) -> Match:
        """Cria ou atualiza partida pela referência externa"""
        return await upsert_by_external_ref(self.db, Match, values)

    async def update(self, match: Match, match_data: dict) -> Match:
        """Atualiza partida"""
        for key, value in match_data.items():
            setattr(match, key, value)
        await self.db.commit()
        return match
