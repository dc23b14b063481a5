"""Service de Liga (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.concurrency import run_in_threadpool
from typing import Any, Iterable, List, Optional
from football_hub.core.cache import cache, standings_key
from football_hub.core.config import settings
from football_hub.core.exceptions import ConflictError, NotFoundError
from football_hub.models.league import League
from football_hub.repositories.league_repository import LeagueRepository
from football_hub.repositories.match_repository import MatchRepository
from football_hub.schemas.provider import ProviderLeague
from football_hub.services.batch import BatchResult, run_batch
from football_hub.services.provider_client import FootballAPIClient
from football_hub.services.standings import MatchResult, compute_standings
import logging

logger = logging.getLogger(__name__)


class LeagueService:
    """Service async para operações com ligas"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = LeagueRepository(db)

    async def get_all_leagues(self) -> List[League]:
        """Obtém todas as ligas"""
        return await self.repository.get_all()

    async def get_league_by_id(self, league_id: int) -> Optional[League]:
        """Obtém liga por ID"""
        return await self.repository.get_by_id(league_id)

    async def synchronize_league_from_api(self, raw: Any) -> League:
        """Upsert de uma liga a partir do registro bruto do provedor"""
        record = ProviderLeague.parse(raw)
        league = await self.repository.upsert(record.to_values())
        logger.info(f"Liga sincronizada: {league.name} ({league.external_ref})")
        return league

    async def sync_league_by_name(self, name: str, country: str, client: FootballAPIClient) -> League:
        """
        Procura a liga no provedor por nome e país e a grava.
        Conflito se já existe no banco; 404 se o provedor não a conhece.
        """
        existing = await self.repository.find_by_name_and_country(name, country)
        if existing:
            raise ConflictError("League already exists in database")

        leagues = await run_in_threadpool(client.get_leagues)
        wanted = (name.strip().lower(), country.strip().lower())
        raw = next(
            (
                item for item in leagues
                if isinstance(item, dict)
                and (str(item.get("league_name", "")).strip().lower(),
                     str(item.get("country_name", "")).strip().lower()) == wanted
            ),
            None,
        )
        if raw is None:
            raise NotFoundError(f"League '{name}' from '{country}' not found in external API")

        return await self.synchronize_league_from_api(raw)

    async def get_standings(self, league_id: int) -> List[dict]:
        """Classificação calculada a partir das partidas encerradas (com cache)"""

        async def load() -> List[dict]:
            matches = await MatchRepository(self.db).get_by_league(league_id)
            return [row.to_dict() for row in compute_standings(MatchResult.from_match(m) for m in matches)]

        return await cache.remember(standings_key(league_id), load, ttl=settings.CACHE_TTL)


async def batch_synchronize_leagues(session_factory: async_sessionmaker, records: Iterable[Any]) -> BatchResult:
    """Upsert em lote de ligas; cada registro em sua própria sessão"""

    async def handle(db: AsyncSession, raw: Any) -> dict:
        league = await LeagueService(db).synchronize_league_from_api(raw)
        return {"success": True, "id": league.id, "external_ref": league.external_ref, "name": league.name}

    return await run_batch(session_factory, records, handle, ref_field="league_id", label="liga")
