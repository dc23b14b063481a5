"""Service de Time (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from typing import Any, Iterable, List, Optional, Tuple
from football_hub.core.cache import cache
from football_hub.core.exceptions import BadRequestError
from football_hub.models.league import League
from football_hub.models.player import Player
from football_hub.models.team import Team
from football_hub.repositories.team_repository import TeamRepository
from football_hub.schemas.provider import ProviderTeam
from football_hub.services.ai_generator import AIGenerator
from football_hub.services.batch import BatchResult, run_batch
from football_hub.services.pagination import PageParams, TeamFilters, page_meta, total_meta
from football_hub.services.player_service import PlayerService, batch_synchronize_players
import logging

logger = logging.getLogger(__name__)

MAX_TEAM_IMAGES = 4
DETAIL_PLAYERS_LIMIT = 10


class TeamService:
    """Service async para operações com times"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = TeamRepository(db)

    async def list_all_teams(self, filters: TeamFilters) -> Tuple[List[Team], dict]:
        """Todos os times filtrados; meta só com o total"""
        teams = await self.repository.list(filters)
        return teams, total_meta(len(teams))

    async def list_teams_page(self, filters: TeamFilters, page: PageParams) -> Tuple[List[Team], dict]:
        """Uma página de times filtrados com meta de paginação"""
        total = await self.repository.count(filters)
        teams = await self.repository.list(filters, page)
        return teams, page_meta(page, total)

    async def get_team_by_id(self, team_id: int) -> Optional[Team]:
        return await self.repository.get_by_id(team_id)

    async def get_team_detail(self, team_id: int) -> Optional[Tuple[Team, List[Player]]]:
        """Time com liga e até 10 jogadores"""
        team = await self.repository.get_by_id(team_id)
        if not team:
            return None
        players = await PlayerService(self.db).get_players_by_team(team_id, limit=DETAIL_PLAYERS_LIMIT)
        return team, players

    async def synchronize_team_from_api(self, raw: Any, league_id: int) -> Team:
        """Upsert de um time a partir do registro bruto do provedor"""
        record = ProviderTeam.parse(raw)
        team = await self.repository.upsert(record.to_values(league_id))
        logger.info(f"Time sincronizado: {team.name} ({team.external_ref})")
        return team

    async def generate_description(self, team: Team, ai: AIGenerator) -> Tuple[Team, bool]:
        """Gera descrição por IA só quando ainda não existe"""
        if team.description:
            return team, False

        facts = [f"Team: {team.name}"]
        if team.country:
            facts.append(f"Country: {team.country}")
        if team.founded_year:
            facts.append(f"Founded: {team.founded_year}")
        if team.stadium_name:
            facts.append(f"Stadium: {team.stadium_name} ({team.stadium_city or 'unknown city'})")
        if team.coach:
            facts.append(f"Coach: {team.coach}")
        if team.league:
            facts.append(f"League: {team.league.name}")

        prompt = (
            "Write a concise description (max 120 words) of this football club "
            "for its profile page, in plain text.\n" + "\n".join(facts)
        )
        description = await ai.generate(prompt)
        team = await self.repository.update(team, {"description": description})
        logger.info(f"Descrição gerada para {team.name}")
        return team, True

    async def add_images(self, team: Team, urls: List[str]) -> Team:
        """Anexa URLs de imagem respeitando o limite por time"""
        if not urls:
            raise BadRequestError("No images provided")
        current = list(team.img_urls or [])
        if len(current) + len(urls) > MAX_TEAM_IMAGES:
            raise BadRequestError(
                f"Image limit exceeded: a team can have at most {MAX_TEAM_IMAGES} images "
                f"({len(current)} already stored)"
            )
        return await self.repository.update(team, {"img_urls": current + list(urls)})

    async def remove_image(self, team: Team, index: int) -> Team:
        """Remove a imagem na posição informada"""
        current = list(team.img_urls or [])
        if index < 0 or index >= len(current):
            raise BadRequestError("Invalid image index")
        del current[index]
        return await self.repository.update(team, {"img_urls": current})


async def batch_synchronize_teams(
    session_factory: async_sessionmaker,
    records: Iterable[Any],
    league_id: int,
) -> BatchResult:
    """Upsert em lote dos times de uma liga"""

    async def handle(db: AsyncSession, raw: Any) -> dict:
        team = await TeamService(db).synchronize_team_from_api(raw, league_id)
        return {"success": True, "id": team.id, "external_ref": team.external_ref, "name": team.name}

    return await run_batch(session_factory, records, handle, ref_field="team_key", label="time")


async def synchronize_league_teams(
    session_factory: async_sessionmaker,
    league: League,
    raw_teams: List[Any],
) -> BatchResult:
    """
    Sincroniza os times da liga e, em seguida, o elenco de cada time
    sincronizado com sucesso. O resultado de jogadores vai no detalhe do time.
    """
    result = await batch_synchronize_teams(session_factory, raw_teams, league.id)

    players_by_ref = {
        str(raw.get("team_key")): raw.get("players") or []
        for raw in raw_teams
        if isinstance(raw, dict) and raw.get("team_key") not in (None, "")
    }
    for detail in result.details:
        if not detail.get("success"):
            continue
        players = players_by_ref.get(detail["external_ref"], [])
        if not players:
            detail["players"] = {"successful": 0, "failed": 0}
            continue
        players_result = await batch_synchronize_players(session_factory, players, detail["id"])
        detail["players"] = {"successful": players_result.successful, "failed": players_result.failed}

    if result.successful:
        # nome e escudo aparecem na classificação em cache
        await cache.invalidate_league(league.id)
    logger.info(f"✅ Times da liga {league.name}: {result.successful} ok, {result.failed} falhas")
    return result
