"""Service de Partida (Async)"""
from dataclasses import dataclass
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from typing import Any, Iterable, List, Optional, Tuple
from football_hub.core.cache import cache
from football_hub.core.exceptions import AppError, UpstreamUnavailableError
from football_hub.models.match import Match
from football_hub.models.team import Team
from football_hub.repositories.match_repository import MatchRepository
from football_hub.repositories.team_repository import TeamRepository
from football_hub.schemas.provider import ProviderMatch, to_int
from football_hub.services.ai_generator import AIGenerator
from football_hub.services.batch import BatchResult, run_batch
from football_hub.services.pagination import MatchFilters, PageParams, page_meta, total_meta
import logging

logger = logging.getLogger(__name__)

TEAMS_NOT_FOUND = "Teams not found"
TEAMS_OUTSIDE_LEAGUE = "Teams belong to a different league"


@dataclass
class MatchSyncResult:
    """Resultado de uma partida: gravada ou ignorada com motivo"""
    success: bool
    external_ref: Optional[str]
    match: Optional[Match] = None
    reason: Optional[str] = None
    home_team: Optional[str] = None
    away_team: Optional[str] = None

    def to_detail(self) -> dict:
        detail = {"success": self.success, "external_ref": self.external_ref}
        if self.match is not None:
            detail["id"] = self.match.id
        if not self.success:
            detail.update(reason=self.reason, home_team=self.home_team, away_team=self.away_team)
        return detail


def filter_season(events: Iterable[Any], season: Optional[str]) -> List[Any]:
    """Mantém eventos da temporada; eventos sem league_year passam"""
    if not season:
        return list(events)
    return [
        event for event in events
        if not isinstance(event, dict) or not event.get("league_year") or event.get("league_year") == season
    ]


def _team_label(team: Optional[Team]) -> str:
    return team.name if team else "N/A"


class MatchService:
    """Service async para operações com partidas"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = MatchRepository(db)

    async def list_all_matches(self, filters: MatchFilters) -> Tuple[List[Match], dict]:
        """Todas as partidas filtradas; meta só com o total"""
        matches = await self.repository.list(filters)
        return matches, total_meta(len(matches))

    async def list_matches_page(self, filters: MatchFilters, page: PageParams) -> Tuple[List[Match], dict]:
        """Uma página de partidas filtradas com meta de paginação"""
        total = await self.repository.count(filters)
        matches = await self.repository.list(filters, page)
        return matches, page_meta(page, total)

    async def get_match_by_id(self, match_id: int) -> Optional[Match]:
        return await self.repository.get_by_id(match_id)

    async def synchronize_match_from_api(self, raw: Any, league_id: int) -> MatchSyncResult:
        """
        Upsert de uma partida. Times não encontrados (ou de outra liga) não
        levantam erro: a partida é ignorada e o motivo vai no resultado.
        """
        record = ProviderMatch.parse(raw)
        teams = await TeamRepository(self.db).get_by_external_refs(
            [record.match_hometeam_id, record.match_awayteam_id]
        )
        home_team = teams.get(record.match_hometeam_id)
        away_team = teams.get(record.match_awayteam_id)

        if not home_team or not away_team:
            logger.warning(
                f"⚠️ Partida {record.match_id} ignorada: times não encontrados "
                f"(casa={record.match_hometeam_id}, fora={record.match_awayteam_id})"
            )
            return MatchSyncResult(
                success=False,
                external_ref=record.match_id,
                reason=TEAMS_NOT_FOUND,
                home_team=_team_label(home_team),
                away_team=_team_label(away_team),
            )

        if home_team.league_id != league_id or away_team.league_id != league_id:
            return MatchSyncResult(
                success=False,
                external_ref=record.match_id,
                reason=TEAMS_OUTSIDE_LEAGUE,
                home_team=home_team.name,
                away_team=away_team.name,
            )

        match = await self.repository.upsert(
            record.to_values(league_id, home_team.id, away_team.id, venue=home_team.stadium_name)
        )
        return MatchSyncResult(success=True, external_ref=match.external_ref, match=match)

    async def generate_analysis(self, match: Match, ai: AIGenerator) -> Tuple[Match, bool]:
        """Visão geral e análise tática; só para partidas encerradas ainda sem texto"""
        if not match.is_finished or match.match_overview or match.tactical_analysis:
            return match, False

        prompt = (
            "Write a post-match report for this football match.\n"
            f"{self._match_facts(match)}\n"
            f"Final score: {match.home_score} - {match.away_score}\n"
            f"Statistics: {match.statistics or 'not available'}\n"
            'Return JSON with keys "match_overview" (one paragraph) and '
            '"tactical_analysis" (one paragraph).'
        )
        data = await ai.generate_json(prompt)
        overview, tactical = _text(data.get("match_overview")), _text(data.get("tactical_analysis"))
        if not overview or not tactical:
            raise UpstreamUnavailableError("AI provider returned incomplete analysis")
        match = await self.repository.update(match, {
            "match_overview": overview,
            "tactical_analysis": tactical,
        })
        logger.info(f"Análise gerada para partida {match.id}")
        return match, True

    async def generate_preview(self, match: Match, ai: AIGenerator) -> Tuple[Match, bool]:
        """Prévia e palpite; só para partidas não encerradas ainda sem texto"""
        if match.is_finished or match.match_preview or match.prediction:
            return match, False

        prompt = (
            "Write a preview of this upcoming football match and predict the result.\n"
            f"{self._match_facts(match)}\n"
            'Return JSON with keys "match_preview" (one paragraph), "prediction" '
            '(one sentence) and "predicted_score" (object with integer "home" and "away").'
        )
        data = await ai.generate_json(prompt)
        predicted = data.get("predicted_score") if isinstance(data.get("predicted_score"), dict) else {}
        preview, prediction = _text(data.get("match_preview")), _text(data.get("prediction"))
        if not preview or not prediction:
            raise UpstreamUnavailableError("AI provider returned incomplete preview")
        match = await self.repository.update(match, {
            "match_preview": preview,
            "prediction": prediction,
            "predicted_score_home": to_int(predicted.get("home")),
            "predicted_score_away": to_int(predicted.get("away")),
        })
        logger.info(f"Prévia gerada para partida {match.id}")
        return match, True

    async def ensure_ai_content(self, match: Match, ai: AIGenerator) -> Match:
        """Preenche textos de IA na primeira visualização; falha não derruba a leitura"""
        if not ai.available:
            return match
        try:
            if match.is_finished:
                match, _ = await self.generate_analysis(match, ai)
            else:
                match, _ = await self.generate_preview(match, ai)
        except AppError as e:
            logger.warning(f"⚠️ Geração de IA falhou para partida {match.id}: {e.message}")
        return match

    @staticmethod
    def _match_facts(match: Match) -> str:
        home = match.home_team.name if match.home_team else f"Team {match.home_team_id}"
        away = match.away_team.name if match.away_team else f"Team {match.away_team_id}"
        league = match.league.name if match.league else "unknown league"
        when = match.match_date.date().isoformat() if match.match_date else "date to be defined"
        return (
            f"League: {league}\nHome: {home}\nAway: {away}\n"
            f"Date: {when}\nVenue: {match.venue or 'unknown'}\nStatus: {match.status or 'scheduled'}"
        )


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


async def batch_synchronize_matches(
    session_factory: async_sessionmaker,
    records: Iterable[Any],
    league_id: int,
) -> BatchResult:
    """Upsert em lote das partidas de uma liga; invalida a classificação em cache"""

    async def handle(db: AsyncSession, raw: Any) -> dict:
        result = await MatchService(db).synchronize_match_from_api(raw, league_id)
        return result.to_detail()

    result = await run_batch(session_factory, records, handle, ref_field="match_id", label="partida")
    if result.successful:
        await cache.invalidate_league(league_id)
    return result
