"""Tasks de sincronização com o provedor"""
import asyncio
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import NullPool
from football_hub.core.cache import cache
from football_hub.core.config import settings
from football_hub.core.database import build_engine, build_session_factory
from football_hub.core.exceptions import NotFoundError, UpstreamUnavailableError
from football_hub.models.league import League
from football_hub.services.match_service import batch_synchronize_matches, filter_season
from football_hub.services.provider_client import FootballAPIClient
from football_hub.services.team_service import synchronize_league_teams
from football_hub.tasks.celery_app import celery_app
import logging

logger = logging.getLogger(__name__)


async def run_league_sync(league_id: int, session_factory: async_sessionmaker, client: FootballAPIClient) -> dict:
    """Times, elencos e partidas de uma liga, nessa ordem"""
    async with session_factory() as db:
        league = (await db.execute(select(League).filter(League.id == league_id))).scalar_one_or_none()
    if not league:
        raise NotFoundError(f"League {league_id} not found")

    raw_teams = await asyncio.to_thread(client.get_teams, league.external_ref)
    teams = await synchronize_league_teams(session_factory, league, raw_teams)

    events = await asyncio.to_thread(
        client.get_events, league.external_ref, settings.SYNC_MATCHES_FROM, settings.SYNC_MATCHES_TO
    )
    matches = await batch_synchronize_matches(
        session_factory, filter_season(events, settings.SYNC_SEASON), league.id
    )

    summary = {
        "league_id": league.id,
        "teams": {"successful": teams.successful, "failed": teams.failed},
        "matches": {"successful": matches.successful, "failed": matches.failed},
    }
    logger.info(f"✅ Liga {league.name} sincronizada: {summary}")
    return summary


async def _league_ids(session_factory: async_sessionmaker) -> List[int]:
    async with session_factory() as db:
        result = await db.execute(select(League.id).order_by(League.updated_at.asc()))
        return list(result.scalars().all())


def _run_with_fresh_engine(coro_factory):
    """
    Executa a corrotina com engine própria. Cada task tem seu event loop, então
    a conexão Redis aberta durante a execução é fechada junto com ele.
    """

    async def runner():
        engine = build_engine(settings.database_url, poolclass=NullPool)
        try:
            return await coro_factory(build_session_factory(engine))
        finally:
            await engine.dispose()
            await cache.close()

    return asyncio.run(runner())


@celery_app.task(bind=True, max_retries=3)
def sync_league_task(self, league_id: int):
    """Sincronização completa de uma liga"""
    try:
        return _run_with_fresh_engine(
            lambda session_factory: run_league_sync(league_id, session_factory, FootballAPIClient())
        )
    except NotFoundError as e:
        logger.warning(f"⚠️ {e.message}")
        return {"status": "skipped", "league_id": league_id, "reason": e.message}
    except UpstreamUnavailableError as e:
        logger.error(f"❌ Provedor indisponível ao sincronizar liga {league_id}: {e.message}")
        raise self.retry(exc=e, countdown=60 * (2 ** self.request.retries))


@celery_app.task
def sync_all_leagues_task():
    """Enfileira a sincronização de cada liga gravada"""
    league_ids = _run_with_fresh_engine(_league_ids)
    if not league_ids:
        logger.info("Nenhuma liga no banco. Sincronização periódica ignorada.")
        return {"status": "skipped", "reason": "no_leagues_in_database"}

    for league_id in league_ids:
        sync_league_task.delay(league_id)
    logger.info(f"🔄 Sincronização enfileirada para {len(league_ids)} ligas")
    return {"status": "queued", "leagues": league_ids}
