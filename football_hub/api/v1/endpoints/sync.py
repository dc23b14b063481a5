"""Endpoints de sincronização agendada (Celery)"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from football_hub.api.deps import require_admin
from football_hub.core.database import get_db
from football_hub.core.exceptions import NotFoundError
from football_hub.core.responses import success_response
from football_hub.models.user import User
from football_hub.services.league_service import LeagueService
from football_hub.tasks.sync_tasks import sync_all_leagues_task, sync_league_task
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/trigger", status_code=status.HTTP_202_ACCEPTED)
async def trigger_sync(
    league_id: Optional[int] = Query(None, gt=0),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Enfileira a sincronização completa (times, jogadores e partidas).

    - Com `league_id`: só essa liga
    - Sem `league_id`: todas as ligas gravadas
    """
    if league_id is not None:
        if not await LeagueService(db).get_league_by_id(league_id):
            raise NotFoundError("League not found")
        task = sync_league_task.delay(league_id)
        logger.info(f"Sincronização da liga {league_id} enfileirada ({task.id})")
        return success_response({"task_id": task.id, "league_id": league_id}, "Synchronization queued")

    task = sync_all_leagues_task.delay()
    logger.info(f"Sincronização de todas as ligas enfileirada ({task.id})")
    return success_response({"task_id": task.id}, "Synchronization queued")
