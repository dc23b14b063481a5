"""Endpoints de Ligas"""
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from football_hub.api.deps import require_admin
from football_hub.core.database import get_db
from football_hub.core.exceptions import NotFoundError
from football_hub.core.limiter import limiter
from football_hub.core.responses import success_response
from football_hub.models.user import User
from football_hub.schemas.common import ApiResponse, StandingRowResponse
from football_hub.schemas.league import LeagueResponse, LeagueSyncRequest
from football_hub.services.league_service import LeagueService
from football_hub.services.provider_client import FootballAPIClient, get_football_api_client

router = APIRouter()


@router.get("", response_model=ApiResponse[List[LeagueResponse]])
async def get_leagues(db: AsyncSession = Depends(get_db)):
    """Lista todas as ligas"""
    leagues = await LeagueService(db).get_all_leagues()
    return success_response(leagues, "Leagues retrieved successfully", {"total": len(leagues)})


@router.post("/sync", response_model=ApiResponse[LeagueResponse], status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def sync_league(
    request: Request,
    payload: LeagueSyncRequest,
    db: AsyncSession = Depends(get_db),
    client: FootballAPIClient = Depends(get_football_api_client),
    admin: User = Depends(require_admin),
):
    """Busca a liga no provedor por nome e país e grava no banco"""
    league = await LeagueService(db).sync_league_by_name(payload.league_name, payload.league_country, client)
    return success_response(league, "League synchronized successfully")


@router.get("/{league_id}", response_model=ApiResponse[LeagueResponse])
async def get_league(
    league_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Obtém uma liga por ID"""
    league = await LeagueService(db).get_league_by_id(league_id)
    if not league:
        raise NotFoundError("League not found")
    return success_response(league, "League retrieved successfully")


@router.get("/{league_id}/standings", response_model=ApiResponse[List[StandingRowResponse]])
@limiter.limit("200/minute")
async def get_league_standings(
    request: Request,
    league_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Tabela de classificação calculada a partir das partidas encerradas"""
    service = LeagueService(db)
    if not await service.get_league_by_id(league_id):
        raise NotFoundError("League not found")
    standings = await service.get_standings(league_id)
    return success_response(standings, "Standings retrieved successfully", {"total": len(standings)})
