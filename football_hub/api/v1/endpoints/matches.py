"""Endpoints de Partidas"""
from fastapi import APIRouter, Depends, Path, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.concurrency import run_in_threadpool
from typing import List, Optional
from football_hub.api.deps import get_current_user, require_admin
from football_hub.core.config import settings
from football_hub.core.database import get_db, get_session_factory
from football_hub.core.exceptions import NotFoundError
from football_hub.core.limiter import limiter
from football_hub.core.responses import success_response
from football_hub.models.user import User
from football_hub.schemas.common import ApiResponse, BatchResultResponse
from football_hub.schemas.match import MatchResponse
from football_hub.services.ai_generator import AIGenerator, get_ai_generator
from football_hub.services.league_service import LeagueService
from football_hub.services.match_service import MatchService, batch_synchronize_matches, filter_season
from football_hub.services.pagination import MatchFilters, build_page_params, parse_day_range
from football_hub.services.provider_client import FootballAPIClient, get_football_api_client
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

DEFAULT_PAGE_SIZE = 10


async def _list_matches(service: MatchService, filters: MatchFilters, page_number, page_size):
    if page_number is None and page_size is None:
        return await service.list_all_matches(filters)
    page = build_page_params(page_number, page_size, default_size=DEFAULT_PAGE_SIZE)
    return await service.list_matches_page(filters, page)


async def _get_match_or_404(service: MatchService, match_id: int):
    match = await service.get_match_by_id(match_id)
    if not match:
        raise NotFoundError("Match not found")
    return match


@router.get("", response_model=ApiResponse[List[MatchResponse]])
async def get_matches(
    q: Optional[str] = Query(None, description="Busca por estádio ou status"),
    status_filter: Optional[str] = Query(None, alias="status"),
    league_id: Optional[int] = Query(None, gt=0),
    date: Optional[str] = Query(None, description="Dia no formato MM/DD/YYYY"),
    page_number: Optional[str] = Query(None, alias="page[number]"),
    page_size: Optional[str] = Query(None, alias="page[size]"),
    db: AsyncSession = Depends(get_db),
):
    """Lista partidas por data; paginação opcional"""
    filters = MatchFilters(
        search=q or None,
        status=status_filter or None,
        league_id=league_id,
        date_range=parse_day_range(date),
    )
    matches, meta = await _list_matches(MatchService(db), filters, page_number, page_size)
    return success_response(matches, "Matches retrieved successfully", meta)


@router.get("/league/{league_id}", response_model=ApiResponse[List[MatchResponse]])
async def get_matches_by_league(
    league_id: int = Path(..., gt=0),
    status_filter: Optional[str] = Query(None, alias="status"),
    date: Optional[str] = Query(None, description="Dia no formato MM/DD/YYYY"),
    page_number: Optional[str] = Query(None, alias="page[number]"),
    page_size: Optional[str] = Query(None, alias="page[size]"),
    db: AsyncSession = Depends(get_db),
):
    """Partidas de uma liga, com filtro por status e dia"""
    if not await LeagueService(db).get_league_by_id(league_id):
        raise NotFoundError("League not found")
    filters = MatchFilters(
        status=status_filter or None,
        league_id=league_id,
        date_range=parse_day_range(date),
    )
    matches, meta = await _list_matches(MatchService(db), filters, page_number, page_size)
    return success_response(matches, "Matches retrieved successfully", meta)


@router.post("/sync/{league_id}", response_model=ApiResponse[BatchResultResponse], status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def sync_matches(
    request: Request,
    league_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    client: FootballAPIClient = Depends(get_football_api_client),
    admin: User = Depends(require_admin),
):
    """Sincroniza as partidas da temporada configurada"""
    league = await LeagueService(db).get_league_by_id(league_id)
    if not league:
        raise NotFoundError("League not found")

    events = await run_in_threadpool(
        client.get_events, league.external_ref, settings.SYNC_MATCHES_FROM, settings.SYNC_MATCHES_TO
    )
    events = filter_season(events, settings.SYNC_SEASON)
    logger.info(f"Sincronizando {len(events)} partidas da liga {league.name}")

    result = await batch_synchronize_matches(session_factory, events, league.id)
    return success_response(result.to_dict(), "Match synchronization completed")


@router.get("/{match_id}", response_model=ApiResponse[MatchResponse])
async def get_match(
    match_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    ai: AIGenerator = Depends(get_ai_generator),
):
    """Detalhe da partida; textos de IA são gerados na primeira visualização"""
    service = MatchService(db)
    match = await _get_match_or_404(service, match_id)
    if settings.AI_LAZY_GENERATION:
        match = await service.ensure_ai_content(match, ai)
    return success_response(match, "Match retrieved successfully")


@router.put("/{match_id}/analysis", response_model=ApiResponse[MatchResponse])
@limiter.limit("10/minute")
async def generate_match_analysis(
    request: Request,
    match_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    ai: AIGenerator = Depends(get_ai_generator),
    user: User = Depends(get_current_user),
):
    """Visão geral e análise tática de uma partida encerrada"""
    service = MatchService(db)
    match = await _get_match_or_404(service, match_id)
    match, updated = await service.generate_analysis(match, ai)
    message = (
        "Successfully updated match analysis" if updated
        else "Match analysis already exists, no update made or match is upcoming"
    )
    return success_response(match, message)


@router.put("/{match_id}/preview", response_model=ApiResponse[MatchResponse])
@limiter.limit("10/minute")
async def generate_match_preview(
    request: Request,
    match_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    ai: AIGenerator = Depends(get_ai_generator),
    user: User = Depends(get_current_user),
):
    """Prévia e palpite de uma partida ainda não encerrada"""
    service = MatchService(db)
    match = await _get_match_or_404(service, match_id)
    match, updated = await service.generate_preview(match, ai)
    message = (
        "Successfully updated match preview and prediction" if updated
        else "Match preview and prediction already exists, no update made or match is finished"
    )
    return success_response(match, message)
