"""Endpoints de Times"""
from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.concurrency import run_in_threadpool
from typing import List, Optional
from football_hub.api.deps import require_admin
from football_hub.core.database import get_db, get_session_factory
from football_hub.core.exceptions import NotFoundError
from football_hub.core.limiter import limiter
from football_hub.core.responses import success_response
from football_hub.models.user import User
from football_hub.schemas.common import ApiResponse, BatchResultResponse
from football_hub.schemas.team import (
    TeamDetailResponse,
    TeamImagesRequest,
    TeamListItem,
    TeamPlayerSummary,
    TeamResponse,
)
from football_hub.services.ai_generator import AIGenerator, get_ai_generator
from football_hub.services.league_service import LeagueService
from football_hub.services.pagination import TeamFilters, build_page_params
from football_hub.services.provider_client import FootballAPIClient, get_football_api_client
from football_hub.services.team_service import TeamService, synchronize_league_teams
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

DEFAULT_PAGE_SIZE = 9


async def _get_team_or_404(service: TeamService, team_id: int):
    team = await service.get_team_by_id(team_id)
    if not team:
        raise NotFoundError("Team not found")
    return team


@router.get("", response_model=ApiResponse[List[TeamListItem]])
async def get_teams(
    q: Optional[str] = Query(None, description="Busca por nome"),
    country: Optional[str] = Query(None, alias="filter", description="País exato"),
    league_id: Optional[int] = Query(None, gt=0),
    page_number: Optional[str] = Query(None, alias="page[number]"),
    page_size: Optional[str] = Query(None, alias="page[size]"),
    db: AsyncSession = Depends(get_db),
):
    """
    Lista times ordenados por nome.

    Sem page[number]/page[size] devolve todos os times com meta {total};
    com paginação, page[size] acima do máximo é limitado a 50.
    """
    filters = TeamFilters(search=q or None, country=country or None, league_id=league_id)
    service = TeamService(db)

    if page_number is None and page_size is None:
        teams, meta = await service.list_all_teams(filters)
    else:
        page = build_page_params(page_number, page_size, default_size=DEFAULT_PAGE_SIZE)
        teams, meta = await service.list_teams_page(filters, page)

    return success_response(teams, "Teams retrieved successfully", meta)


@router.get("/{team_id}", response_model=ApiResponse[TeamDetailResponse])
async def get_team(
    team_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Time com liga e até 10 jogadores"""
    detail = await TeamService(db).get_team_detail(team_id)
    if not detail:
        raise NotFoundError("Team not found")
    team, players = detail
    data = TeamDetailResponse(
        **TeamListItem.model_validate(team).model_dump(),
        players=[TeamPlayerSummary.model_validate(player) for player in players],
    )
    return success_response(data, "Team retrieved successfully")


@router.post("/sync/{league_id}", response_model=ApiResponse[BatchResultResponse], status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def sync_teams(
    request: Request,
    league_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    client: FootballAPIClient = Depends(get_football_api_client),
    admin: User = Depends(require_admin),
):
    """Sincroniza os times da liga e seus elencos a partir do provedor"""
    league = await LeagueService(db).get_league_by_id(league_id)
    if not league:
        raise NotFoundError("League not found")

    raw_teams = await run_in_threadpool(client.get_teams, league.external_ref)
    if not raw_teams:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=success_response(
                {"successful": 0, "failed": 0, "details": []},
                "No teams found for synchronization",
            ),
        )

    logger.info(f"Sincronizando {len(raw_teams)} times da liga {league.name}")
    result = await synchronize_league_teams(session_factory, league, raw_teams)
    return success_response(result.to_dict(), "Team and player synchronization completed")


@router.patch("/{team_id}/description", response_model=ApiResponse[TeamResponse])
@limiter.limit("10/minute")
async def generate_team_description(
    request: Request,
    team_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    ai: AIGenerator = Depends(get_ai_generator),
    admin: User = Depends(require_admin),
):
    """Gera a descrição do time por IA, se ainda não houver"""
    service = TeamService(db)
    team = await _get_team_or_404(service, team_id)
    team, updated = await service.generate_description(team, ai)
    message = (
        "Team description updated successfully" if updated
        else "Team description already exists, skipping regeneration"
    )
    return success_response(team, message)


@router.patch("/{team_id}/images", response_model=ApiResponse[TeamResponse])
async def add_team_images(
    payload: TeamImagesRequest,
    team_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Anexa URLs de imagens ao time (máximo 4)"""
    service = TeamService(db)
    team = await _get_team_or_404(service, team_id)
    team = await service.add_images(team, [str(url) for url in payload.urls])
    return success_response(team, "Team images updated successfully")


@router.delete("/{team_id}/images/{image_index}", response_model=ApiResponse[TeamResponse])
async def delete_team_image(
    team_id: int = Path(..., gt=0),
    image_index: int = Path(...),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Remove a imagem na posição informada (base 0)"""
    service = TeamService(db)
    team = await _get_team_or_404(service, team_id)
    team = await service.remove_image(team, image_index)
    return success_response(team, "Team image deleted successfully")
