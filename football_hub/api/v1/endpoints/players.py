"""Endpoints de Jogadores"""
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from football_hub.core.database import get_db
from football_hub.core.exceptions import NotFoundError
from football_hub.core.responses import success_response
from football_hub.schemas.common import ApiResponse
from football_hub.schemas.player import PlayerResponse
from football_hub.services.player_service import PlayerService
from football_hub.services.team_service import TeamService

router = APIRouter()


@router.get("", response_model=ApiResponse[List[PlayerResponse]])
async def get_players(db: AsyncSession = Depends(get_db)):
    """Lista todos os jogadores com o time"""
    players = await PlayerService(db).get_all_players()
    return success_response(players, "Players retrieved successfully", {"total": len(players)})


@router.get("/team/{team_id}", response_model=ApiResponse[List[PlayerResponse]])
async def get_players_by_team(
    team_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Elenco de um time"""
    team = await TeamService(db).get_team_by_id(team_id)
    if not team:
        raise NotFoundError("Team not found")
    players = await PlayerService(db).get_players_by_team(team_id)
    return success_response(players, "Players retrieved successfully", {"total": len(players)})


@router.get("/{player_id}", response_model=ApiResponse[PlayerResponse])
async def get_player(
    player_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Obtém um jogador por ID"""
    player = await PlayerService(db).get_player_by_id(player_id)
    if not player:
        raise NotFoundError("Player not found")
    return success_response(player, "Player retrieved successfully")
