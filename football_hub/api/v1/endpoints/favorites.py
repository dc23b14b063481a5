"""Endpoints de Favoritos"""
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from football_hub.api.deps import get_current_user
from football_hub.core.database import get_db
from football_hub.core.responses import success_response
from football_hub.models.user import User
from football_hub.schemas.common import ApiResponse
from football_hub.schemas.favorite import FavoriteResponse
from football_hub.services.favorite_service import FavoriteService

router = APIRouter()


@router.get("", response_model=ApiResponse[List[FavoriteResponse]])
async def get_favorites(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Favoritos do usuário autenticado"""
    favorites = await FavoriteService(db).list_favorites(user.id)
    return success_response(favorites, "Favorites retrieved successfully", {"total": len(favorites)})


@router.post("/{team_id}", response_model=ApiResponse[FavoriteResponse], status_code=status.HTTP_201_CREATED)
async def add_favorite(
    team_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Adiciona um time aos favoritos"""
    favorite = await FavoriteService(db).add_favorite(user.id, team_id)
    return success_response(favorite, "Team added to favorites")


@router.delete("/{favorite_id}", response_model=ApiResponse[None])
async def remove_favorite(
    favorite_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Remove um favorito do usuário"""
    await FavoriteService(db).remove_favorite(user.id, favorite_id)
    return success_response(None, "Favorite removed successfully")
