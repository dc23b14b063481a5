"""Router principal da API v1"""
from fastapi import APIRouter
from football_hub.api.v1.endpoints import favorites, leagues, matches, players, sync, teams, users

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(leagues.router, prefix="/leagues", tags=["leagues"])
api_router.include_router(teams.router, prefix="/teams", tags=["teams"])
api_router.include_router(players.router, prefix="/players", tags=["players"])
api_router.include_router(matches.router, prefix="/matches", tags=["matches"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(sync.router, prefix="/sync", tags=["sync"])
