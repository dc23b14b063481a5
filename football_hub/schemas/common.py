"""Schemas compartilhados: envelope e paginação"""
from pydantic import BaseModel
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope {success, message, data, meta?}"""
    success: bool = True
    message: str
    data: Optional[T] = None
    meta: Optional[dict] = None


class BatchDetail(BaseModel):
    success: bool
    external_ref: Optional[str] = None
    id: Optional[int] = None
    name: Optional[str] = None
    reason: Optional[str] = None
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    players: Optional[dict] = None


class BatchResultResponse(BaseModel):
    successful: int
    failed: int
    details: List[BatchDetail]


class StandingRowResponse(BaseModel):
    position: int
    team_id: int
    team_name: str
    logo_url: Optional[str] = None
    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    goal_difference: int
    points: int
