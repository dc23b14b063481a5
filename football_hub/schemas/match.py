"""Schemas de Match"""
from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional
from datetime import datetime, time
from football_hub.schemas.league import LeagueSummary
from football_hub.schemas.team import TeamSummary


class MatchResponse(BaseModel):
    """Schema de resposta de Match"""
    id: int
    league_id: int
    home_team_id: int
    away_team_id: int
    match_date: Optional[datetime] = None
    match_time: Optional[time] = None
    home_score: Optional[str] = None
    away_score: Optional[str] = None
    status: str
    venue: Optional[str] = None
    external_ref: str
    match_overview: Optional[str] = None
    tactical_analysis: Optional[str] = None
    match_preview: Optional[str] = None
    prediction: Optional[str] = None
    predicted_score_home: Optional[int] = None
    predicted_score_away: Optional[int] = None
    statistics: List[Any] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    home_team: Optional[TeamSummary] = None
    away_team: Optional[TeamSummary] = None
    league: Optional[LeagueSummary] = None

    model_config = ConfigDict(from_attributes=True)
