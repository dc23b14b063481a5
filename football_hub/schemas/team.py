"""Schemas de Team"""
from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from typing import List, Optional
from datetime import datetime
from football_hub.schemas.league import LeagueSummary


class TeamSummary(BaseModel):
    id: int
    name: str
    logo_url: Optional[str] = None
    country: Optional[str] = None
    stadium_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TeamResponse(TeamSummary):
    """Schema de resposta de Team"""
    league_id: int
    founded_year: Optional[int] = None
    stadium_city: Optional[str] = None
    stadium_capacity: Optional[int] = None
    venue_address: Optional[str] = None
    coach: Optional[str] = None
    external_ref: str
    description: Optional[str] = None
    img_urls: List[str] = []
    last_synced_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class TeamListItem(TeamResponse):
    league: Optional[LeagueSummary] = None


class TeamPlayerSummary(BaseModel):
    id: int
    full_name: str
    primary_position: Optional[str] = None
    thumb_url: Optional[str] = None
    shirt_number: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TeamDetailResponse(TeamListItem):
    """Team com liga e elenco resumido"""
    players: List[TeamPlayerSummary] = []


class TeamImagesRequest(BaseModel):
    """URLs de imagens a anexar ao time"""
    urls: List[HttpUrl] = Field(..., min_length=1)
