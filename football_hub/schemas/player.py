"""Schemas de Player"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from football_hub.schemas.team import TeamSummary


class PlayerResponse(BaseModel):
    """Schema de resposta de Player"""
    id: int
    team_id: int
    full_name: str
    primary_position: Optional[str] = None
    thumb_url: Optional[str] = None
    external_ref: str
    age: Optional[int] = None
    shirt_number: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    team: Optional[TeamSummary] = None

    model_config = ConfigDict(from_attributes=True)
