"""Schemas de Favorite"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from football_hub.schemas.team import TeamSummary


class FavoriteResponse(BaseModel):
    id: int
    user_id: int
    team_id: int
    created_at: datetime
    team: Optional[TeamSummary] = None

    model_config = ConfigDict(from_attributes=True)
