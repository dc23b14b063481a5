"""Schemas de League"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class LeagueSummary(BaseModel):
    """Resumo de League para respostas aninhadas"""
    id: int
    name: str
    country: Optional[str] = None
    logo_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class LeagueResponse(LeagueSummary):
    """Schema de resposta de League"""
    external_ref: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class LeagueSyncRequest(BaseModel):
    """Pedido de sincronização de uma liga pelo nome e país"""
    league_name: str = Field(..., alias="leagueName", min_length=1)
    league_country: str = Field(..., alias="leagueCountry", min_length=1)

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)
