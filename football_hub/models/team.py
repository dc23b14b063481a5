"""Modelo Team"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from football_hub.models.base import BaseModel


class Team(BaseModel):
    """Modelo de Time"""
    __tablename__ = "teams"

    league_id = Column(Integer, ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    logo_url = Column(Text, nullable=True)
    founded_year = Column(Integer, nullable=True)
    country = Column(String(100), nullable=True, index=True)
    stadium_name = Column(String(255), nullable=True)
    stadium_city = Column(String(255), nullable=True)
    stadium_capacity = Column(Integer, nullable=True)
    venue_address = Column(Text, nullable=True)
    coach = Column(String(255), nullable=True)
    external_ref = Column(String(50), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    last_synced_at = Column(DateTime(timezone=True), nullable=True)
    # URLs de imagens em ordem de inserção
    img_urls = Column(JSON, nullable=False, default=list)

    # Relationships
    league = relationship("League", backref="teams")

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}', league_id={self.league_id})>"
