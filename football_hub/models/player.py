"""Modelo Player"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from football_hub.models.base import BaseModel


class Player(BaseModel):
    """Modelo de Jogador"""
    __tablename__ = "players"

    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    primary_position = Column(String(100), nullable=True)
    thumb_url = Column(Text, nullable=True)
    external_ref = Column(String(50), nullable=False, unique=True)
    age = Column(Integer, nullable=True)
    shirt_number = Column(String(10), nullable=True)

    # Relationships
    team = relationship("Team", backref="players")

    def __repr__(self):
        return f"<Player(id={self.id}, full_name='{self.full_name}', team_id={self.team_id})>"
